import uuid
from typing import List

from humanai_study.models.schemas.assignment import AssignmentModel, ConditionId
from humanai_study.models.schemas.event import DecisionEvent, DecisionType, TaskShownEvent
from humanai_study.models.schemas.trial import TrialDefinition, TrialViewModel
from humanai_study.models.trials import CONDITION_CUES, TRIALS


def get_trial(trial_index: int) -> TrialDefinition:
    if trial_index < 0 or trial_index >= len(TRIALS):
        raise IndexError(f"trial_index {trial_index} is out of range")
    return TRIALS[trial_index]


def get_trial_views(condition_id: ConditionId) -> List[TrialViewModel]:
    """Renders every trial with the rationale and cue of one condition."""
    cue = CONDITION_CUES[condition_id]
    return [
        TrialViewModel(
            trial_index=index,
            trial_id=trial.trial_id,
            job_title=trial.job_title,
            requirements=list(trial.requirements),
            candidate_summary=trial.candidate_summary,
            ai_reco=trial.ai_reco,
            rationale=trial.rationale_for(condition_id),
            cue=cue,
        )
        for index, trial in enumerate(TRIALS)
    ]


def make_task_shown_event(
    assignment: AssignmentModel, trial_index: int, shown_at_ms: int
) -> TaskShownEvent:
    trial = get_trial(trial_index)
    return TaskShownEvent(
        event_id=str(uuid.uuid4()),
        participant_id=assignment.participant_id,
        condition_id=assignment.condition_id,
        session_id=assignment.session_id,
        event_type="task_shown",
        timestamp_ms=shown_at_ms,
        trial_id=trial.trial_id,
        trial_index=trial_index,
    )


def make_decision_event(
    assignment: AssignmentModel,
    trial_index: int,
    decision: DecisionType,
    shown_at_ms: int,
    decided_at_ms: int,
) -> DecisionEvent:
    """
    Builds a decision record the way the task page does. The latency is
    clamped at zero when the clock moved backwards between the two stamps.
    """
    trial = get_trial(trial_index)
    return DecisionEvent(
        event_id=str(uuid.uuid4()),
        participant_id=assignment.participant_id,
        condition_id=assignment.condition_id,
        session_id=assignment.session_id,
        event_type="decision",
        timestamp_ms=decided_at_ms,
        trial_id=trial.trial_id,
        trial_index=trial_index,
        decision=decision,
        latency_ms=max(0, decided_at_ms - shown_at_ms),
        ai_reco=trial.ai_reco,
        ground_truth=trial.ground_truth,
        follow_ai=decision == "accept",
        ai_correct=trial.ai_reco == trial.ground_truth,
    )
