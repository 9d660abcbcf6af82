"""Tests for static trial content and event construction."""
import pytest

from humanai_study.models.schemas.assignment import AssignmentModel
from humanai_study.models.schemas.event import validate_event
from humanai_study.models.trials import CONDITION_CUES, TRIALS
from humanai_study.services.trial_service import (
    get_trial_views,
    make_decision_event,
    make_task_shown_event,
)
from tests.helpers import PARTICIPANT_ID, SESSION_ID


ASSIGNMENT = AssignmentModel(participant_id=PARTICIPANT_ID, condition_id="B", session_id=SESSION_ID)


def test_ten_unique_trials() -> None:
    assert len(TRIALS) == 10
    assert len({trial.trial_id for trial in TRIALS}) == 10


def test_trial_views_use_condition_rationale_and_cue() -> None:
    views_a = get_trial_views("A")
    views_b = get_trial_views("B")

    assert [v.trial_index for v in views_a] == list(range(10))
    assert views_a[1].rationale == TRIALS[1].rationale_A
    assert views_b[1].rationale == TRIALS[1].rationale_B
    assert views_b[0].cue == CONDITION_CUES["B"]
    assert views_b[0].cue.agent_name == "Mia"


def test_task_shown_event_is_valid() -> None:
    event = make_task_shown_event(ASSIGNMENT, 2, shown_at_ms=1_000)

    assert event.trial_id == "trial_03"
    assert validate_event(event.model_dump()).ok is True


@pytest.mark.parametrize("trial_index", range(10))
@pytest.mark.parametrize("decision", ["accept", "override"])
def test_decision_events_always_validate(trial_index, decision) -> None:
    event = make_decision_event(ASSIGNMENT, trial_index, decision, shown_at_ms=1_000, decided_at_ms=2_500)

    assert event.latency_ms == 1_500
    assert event.follow_ai is (decision == "accept")
    assert validate_event(event.model_dump()).ok is True


def test_decision_latency_is_clamped_at_zero() -> None:
    event = make_decision_event(ASSIGNMENT, 0, "accept", shown_at_ms=2_000, decided_at_ms=1_000)

    assert event.latency_ms == 0


@pytest.mark.parametrize("trial_index", [-1, 10])
def test_out_of_range_trial_index(trial_index) -> None:
    with pytest.raises(IndexError):
        make_task_shown_event(ASSIGNMENT, trial_index, shown_at_ms=0)
