from typing import List

from pydantic import BaseModel, Field

from humanai_study.models.schemas.assignment import ConditionCue, ConditionId
from humanai_study.models.schemas.event import Recommendation


class TrialDefinition(BaseModel):
    """One fixed hiring scenario shown to every participant."""

    trial_id: str
    job_title: str
    requirements: List[str]
    candidate_summary: str
    ground_truth: Recommendation
    ai_reco: Recommendation
    rationale_A: str
    rationale_B: str

    def rationale_for(self, condition_id: ConditionId) -> str:
        return self.rationale_B if condition_id == "B" else self.rationale_A


class TrialViewModel(BaseModel):
    """A trial as presented under one condition."""

    trial_index: int = Field(..., ge=0)
    trial_id: str
    job_title: str
    requirements: List[str]
    candidate_summary: str
    ai_reco: Recommendation
    rationale: str
    cue: ConditionCue
