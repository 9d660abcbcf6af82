from typing import Literal

from pydantic import BaseModel, Field


ConditionId = Literal["A", "B"]
ConditionTone = Literal["formal", "conversational"]


class AssignmentModel(BaseModel):
    """Resolved identity triple for one client."""

    participant_id: str = Field(..., description="Durable participant UUID.")
    condition_id: ConditionId
    session_id: str = Field(..., description="UUID for the current page lifetime.")


class ConditionCue(BaseModel):
    """Presentation cue tied to an experimental condition."""

    agent_name: str
    tone: ConditionTone


class AssignmentResponseModel(AssignmentModel):
    cue: ConditionCue


class ResetResponseModel(BaseModel):
    ok: bool = True
    reload: bool = Field(True, description="The caller should reload after a reset.")
