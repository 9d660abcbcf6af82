from typing import Any, Dict, Literal, Optional, Type, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    ValidationError,
    confloat,
    conint,
    constr,
    model_validator,
)
from pydantic_core import PydanticCustomError

from humanai_study.models.schemas.assignment import ConditionId


UUID_PATTERN = (
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[1-5][0-9a-fA-F]{3}-"
    r"[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}$"
)

EventType = Literal["task_shown", "decision"]
DecisionType = Literal["accept", "override"]
Recommendation = Literal["proceed", "reject"]

UuidStr = constr(strict=True, pattern=UUID_PATTERN)
FiniteNumber = Union[StrictInt, confloat(strict=True, allow_inf_nan=False)]
NonNegativeNumber = Union[
    conint(strict=True, ge=0), confloat(strict=True, ge=0, allow_inf_nan=False)
]


#  event posting flow


class BaseEvent(BaseModel):
    """Fields shared by every event kind, in validation order."""

    model_config = ConfigDict(extra="ignore")

    event_id: UuidStr
    participant_id: UuidStr
    condition_id: ConditionId
    session_id: UuidStr
    event_type: EventType
    timestamp_ms: FiniteNumber = Field(..., description="Client clock, epoch millis.")
    trial_id: constr(strict=True, min_length=1)
    trial_index: conint(strict=True, ge=0)


class TaskShownEvent(BaseEvent):
    event_type: Literal["task_shown"]


class DecisionEvent(BaseEvent):
    event_type: Literal["decision"]
    decision: DecisionType
    latency_ms: NonNegativeNumber
    ai_reco: Recommendation
    ground_truth: Recommendation
    follow_ai: StrictBool
    ai_correct: StrictBool

    @model_validator(mode="after")
    def check_derived_fields(self) -> "DecisionEvent":
        # Derived flags are checked, never recomputed.
        if self.follow_ai != (self.decision == "accept"):
            raise PydanticCustomError(
                "follow_ai_mismatch",
                "follow_ai must match decision (accept=true, override=false)",
            )
        if self.ai_correct != (self.ai_reco == self.ground_truth):
            raise PydanticCustomError(
                "ai_correct_mismatch",
                "ai_correct must match ai_reco == ground_truth",
            )
        return self


Event = Union[TaskShownEvent, DecisionEvent]

EVENT_MODELS: Dict[str, Type[BaseEvent]] = {
    "task_shown": TaskShownEvent,
    "decision": DecisionEvent,
}

EVENT_TYPE_ERROR = "event_type must be 'task_shown' or 'decision'"

FIELD_ERRORS: Dict[str, str] = {
    "event_id": "event_id must be a UUID string",
    "participant_id": "participant_id must be a UUID string",
    "condition_id": "condition_id must be 'A' or 'B'",
    "session_id": "session_id must be a UUID string",
    "event_type": EVENT_TYPE_ERROR,
    "timestamp_ms": "timestamp_ms must be a finite number",
    "trial_id": "trial_id must be a non-empty string",
    "trial_index": "trial_index must be a non-negative integer",
    "decision": "decision must be 'accept' or 'override'",
    "latency_ms": "latency_ms must be a non-negative number",
    "ai_reco": "ai_reco must be 'proceed' or 'reject'",
    "ground_truth": "ground_truth must be 'proceed' or 'reject'",
    "follow_ai": "follow_ai must be a boolean",
    "ai_correct": "ai_correct must be a boolean",
}


class ValidationResult(BaseModel):
    """Outcome of validate_event: either a parsed event or a reason."""

    ok: bool
    error: Optional[str] = None
    event: Optional[Event] = None


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = first.get("loc") or ()
    if loc and loc[0] in FIELD_ERRORS:
        return FIELD_ERRORS[loc[0]]
    return first["msg"]


def validate_event(payload: Any) -> ValidationResult:
    """
    Validates a decoded JSON payload against the event union.

    The first failing check wins, so each rejection carries exactly one
    field-specific reason. Inconsistent derived fields on decision events
    are rejected rather than corrected.
    """
    if not isinstance(payload, dict):
        return ValidationResult(ok=False, error="event must be an object")

    event_type = payload.get("event_type")
    model = EVENT_MODELS.get(event_type) if isinstance(event_type, str) else None
    if model is None:
        return ValidationResult(ok=False, error=EVENT_TYPE_ERROR)

    try:
        event = model.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(ok=False, error=_describe(e))

    return ValidationResult(ok=True, event=event)


class EnvelopeResponseModel(BaseModel):
    """Success/failure envelope returned by the ingestion endpoint."""

    ok: bool
    message: Optional[str] = None
