"""Tests for the event validator."""
import pytest

from humanai_study.models.schemas.event import (
    DecisionEvent,
    TaskShownEvent,
    validate_event,
)
from tests.helpers import make_decision_payload, make_task_shown_payload


def test_valid_task_shown_event_is_accepted() -> None:
    result = validate_event(make_task_shown_payload())

    assert result.ok is True
    assert result.error is None
    assert isinstance(result.event, TaskShownEvent)


def test_valid_decision_event_is_accepted() -> None:
    result = validate_event(make_decision_payload())

    assert result.ok is True
    assert isinstance(result.event, DecisionEvent)


@pytest.mark.parametrize("payload", [None, [], "event", 42])
def test_non_object_payload_is_rejected(payload) -> None:
    result = validate_event(payload)

    assert result.ok is False
    assert result.error == "event must be an object"


@pytest.mark.parametrize("event_type", [None, "click", 1])
def test_unknown_event_type_is_rejected(event_type) -> None:
    result = validate_event(make_task_shown_payload(event_type=event_type))

    assert result.ok is False
    assert result.error == "event_type must be 'task_shown' or 'decision'"


@pytest.mark.parametrize(
    "field, value, expected",
    [
        ("event_id", "not-a-uuid", "event_id must be a UUID string"),
        ("participant_id", "00000000-0000-0000-0000-000000000000", "participant_id must be a UUID string"),
        ("condition_id", "C", "condition_id must be 'A' or 'B'"),
        ("session_id", 123, "session_id must be a UUID string"),
        ("timestamp_ms", "1700000000000", "timestamp_ms must be a finite number"),
        ("timestamp_ms", float("nan"), "timestamp_ms must be a finite number"),
        ("trial_id", "", "trial_id must be a non-empty string"),
        ("trial_index", -1, "trial_index must be a non-negative integer"),
        ("trial_index", 1.5, "trial_index must be a non-negative integer"),
        ("trial_index", 1.0, "trial_index must be a non-negative integer"),
    ],
)
def test_base_field_errors_are_field_specific(field, value, expected) -> None:
    result = validate_event(make_task_shown_payload(**{field: value}))

    assert result.ok is False
    assert result.error == expected


def test_missing_base_field_is_reported() -> None:
    payload = make_task_shown_payload()
    del payload["session_id"]

    result = validate_event(payload)

    assert result.error == "session_id must be a UUID string"


def test_uuid_check_is_case_insensitive() -> None:
    payload = make_task_shown_payload(participant_id="3F1C2B8E-6A4D-4C1E-9B7A-2D5E8F0A1C3B")

    assert validate_event(payload).ok is True


@pytest.mark.parametrize(
    "field, value, expected",
    [
        ("decision", "maybe", "decision must be 'accept' or 'override'"),
        ("latency_ms", -1, "latency_ms must be a non-negative number"),
        ("ai_reco", "hire", "ai_reco must be 'proceed' or 'reject'"),
        ("ground_truth", None, "ground_truth must be 'proceed' or 'reject'"),
        ("follow_ai", "true", "follow_ai must be a boolean"),
        ("ai_correct", 1, "ai_correct must be a boolean"),
    ],
)
def test_decision_field_errors_are_field_specific(field, value, expected) -> None:
    result = validate_event(make_decision_payload(**{field: value}))

    assert result.ok is False
    assert result.error == expected


def test_zero_latency_is_valid() -> None:
    assert validate_event(make_decision_payload(latency_ms=0)).ok is True


def test_flipped_follow_ai_is_rejected_not_repaired() -> None:
    result = validate_event(make_decision_payload(follow_ai=False))

    assert result.ok is False
    assert "follow_ai" in result.error
    assert result.event is None


def test_flipped_ai_correct_is_rejected() -> None:
    result = validate_event(make_decision_payload(ai_correct=False))

    assert result.ok is False
    assert result.error == "ai_correct must match ai_reco == ground_truth"


@pytest.mark.parametrize("decision", ["accept", "override"])
@pytest.mark.parametrize("ai_reco", ["proceed", "reject"])
@pytest.mark.parametrize("ground_truth", ["proceed", "reject"])
def test_consistent_derived_fields_pass_and_flips_fail(decision, ai_reco, ground_truth) -> None:
    consistent = make_decision_payload(
        decision=decision,
        ai_reco=ai_reco,
        ground_truth=ground_truth,
        follow_ai=decision == "accept",
        ai_correct=ai_reco == ground_truth,
    )
    assert validate_event(consistent).ok is True

    flipped_follow = dict(consistent, follow_ai=not consistent["follow_ai"])
    flipped_correct = dict(consistent, ai_correct=not consistent["ai_correct"])
    assert validate_event(flipped_follow).ok is False
    assert validate_event(flipped_correct).ok is False


def test_first_failing_field_wins() -> None:
    result = validate_event(make_decision_payload(event_id="bad", decision="maybe"))

    assert result.error == "event_id must be a UUID string"


def test_extra_fields_are_dropped_from_the_parsed_event() -> None:
    result = validate_event(make_task_shown_payload(debug=True))

    assert result.ok is True
    assert "debug" not in result.event.model_dump()
