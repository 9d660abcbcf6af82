"""Shared helpers for unit tests."""
from __future__ import annotations

import uuid
from typing import Any, Dict


PARTICIPANT_ID = "3f1c2b8e-6a4d-4c1e-9b7a-2d5e8f0a1c3b"
SESSION_ID = "a7d9e2c4-1b3f-4e5a-8c6d-0f2b4a6c8e1d"


def make_task_shown_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "event_id": str(uuid.uuid4()),
        "participant_id": PARTICIPANT_ID,
        "condition_id": "A",
        "session_id": SESSION_ID,
        "event_type": "task_shown",
        "timestamp_ms": 1_700_000_000_000,
        "trial_id": "trial_01",
        "trial_index": 0,
    }
    payload.update(overrides)
    return payload


def make_decision_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "event_id": str(uuid.uuid4()),
        "participant_id": PARTICIPANT_ID,
        "condition_id": "A",
        "session_id": SESSION_ID,
        "event_type": "decision",
        "timestamp_ms": 1_700_000_004_250,
        "trial_id": "trial_01",
        "trial_index": 0,
        "decision": "accept",
        "latency_ms": 4250,
        "ai_reco": "proceed",
        "ground_truth": "proceed",
        "follow_ai": True,
        "ai_correct": True,
    }
    payload.update(overrides)
    return payload
