# services/event_service.py
import csv
import io
import json
import logging
from typing import Any, Dict, List, Optional

from humanai_study.core.errors import BadRequest, EventLogCorruptError, ServerError
from humanai_study.models.schemas.event import (
    DecisionEvent,
    EnvelopeResponseModel,
    Event,
    TaskShownEvent,
    validate_event,
)
from humanai_study.repositories.event_repo import EventLogRepository


logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "csv")

CSV_COLUMNS = (
    "event_id",
    "participant_id",
    "condition_id",
    "session_id",
    "event_type",
    "timestamp_ms",
    "trial_id",
    "trial_index",
    "decision",
    "latency_ms",
    "ai_reco",
    "ground_truth",
    "follow_ai",
    "ai_correct",
)

DECISION_COLUMNS = (
    "decision",
    "latency_ms",
    "ai_reco",
    "ground_truth",
    "follow_ai",
    "ai_correct",
)


def _reject_constant(token: str):
    raise ValueError(f"Non-finite JSON literal {token}")


def parse_json(text: str) -> Any:
    """json.loads that refuses NaN and Infinity literals."""
    return json.loads(text, parse_constant=_reject_constant)


def parse_event_lines(lines: List[str]) -> List[Event]:
    """
    Parses and re-validates every non-blank log line, then sorts by
    timestamp_ms. Any bad line aborts the whole parse.
    """
    events: List[Event] = []
    for index, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue

        try:
            payload = parse_json(line)
        except (ValueError, RecursionError):
            raise EventLogCorruptError(index, f"Invalid JSON at line {index}")

        result = validate_event(payload)
        if not result.ok:
            raise EventLogCorruptError(
                index, f"Invalid event at line {index}: {result.error}"
            )
        events.append(result.event)

    # sorted() is stable, ties keep log order
    return sorted(events, key=lambda event: event.timestamp_ms)


def _csv_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _csv_row(event: Event) -> List[Any]:
    record: Dict[str, Any] = event.model_dump()
    if isinstance(event, TaskShownEvent):
        for column in DECISION_COLUMNS:
            record[column] = None
    elif not isinstance(event, DecisionEvent):
        raise TypeError(f"Unsupported event kind {type(event).__name__}")
    return [_csv_value(record.get(column)) for column in CSV_COLUMNS]


def _format_csv_row(values) -> str:
    # csv only quotes characters found in lineterminator, so a CRLF
    # terminator is needed for a bare \r to be quoted
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\r\n", quoting=csv.QUOTE_MINIMAL).writerow(values)
    return buffer.getvalue()[: -len("\r\n")]


def events_to_csv(events: List[Event]) -> str:
    """
    Serializes events with the fixed column order. Fields are quoted only
    when they contain a comma, quote, CR or LF. Rows are joined by a
    bare newline with no trailing newline.
    """
    rows = [_format_csv_row(CSV_COLUMNS)]
    rows.extend(_format_csv_row(_csv_row(event)) for event in events)
    return "\n".join(rows)


class EventService:
    def __init__(self, event_log: EventLogRepository):
        """Initializes the service with the log repository it needs."""
        self.event_log = event_log

    def ingest(self, content_type: Optional[str], body: bytes) -> EnvelopeResponseModel:
        """
        Handles the business logic for recording an event.
        1. Requires a JSON content type and a parseable body.
        2. Validates the payload against the event schema.
        3. Appends the validated record to the log.
        """
        if "application/json" not in (content_type or "").lower():
            raise BadRequest("Content-Type must be application/json")

        try:
            payload = parse_json(body.decode("utf-8"))
        except (ValueError, RecursionError):
            raise BadRequest("Invalid JSON body")

        result = validate_event(payload)
        if not result.ok:
            logger.info("Rejected event: %s", result.error)
            raise BadRequest(result.error or "Invalid event payload")

        event = result.event
        try:
            self.event_log.append(event.model_dump())
        except OSError:
            logger.exception("Failed to append event %s", event.event_id)
            raise ServerError("Failed to write event")

        logger.info(
            "Recorded %s event %s for participant %s",
            event.event_type,
            event.event_id,
            event.participant_id,
        )
        return EnvelopeResponseModel(ok=True)

    def load_events(self) -> List[Event]:
        """Reads, validates and orders the full log."""
        try:
            lines = self.event_log.read_lines()
        except (OSError, UnicodeDecodeError):
            logger.exception("Failed to read event log %s", self.event_log.path)
            raise ServerError("Failed to read events")

        try:
            return parse_event_lines(lines)
        except EventLogCorruptError as e:
            logger.error("Event log %s is corrupt: %s", self.event_log.path, e)
            raise ServerError(str(e))

    def export(self, export_format: Optional[str]):
        """
        Returns the ordered events as a list of dicts for "json" or as a CSV
        string for "csv".
        """
        if export_format not in EXPORT_FORMATS:
            raise BadRequest("Query parameter 'format' must be 'json' or 'csv'")

        events = self.load_events()
        logger.info("Exporting %d events as %s", len(events), export_format)

        if export_format == "json":
            return [event.model_dump() for event in events]
        return events_to_csv(events)
