from typing import List, Optional

from fastapi import FastAPI, Depends, Query, Request, Response
import uvicorn
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from humanai_study.core.logging import configure_logging
from humanai_study.core.settings import config_settings
from humanai_study.core.storage import get_event_log
from humanai_study.models.schemas.assignment import (
    AssignmentResponseModel,
    ConditionId,
    ResetResponseModel,
)
from humanai_study.models.schemas.event import EnvelopeResponseModel
from humanai_study.models.schemas.trial import TrialViewModel
from humanai_study.models.trials import CONDITION_CUES
from humanai_study.repositories.event_repo import EventLogRepository
from humanai_study.repositories.identity_stores import CookieStore
from humanai_study.services.assignment_service import AssignmentResolver, SessionContext
from humanai_study.services.event_service import EventService
from humanai_study.services.trial_service import get_trial_views

configure_logging(config_settings.LOG_LEVEL)

app = FastAPI(
    title=config_settings.APP_NAME,
    description="Assignment and event logging for the human/AI hiring decision study",
    version=config_settings.APP_VERSION,
)


@app.exception_handler(StarletteHTTPException)
async def envelope_exception_handler(request: Request, exc: StarletteHTTPException):
    # Every error, including routing 404/405, uses the {ok, message} envelope
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0]
    field = first["loc"][-1] if first.get("loc") else "request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"ok": False, "message": f"Invalid value for '{field}': {first['msg']}"},
    )


def _resolver_for(request: Request, response: Response) -> AssignmentResolver:
    durable = CookieStore(
        request,
        response,
        max_age=config_settings.COOKIE_MAX_AGE_SECONDS,
        secure=config_settings.COOKIE_SECURE,
    )
    session_scoped = CookieStore(request, response, secure=config_settings.COOKIE_SECURE)
    return AssignmentResolver([durable], SessionContext(session_scoped))


@app.post(
    "/api/log",
    response_model=EnvelopeResponseModel,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Append one event to the log.",
)
async def post_log_event(
    request: Request, event_log: EventLogRepository = Depends(get_event_log)
):
    body = await request.body()
    event_service = EventService(event_log)
    return await run_in_threadpool(
        event_service.ingest, request.headers.get("content-type"), body
    )


@app.get(
    "/api/export",
    status_code=status.HTTP_200_OK,
    summary="Export the event log as JSON or CSV",
)
def get_export(
    format: Optional[str] = Query(None, description="Either 'json' or 'csv'."),
    event_log: EventLogRepository = Depends(get_event_log),
):
    event_service = EventService(event_log)
    exported = event_service.export(format)

    if format == "json":
        return JSONResponse(content=exported, status_code=status.HTTP_200_OK)

    return Response(
        content=exported,
        status_code=status.HTTP_200_OK,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="events.csv"'},
    )


@app.get(
    "/api/assignment",
    response_model=AssignmentResponseModel,
    status_code=status.HTTP_200_OK,
    summary="Get participant assignment",
)
def get_assignment(request: Request, response: Response):
    """
    Resolves the participant and condition from the identity cookies, or
    creates them, and starts a new session for this page load.
    """
    assignment = _resolver_for(request, response).resolve()
    return AssignmentResponseModel(
        **assignment.model_dump(), cue=CONDITION_CUES[assignment.condition_id]
    )


@app.post(
    "/api/assignment/reset",
    response_model=ResetResponseModel,
    status_code=status.HTTP_200_OK,
    summary="Clear identity, session and shown markers",
)
def post_assignment_reset(request: Request, response: Response):
    reload = _resolver_for(request, response).reset()
    return ResetResponseModel(ok=True, reload=reload)


@app.get(
    "/api/trials",
    response_model=List[TrialViewModel],
    status_code=status.HTTP_200_OK,
    summary="Get the trial sequence for a condition",
)
def get_trials(condition_id: ConditionId = Query(..., description="'A' or 'B'")):
    return get_trial_views(condition_id)


# Entry point for local development
if __name__ == "__main__":
    uvicorn.run("humanai_study.main:app", host="0.0.0.0", port=8000, reload=True)
