import logging
from functools import lru_cache
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlmodel import Session

from app.core.config import get_settings
from app.db import get_session
from app.form_state import clear_form_state, load_form_state, save_form_state
from app.schemas import (
    ConstraintIn,
    DuplicateName,
    ErrorDetail,
    FormState,
    GenerateTeamsRequest,
    GenerateTeamsResponse,
    LogResultRequest,
    StatusResponse,
)
from team_shuffle.errors import DuplicateNamesError, InvalidRosterError, UsageLogError
from team_shuffle.generator import Constraint, ConstraintKind, generate
from team_shuffle.usage_log import UsageLog

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


@lru_cache(maxsize=1)
def get_usage_log() -> UsageLog:
    """Shared usage log so appends from concurrent requests go through one lock."""
    return UsageLog(settings.usage_log_path)


def _client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded
    return request.client.host if request.client else None


def _to_constraints(rows: List[ConstraintIn], kind: ConstraintKind) -> List[Constraint]:
    return [Constraint(p1=row.p1, p2=row.p2, kind=kind, id=row.id) for row in rows]


def _invalid_input(exc: InvalidRosterError) -> HTTPException:
    detail = ErrorDetail(code=exc.code, message=str(exc))
    if isinstance(exc, DuplicateNamesError):
        detail.duplicates = [DuplicateName(name=name, positions=slots) for name, slots in exc.duplicates.items()]
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail.model_dump(exclude_none=True))


@router.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/teams/generate", response_model=GenerateTeamsResponse, tags=["teams"])
def generate_teams(
    payload: GenerateTeamsRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    usage_log: UsageLog = Depends(get_usage_log),
) -> GenerateTeamsResponse:
    """Split the roster into blue/red teams; the result is logged after the response is sent."""
    max_attempts = settings.max_attempts
    if payload.max_attempts is not None:
        max_attempts = min(payload.max_attempts, settings.max_attempts)
    try:
        result = generate(
            payload.players,
            payload.team_size,
            same_team=_to_constraints(payload.same_team, ConstraintKind.SAME_TEAM),
            diff_team=_to_constraints(payload.diff_team, ConstraintKind.DIFFERENT_TEAM),
            max_attempts=max_attempts,
            rng=payload.seed,
        )
    except InvalidRosterError as exc:
        raise _invalid_input(exc) from exc

    if not result:
        detail = ErrorDetail(code="not_found", message=result.message, attempts=result.attempts)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail.model_dump(exclude_none=True))

    roster = [name.strip() for name in payload.players if name.strip()]
    background_tasks.add_task(
        usage_log.record_safely, roster, result.team_blue, result.team_red, _client_ip(request)
    )
    return GenerateTeamsResponse(team_blue=result.team_blue, team_red=result.team_red, attempts=result.attempts)


@router.post("/log-result", response_model=StatusResponse, tags=["teams"])
def log_result(
    payload: LogResultRequest,
    request: Request,
    usage_log: UsageLog = Depends(get_usage_log),
):
    """Record a result generated elsewhere (e.g. by a browser client)."""
    try:
        usage_log.append(payload.players, payload.team_blue, payload.team_red, _client_ip(request))
    except UsageLogError:
        logger.exception("Error logging result")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "error", "message": "Failed to log result"},
        )
    return StatusResponse(status="success")


@router.get("/form-state", response_model=FormState, tags=["form"])
def get_form_state(session: Session = Depends(get_session)) -> FormState:
    return load_form_state(session)


@router.put("/form-state", response_model=FormState, tags=["form"])
def put_form_state(state: FormState, session: Session = Depends(get_session)) -> FormState:
    return save_form_state(session, state)


@router.delete("/form-state", response_model=FormState, tags=["form"])
def delete_form_state(session: Session = Depends(get_session)) -> FormState:
    return clear_form_state(session)
