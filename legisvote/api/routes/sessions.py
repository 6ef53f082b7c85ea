"""Session API routes.

Endpoints for the session lifecycle and session read models:
- POST /v1/sessions: Create a session (optionally with its agenda)
- GET /v1/sessions: Paginated listing with state and date filters
- GET /v1/sessions/recent, /v1/sessions/active
- GET /v1/sessions/{id}, /details, /history
- POST /v1/sessions/{id}/activate | pause | resume | close
- POST /v1/sessions/{id}/initiatives: Append agenda items
- GET /v1/sessions/{id}/initiatives, /initiatives/open

Mutations require the X-Actor-* identity headers.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from legisvote.api.auth.actor import get_actor
from legisvote.api.converters import (
    details_to_response,
    entry_to_response,
    initiative_to_response,
    session_to_response,
)
from legisvote.api.dependencies.chamber import (
    get_initiative_service,
    get_session_service,
)
from legisvote.api.errors import problem_exception
from legisvote.api.models.chamber import (
    AddInitiativesRequest,
    CreateSessionRequest,
    EventLogEntryResponse,
    InitiativeItemRequest,
    InitiativeResponse,
    ProblemDetail,
    SessionCreatedResponse,
    SessionDetailsResponse,
    SessionListResponse,
    SessionResponse,
    SessionStateEnum,
)
from legisvote.application.services.initiative_service import InitiativeService
from legisvote.application.services.session_service import SessionService
from legisvote.domain.exceptions import ChamberError
from legisvote.domain.models.initiative import InitiativeDraft, MajorityType
from legisvote.domain.models.member import Principal
from legisvote.domain.models.session import SessionKind, SessionState

router = APIRouter(prefix="/v1/sessions", tags=["sessions"])

_ERRORS = {
    400: {"model": ProblemDetail, "description": "Invalid request"},
    403: {"model": ProblemDetail, "description": "Actor not allowed"},
    404: {"model": ProblemDetail, "description": "Session not found"},
    409: {"model": ProblemDetail, "description": "Lifecycle state conflict"},
}


def _to_drafts(items: list[InitiativeItemRequest]) -> list[InitiativeDraft]:
    return [
        InitiativeDraft(
            title=item.title,
            description=item.description,
            presenter=item.presenter,
            party=item.party,
            majority_type=MajorityType(item.majority_type.value)
            if item.majority_type
            else None,
        )
        for item in items
    ]


@router.post(
    "",
    response_model=SessionCreatedResponse,
    status_code=201,
    responses=_ERRORS,
)
async def create_session(
    request: Request,
    body: CreateSessionRequest,
    actor: Annotated[Principal, Depends(get_actor)],
    service: Annotated[SessionService, Depends(get_session_service)],
) -> SessionCreatedResponse:
    """Create a session, SCHEDULED when scheduled_at is given."""
    try:
        result = await service.create(
            actor,
            name=body.name,
            code=body.code,
            kind=SessionKind(body.kind.value),
            scheduled_at=body.scheduled_at,
            notes=body.notes,
            initiatives=_to_drafts(body.initiatives),
        )
    except ChamberError as e:
        raise problem_exception(e, request) from None
    return SessionCreatedResponse(
        session=session_to_response(result.session),
        initiatives=[initiative_to_response(i) for i in result.initiatives],
    )


@router.get("", response_model=SessionListResponse)
async def list_sessions(
    service: Annotated[SessionService, Depends(get_session_service)],
    state: SessionStateEnum | None = Query(default=None),
    date_from: datetime | None = Query(default=None),
    date_to: datetime | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> SessionListResponse:
    """List sessions, newest sitting first."""
    result = await service.list_sessions(
        state=SessionState(state.value) if state else None,
        date_from=date_from,
        date_to=date_to,
        page=page,
        limit=limit,
    )
    return SessionListResponse(
        sessions=[session_to_response(s) for s in result.sessions],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get("/recent", response_model=list[SessionResponse])
async def recent_sessions(
    service: Annotated[SessionService, Depends(get_session_service)],
    limit: int | None = Query(default=None, ge=1, le=50),
) -> list[SessionResponse]:
    return [session_to_response(s) for s in await service.recent_sessions(limit)]


@router.get("/active", response_model=SessionResponse | None)
async def active_session(
    service: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse | None:
    """The active session, or null when none is active."""
    session = await service.get_active()
    return session_to_response(session) if session else None


@router.get("/{session_id}", response_model=SessionResponse, responses=_ERRORS)
async def get_session(
    request: Request,
    session_id: UUID,
    service: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    try:
        return session_to_response(await service.get(session_id))
    except ChamberError as e:
        raise problem_exception(e, request) from None


@router.get(
    "/{session_id}/details",
    response_model=SessionDetailsResponse,
    responses=_ERRORS,
)
async def get_session_details(
    request: Request,
    session_id: UUID,
    service: Annotated[SessionService, Depends(get_session_service)],
) -> SessionDetailsResponse:
    """Session with agenda, live counts, counters and history."""
    try:
        return details_to_response(await service.get_details(session_id))
    except ChamberError as e:
        raise problem_exception(e, request) from None


@router.get(
    "/{session_id}/history",
    response_model=list[EventLogEntryResponse],
    responses=_ERRORS,
)
async def get_session_history(
    request: Request,
    session_id: UUID,
    service: Annotated[SessionService, Depends(get_session_service)],
    limit: int | None = Query(default=None, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
) -> list[EventLogEntryResponse]:
    """Audit trail, newest first."""
    try:
        entries = await service.history(session_id, limit=limit, offset=offset)
    except ChamberError as e:
        raise problem_exception(e, request) from None
    return [entry_to_response(e) for e in entries]


@router.post(
    "/{session_id}/activate", response_model=SessionResponse, responses=_ERRORS
)
async def activate_session(
    request: Request,
    session_id: UUID,
    actor: Annotated[Principal, Depends(get_actor)],
    service: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    """Activate a session, pausing whichever session was active."""
    try:
        return session_to_response(await service.activate(session_id, actor))
    except ChamberError as e:
        raise problem_exception(e, request) from None


@router.post("/{session_id}/pause", response_model=SessionResponse, responses=_ERRORS)
async def pause_session(
    request: Request,
    session_id: UUID,
    actor: Annotated[Principal, Depends(get_actor)],
    service: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    try:
        return session_to_response(await service.pause(session_id, actor))
    except ChamberError as e:
        raise problem_exception(e, request) from None


@router.post(
    "/{session_id}/resume", response_model=SessionResponse, responses=_ERRORS
)
async def resume_session(
    request: Request,
    session_id: UUID,
    actor: Annotated[Principal, Depends(get_actor)],
    service: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    try:
        return session_to_response(await service.resume(session_id, actor))
    except ChamberError as e:
        raise problem_exception(e, request) from None


@router.post("/{session_id}/close", response_model=SessionResponse, responses=_ERRORS)
async def close_session(
    request: Request,
    session_id: UUID,
    actor: Annotated[Principal, Depends(get_actor)],
    service: Annotated[SessionService, Depends(get_session_service)],
) -> SessionResponse:
    """Close a session. 409 while an initiative is still open."""
    try:
        return session_to_response(await service.close(session_id, actor))
    except ChamberError as e:
        raise problem_exception(e, request) from None


@router.post(
    "/{session_id}/initiatives",
    response_model=list[InitiativeResponse],
    status_code=201,
    responses=_ERRORS,
)
async def add_initiatives(
    request: Request,
    session_id: UUID,
    body: AddInitiativesRequest,
    actor: Annotated[Principal, Depends(get_actor)],
    service: Annotated[InitiativeService, Depends(get_initiative_service)],
) -> list[InitiativeResponse]:
    """Append agenda items; ordinals continue after the existing ones."""
    try:
        created = await service.batch_create(
            session_id, _to_drafts(body.initiatives), actor
        )
    except ChamberError as e:
        raise problem_exception(e, request) from None
    return [initiative_to_response(i) for i in created]


@router.get("/{session_id}/initiatives", response_model=list[InitiativeResponse])
async def list_initiatives(
    session_id: UUID,
    service: Annotated[InitiativeService, Depends(get_initiative_service)],
) -> list[InitiativeResponse]:
    """Agenda in ordinal order."""
    return [
        initiative_to_response(i) for i in await service.list_for_session(session_id)
    ]


@router.get(
    "/{session_id}/initiatives/open", response_model=InitiativeResponse | None
)
async def open_initiative(
    session_id: UUID,
    service: Annotated[InitiativeService, Depends(get_initiative_service)],
) -> InitiativeResponse | None:
    """The initiative currently open for voting, or null."""
    initiative = await service.get_open(session_id)
    return initiative_to_response(initiative) if initiative else None
