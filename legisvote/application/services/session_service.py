"""Session Service: the session state machine.

This service owns the session lifecycle:

    create -> PREPARED | SCHEDULED
    activate -> ACTIVE (demotes any other ACTIVE session to PAUSED)
    pause / resume -> PAUSED <-> ACTIVE
    close -> CLOSED (terminal; refused while an initiative is OPEN)

Invariants:
- At most one session is ACTIVE at any instant. The repository enforces
  this inside activate_exclusive(); the service never reads-then-writes.
- A session with an OPEN initiative cannot be closed. The repository
  checks the initiative table inside close_if_idle().

Developer Golden Rules:
1. AUTHORIZE FIRST - Re-check the acting principal before any write
2. ONE CONDITIONAL WRITE - Each transition is a single repository call
3. EVENT AFTER SAVE - Audit + notify only after the write committed
4. NOTIFICATION FIRE-AND-FORGET - Never roll back on a publish failure
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from legisvote.application.dtos.session_details import (
    InitiativeSummary,
    SessionDetails,
    SessionPage,
    SessionStats,
)
from legisvote.application.ports.event_log import EventLogPort
from legisvote.application.ports.initiative_repository import (
    InitiativeRepositoryProtocol,
)
from legisvote.application.ports.session_repository import SessionRepositoryProtocol
from legisvote.application.ports.vote_repository import VoteRepositoryProtocol
from legisvote.application.services.authorization import require_role
from legisvote.application.services.base import LoggingMixin
from legisvote.application.services.initiative_service import validate_drafts
from legisvote.application.services.lifecycle_recorder import LifecycleRecorder
from legisvote.config.chamber_config import DEFAULT_CHAMBER_CONFIG, ChamberConfig
from legisvote.domain.errors import SessionNotFoundError
from legisvote.domain.events.notification import NotificationType
from legisvote.domain.models.event_log_entry import EventLogEntry, EventLogKind
from legisvote.domain.models.initiative import (
    Initiative,
    InitiativeDraft,
    InitiativeStatus,
)
from legisvote.domain.models.member import OPERATOR_ROLES, Principal
from legisvote.domain.models.session import Session, SessionKind, SessionState


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def _as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes as UTC so sitting dates stay comparable."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class SessionCreationResult:
    """Result of creating a session with its initial agenda.

    Attributes:
        session: The stored session.
        initiatives: The agenda items created with it, in ordinal order.
    """

    session: Session
    initiatives: list[Initiative] = field(default_factory=list)


class SessionService(LoggingMixin):
    """Service for the session lifecycle and session read models.

    Attributes:
        _sessions: Session repository.
        _initiatives: Initiative repository.
        _votes: Vote repository, for per-session counters.
        _event_log: Audit trail, for history reads.
        _recorder: Audit + notification glue for committed transitions.
        _config: Listing and code generation tunables.
    """

    def __init__(
        self,
        sessions: SessionRepositoryProtocol,
        initiatives: InitiativeRepositoryProtocol,
        votes: VoteRepositoryProtocol,
        event_log: EventLogPort,
        recorder: LifecycleRecorder,
        config: ChamberConfig = DEFAULT_CHAMBER_CONFIG,
    ) -> None:
        """Initialize the session service.

        Args:
            sessions: Repository for sessions.
            initiatives: Repository for agenda items.
            votes: Ballot ledger.
            event_log: Audit trail for history reads.
            recorder: Records and broadcasts committed transitions.
            config: Chamber configuration.
        """
        self._sessions = sessions
        self._initiatives = initiatives
        self._votes = votes
        self._event_log = event_log
        self._recorder = recorder
        self._config = config
        self._init_logger(component="session")

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def create(
        self,
        actor: Principal,
        name: str | None = None,
        code: str | None = None,
        kind: SessionKind = SessionKind.ORDINARY,
        scheduled_at: datetime | None = None,
        notes: str = "",
        initiatives: Sequence[InitiativeDraft] = (),
    ) -> SessionCreationResult:
        """Create a session, optionally with its initial agenda.

        The initial state is SCHEDULED when scheduled_at is given, PREPARED
        otherwise. A code is generated from the current time when none is
        supplied. The agenda is validated in full before anything is stored.

        Args:
            actor: Acting principal (operator or superadmin).
            name: Display name; defaults to "Session <date>".
            code: Unique session code; generated when None or blank.
            kind: Kind of sitting.
            scheduled_at: Planned start.
            notes: Operator notes.
            initiatives: Agenda items in presentation order.

        Returns:
            SessionCreationResult with the session and its initiatives.

        Raises:
            PermissionDeniedError: If the actor may not create sessions.
            MissingFieldError: If an agenda item has no title.
            DuplicateSessionCodeError: If the code is already taken.
        """
        log = self._log_operation(
            "create",
            actor_id=str(actor.id),
            code=code,
            initiative_count=len(initiatives),
        )
        require_role(actor, OPERATOR_ROLES, "create sessions")
        validate_drafts(initiatives)

        now = _utc_now()
        scheduled_at = _as_utc(scheduled_at)
        resolved_code = code.strip() if code and code.strip() else None
        if resolved_code is None:
            resolved_code = await self._generate_code(now)

        session = Session(
            id=uuid4(),
            code=resolved_code,
            name=name.strip() if name and name.strip() else f"Session {now:%Y-%m-%d}",
            kind=kind,
            state=SessionState.SCHEDULED if scheduled_at else SessionState.PREPARED,
            scheduled_at=scheduled_at,
            notes=notes,
            created_by=actor.id,
            created_at=now,
        )
        log.info("create_started", code=session.code, state=session.state.value)

        stored = await self._sessions.save_new(session)
        created: list[Initiative] = []
        if initiatives:
            created = await self._initiatives.add_batch(stored.id, initiatives, now)

        log.info(
            "create_completed",
            session_id=str(stored.id),
            initiatives_created=len(created),
        )

        await self._recorder.record(
            stored.id,
            EventLogKind.SESSION_CREATED,
            f"Session created with {len(created)} initiative(s)",
            actor.id,
        )
        self._recorder.notify(
            NotificationType.SESSION_CREATED,
            session_id=stored.id,
            session=stored,
            initiatives=created,
        )
        return SessionCreationResult(session=stored, initiatives=created)

    async def activate(self, session_id: UUID, actor: Principal) -> Session:
        """Give a session the active designation.

        Any other ACTIVE session is demoted to PAUSED in the same write.
        Re-activating the active session only refreshes started_by.

        Raises:
            PermissionDeniedError: If the actor may not activate sessions.
            SessionNotFoundError: If the session does not exist.
            SessionAlreadyClosedError: If the session is closed.
        """
        log = self._log_operation(
            "activate", session_id=str(session_id), actor_id=str(actor.id)
        )
        require_role(actor, OPERATOR_ROLES, "activate sessions")
        log.info("activate_started")

        activated, demoted = await self._sessions.activate_exclusive(
            session_id, actor.id, _utc_now()
        )
        log.info(
            "activate_completed",
            demoted_sessions=[str(s.id) for s in demoted],
        )

        for other in demoted:
            await self._recorder.record(
                other.id,
                EventLogKind.SESSION_DEACTIVATED,
                f"Session paused: session {activated.code} was activated",
                actor.id,
            )
        await self._recorder.record(
            activated.id,
            EventLogKind.SESSION_ACTIVATED,
            "Session officially started",
            actor.id,
        )
        self._recorder.notify(
            NotificationType.SESSION_ACTIVATED,
            session_id=activated.id,
            session=activated,
            deactivated=demoted,
        )
        return activated

    async def pause(self, session_id: UUID, actor: Principal) -> Session:
        """Interrupt the active session (ACTIVE -> PAUSED).

        Raises:
            PermissionDeniedError: If the actor may not pause sessions.
            SessionNotFoundError: If the session does not exist.
            SessionAlreadyClosedError: If the session is closed.
            InvalidSessionTransitionError: If the session is not ACTIVE.
        """
        log = self._log_operation(
            "pause", session_id=str(session_id), actor_id=str(actor.id)
        )
        require_role(actor, OPERATOR_ROLES, "pause sessions")

        paused = await self._sessions.transition_cas(
            session_id, SessionState.ACTIVE, SessionState.PAUSED
        )
        log.info("pause_completed")

        await self._recorder.record(
            paused.id, EventLogKind.SESSION_PAUSED, "Session paused", actor.id
        )
        self._recorder.notify(
            NotificationType.SESSION_PAUSED, session_id=paused.id, session=paused
        )
        return paused

    async def resume(self, session_id: UUID, actor: Principal) -> Session:
        """Resume a paused session (PAUSED -> ACTIVE).

        Resuming is an activation: any other ACTIVE session is demoted.

        Raises:
            PermissionDeniedError: If the actor may not resume sessions.
            SessionNotFoundError: If the session does not exist.
            SessionAlreadyClosedError: If the session is closed.
            InvalidSessionTransitionError: If the session is not PAUSED.
        """
        log = self._log_operation(
            "resume", session_id=str(session_id), actor_id=str(actor.id)
        )
        require_role(actor, OPERATOR_ROLES, "resume sessions")

        resumed, demoted = await self._sessions.activate_exclusive(
            session_id, actor.id, _utc_now(), expected_state=SessionState.PAUSED
        )
        log.info("resume_completed", demoted_sessions=[str(s.id) for s in demoted])

        for other in demoted:
            await self._recorder.record(
                other.id,
                EventLogKind.SESSION_DEACTIVATED,
                f"Session paused: session {resumed.code} was resumed",
                actor.id,
            )
        await self._recorder.record(
            resumed.id, EventLogKind.SESSION_RESUMED, "Session resumed", actor.id
        )
        self._recorder.notify(
            NotificationType.SESSION_RESUMED,
            session_id=resumed.id,
            session=resumed,
            deactivated=demoted,
        )
        return resumed

    async def close(self, session_id: UUID, actor: Principal) -> Session:
        """Close a session for good.

        Raises:
            PermissionDeniedError: If the actor may not close sessions.
            SessionNotFoundError: If the session does not exist.
            SessionAlreadyClosedError: If the session is already closed.
            OpenInitiativesRemainError: If an initiative is still open.
        """
        log = self._log_operation(
            "close", session_id=str(session_id), actor_id=str(actor.id)
        )
        require_role(actor, OPERATOR_ROLES, "close sessions")
        log.info("close_started")

        closed = await self._sessions.close_if_idle(session_id, actor.id, _utc_now())
        log.info("close_completed")

        await self._recorder.record(
            closed.id,
            EventLogKind.SESSION_CLOSED,
            "Session officially closed",
            actor.id,
        )
        self._recorder.notify(
            NotificationType.SESSION_CLOSED, session_id=closed.id, session=closed
        )
        return closed

    # =========================================================================
    # Reads
    # =========================================================================

    async def get(self, session_id: UUID) -> Session:
        """Retrieve a session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = await self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def get_active(self) -> Session | None:
        """Retrieve the active session, if any."""
        return await self._sessions.get_active()

    async def list_sessions(
        self,
        state: SessionState | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> SessionPage:
        """List sessions, newest sitting first, one page at a time."""
        page = max(page, 1)
        page_size = self._config.clamp_page_size(limit)
        sessions, total = await self._sessions.list_sessions(
            state=state,
            date_from=_as_utc(date_from),
            date_to=_as_utc(date_to),
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        return SessionPage(sessions=sessions, total=total, page=page, limit=page_size)

    async def recent_sessions(self, limit: int | None = None) -> list[Session]:
        """List the most recent sessions."""
        return await self._sessions.list_recent(
            limit or self._config.recent_sessions_limit
        )

    async def history(
        self,
        session_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[EventLogEntry]:
        """Audit trail of a session, newest first.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        await self.get(session_id)
        return await self._event_log.list_for_session(
            session_id, limit=limit or self._config.history_limit, offset=offset
        )

    async def get_details(self, session_id: UUID) -> SessionDetails:
        """A session with its agenda, live counts, counters and history.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = await self.get(session_id)
        initiatives = await self._initiatives.list_by_session(session_id)

        summaries: list[InitiativeSummary] = []
        for initiative in initiatives:
            tally = (
                initiative.cached_tally
                if initiative.is_closed
                else await self._votes.tally(initiative.id)
            )
            summaries.append(InitiativeSummary(initiative=initiative, tally=tally))

        stats = SessionStats(
            total_initiatives=len(initiatives),
            closed_initiatives=sum(
                1 for i in initiatives if i.status is InitiativeStatus.CLOSED
            ),
            open_initiatives=sum(
                1 for i in initiatives if i.status is InitiativeStatus.OPEN
            ),
            total_votes=await self._votes.count_by_session(session_id),
        )
        history = await self._event_log.list_for_session(
            session_id, limit=self._config.history_limit
        )
        return SessionDetails(
            session=session,
            stats=stats,
            initiatives=summaries,
            history=history,
        )

    async def _generate_code(self, now: datetime) -> str:
        """Build an unused code like SES-2025-03-04-1000.

        Uniqueness is still enforced by save_new(); this only avoids the
        obvious collision of two sessions created in the same minute.
        """
        base = f"{self._config.session_code_prefix}-{now:%Y-%m-%d-%H%M}"
        candidate = base
        suffix = 1
        while await self._sessions.get_by_code(candidate) is not None:
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate
