"""Session repository stub implementation.

In-memory implementation of SessionRepositoryProtocol over the shared
ChamberStore. Conditional writes run under the store lock, standing in
for PostgreSQL's UPDATE ... WHERE ... RETURNING.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from legisvote.application.ports.session_repository import SessionRepositoryProtocol
from legisvote.domain.errors import (
    DuplicateSessionCodeError,
    InvalidSessionTransitionError,
    OpenInitiativesRemainError,
    SessionAlreadyClosedError,
    SessionNotFoundError,
)
from legisvote.domain.models.session import Session, SessionState
from legisvote.infrastructure.stubs.chamber_store import ChamberStore


def _sitting_date(session: Session) -> datetime:
    return session.scheduled_at or session.created_at


class SessionRepositoryStub(SessionRepositoryProtocol):
    """In-memory session storage.

    Attributes:
        _store: Shared chamber tables and write lock.
    """

    def __init__(self, store: ChamberStore | None = None) -> None:
        self._store = store or ChamberStore()

    async def save_new(self, session: Session) -> Session:
        async with self._store.lock:
            if session.id in self._store.sessions:
                raise ValueError(f"Session already exists: {session.id}")
            if any(s.code == session.code for s in self._store.sessions.values()):
                raise DuplicateSessionCodeError(session.code)
            self._store.sessions[session.id] = session
            return session

    async def get(self, session_id: UUID) -> Session | None:
        return self._store.sessions.get(session_id)

    async def get_by_code(self, code: str) -> Session | None:
        for session in self._store.sessions.values():
            if session.code == code:
                return session
        return None

    async def get_active(self) -> Session | None:
        for session in self._store.sessions.values():
            if session.is_active:
                return session
        return None

    async def list_sessions(
        self,
        state: SessionState | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[Session], int]:
        matching = [
            s
            for s in self._store.sessions.values()
            if (state is None or s.state is state)
            and (date_from is None or _sitting_date(s) >= date_from)
            and (date_to is None or _sitting_date(s) <= date_to)
        ]
        matching.sort(key=_sitting_date, reverse=True)
        return matching[offset : offset + limit], len(matching)

    async def list_recent(self, limit: int = 5) -> list[Session]:
        sessions, _ = await self.list_sessions(limit=limit)
        return sessions

    async def activate_exclusive(
        self,
        session_id: UUID,
        actor_id: UUID,
        at: datetime,
        expected_state: SessionState | None = None,
    ) -> tuple[Session, list[Session]]:
        async with self._store.lock:
            session = self._require_open(session_id)
            if expected_state is not None and session.state is not expected_state:
                raise InvalidSessionTransitionError(
                    session_id, session.state, SessionState.ACTIVE
                )

            demoted = []
            for other in list(self._store.sessions.values()):
                if other.id != session_id and other.is_active:
                    paused = other.with_state(SessionState.PAUSED)
                    self._store.sessions[other.id] = paused
                    demoted.append(paused)

            activated = session.activated(actor_id, at)
            self._store.sessions[session_id] = activated
            return activated, demoted

    async def transition_cas(
        self,
        session_id: UUID,
        expected_state: SessionState,
        new_state: SessionState,
    ) -> Session:
        async with self._store.lock:
            session = self._require_open(session_id)
            if session.state is not expected_state or not session.can_transition_to(
                new_state
            ):
                raise InvalidSessionTransitionError(
                    session_id, session.state, new_state
                )
            updated = session.with_state(new_state)
            self._store.sessions[session_id] = updated
            return updated

    async def close_if_idle(
        self,
        session_id: UUID,
        actor_id: UUID,
        at: datetime,
    ) -> Session:
        async with self._store.lock:
            session = self._require_open(session_id)
            open_count = sum(
                1 for i in self._store.initiatives_of(session_id) if i.is_open
            )
            if open_count:
                raise OpenInitiativesRemainError(session_id, open_count)
            closed = session.closed(actor_id, at)
            self._store.sessions[session_id] = closed
            return closed

    def _require_open(self, session_id: UUID) -> Session:
        """Fetch a non-closed session. Caller holds the lock."""
        session = self._store.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if session.is_closed:
            raise SessionAlreadyClosedError(session_id)
        return session

    def clear(self) -> None:
        """Remove every session (for testing)."""
        self._store.sessions.clear()
