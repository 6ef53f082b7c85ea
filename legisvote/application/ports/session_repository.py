"""Session repository port.

This module defines the abstract interface for session storage.

Developer Golden Rules:
1. ONE CONDITIONAL WRITE - every mutation checks and writes in one atomic
   step against the store (UPDATE ... WHERE ... RETURNING in SQL terms)
2. FAIL LOUD - repository raises domain errors, never returns partial results
3. AUDIT IN SERVICE - repository stores, service records the audit trail
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from legisvote.domain.models.session import Session, SessionState


class SessionRepositoryProtocol(Protocol):
    """Protocol for session storage operations.

    Implementations must enforce, inside their conditional writes:
    - unique session codes
    - at most one ACTIVE session system-wide
    - no closure while an owned initiative is OPEN

    Methods:
        save_new: Store a new session
        get / get_by_code / get_active: Lookups
        list_sessions / list_recent: Listings
        activate_exclusive: Activate one session, demoting any other
        transition_cas: Compare-and-swap state change
        close_if_idle: Close unless an initiative is open
    """

    async def save_new(self, session: Session) -> Session:
        """Store a new session.

        Raises:
            DuplicateSessionCodeError: If session.code is taken.
        """
        ...

    async def get(self, session_id: UUID) -> Session | None:
        """Retrieve a session by id."""
        ...

    async def get_by_code(self, code: str) -> Session | None:
        """Retrieve a session by its unique code."""
        ...

    async def get_active(self) -> Session | None:
        """Retrieve the session holding the active designation, if any."""
        ...

    async def list_sessions(
        self,
        state: SessionState | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[Session], int]:
        """List sessions, newest sitting date first.

        The sitting date is scheduled_at when set, else created_at. Filters
        combine with AND logic; date bounds are inclusive.

        Returns:
            Tuple of (page of sessions, total count matching filters).
        """
        ...

    async def list_recent(self, limit: int = 5) -> list[Session]:
        """List the most recent sessions by sitting date."""
        ...

    async def activate_exclusive(
        self,
        session_id: UUID,
        actor_id: UUID,
        at: datetime,
        expected_state: SessionState | None = None,
    ) -> tuple[Session, list[Session]]:
        """Give session_id the active designation in one atomic step.

        Any other ACTIVE session is demoted to PAUSED in the same write.

        Args:
            session_id: Session to activate.
            actor_id: Principal activating it.
            at: Server time of the activation.
            expected_state: If set, the current state must equal it (CAS).

        Returns:
            Tuple of (activated session, sessions that were demoted).

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionAlreadyClosedError: If the session is closed.
            InvalidSessionTransitionError: If expected_state does not match.
        """
        ...

    async def transition_cas(
        self,
        session_id: UUID,
        expected_state: SessionState,
        new_state: SessionState,
    ) -> Session:
        """Compare-and-swap a session's state.

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionAlreadyClosedError: If the session is closed.
            InvalidSessionTransitionError: If the current state differs from
                expected_state or the transition is not allowed.
        """
        ...

    async def close_if_idle(
        self,
        session_id: UUID,
        actor_id: UUID,
        at: datetime,
    ) -> Session:
        """Close a session unless one of its initiatives is open.

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionAlreadyClosedError: If the session is already closed.
            OpenInitiativesRemainError: If any owned initiative is OPEN.
        """
        ...
