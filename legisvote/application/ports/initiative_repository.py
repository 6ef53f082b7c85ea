"""Initiative repository port.

Defines the storage contract for the agenda items of a session. The two
lifecycle mutations (open, close) are single conditional writes so the
one-open-initiative-per-session invariant holds under concurrent callers.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Protocol
from uuid import UUID

from legisvote.domain.models.initiative import (
    Initiative,
    InitiativeDraft,
    InitiativeResult,
    MajorityType,
)
from legisvote.domain.models.tally import Tally

# Resolves a result from the majority type and the closure-time tally
ResultResolver = Callable[[MajorityType, Tally], InitiativeResult]


class InitiativeRepositoryProtocol(Protocol):
    """Protocol for initiative storage operations."""

    async def add_batch(
        self,
        session_id: UUID,
        drafts: Sequence[InitiativeDraft],
        created_at: datetime,
    ) -> list[Initiative]:
        """Append initiatives to a session's agenda.

        Ordinals continue after the highest existing ordinal of the session.
        A draft without majority type is stored as SIMPLE.

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionAlreadyClosedError: If the session is closed.
        """
        ...

    async def get(self, initiative_id: UUID) -> Initiative | None:
        """Retrieve an initiative by id."""
        ...

    async def list_by_session(self, session_id: UUID) -> list[Initiative]:
        """List a session's initiatives in ordinal order."""
        ...

    async def list_in_closed_sessions(self) -> list[Initiative]:
        """List every initiative whose owning session is closed."""
        ...

    async def count_open(self, session_id: UUID) -> int:
        """Count OPEN initiatives of a session (0 or 1 by invariant)."""
        ...

    async def open_exclusive(
        self,
        initiative_id: UUID,
        actor_id: UUID,
        at: datetime,
    ) -> tuple[Initiative, list[Initiative]]:
        """Open an initiative, demoting any other open one of its session.

        Returns:
            Tuple of (opened initiative, initiatives demoted to PENDING).

        Raises:
            InitiativeNotFoundError: If the initiative does not exist.
            InitiativeAlreadyOpenError: If it is already open.
            InitiativeAlreadyClosedError: If it is closed.
            SessionAlreadyClosedError: If its session is closed.
        """
        ...

    async def close_with_result(
        self,
        initiative_id: UUID,
        resolve: ResultResolver,
        actor_id: UUID,
        at: datetime,
    ) -> tuple[Initiative, Tally]:
        """Close an initiative with its result in one atomic step.

        The tally is rebuilt from the vote ledger inside the same write, so
        no ballot can land between counting and closing.

        Returns:
            Tuple of (closed initiative, closure-time tally).

        Raises:
            InitiativeNotFoundError: If the initiative does not exist.
            InitiativeAlreadyClosedError: If it is already closed.
        """
        ...
