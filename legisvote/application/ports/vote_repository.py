"""Vote ledger repository port.

One ballot per (initiative, voter). Writes are accepted only while the
initiative is OPEN; the status check and the write are one atomic step.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from legisvote.domain.models.tally import Tally
from legisvote.domain.models.vote import Vote


class VoteRepositoryProtocol(Protocol):
    """Protocol for ballot storage operations."""

    async def upsert_if_open(self, vote: Vote) -> tuple[Vote, Vote | None]:
        """Insert or replace the ballot keyed by (initiative, voter).

        Last writer wins; there is no field-level merge.

        Returns:
            Tuple of (stored ballot, replaced ballot or None).

        Raises:
            InitiativeNotFoundError: If the initiative does not exist.
            InitiativeNotOpenError: If the initiative is not OPEN.
        """
        ...

    async def delete_if_open(self, initiative_id: UUID, voter_id: UUID) -> bool:
        """Delete a ballot while the initiative is OPEN.

        Returns:
            True if a ballot existed and was deleted.

        Raises:
            InitiativeNotFoundError: If the initiative does not exist.
            InitiativeNotOpenError: If the initiative is not OPEN.
        """
        ...

    async def get(self, initiative_id: UUID, voter_id: UUID) -> Vote | None:
        """Retrieve one voter's ballot."""
        ...

    async def list_by_initiative(self, initiative_id: UUID) -> list[Vote]:
        """List an initiative's ballots, most recently cast first."""
        ...

    async def list_by_voter(self, voter_id: UUID) -> list[Vote]:
        """List every ballot of one voter across initiatives."""
        ...

    async def tally(self, initiative_id: UUID) -> Tally:
        """Aggregate an initiative's ballots. Zero tally when none."""
        ...

    async def count_by_session(self, session_id: UUID) -> int:
        """Count ballots across every initiative of a session."""
        ...
