"""Vote repository stub implementation.

In-memory ballot ledger over the shared ChamberStore. The initiative
status check and the ballot write happen under the same lock as
InitiativeRepositoryStub.close_with_result().
"""

from __future__ import annotations

from uuid import UUID

from legisvote.application.ports.vote_repository import VoteRepositoryProtocol
from legisvote.domain.errors import InitiativeNotFoundError, InitiativeNotOpenError
from legisvote.domain.models.tally import Tally
from legisvote.domain.models.vote import Vote
from legisvote.infrastructure.stubs.chamber_store import ChamberStore


class VoteRepositoryStub(VoteRepositoryProtocol):
    """In-memory ballot storage keyed by (initiative_id, voter_id).

    Attributes:
        _store: Shared chamber tables and write lock.
    """

    def __init__(self, store: ChamberStore | None = None) -> None:
        self._store = store or ChamberStore()

    async def upsert_if_open(self, vote: Vote) -> tuple[Vote, Vote | None]:
        async with self._store.lock:
            self._require_open(vote.initiative_id)
            previous = self._store.votes.pop(vote.key, None)
            self._store.votes[vote.key] = vote
            return vote, previous

    async def delete_if_open(self, initiative_id: UUID, voter_id: UUID) -> bool:
        async with self._store.lock:
            self._require_open(initiative_id)
            return self._store.votes.pop((initiative_id, voter_id), None) is not None

    async def get(self, initiative_id: UUID, voter_id: UUID) -> Vote | None:
        return self._store.votes.get((initiative_id, voter_id))

    async def list_by_initiative(self, initiative_id: UUID) -> list[Vote]:
        return sorted(
            self._store.votes_of(initiative_id),
            key=lambda v: v.cast_at,
            reverse=True,
        )

    async def list_by_voter(self, voter_id: UUID) -> list[Vote]:
        return [v for v in self._store.votes.values() if v.voter_id == voter_id]

    async def tally(self, initiative_id: UUID) -> Tally:
        return Tally.from_values(v.value for v in self._store.votes_of(initiative_id))

    async def count_by_session(self, session_id: UUID) -> int:
        owned = {i.id for i in self._store.initiatives_of(session_id)}
        return sum(1 for v in self._store.votes.values() if v.initiative_id in owned)

    def _require_open(self, initiative_id: UUID) -> None:
        """Reject writes unless the initiative is OPEN. Caller holds the lock."""
        initiative = self._store.initiatives.get(initiative_id)
        if initiative is None:
            raise InitiativeNotFoundError(initiative_id)
        if not initiative.is_open:
            raise InitiativeNotOpenError(initiative_id, initiative.status.value)

    def clear(self) -> None:
        """Remove every ballot (for testing)."""
        self._store.votes.clear()
