"""Shared in-memory tables for the chamber repository stubs.

The session, initiative and vote stubs each implement their own port, but
the conditional writes span tables (closing a session checks initiatives,
casting a ballot checks the initiative status). They therefore share one
store and one lock, the in-memory equivalent of a single database
transaction running UPDATE ... WHERE ... RETURNING.

NOT suitable for production use.
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from legisvote.domain.models.initiative import Initiative
from legisvote.domain.models.session import Session
from legisvote.domain.models.vote import Vote


class ChamberStore:
    """Tables and the write lock shared by the repository stubs.

    Attributes:
        sessions: session.id -> Session.
        initiatives: initiative.id -> Initiative.
        votes: (initiative_id, voter_id) -> Vote.
        lock: Serializes every conditional write.
    """

    def __init__(self) -> None:
        self.sessions: dict[UUID, Session] = {}
        self.initiatives: dict[UUID, Initiative] = {}
        self.votes: dict[tuple[UUID, UUID], Vote] = {}
        self.lock = asyncio.Lock()

    def initiatives_of(self, session_id: UUID) -> list[Initiative]:
        """A session's initiatives in ordinal order. Caller holds the lock."""
        return sorted(
            (i for i in self.initiatives.values() if i.session_id == session_id),
            key=lambda i: i.ordinal,
        )

    def votes_of(self, initiative_id: UUID) -> list[Vote]:
        """An initiative's ballots in insertion order."""
        return [v for v in self.votes.values() if v.initiative_id == initiative_id]

    def clear(self) -> None:
        """Drop every row (for testing)."""
        self.sessions.clear()
        self.initiatives.clear()
        self.votes.clear()
