"""Initiative repository stub implementation.

In-memory implementation of InitiativeRepositoryProtocol over the shared
ChamberStore. open_exclusive() and close_with_result() run under the
store lock so two concurrent opens cannot both succeed and no ballot can
land between counting and closing.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID, uuid4

from legisvote.application.ports.initiative_repository import (
    InitiativeRepositoryProtocol,
    ResultResolver,
)
from legisvote.domain.errors import (
    InitiativeAlreadyClosedError,
    InitiativeAlreadyOpenError,
    InitiativeNotFoundError,
    SessionAlreadyClosedError,
    SessionNotFoundError,
)
from legisvote.domain.models.initiative import (
    Initiative,
    InitiativeDraft,
    MajorityType,
)
from legisvote.domain.models.tally import Tally
from legisvote.infrastructure.stubs.chamber_store import ChamberStore


class InitiativeRepositoryStub(InitiativeRepositoryProtocol):
    """In-memory initiative storage.

    Attributes:
        _store: Shared chamber tables and write lock.
    """

    def __init__(self, store: ChamberStore | None = None) -> None:
        self._store = store or ChamberStore()

    async def add_batch(
        self,
        session_id: UUID,
        drafts: Sequence[InitiativeDraft],
        created_at: datetime,
    ) -> list[Initiative]:
        async with self._store.lock:
            session = self._store.sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            if session.is_closed:
                raise SessionAlreadyClosedError(session_id)

            existing = self._store.initiatives_of(session_id)
            next_ordinal = existing[-1].ordinal + 1 if existing else 1

            created = []
            for offset, draft in enumerate(drafts):
                initiative = Initiative(
                    id=uuid4(),
                    session_id=session_id,
                    ordinal=next_ordinal + offset,
                    title=draft.title.strip(),
                    description=draft.description,
                    presenter=draft.presenter,
                    party=draft.party,
                    majority_type=draft.majority_type or MajorityType.SIMPLE,
                    created_at=created_at,
                )
                self._store.initiatives[initiative.id] = initiative
                created.append(initiative)
            return created

    async def get(self, initiative_id: UUID) -> Initiative | None:
        return self._store.initiatives.get(initiative_id)

    async def list_by_session(self, session_id: UUID) -> list[Initiative]:
        return self._store.initiatives_of(session_id)

    async def list_in_closed_sessions(self) -> list[Initiative]:
        closed = {s.id for s in self._store.sessions.values() if s.is_closed}
        return [i for i in self._store.initiatives.values() if i.session_id in closed]

    async def count_open(self, session_id: UUID) -> int:
        return sum(1 for i in self._store.initiatives_of(session_id) if i.is_open)

    async def open_exclusive(
        self,
        initiative_id: UUID,
        actor_id: UUID,
        at: datetime,
    ) -> tuple[Initiative, list[Initiative]]:
        async with self._store.lock:
            initiative = self._store.initiatives.get(initiative_id)
            if initiative is None:
                raise InitiativeNotFoundError(initiative_id)
            if initiative.is_closed:
                raise InitiativeAlreadyClosedError(initiative_id)
            if initiative.is_open:
                raise InitiativeAlreadyOpenError(initiative_id)
            session = self._store.sessions.get(initiative.session_id)
            if session is not None and session.is_closed:
                raise SessionAlreadyClosedError(initiative.session_id)

            demoted = []
            for other in self._store.initiatives_of(initiative.session_id):
                if other.is_open:
                    pending = other.demoted()
                    self._store.initiatives[other.id] = pending
                    demoted.append(pending)

            opened = initiative.opened(actor_id, at)
            self._store.initiatives[initiative_id] = opened
            return opened, demoted

    async def close_with_result(
        self,
        initiative_id: UUID,
        resolve: ResultResolver,
        actor_id: UUID,
        at: datetime,
    ) -> tuple[Initiative, Tally]:
        async with self._store.lock:
            initiative = self._store.initiatives.get(initiative_id)
            if initiative is None:
                raise InitiativeNotFoundError(initiative_id)
            if initiative.is_closed:
                raise InitiativeAlreadyClosedError(initiative_id)

            tally = Tally.from_values(
                v.value for v in self._store.votes_of(initiative_id)
            )
            closed = initiative.closed(
                tally, resolve(initiative.majority_type, tally), actor_id, at
            )
            self._store.initiatives[initiative_id] = closed
            return closed, tally

    def clear(self) -> None:
        """Remove every initiative (for testing)."""
        self._store.initiatives.clear()
