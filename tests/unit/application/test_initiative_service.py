"""Unit tests for InitiativeService.

Tests cover:
- batch_create(): ordinals continue, closed session rejected, validation
- open(): single open initiative per session, demotion keeps ballots
- close(): tally + result persisted atomically, terminal, zero-vote close
- concurrent open() calls
"""

import asyncio
from uuid import uuid4

import pytest

from legisvote.domain.errors import (
    InitiativeAlreadyClosedError,
    InitiativeAlreadyOpenError,
    InitiativeNotFoundError,
    InitiativeNotOpenError,
    MissingFieldError,
    PermissionDeniedError,
    SessionAlreadyClosedError,
    SessionNotFoundError,
)
from legisvote.domain.events.notification import NotificationType
from legisvote.domain.models.initiative import (
    InitiativeDraft,
    InitiativeResult,
    InitiativeStatus,
    MajorityType,
)
from legisvote.domain.models.vote import VoteValue
from tests.helpers import ChamberHarness


class TestBatchCreate:
    """Tests for batch_create()."""

    @pytest.mark.asyncio
    async def test_ordinals_continue_after_existing(
        self, chamber: ChamberHarness
    ) -> None:
        session, _ = await chamber.session_with_agenda("One", "Two")

        added = await chamber.initiatives.batch_create(
            session.id,
            [InitiativeDraft(title="Three"), InitiativeDraft(title="Four")],
            chamber.operator,
        )

        assert [i.ordinal for i in added] == [3, 4]
        listed = await chamber.initiatives.list_for_session(session.id)
        assert [i.title for i in listed] == ["One", "Two", "Three", "Four"]

    @pytest.mark.asyncio
    async def test_closed_session_rejected(self, chamber: ChamberHarness) -> None:
        session, _ = await chamber.session_with_agenda()
        await chamber.sessions.close(session.id, chamber.operator)

        with pytest.raises(SessionAlreadyClosedError):
            await chamber.initiatives.batch_create(
                session.id, [InitiativeDraft(title="Late")], chamber.operator
            )

    @pytest.mark.asyncio
    async def test_unknown_session_rejected(self, chamber: ChamberHarness) -> None:
        with pytest.raises(SessionNotFoundError):
            await chamber.initiatives.batch_create(
                uuid4(), [InitiativeDraft(title="Orphan")], chamber.operator
            )

    @pytest.mark.asyncio
    async def test_missing_title_rejected(self, chamber: ChamberHarness) -> None:
        session, _ = await chamber.session_with_agenda("One")

        with pytest.raises(MissingFieldError) as exc_info:
            await chamber.initiatives.batch_create(
                session.id, [InitiativeDraft(title="")], chamber.operator
            )

        assert exc_info.value.field == "title"
        assert len(await chamber.initiatives.list_for_session(session.id)) == 1

    @pytest.mark.asyncio
    async def test_secretary_cannot_add(self, chamber: ChamberHarness) -> None:
        from legisvote.domain.models.member import MemberRole
        from tests.helpers import make_principal

        session, _ = await chamber.session_with_agenda()

        with pytest.raises(PermissionDeniedError):
            await chamber.initiatives.batch_create(
                session.id,
                [InitiativeDraft(title="X")],
                make_principal(MemberRole.SECRETARY),
            )


class TestOpen:
    """Tests for open()."""

    @pytest.mark.asyncio
    async def test_open_sets_status_and_notifies(self, chamber: ChamberHarness) -> None:
        _, items = await chamber.session_with_agenda("Budget")

        opened = await chamber.initiatives.open(items[0].id, chamber.operator)

        assert opened.status is InitiativeStatus.OPEN
        assert opened.opened_by == chamber.operator.id
        assert chamber.bus.types()[-1] is NotificationType.INITIATIVE_OPENED

    @pytest.mark.asyncio
    async def test_opening_second_demotes_first_and_keeps_ballots(
        self, chamber: ChamberHarness
    ) -> None:
        session, items = await chamber.session_with_agenda("One", "Two")
        await chamber.initiatives.open(items[0].id, chamber.operator)
        await chamber.cast_many(items[0].id, favor=2)

        await chamber.initiatives.open(items[1].id, chamber.operator)

        first = await chamber.initiatives.get(items[0].id)
        assert first.status is InitiativeStatus.PENDING
        assert (await chamber.initiatives.get_open(session.id)).id == items[1].id
        assert (await chamber.tally.tally(items[0].id)).favor == 2

    @pytest.mark.asyncio
    async def test_open_twice_rejected(self, chamber: ChamberHarness) -> None:
        _, items = await chamber.session_with_agenda("Budget")
        await chamber.initiatives.open(items[0].id, chamber.operator)

        with pytest.raises(InitiativeAlreadyOpenError):
            await chamber.initiatives.open(items[0].id, chamber.operator)

    @pytest.mark.asyncio
    async def test_open_closed_rejected(self, chamber: ChamberHarness) -> None:
        _, items = await chamber.session_with_agenda("Budget")
        await chamber.initiatives.open(items[0].id, chamber.operator)
        await chamber.initiatives.close(items[0].id, chamber.operator)

        with pytest.raises(InitiativeAlreadyClosedError):
            await chamber.initiatives.open(items[0].id, chamber.operator)

    @pytest.mark.asyncio
    async def test_open_in_closed_session_rejected(
        self, chamber: ChamberHarness
    ) -> None:
        session, items = await chamber.session_with_agenda("A", "B")
        await chamber.sessions.close(session.id, chamber.operator)
        chamber.bus.reset()

        with pytest.raises(SessionAlreadyClosedError):
            await chamber.initiatives.open(items[0].id, chamber.operator)

        assert (await chamber.initiatives.get(items[0].id)).status is (
            InitiativeStatus.PENDING
        )
        assert chamber.bus.types() == []
        with pytest.raises(InitiativeNotOpenError):
            await chamber.ledger.cast(
                items[0].id, chamber.legislators[0].id, VoteValue.FAVOR
            )

    @pytest.mark.asyncio
    async def test_open_unknown(self, chamber: ChamberHarness) -> None:
        with pytest.raises(InitiativeNotFoundError):
            await chamber.initiatives.open(uuid4(), chamber.operator)

    @pytest.mark.asyncio
    async def test_concurrent_opens_leave_one_open(
        self, chamber: ChamberHarness
    ) -> None:
        session, items = await chamber.session_with_agenda("A", "B", "C", "D")

        await asyncio.gather(
            *(chamber.initiatives.open(i.id, chamber.operator) for i in items),
            return_exceptions=True,
        )

        listed = await chamber.initiatives.list_for_session(session.id)
        assert sum(1 for i in listed if i.is_open) == 1

    @pytest.mark.asyncio
    async def test_open_in_other_session_is_independent(
        self, chamber: ChamberHarness
    ) -> None:
        _, first_items = await chamber.session_with_agenda("A")
        _, second_items = await chamber.session_with_agenda("B")

        await chamber.initiatives.open(first_items[0].id, chamber.operator)
        await chamber.initiatives.open(second_items[0].id, chamber.operator)

        assert (await chamber.initiatives.get(first_items[0].id)).is_open
        assert (await chamber.initiatives.get(second_items[0].id)).is_open


class TestClose:
    """Tests for close()."""

    @pytest.mark.asyncio
    async def test_close_with_zero_votes(self, chamber: ChamberHarness) -> None:
        _, items = await chamber.session_with_agenda("Budget")
        await chamber.initiatives.open(items[0].id, chamber.operator)

        closed, tally = await chamber.initiatives.close(items[0].id, chamber.operator)

        assert closed.result is InitiativeResult.NO_VOTES
        assert (closed.votes_favor, closed.votes_against, closed.votes_abstain) == (
            0,
            0,
            0,
        )
        assert tally.total == 0

    @pytest.mark.asyncio
    async def test_close_persists_counts_and_result(
        self, chamber: ChamberHarness
    ) -> None:
        _, items = await chamber.session_with_agenda("Budget")
        await chamber.initiatives.open(items[0].id, chamber.operator)
        await chamber.cast_many(items[0].id, favor=3, against=1, abstain=1)

        closed, tally = await chamber.initiatives.close(items[0].id, chamber.operator)

        assert closed.result is InitiativeResult.APPROVED
        assert closed.cached_tally == tally
        assert closed.closed_by == chamber.operator.id
        notification = chamber.bus.of_type(NotificationType.INITIATIVE_CLOSED)[0]
        assert notification.payload["result"] == "approved"
        assert notification.payload["tally"]["total"] == 5

    @pytest.mark.asyncio
    async def test_close_tie(self, chamber: ChamberHarness) -> None:
        _, items = await chamber.session_with_agenda("Budget")
        await chamber.initiatives.open(items[0].id, chamber.operator)
        await chamber.cast_many(items[0].id, favor=2, against=2, abstain=1)

        closed, _ = await chamber.initiatives.close(items[0].id, chamber.operator)

        assert closed.result is InitiativeResult.TIE

    @pytest.mark.asyncio
    async def test_qualified_uses_eligible_roll(self) -> None:
        chamber = ChamberHarness.build(legislators=6)
        result = await chamber.sessions.create(
            chamber.operator,
            initiatives=[
                InitiativeDraft(title="Reform", majority_type=MajorityType.QUALIFIED),
                InitiativeDraft(title="Amend", majority_type=MajorityType.QUALIFIED),
            ],
        )
        reform, amend = result.initiatives

        await chamber.initiatives.open(reform.id, chamber.operator)
        await chamber.cast_many(reform.id, favor=4, against=1, abstain=1)
        closed_reform, _ = await chamber.initiatives.close(reform.id, chamber.operator)

        await chamber.initiatives.open(amend.id, chamber.operator)
        await chamber.cast_many(amend.id, favor=3)
        closed_amend, _ = await chamber.initiatives.close(amend.id, chamber.operator)

        assert closed_reform.result is InitiativeResult.APPROVED
        assert closed_amend.result is not InitiativeResult.APPROVED

    @pytest.mark.asyncio
    async def test_close_is_terminal(self, chamber: ChamberHarness) -> None:
        _, items = await chamber.session_with_agenda("Budget")
        await chamber.initiatives.open(items[0].id, chamber.operator)
        await chamber.initiatives.close(items[0].id, chamber.operator)

        with pytest.raises(InitiativeAlreadyClosedError):
            await chamber.initiatives.close(items[0].id, chamber.operator)
        with pytest.raises(InitiativeNotOpenError):
            await chamber.ledger.cast(
                items[0].id, chamber.legislators[0].id, VoteValue.FAVOR
            )

    @pytest.mark.asyncio
    async def test_close_pending_initiative_resolves_no_votes(
        self, chamber: ChamberHarness
    ) -> None:
        _, items = await chamber.session_with_agenda("Budget")

        closed, _ = await chamber.initiatives.close(items[0].id, chamber.operator)

        assert closed.status is InitiativeStatus.CLOSED
        assert closed.result is InitiativeResult.NO_VOTES

    @pytest.mark.asyncio
    async def test_get_open_none(self, chamber: ChamberHarness) -> None:
        session, _ = await chamber.session_with_agenda("Budget")

        assert await chamber.initiatives.get_open(session.id) is None
