"""Unit tests for VoteLedgerService.

Tests cover:
- cast(): eligibility, open-only writes, upsert (last writer wins)
- cast(): principal re-check and check order; best-effort vote-update
- remove(): superadmin only, open-only, excluded from the next tally
- list_votes() / non_voters() / voter_stats() / votes_in_session()
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from legisvote.domain.errors import (
    InitiativeNotFoundError,
    InitiativeNotOpenError,
    InvalidVoteValueError,
    MemberNotFoundError,
    NotEligibleError,
    PermissionDeniedError,
    StateConflictError,
)
from legisvote.domain.events.notification import NotificationType
from legisvote.domain.models.initiative import Initiative
from legisvote.domain.models.member import MemberRole, Principal
from legisvote.domain.models.vote import VoteValue
from tests.helpers import ChamberHarness


async def _open_item(chamber: ChamberHarness, title: str = "Budget") -> Initiative:
    _, items = await chamber.session_with_agenda(title)
    return await chamber.initiatives.open(items[0].id, chamber.operator)


class TestCast:
    """Tests for cast()."""

    @pytest.mark.asyncio
    async def test_cast_stores_ballot(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)
        voter = chamber.legislators[0]

        vote = await chamber.ledger.cast(item.id, voter.id, "favor")

        assert vote.value is VoteValue.FAVOR
        assert await chamber.ledger.get_vote(item.id, voter.id) == vote

    @pytest.mark.asyncio
    async def test_recast_replaces_ballot(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)
        voter = chamber.legislators[0]

        await chamber.ledger.cast(item.id, voter.id, VoteValue.FAVOR)
        await chamber.ledger.cast(item.id, voter.id, VoteValue.AGAINST)
        await chamber.ledger.cast(item.id, voter.id, VoteValue.AGAINST)

        tally = await chamber.tally.tally(item.id)
        assert (tally.favor, tally.against, tally.total) == (0, 1, 1)

    @pytest.mark.asyncio
    async def test_cast_broadcasts_live_results(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)

        await chamber.ledger.cast(item.id, chamber.legislators[0].id, "abstain")

        update = chamber.bus.of_type(NotificationType.VOTE_UPDATE)[-1]
        assert update.session_id == item.session_id
        assert update.payload["removed"] is False
        assert update.payload["vote"]["value"] == "abstain"
        assert update.payload["results"]["tally"]["abstain"] == 1

    @pytest.mark.asyncio
    async def test_invalid_value_rejected(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)

        with pytest.raises(InvalidVoteValueError):
            await chamber.ledger.cast(item.id, chamber.legislators[0].id, "maybe")

        assert (await chamber.tally.tally(item.id)).total == 0

    @pytest.mark.asyncio
    async def test_unknown_voter(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)

        with pytest.raises(MemberNotFoundError):
            await chamber.ledger.cast(item.id, uuid4(), VoteValue.FAVOR)

    @pytest.mark.asyncio
    async def test_operator_cannot_vote(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)

        with pytest.raises(NotEligibleError) as exc_info:
            await chamber.ledger.cast(item.id, chamber.operator.id, VoteValue.FAVOR)

        assert exc_info.value.reason == "not_legislator"

    @pytest.mark.asyncio
    async def test_inactive_legislator_cannot_vote(
        self, chamber: ChamberHarness
    ) -> None:
        item = await _open_item(chamber)
        voter = chamber.legislators[0]
        chamber.roster.set_active(voter.id, False)

        with pytest.raises(NotEligibleError) as exc_info:
            await chamber.ledger.cast(item.id, voter.id, VoteValue.FAVOR)

        assert exc_info.value.reason == "inactive"

    @pytest.mark.asyncio
    async def test_pending_initiative_rejects(self, chamber: ChamberHarness) -> None:
        _, items = await chamber.session_with_agenda("Budget")

        with pytest.raises(InitiativeNotOpenError) as exc_info:
            await chamber.ledger.cast(
                items[0].id, chamber.legislators[0].id, VoteValue.FAVOR
            )

        assert exc_info.value.status == "pending"

    @pytest.mark.asyncio
    async def test_unknown_initiative(self, chamber: ChamberHarness) -> None:
        with pytest.raises(InitiativeNotFoundError):
            await chamber.ledger.cast(
                uuid4(), chamber.legislators[0].id, VoteValue.FAVOR
            )


class TestCastPrincipal:
    """cast() re-checks the acting principal before the roster."""

    @pytest.mark.asyncio
    async def test_own_principal_casts(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)
        voter = chamber.legislators[0]

        vote = await chamber.ledger.cast(
            item.id, voter.id, "favor", actor=voter.as_principal()
        )

        assert vote.voter_id == voter.id

    @pytest.mark.asyncio
    async def test_inactive_principal_rejected(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)
        voter = chamber.legislators[0]
        actor = Principal(id=voter.id, role=MemberRole.LEGISLATOR, active=False)

        with pytest.raises(NotEligibleError) as exc_info:
            await chamber.ledger.cast(item.id, voter.id, "favor", actor=actor)

        assert exc_info.value.reason == "inactive"
        assert await chamber.ledger.get_vote(item.id, voter.id) is None

    @pytest.mark.asyncio
    async def test_non_legislator_principal_rejected(
        self, chamber: ChamberHarness
    ) -> None:
        item = await _open_item(chamber)
        voter = chamber.legislators[0]
        actor = Principal(id=voter.id, role=MemberRole.OPERATOR)

        with pytest.raises(NotEligibleError) as exc_info:
            await chamber.ledger.cast(item.id, voter.id, "favor", actor=actor)

        assert exc_info.value.reason == "not_legislator"
        assert (await chamber.tally.tally(item.id)).total == 0

    @pytest.mark.asyncio
    async def test_casting_for_another_member_rejected(
        self, chamber: ChamberHarness
    ) -> None:
        item = await _open_item(chamber)
        first, second = chamber.legislators[:2]

        with pytest.raises(PermissionDeniedError):
            await chamber.ledger.cast(
                item.id, second.id, "favor", actor=first.as_principal()
            )

    @pytest.mark.asyncio
    async def test_eligibility_checked_before_value(
        self, chamber: ChamberHarness
    ) -> None:
        item = await _open_item(chamber)

        with pytest.raises(NotEligibleError):
            await chamber.ledger.cast(item.id, chamber.operator.id, "maybe")

    @pytest.mark.asyncio
    async def test_status_checked_before_value(self, chamber: ChamberHarness) -> None:
        _, items = await chamber.session_with_agenda("Budget")

        with pytest.raises(InitiativeNotOpenError):
            await chamber.ledger.cast(items[0].id, chamber.legislators[0].id, "maybe")


class TestBroadcastFailure:
    """A stored ballot stands even when the vote-update cannot be built."""

    @pytest.mark.asyncio
    async def test_cast_survives_results_failure(
        self, chamber: ChamberHarness
    ) -> None:
        item = await _open_item(chamber)
        voter = chamber.legislators[0]
        chamber.roster.count_active_legislators = AsyncMock(  # type: ignore[method-assign]
            side_effect=RuntimeError("roster down")
        )

        vote = await chamber.ledger.cast(item.id, voter.id, VoteValue.FAVOR)

        assert await chamber.ledger.get_vote(item.id, voter.id) == vote
        assert chamber.bus.of_type(NotificationType.VOTE_UPDATE) == []

    @pytest.mark.asyncio
    async def test_remove_survives_results_failure(
        self, chamber: ChamberHarness
    ) -> None:
        item = await _open_item(chamber)
        voter = chamber.legislators[0]
        await chamber.ledger.cast(item.id, voter.id, VoteValue.FAVOR)
        chamber.bus.reset()
        chamber.roster.count_active_legislators = AsyncMock(  # type: ignore[method-assign]
            side_effect=RuntimeError("roster down")
        )

        existed = await chamber.ledger.remove(item.id, voter.id, chamber.superadmin)

        assert existed is True
        assert await chamber.ledger.get_vote(item.id, voter.id) is None
        assert chamber.bus.of_type(NotificationType.VOTE_UPDATE) == []


class TestRemove:
    """Tests for remove()."""

    @pytest.mark.asyncio
    async def test_remove_on_open_excluded_from_tally(
        self, chamber: ChamberHarness
    ) -> None:
        item = await _open_item(chamber)
        await chamber.cast_many(item.id, favor=2, against=1)
        removed_voter = chamber.legislators[0].id

        existed = await chamber.ledger.remove(item.id, removed_voter, chamber.superadmin)

        assert existed is True
        tally = await chamber.tally.tally(item.id)
        assert (tally.favor, tally.against) == (1, 1)
        assert chamber.bus.of_type(NotificationType.VOTE_UPDATE)[-1].payload[
            "removed"
        ] is True

    @pytest.mark.asyncio
    async def test_remove_is_audited(self, chamber: ChamberHarness) -> None:
        from legisvote.domain.models.event_log_entry import EventLogKind

        item = await _open_item(chamber)
        await chamber.cast_many(item.id, favor=1)

        await chamber.ledger.remove(
            item.id, chamber.legislators[0].id, chamber.superadmin
        )

        kinds = [e.kind for e in chamber.event_log.entries]
        assert EventLogKind.VOTE_REMOVED in kinds

    @pytest.mark.asyncio
    async def test_remove_missing_returns_false(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)

        existed = await chamber.ledger.remove(
            item.id, chamber.legislators[0].id, chamber.superadmin
        )

        assert existed is False

    @pytest.mark.asyncio
    async def test_remove_on_closed_fails(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)
        await chamber.cast_many(item.id, favor=1)
        await chamber.initiatives.close(item.id, chamber.operator)

        with pytest.raises(StateConflictError):
            await chamber.ledger.remove(
                item.id, chamber.legislators[0].id, chamber.superadmin
            )

        assert await chamber.ledger.get_vote(item.id, chamber.legislators[0].id)

    @pytest.mark.asyncio
    async def test_operator_cannot_remove(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)
        await chamber.cast_many(item.id, favor=1)

        with pytest.raises(PermissionDeniedError):
            await chamber.ledger.remove(
                item.id, chamber.legislators[0].id, chamber.operator
            )


class TestLedgerReads:
    """Tests for the read operations."""

    @pytest.mark.asyncio
    async def test_list_votes_newest_first_with_identity(
        self, chamber: ChamberHarness
    ) -> None:
        item = await _open_item(chamber)
        await chamber.cast_many(item.id, favor=2, against=1)

        records = await chamber.ledger.list_votes(item.id)

        assert len(records) == 3
        cast_times = [r.vote.cast_at for r in records]
        assert cast_times == sorted(cast_times, reverse=True)
        assert {r.full_name for r in records} == {
            "Legislator 01",
            "Legislator 02",
            "Legislator 03",
        }
        assert all(r.party == "Party A" for r in records)

    @pytest.mark.asyncio
    async def test_list_votes_unknown_initiative(self, chamber: ChamberHarness) -> None:
        with pytest.raises(InitiativeNotFoundError):
            await chamber.ledger.list_votes(uuid4())

    @pytest.mark.asyncio
    async def test_non_voters(self, chamber: ChamberHarness) -> None:
        item = await _open_item(chamber)
        await chamber.cast_many(item.id, favor=2)

        missing = await chamber.ledger.non_voters(item.id)

        assert [m.full_name for m in missing] == [
            "Legislator 03",
            "Legislator 04",
            "Legislator 05",
        ]

    @pytest.mark.asyncio
    async def test_voter_stats_counts_closed_sessions_only(
        self, chamber: ChamberHarness
    ) -> None:
        voter = chamber.legislators[0]
        session, items = await chamber.session_with_agenda("One", "Two")
        await chamber.initiatives.open(items[0].id, chamber.operator)
        await chamber.ledger.cast(items[0].id, voter.id, VoteValue.FAVOR)
        await chamber.initiatives.close(items[0].id, chamber.operator)
        await chamber.initiatives.close(items[1].id, chamber.operator)

        before = await chamber.ledger.voter_stats(voter.id)
        await chamber.sessions.close(session.id, chamber.operator)
        after = await chamber.ledger.voter_stats(voter.id)

        assert before.closed_initiatives == 0
        assert before.participation_rate == 0
        assert after.closed_initiatives == 2
        assert after.tally.favor == 1
        assert after.participation_rate == 50

    @pytest.mark.asyncio
    async def test_voter_stats_unknown_member(self, chamber: ChamberHarness) -> None:
        with pytest.raises(MemberNotFoundError):
            await chamber.ledger.voter_stats(uuid4())

    @pytest.mark.asyncio
    async def test_votes_in_session_agenda_order(
        self, chamber: ChamberHarness
    ) -> None:
        voter = chamber.legislators[0]
        session, items = await chamber.session_with_agenda("One", "Two", "Three")
        for item, value in ((items[2], "against"), (items[0], "favor")):
            await chamber.initiatives.open(item.id, chamber.operator)
            await chamber.ledger.cast(item.id, voter.id, value)
        _, other_items = await chamber.session_with_agenda("Elsewhere")
        await chamber.initiatives.open(other_items[0].id, chamber.operator)
        await chamber.ledger.cast(other_items[0].id, voter.id, "abstain")

        ballots = await chamber.ledger.votes_in_session(voter.id, session.id)

        assert [b.initiative_id for b in ballots] == [items[0].id, items[2].id]
