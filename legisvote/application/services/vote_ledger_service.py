"""Vote Ledger Service: one ballot per (initiative, voter).

Casting is an upsert: a second ballot from the same voter replaces the
first (last writer wins). Ballots are accepted only while the initiative
is OPEN; the status check happens inside the repository write, so a
ballot racing a close() either lands before the count or is rejected.

After closure the ballots are immutable history.

Developer Golden Rules:
1. ELIGIBILITY FIRST - Only active legislators may cast ballots
2. CONDITIONAL WRITE - Never read the status and then write
3. BROADCAST LIVE RESULTS - Every ledger change emits vote-update
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from legisvote.application.dtos.voting_results import VoterStats
from legisvote.application.ports.initiative_repository import (
    InitiativeRepositoryProtocol,
)
from legisvote.application.ports.member_roster import MemberRosterProtocol
from legisvote.application.ports.vote_repository import VoteRepositoryProtocol
from legisvote.application.services.authorization import require_role
from legisvote.application.services.base import LoggingMixin
from legisvote.application.services.lifecycle_recorder import LifecycleRecorder
from legisvote.application.services.tally_service import TallyService
from legisvote.domain.errors import (
    InitiativeNotFoundError,
    InitiativeNotOpenError,
    MemberNotFoundError,
    NotEligibleError,
    PermissionDeniedError,
)
from legisvote.domain.events.notification import NotificationType
from legisvote.domain.models.event_log_entry import EventLogKind
from legisvote.domain.models.initiative import Initiative
from legisvote.domain.models.member import (
    LEDGER_ADMIN_ROLES,
    Member,
    MemberRole,
    Principal,
)
from legisvote.domain.models.tally import Tally
from legisvote.domain.models.vote import Vote, VoteRecord, VoteValue
from legisvote.domain.services.majority_resolution import rounded_percentage


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class VoteLedgerService(LoggingMixin):
    """Service for casting, removing and reading ballots.

    Attributes:
        _votes: Ballot ledger.
        _roster: Member roster, for eligibility and voter identity.
        _initiatives: Initiative storage.
        _tally: Live aggregation, for the vote-update payload.
        _recorder: Audit + notification glue.
    """

    def __init__(
        self,
        votes: VoteRepositoryProtocol,
        roster: MemberRosterProtocol,
        initiatives: InitiativeRepositoryProtocol,
        tally: TallyService,
        recorder: LifecycleRecorder,
    ) -> None:
        self._votes = votes
        self._roster = roster
        self._initiatives = initiatives
        self._tally = tally
        self._recorder = recorder
        self._init_logger(component="ledger")

    async def cast(
        self,
        initiative_id: UUID,
        voter_id: UUID,
        value: VoteValue | str,
        actor: Principal | None = None,
    ) -> Vote:
        """Record or replace a voter's ballot.

        Checks run in order: the acting principal, the roster entry, the
        initiative status, then the ballot value. The status is checked
        again inside the write.

        Args:
            initiative_id: Initiative being voted on.
            voter_id: Casting legislator.
            value: favor, against or abstain.
            actor: Principal making the call. When given it must be the
                voter itself, active, and a legislator.

        Returns:
            The stored ballot.

        Raises:
            PermissionDeniedError: If actor casts for another member.
            MemberNotFoundError: If the voter is unknown to the roster.
            NotEligibleError: If the voter is not an active legislator.
            InitiativeNotFoundError: If the initiative does not exist.
            InitiativeNotOpenError: If the initiative is not open.
            InvalidVoteValueError: If value is not an allowed ballot value.
        """
        log = self._log_operation(
            "cast",
            initiative_id=str(initiative_id),
            voter_id=str(voter_id),
        )
        if actor is not None:
            self._require_voting_principal(actor, voter_id)
        await self._require_eligible(voter_id)
        await self._require_open(initiative_id)
        ballot_value = VoteValue.parse(value)

        stored, previous = await self._votes.upsert_if_open(
            Vote(
                initiative_id=initiative_id,
                voter_id=voter_id,
                value=ballot_value,
                cast_at=_utc_now(),
            )
        )
        log.info(
            "cast_completed",
            value=stored.value.value,
            replaced=previous.value.value if previous else None,
        )

        await self._broadcast(initiative_id, vote=stored, removed=False)
        return stored

    async def remove(
        self,
        initiative_id: UUID,
        voter_id: UUID,
        actor: Principal,
    ) -> bool:
        """Delete a ballot from an open initiative.

        Returns:
            True if a ballot existed and was deleted.

        Raises:
            PermissionDeniedError: If the actor is not a superadmin.
            InitiativeNotFoundError: If the initiative does not exist.
            InitiativeNotOpenError: If the initiative is not open.
        """
        log = self._log_operation(
            "remove",
            initiative_id=str(initiative_id),
            voter_id=str(voter_id),
            actor_id=str(actor.id),
        )
        require_role(actor, LEDGER_ADMIN_ROLES, "remove votes")

        existed = await self._votes.delete_if_open(initiative_id, voter_id)
        log.info("remove_completed", existed=existed)
        if not existed:
            return False

        initiative = await self._initiatives.get(initiative_id)
        if initiative is not None:
            await self._recorder.record(
                initiative.session_id,
                EventLogKind.VOTE_REMOVED,
                f"Ballot of voter {voter_id} removed from initiative "
                f"#{initiative.ordinal}",
                actor.id,
            )
        await self._broadcast(initiative_id, voter_id=voter_id, removed=True)
        return True

    async def get_vote(self, initiative_id: UUID, voter_id: UUID) -> Vote | None:
        """A voter's current ballot on an initiative, if any."""
        return await self._votes.get(initiative_id, voter_id)

    async def list_votes(self, initiative_id: UUID) -> list[VoteRecord]:
        """An initiative's ballots with voter identity, newest first.

        Raises:
            InitiativeNotFoundError: If the initiative does not exist.
        """
        await self._get_initiative(initiative_id)
        records = []
        for vote in await self._votes.list_by_initiative(initiative_id):
            member = await self._roster.get_member(vote.voter_id)
            if member is None:
                records.append(VoteRecord(vote=vote, full_name=str(vote.voter_id)))
                continue
            records.append(
                VoteRecord(
                    vote=vote,
                    full_name=member.full_name,
                    party=member.party,
                    board_position=member.board_position,
                )
            )
        return records

    async def non_voters(self, initiative_id: UUID) -> list[Member]:
        """Active legislators with no ballot on the initiative.

        Raises:
            InitiativeNotFoundError: If the initiative does not exist.
        """
        await self._get_initiative(initiative_id)
        voted = {v.voter_id for v in await self._votes.list_by_initiative(initiative_id)}
        legislators = await self._roster.list_active_legislators()
        return sorted(
            (m for m in legislators if m.id not in voted),
            key=lambda m: m.full_name,
        )

    async def voter_stats(self, voter_id: UUID) -> VoterStats:
        """Ballot counts and participation of one legislator.

        Participation is measured over the initiatives of closed sessions.

        Raises:
            MemberNotFoundError: If the voter is unknown to the roster.
        """
        if await self._roster.get_member(voter_id) is None:
            raise MemberNotFoundError(voter_id)

        closed = {i.id for i in await self._initiatives.list_in_closed_sessions()}
        ballots = [
            v for v in await self._votes.list_by_voter(voter_id)
            if v.initiative_id in closed
        ]
        return VoterStats(
            voter_id=voter_id,
            tally=Tally.from_values(v.value for v in ballots),
            closed_initiatives=len(closed),
            participation_rate=rounded_percentage(len(ballots), len(closed)),
        )

    async def votes_in_session(self, voter_id: UUID, session_id: UUID) -> list[Vote]:
        """A voter's ballots on one session's initiatives, in agenda order."""
        agenda = await self._initiatives.list_by_session(session_id)
        order = {i.id: i.ordinal for i in agenda}
        ballots = [
            v for v in await self._votes.list_by_voter(voter_id)
            if v.initiative_id in order
        ]
        return sorted(ballots, key=lambda v: order[v.initiative_id])

    def _require_voting_principal(self, actor: Principal, voter_id: UUID) -> None:
        """Re-check the principal's own flags before touching the roster."""
        if actor.id != voter_id:
            self._log.warning(
                "cast_rejected",
                reason="proxy_vote",
                actor_id=str(actor.id),
                voter_id=str(voter_id),
            )
            raise PermissionDeniedError(
                actor.id,
                "cast votes for another member",
                [MemberRole.LEGISLATOR.value],
                reason="proxy_vote",
            )
        if not actor.active:
            raise NotEligibleError(voter_id, reason="inactive")
        if actor.role is not MemberRole.LEGISLATOR:
            raise NotEligibleError(voter_id, reason="not_legislator")

    async def _require_eligible(self, voter_id: UUID) -> Member:
        member = await self._roster.get_member(voter_id)
        if member is None:
            raise MemberNotFoundError(voter_id)
        if member.role is not MemberRole.LEGISLATOR:
            raise NotEligibleError(voter_id, reason="not_legislator")
        if not member.active:
            raise NotEligibleError(voter_id, reason="inactive")
        return member

    async def _require_open(self, initiative_id: UUID) -> Initiative:
        initiative = await self._get_initiative(initiative_id)
        if not initiative.is_open:
            raise InitiativeNotOpenError(initiative_id, initiative.status.value)
        return initiative

    async def _get_initiative(self, initiative_id: UUID) -> Initiative:
        initiative = await self._initiatives.get(initiative_id)
        if initiative is None:
            raise InitiativeNotFoundError(initiative_id)
        return initiative

    async def _broadcast(self, initiative_id: UUID, **records: object) -> None:
        """Emit vote-update with the live results of the initiative.

        The ledger write has already committed, so a failure while building
        the payload is logged and dropped.
        """
        try:
            initiative = await self._get_initiative(initiative_id)
            results = await self._tally.voting_results(initiative_id)
        except Exception as e:
            self._log.warning(
                "vote_update_skipped",
                initiative_id=str(initiative_id),
                error=str(e),
            )
            return
        self._recorder.notify(
            NotificationType.VOTE_UPDATE,
            session_id=initiative.session_id,
            initiative_id=initiative_id,
            results=results,
            **records,
        )
