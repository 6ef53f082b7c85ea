"""Tally service: live vote aggregation.

Every figure here is computed on demand from the vote ledger and the
member roster. Nothing is cached; the only stored counts are the ones
written onto an initiative when it closes.

Read-only aggregation never raises on empty data. An initiative with no
ballots yields a zero tally, and an empty roll yields a 0% participation.
"""

from __future__ import annotations

from uuid import UUID

from legisvote.application.dtos.voting_results import (
    ConsensusLevel,
    ParticipationLevel,
    VotePercentages,
    VotingAnalysis,
    VotingResults,
)
from legisvote.application.ports.initiative_repository import (
    InitiativeRepositoryProtocol,
)
from legisvote.application.ports.member_roster import MemberRosterProtocol
from legisvote.application.ports.vote_repository import VoteRepositoryProtocol
from legisvote.application.services.base import LoggingMixin
from legisvote.domain.errors import InitiativeNotFoundError
from legisvote.domain.models.initiative import Initiative, InitiativeStatus
from legisvote.domain.models.tally import Tally
from legisvote.domain.services.majority_resolution import (
    compute_result,
    participation_rate,
    required_favor,
    rounded_percentage,
)

# Banding thresholds for VotingAnalysis (percent)
HIGH_PARTICIPATION = 80
MEDIUM_PARTICIPATION = 60
HIGH_CONSENSUS = 80
MEDIUM_CONSENSUS = 60


class TallyService(LoggingMixin):
    """Live aggregation over the vote ledger.

    Attributes:
        _votes: Ballot ledger.
        _roster: Member roster (eligible roll).
        _initiatives: Initiative storage, for majority type and status.
    """

    def __init__(
        self,
        votes: VoteRepositoryProtocol,
        roster: MemberRosterProtocol,
        initiatives: InitiativeRepositoryProtocol,
    ) -> None:
        self._votes = votes
        self._roster = roster
        self._initiatives = initiatives
        self._init_logger(component="tally")

    async def tally(self, initiative_id: UUID) -> Tally:
        """Aggregate an initiative's ballots right now.

        Returns:
            {favor, against, abstain, total}; zeros when nobody voted.
        """
        return await self._votes.tally(initiative_id)

    async def eligible_count(self) -> int:
        """Count active legislators at call time."""
        return await self._roster.count_active_legislators()

    @staticmethod
    def participation_rate(tally: Tally, eligible_count: int) -> int:
        """round(total / eligible * 100); 0 when nobody is eligible."""
        return participation_rate(tally, eligible_count)

    async def voting_results(self, initiative_id: UUID) -> VotingResults:
        """Build the live results view of an initiative.

        For a closed initiative the counts come from the closure cache, so
        the view matches the persisted result.

        Raises:
            InitiativeNotFoundError: If the initiative does not exist.
        """
        initiative = await self._initiatives.get(initiative_id)
        if initiative is None:
            raise InitiativeNotFoundError(initiative_id)

        tally = await self._current_tally(initiative)
        eligible = await self.eligible_count()
        rate = participation_rate(tally, eligible)

        self._log_operation(
            "voting_results",
            initiative_id=str(initiative_id),
            total=tally.total,
            eligible=eligible,
        ).debug("voting_results_computed")

        return VotingResults(
            initiative_id=initiative.id,
            majority_type=initiative.majority_type,
            tally=tally,
            percentages=VotePercentages(
                favor=rounded_percentage(tally.favor, tally.total),
                against=rounded_percentage(tally.against, tally.total),
                abstain=rounded_percentage(tally.abstain, tally.total),
            ),
            eligible_count=eligible,
            participation_rate=rate,
            required_favor=required_favor(initiative.majority_type, tally, eligible),
            projected_result=(
                initiative.result
                if initiative.status is InitiativeStatus.CLOSED
                else compute_result(initiative.majority_type, tally, eligible)
            ),
            analysis=analyze(tally, eligible, rate),
        )

    async def _current_tally(self, initiative: Initiative) -> Tally:
        """Closure cache for closed initiatives, live ledger otherwise."""
        if initiative.status is InitiativeStatus.CLOSED:
            return initiative.cached_tally
        return await self._votes.tally(initiative.id)


def analyze(tally: Tally, eligible_count: int, rate: int) -> VotingAnalysis:
    """Qualitative reading of a tally.

    Args:
        tally: Ballot counts.
        eligible_count: Active legislators at tally time.
        rate: Participation rate in percent.

    Returns:
        VotingAnalysis. With no ballots, consensus is LOW and the
        abstention rate is 0.0.
    """
    if rate >= HIGH_PARTICIPATION:
        participation = ParticipationLevel.HIGH
    elif rate >= MEDIUM_PARTICIPATION:
        participation = ParticipationLevel.MEDIUM
    else:
        participation = ParticipationLevel.LOW

    # favor / total compared as integers to avoid float thresholds
    if tally.total and tally.favor * 100 >= HIGH_CONSENSUS * tally.total:
        consensus = ConsensusLevel.HIGH
    elif tally.total and tally.favor * 100 >= MEDIUM_CONSENSUS * tally.total:
        consensus = ConsensusLevel.MEDIUM
    else:
        consensus = ConsensusLevel.LOW

    abstention = round(tally.abstain * 100 / tally.total, 1) if tally.total else 0.0

    return VotingAnalysis(
        participation_level=participation,
        consensus_level=consensus,
        abstention_rate=abstention,
        turnout_sufficient=tally.total * 2 >= eligible_count,
    )
