"""Voting result read models.

Dataclass DTOs returned by the tally and ledger services. The API layer
maps them onto its own Pydantic response models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

from legisvote.domain.models.initiative import InitiativeResult, MajorityType
from legisvote.domain.models.tally import Tally


class ParticipationLevel(Enum):
    """Banding of the participation rate."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ConsensusLevel(Enum):
    """Banding of the favor share of ballots cast."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class VotePercentages:
    """Share of ballots cast per value, rounded half up."""

    favor: int = 0
    against: int = 0
    abstain: int = 0


@dataclass(frozen=True)
class VotingAnalysis:
    """Qualitative reading of a tally.

    Attributes:
        participation_level: HIGH >= 80%, MEDIUM >= 60%, else LOW.
        consensus_level: HIGH when favor >= 80% of ballots, MEDIUM >= 60%.
        abstention_rate: Abstentions as percent of ballots, one decimal.
        turnout_sufficient: True when at least half the roll voted.
    """

    participation_level: ParticipationLevel
    consensus_level: ConsensusLevel
    abstention_rate: float
    turnout_sufficient: bool


@dataclass(frozen=True)
class VotingResults:
    """Live results of one initiative.

    Attributes:
        initiative_id: Initiative tallied.
        majority_type: Its majority rule.
        tally: Live ballot counts.
        percentages: Share of ballots per value.
        eligible_count: Active legislators at tally time.
        participation_rate: Percent of the roll that voted.
        required_favor: Favor ballots needed for approval right now.
        projected_result: Result if the initiative closed now.
        analysis: Qualitative reading.
    """

    initiative_id: UUID
    majority_type: MajorityType
    tally: Tally
    percentages: VotePercentages
    eligible_count: int
    participation_rate: int
    required_favor: int
    projected_result: InitiativeResult
    analysis: VotingAnalysis


@dataclass(frozen=True)
class VoterStats:
    """Ballot statistics for one legislator.

    Attributes:
        voter_id: The legislator.
        tally: Counts of the voter's ballots per value.
        closed_initiatives: Initiatives of closed sessions.
        participation_rate: Percent of those initiatives the voter voted on.
    """

    voter_id: UUID
    tally: Tally = field(default_factory=Tally)
    closed_initiatives: int = 0
    participation_rate: int = 0
