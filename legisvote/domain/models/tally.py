"""Vote tally value object.

A tally is always derived from the vote ledger. It is never maintained
incrementally, so rebuilding it from the same ballots always yields the
same counts.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from legisvote.domain.models.vote import VoteValue


@dataclass(frozen=True)
class Tally:
    """Counts of ballots per value for one initiative.

    Attributes:
        favor: Ballots in favor.
        against: Ballots against.
        abstain: Abstentions.
        total: Sum of the three counts.
    """

    favor: int = 0
    against: int = 0
    abstain: int = 0
    total: int = 0

    def __post_init__(self) -> None:
        """Validate counts are non-negative and consistent."""
        if min(self.favor, self.against, self.abstain) < 0:
            raise ValueError("Tally counts must be non-negative")
        if self.total != self.favor + self.against + self.abstain:
            raise ValueError("Tally total must equal the sum of its counts")

    @classmethod
    def of(cls, favor: int, against: int, abstain: int) -> Tally:
        """Build a tally from the three counts."""
        return cls(
            favor=favor,
            against=against,
            abstain=abstain,
            total=favor + against + abstain,
        )

    @classmethod
    def from_values(cls, values: Iterable[VoteValue]) -> Tally:
        """Aggregate a stream of ballot values."""
        counts = {value: 0 for value in VoteValue}
        for value in values:
            counts[value] += 1
        return cls.of(
            counts[VoteValue.FAVOR],
            counts[VoteValue.AGAINST],
            counts[VoteValue.ABSTAIN],
        )

    def count(self, value: VoteValue) -> int:
        """Get the count for one ballot value."""
        return {
            VoteValue.FAVOR: self.favor,
            VoteValue.AGAINST: self.against,
            VoteValue.ABSTAIN: self.abstain,
        }[value]

    def to_dict(self) -> dict[str, int]:
        """Serialize for notifications and API payloads."""
        return {
            "favor": self.favor,
            "against": self.against,
            "abstain": self.abstain,
            "total": self.total,
        }
