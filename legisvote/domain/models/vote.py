"""Ballot domain model.

One ballot exists per (initiative, voter). Re-casting replaces the value
and timestamp; there is no history of superseded ballots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from legisvote.domain.errors.validation import InvalidVoteValueError


class VoteValue(Enum):
    """Allowed ballot values."""

    FAVOR = "favor"
    AGAINST = "against"
    ABSTAIN = "abstain"

    @classmethod
    def parse(cls, raw: VoteValue | str) -> VoteValue:
        """Coerce a raw ballot value.

        Raises:
            InvalidVoteValueError: If raw is not an allowed value.
        """
        if isinstance(raw, VoteValue):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        raise InvalidVoteValueError(raw, allowed=[v.value for v in cls])


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Vote:
    """A legislator's ballot on an initiative.

    Attributes:
        initiative_id: Initiative voted on.
        voter_id: Legislator who cast the ballot.
        value: Ballot value.
        cast_at: Time of the latest cast (UTC).
    """

    initiative_id: UUID
    voter_id: UUID
    value: VoteValue
    cast_at: datetime = field(default_factory=_utc_now)

    @property
    def key(self) -> tuple[UUID, UUID]:
        """Ledger key: one ballot per (initiative, voter)."""
        return (self.initiative_id, self.voter_id)


@dataclass(frozen=True)
class VoteRecord:
    """A ballot joined with the voter's identity, for listings.

    Attributes:
        vote: The ballot.
        full_name: Voter's display name.
        party: Voter's party, if any.
        board_position: Voter's seat on the chamber board, if any.
    """

    vote: Vote
    full_name: str
    party: str | None = None
    board_position: str | None = None
