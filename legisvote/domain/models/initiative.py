"""Initiative domain model.

An initiative is a single agenda item of a session, resolved by one
roll-call vote. Its lifecycle is linear:

    PENDING -> OPEN -> CLOSED (terminal)

An open initiative may also be demoted back to PENDING when the operator
opens a different initiative of the same session; its ballots are kept.
The favor/against/abstain counts on the record are a cache written only
when the initiative is closed. While open, tallies are always computed
live from the vote ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from legisvote.domain.models.tally import Tally


class MajorityType(Enum):
    """Majority rule an initiative is resolved under."""

    SIMPLE = "simple"
    ABSOLUTE = "absolute"
    QUALIFIED = "qualified"
    UNANIMOUS = "unanimous"


class InitiativeStatus(Enum):
    """Lifecycle status of an initiative."""

    PENDING = "pending"
    OPEN = "open"
    CLOSED = "closed"


class InitiativeResult(Enum):
    """Outcome of an initiative. PENDING until the initiative closes."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    TIE = "tie"
    NO_VOTES = "no_votes"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class InitiativeDraft:
    """Initiative descriptor supplied by the agenda source.

    Attributes:
        title: Title as printed on the agenda (required).
        description: Longer summary.
        presenter: Name of the presenting legislator or body.
        party: Party of the presenter.
        majority_type: Majority rule; None means SIMPLE.
    """

    title: str
    description: str = ""
    presenter: str = ""
    party: str = ""
    majority_type: MajorityType | None = None


@dataclass(frozen=True, eq=True)
class Initiative:
    """An agenda item resolved by a roll-call vote.

    Attributes:
        id: Unique identifier.
        session_id: Owning session (immutable).
        ordinal: Presentation order, unique within the session, from 1.
        title: Agenda title.
        description: Longer summary.
        presenter: Presenting legislator or body.
        party: Party of the presenter.
        majority_type: Majority rule applied at closure.
        status: Lifecycle status.
        result: Outcome, PENDING until closure.
        votes_favor: Cached favor count, written at closure.
        votes_against: Cached against count, written at closure.
        votes_abstain: Cached abstain count, written at closure.
        opened_at: Last time the initiative was opened.
        opened_by: Principal that last opened it.
        closed_at: Closure time.
        closed_by: Principal that closed it.
        created_at: Creation timestamp (UTC).
    """

    id: UUID
    session_id: UUID
    ordinal: int
    title: str
    description: str = ""
    presenter: str = ""
    party: str = ""
    majority_type: MajorityType = field(default=MajorityType.SIMPLE)
    status: InitiativeStatus = field(default=InitiativeStatus.PENDING)
    result: InitiativeResult = field(default=InitiativeResult.PENDING)
    votes_favor: int = 0
    votes_against: int = 0
    votes_abstain: int = 0
    opened_at: datetime | None = None
    opened_by: UUID | None = None
    closed_at: datetime | None = None
    closed_by: UUID | None = None
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate initiative fields."""
        if self.ordinal < 1:
            raise ValueError("Initiative ordinal must be >= 1")
        if not self.title.strip():
            raise ValueError("Initiative title must not be blank")

    @property
    def is_open(self) -> bool:
        """True while ballots are accepted."""
        return self.status is InitiativeStatus.OPEN

    @property
    def is_closed(self) -> bool:
        """True once the result has been fixed."""
        return self.status is InitiativeStatus.CLOSED

    @property
    def cached_tally(self) -> Tally:
        """The closure-time counts stored on the record."""
        return Tally.of(self.votes_favor, self.votes_against, self.votes_abstain)

    def opened(self, actor_id: UUID, at: datetime) -> Initiative:
        """Return an OPEN copy stamped with the opening principal."""
        return replace(
            self, status=InitiativeStatus.OPEN, opened_at=at, opened_by=actor_id
        )

    def demoted(self) -> Initiative:
        """Return a PENDING copy, used when another initiative is opened."""
        return replace(self, status=InitiativeStatus.PENDING)

    def closed(
        self,
        tally: Tally,
        result: InitiativeResult,
        actor_id: UUID,
        at: datetime,
    ) -> Initiative:
        """Return the terminal copy, rebuilding the cached counts from tally."""
        return replace(
            self,
            status=InitiativeStatus.CLOSED,
            result=result,
            votes_favor=tally.favor,
            votes_against=tally.against,
            votes_abstain=tally.abstain,
            closed_at=at,
            closed_by=actor_id,
        )
