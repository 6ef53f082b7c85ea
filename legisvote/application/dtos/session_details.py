"""Session detail read models."""

from __future__ import annotations

from dataclasses import dataclass, field

from legisvote.domain.models.event_log_entry import EventLogEntry
from legisvote.domain.models.initiative import Initiative
from legisvote.domain.models.session import Session
from legisvote.domain.models.tally import Tally


@dataclass(frozen=True)
class InitiativeSummary:
    """An initiative with its live ballot counts."""

    initiative: Initiative
    tally: Tally


@dataclass(frozen=True)
class SessionStats:
    """Aggregate counters for a session."""

    total_initiatives: int = 0
    closed_initiatives: int = 0
    open_initiatives: int = 0
    total_votes: int = 0


@dataclass(frozen=True)
class SessionDetails:
    """A session with its agenda, counters and history (newest first)."""

    session: Session
    stats: SessionStats
    initiatives: list[InitiativeSummary] = field(default_factory=list)
    history: list[EventLogEntry] = field(default_factory=list)


@dataclass(frozen=True)
class SessionPage:
    """One page of a session listing."""

    sessions: list[Session]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        """Number of pages at this page size."""
        return -(-self.total // self.limit) if self.limit else 0
