"""Audit trail entry model.

Entries are append-only: once written they are never mutated or deleted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class EventLogKind(Enum):
    """Kinds of lifecycle transitions recorded in the audit trail."""

    SESSION_CREATED = "session_created"
    SESSION_ACTIVATED = "session_activated"
    SESSION_DEACTIVATED = "session_deactivated"
    SESSION_PAUSED = "session_paused"
    SESSION_RESUMED = "session_resumed"
    SESSION_CLOSED = "session_closed"
    INITIATIVES_ADDED = "initiatives_added"
    INITIATIVE_OPENED = "initiative_opened"
    INITIATIVE_DEMOTED = "initiative_demoted"
    INITIATIVE_CLOSED = "initiative_closed"
    VOTE_REMOVED = "vote_removed"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class EventLogEntry:
    """One recorded lifecycle transition.

    Attributes:
        session_id: Session the transition belongs to.
        kind: Kind of transition.
        description: Human-readable summary.
        actor_id: Principal that caused it, None for system actions.
        entry_id: Unique identifier.
        occurred_at: Server time of the transition (UTC).
    """

    session_id: UUID
    kind: EventLogKind
    description: str
    actor_id: UUID | None = None
    entry_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)
