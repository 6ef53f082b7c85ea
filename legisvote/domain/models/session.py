"""Chamber session domain model.

A session is one sitting of the chamber. It owns an ordered agenda of
initiatives and moves through a small lifecycle:

    PREPARED  -> ACTIVE, CLOSED
    SCHEDULED -> ACTIVE, CLOSED
    ACTIVE    -> PAUSED, CLOSED
    PAUSED    -> ACTIVE, CLOSED
    CLOSED    (terminal)

At most one session may be ACTIVE system-wide. Activating a session
demotes whichever session currently holds the active designation to
PAUSED, inside the same conditional write.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID


class SessionState(Enum):
    """Lifecycle state of a session."""

    PREPARED = "prepared"
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    PAUSED = "paused"
    CLOSED = "closed"

    def is_terminal(self) -> bool:
        """Check if this state admits no further transitions."""
        return self is SessionState.CLOSED

    def valid_transitions(self) -> frozenset[SessionState]:
        """Get valid target states from this state."""
        return SESSION_TRANSITIONS.get(self, frozenset())


class SessionKind(Enum):
    """Kind of sitting, as declared by the agenda source."""

    ORDINARY = "ordinary"
    EXTRAORDINARY = "extraordinary"
    SOLEMN = "solemn"


SESSION_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.PREPARED: frozenset({SessionState.ACTIVE, SessionState.CLOSED}),
    SessionState.SCHEDULED: frozenset({SessionState.ACTIVE, SessionState.CLOSED}),
    # ACTIVE -> ACTIVE is a re-activation; it only refreshes started_by
    SessionState.ACTIVE: frozenset(
        {SessionState.ACTIVE, SessionState.PAUSED, SessionState.CLOSED}
    ),
    SessionState.PAUSED: frozenset({SessionState.ACTIVE, SessionState.CLOSED}),
    SessionState.CLOSED: frozenset(),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Session:
    """A sitting of the chamber.

    Attributes:
        id: Unique identifier.
        code: Immutable unique human-facing code (e.g. SES-2025-03-04-1000).
        name: Display name.
        kind: Kind of sitting.
        state: Current lifecycle state.
        scheduled_at: Planned start, when the session was scheduled.
        started_at: First activation time.
        closed_at: Closure time.
        started_by: Principal that last activated the session.
        closed_by: Principal that closed the session.
        notes: Free-form operator notes.
        created_by: Principal that created the session, if known.
        created_at: Creation timestamp (UTC).
    """

    id: UUID
    code: str
    name: str
    kind: SessionKind = field(default=SessionKind.ORDINARY)
    state: SessionState = field(default=SessionState.PREPARED)
    scheduled_at: datetime | None = field(default=None)
    started_at: datetime | None = field(default=None)
    closed_at: datetime | None = field(default=None)
    started_by: UUID | None = field(default=None)
    closed_by: UUID | None = field(default=None)
    notes: str = field(default="")
    created_by: UUID | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate session fields."""
        if not self.code.strip():
            raise ValueError("Session code must not be blank")
        if not self.name.strip():
            raise ValueError("Session name must not be blank")

    @property
    def is_active(self) -> bool:
        """True while this session holds the active designation."""
        return self.state is SessionState.ACTIVE

    @property
    def is_closed(self) -> bool:
        """True once the session has been closed."""
        return self.state.is_terminal()

    def can_transition_to(self, new_state: SessionState) -> bool:
        """Check the transition matrix for this session's current state."""
        return new_state in self.state.valid_transitions()

    def activated(self, actor_id: UUID, at: datetime) -> Session:
        """Return a copy holding the active designation.

        started_at records the first activation only; started_by always
        records the latest activating principal.
        """
        return replace(
            self,
            state=SessionState.ACTIVE,
            started_at=self.started_at or at,
            started_by=actor_id,
        )

    def closed(self, actor_id: UUID, at: datetime) -> Session:
        """Return a terminal copy stamped with the closing principal."""
        return replace(
            self,
            state=SessionState.CLOSED,
            closed_at=at,
            closed_by=actor_id,
        )

    def with_state(self, new_state: SessionState) -> Session:
        """Return a copy in new_state without touching audit fields."""
        return replace(self, state=new_state)
