"""State conflict errors for the session and initiative state machines.

A state conflict means the request was well-formed but the target record
is in a lifecycle state that does not permit the operation. The check and
the write happen in one conditional operation against the store, so these
errors also surface the loser of a concurrent race.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from legisvote.domain.exceptions import ChamberError

if TYPE_CHECKING:
    from legisvote.domain.models.session import SessionState


class StateConflictError(ChamberError):
    """Base class for operations rejected by the current lifecycle state."""


class AlreadyClosedError(StateConflictError):
    """Raised when mutating a record whose lifecycle has terminated.

    Attributes:
        record_id: Id of the closed session or initiative.
    """

    kind = "record"

    def __init__(self, record_id: UUID) -> None:
        self.record_id = record_id
        super().__init__(
            f"{self.kind.capitalize()} {record_id} is already closed. "
            "Closed records cannot be modified."
        )


class SessionAlreadyClosedError(AlreadyClosedError):
    """Raised when changing a closed session or opening one of its initiatives."""

    kind = "session"


class InitiativeAlreadyClosedError(AlreadyClosedError):
    """Raised when opening or closing an initiative that is already closed."""

    kind = "initiative"


class InitiativeAlreadyOpenError(StateConflictError):
    """Raised when opening an initiative that is already open."""

    def __init__(self, initiative_id: UUID) -> None:
        self.initiative_id = initiative_id
        super().__init__(f"Initiative {initiative_id} is already open for voting")


class InitiativeNotOpenError(StateConflictError):
    """Raised when a ballot write targets an initiative that is not open.

    Attributes:
        initiative_id: The targeted initiative.
        status: Its current status value.
    """

    def __init__(self, initiative_id: UUID, status: str) -> None:
        self.initiative_id = initiative_id
        self.status = status
        super().__init__(
            f"Initiative {initiative_id} is not open for voting (status: {status})"
        )


class OpenInitiativesRemainError(StateConflictError):
    """Raised when closing a session that still has an open initiative.

    Attributes:
        session_id: The session that could not be closed.
        open_count: Number of initiatives still open.
    """

    def __init__(self, session_id: UUID, open_count: int) -> None:
        self.session_id = session_id
        self.open_count = open_count
        super().__init__(
            f"Session {session_id} cannot be closed: "
            f"{open_count} initiative(s) still open"
        )


class DuplicateSessionCodeError(StateConflictError):
    """Raised when a session code is already taken."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"A session with code {code!r} already exists")


class InvalidSessionTransitionError(StateConflictError):
    """Raised when a session transition is not in the transition matrix.

    Attributes:
        session_id: The session being transitioned.
        from_state: Its current state.
        to_state: The requested state.
    """

    def __init__(
        self,
        session_id: UUID,
        from_state: SessionState,
        to_state: SessionState,
    ) -> None:
        self.session_id = session_id
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid session transition for {session_id}: "
            f"{from_state.value} -> {to_state.value}"
        )
