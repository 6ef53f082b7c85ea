"""Errors for references to records that do not exist."""

from __future__ import annotations

from uuid import UUID

from legisvote.domain.exceptions import ChamberError


class NotFoundError(ChamberError):
    """Raised when a referenced record does not exist.

    Attributes:
        resource: Kind of record that was looked up.
        resource_id: Identifier that was not found.
    """

    resource = "record"

    def __init__(self, resource_id: UUID | str) -> None:
        self.resource_id = resource_id
        super().__init__(f"{self.resource.capitalize()} not found: {resource_id}")


class SessionNotFoundError(NotFoundError):
    """Raised when a session id does not resolve."""

    resource = "session"


class InitiativeNotFoundError(NotFoundError):
    """Raised when an initiative id does not resolve."""

    resource = "initiative"


class MemberNotFoundError(NotFoundError):
    """Raised when a voter or actor is unknown to the member roster."""

    resource = "member"
