"""Authorization errors for acting principals.

The identity collaborator authenticates callers upstream. The core only
re-checks the role and the active flag of the principal it is handed.
"""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from legisvote.domain.exceptions import ChamberError


class PermissionDeniedError(ChamberError):
    """Raised when the acting principal may not perform an operation.

    Attributes:
        actor_id: The rejected principal.
        operation: Name of the attempted operation.
        required_roles: Roles that would have been accepted.
        reason: Short machine-readable reason (insufficient_role, inactive).
    """

    def __init__(
        self,
        actor_id: UUID,
        operation: str,
        required_roles: Iterable[str],
        reason: str = "insufficient_role",
    ) -> None:
        self.actor_id = actor_id
        self.operation = operation
        self.required_roles = sorted(required_roles)
        self.reason = reason
        if reason == "inactive":
            message = f"Actor {actor_id} is inactive and cannot {operation}"
        else:
            message = (
                f"Actor {actor_id} lacks permission to {operation}. "
                f"Required roles: {', '.join(self.required_roles)}"
            )
        super().__init__(message)
