"""Principal checks shared by the lifecycle services.

Authentication happens upstream. Here the core only re-validates the
active flag and the role of the principal it was handed.
"""

from __future__ import annotations

from collections.abc import Collection

import structlog

from legisvote.domain.errors import PermissionDeniedError
from legisvote.domain.models.member import MemberRole, Principal

logger = structlog.get_logger(__name__)


def require_role(
    actor: Principal,
    allowed_roles: Collection[MemberRole],
    operation: str,
) -> None:
    """Ensure actor is active and holds one of allowed_roles.

    Args:
        actor: The acting principal.
        allowed_roles: Roles permitted to perform the operation.
        operation: Operation name, for the error and the log.

    Raises:
        PermissionDeniedError: If the actor is inactive or the role is not allowed.
    """
    required = [role.value for role in allowed_roles]
    if not actor.active:
        logger.warning(
            "authz_failed",
            reason="inactive",
            actor_id=str(actor.id),
            operation=operation,
        )
        raise PermissionDeniedError(actor.id, operation, required, reason="inactive")
    if actor.role not in allowed_roles:
        logger.warning(
            "authz_failed",
            reason="insufficient_role",
            actor_id=str(actor.id),
            provided_role=actor.role.value,
            required_roles=required,
            operation=operation,
        )
        raise PermissionDeniedError(actor.id, operation, required)
