"""Acting principal extraction.

Authentication is done upstream by the identity collaborator, which
forwards the authenticated member as request headers:

    X-Actor-Id: member UUID (required)
    X-Actor-Role: legislator | operator | secretary | superadmin (required)
    X-Actor-Active: true | false (default true)

This module only parses them; role and active checks happen in the
services so every entry point applies the same rules.
"""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Header, HTTPException, Request, status

from legisvote.domain.models.member import MemberRole, Principal

logger = structlog.get_logger(__name__)

_FALSE_VALUES = {"false", "0", "no"}


def get_actor(
    request: Request,
    x_actor_id: Annotated[
        str | None,
        Header(description="Authenticated member id (UUID)"),
    ] = None,
    x_actor_role: Annotated[
        str | None,
        Header(description="Member role: legislator, operator, secretary, superadmin"),
    ] = None,
    x_actor_active: Annotated[
        str | None,
        Header(description="Whether the member is active (default true)"),
    ] = None,
) -> Principal:
    """Build the acting Principal from forwarded identity headers.

    Raises:
        HTTPException 401: If the id or role header is missing.
        HTTPException 400: If the id is not a UUID or the role is unknown.
    """
    log = logger.bind(component="actor_auth", path=request.url.path)

    if not x_actor_id:
        log.warning("auth_failed", reason="missing_actor_id")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Actor-Id header is required",
        )
    try:
        actor_id = UUID(x_actor_id)
    except ValueError:
        log.warning("auth_failed", reason="invalid_actor_id", actor_id=x_actor_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid X-Actor-Id format (must be UUID)",
        ) from None

    if not x_actor_role:
        log.warning("auth_failed", reason="missing_role", actor_id=str(actor_id))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Actor-Role header is required",
        )
    try:
        role = MemberRole(x_actor_role.strip().lower())
    except ValueError:
        log.warning("auth_failed", reason="unknown_role", role=x_actor_role)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown role: {x_actor_role}",
        ) from None

    active = (x_actor_active or "true").strip().lower() not in _FALSE_VALUES
    return Principal(id=actor_id, role=role, active=active)
