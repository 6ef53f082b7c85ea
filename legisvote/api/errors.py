"""Translation of domain errors into RFC 7807 problem responses.

Routes catch ChamberError and re-raise problem_exception(e, request)
``from None``. Status mapping:

    ValidationError       -> 400
    PermissionDeniedError -> 403
    NotEligibleError      -> 403
    NotFoundError         -> 404
    StateConflictError    -> 409
"""

from typing import Any

import structlog
from fastapi import HTTPException, Request

from legisvote.domain.errors import (
    NotEligibleError,
    NotFoundError,
    OpenInitiativesRemainError,
    PermissionDeniedError,
    StateConflictError,
    ValidationError,
)
from legisvote.domain.exceptions import ChamberError

logger = structlog.get_logger(__name__)

ERROR_TYPE_BASE = "urn:legisvote:error"


def _classify(error: ChamberError) -> tuple[int, str, str]:
    """Map an error to (status, type slug, title)."""
    if isinstance(error, ValidationError):
        return 400, "validation", "Invalid Request"
    if isinstance(error, PermissionDeniedError):
        return 403, "permission-denied", "Permission Denied"
    if isinstance(error, NotEligibleError):
        return 403, "not-eligible", "Not Eligible To Vote"
    if isinstance(error, NotFoundError):
        return 404, f"{error.resource}-not-found", "Not Found"
    if isinstance(error, StateConflictError):
        return 409, "state-conflict", "State Conflict"
    return 500, "internal", "Internal Error"


def _extensions(error: ChamberError) -> dict[str, Any]:
    if isinstance(error, OpenInitiativesRemainError):
        return {"open_initiatives": error.open_count}
    if isinstance(error, ValidationError) and error.field:
        return {"field": error.field}
    if isinstance(error, PermissionDeniedError):
        return {"required_roles": error.required_roles, "reason": error.reason}
    if isinstance(error, NotEligibleError):
        return {"reason": error.reason}
    return {}


def problem_exception(error: ChamberError, request: Request) -> HTTPException:
    """Build the HTTPException carrying a problem detail for error."""
    status_code, slug, title = _classify(error)
    logger.info(
        "request_rejected",
        status=status_code,
        error_type=type(error).__name__,
        path=request.url.path,
    )
    return HTTPException(
        status_code=status_code,
        detail={
            "type": f"{ERROR_TYPE_BASE}:{slug}",
            "title": title,
            "status": status_code,
            "detail": str(error),
            "instance": str(request.url),
            **_extensions(error),
        },
    )
