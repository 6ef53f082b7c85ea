"""Request correlation ids.

The id lives in a contextvar so every log line emitted while serving one
request (or one SSE stream) carries the same value across awaits.

Usage:
    # In middleware (request start)
    token = bind_correlation_id(request.headers.get(CORRELATION_HEADER))
    ...
    reset_correlation_id(token)

    # In structlog configuration
    processors = [..., correlation_id_processor, ...]
"""

from contextvars import ContextVar, Token
from typing import Any
from uuid import uuid4

CORRELATION_HEADER = "X-Correlation-ID"

# Empty string means "no request in scope"
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Generate a new correlation ID (UUID4 string)."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Get the current correlation ID, or "" outside a request."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    _correlation_id.set(correlation_id)


def bind_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Set the correlation ID, generating one when none is supplied.

    Returns:
        Token to pass to reset_correlation_id() when the request ends.
    """
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    """Restore the correlation ID that was current before bind_correlation_id()."""
    _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding correlation_id to every entry.

    An id bound explicitly on the logger wins over the contextvar.
    """
    correlation_id = get_correlation_id()
    if correlation_id and not event_dict.get("correlation_id"):
        event_dict["correlation_id"] = correlation_id
    return event_dict
