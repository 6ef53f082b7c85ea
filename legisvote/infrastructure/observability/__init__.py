"""Observability: structured logging and request correlation.

Usage:
    from legisvote.infrastructure.observability import (
        configure_structlog,
        get_correlation_id,
    )

    configure_structlog(environment="production")
"""

from legisvote.infrastructure.observability.correlation import (
    CORRELATION_HEADER,
    bind_correlation_id,
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from legisvote.infrastructure.observability.logging import configure_structlog

__all__: list[str] = [
    "CORRELATION_HEADER",
    "bind_correlation_id",
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]
