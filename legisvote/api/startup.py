"""Startup hooks for the legisvote API.

1. Configure structured logging from ENVIRONMENT
2. Load and log the chamber configuration (fails fast on invalid values)

Usage:
    configure_logging()
    log_chamber_configuration()
"""

import os

from structlog import get_logger

from legisvote.api.dependencies.chamber import get_chamber_config
from legisvote.infrastructure.observability import configure_structlog

ENVIRONMENT_VAR = "ENVIRONMENT"
DEFAULT_ENVIRONMENT = "development"

logger = get_logger()


def configure_logging() -> None:
    """Configure structlog for the current ENVIRONMENT.

    production: JSON output. Anything else: colored console output.
    Call first, before any logging occurs.
    """
    environment = os.getenv(ENVIRONMENT_VAR, DEFAULT_ENVIRONMENT)
    configure_structlog(environment=environment)
    logger.bind(component="startup").info(
        "structured_logging_configured", environment=environment
    )


def log_chamber_configuration() -> None:
    """Resolve the chamber configuration and record it."""
    config = get_chamber_config()
    logger.bind(component="startup").info(
        "chamber_configuration_loaded",
        session_code_prefix=config.session_code_prefix,
        default_page_size=config.default_page_size,
        max_page_size=config.max_page_size,
        notification_queue_size=config.notification_queue_size,
        sse_keepalive_seconds=config.sse_keepalive_seconds,
    )
