"""Chamber configuration.

This module defines tunables for the voting core and its HTTP surface,
with environment variable overrides for deployment tuning. Unparseable
values fall back to the default.

Environment Variables:
- LEGISVOTE_SESSION_CODE_PREFIX: Prefix of generated session codes (default: SES)
- LEGISVOTE_DEFAULT_PAGE_SIZE: Default session listing page size (default: 10)
- LEGISVOTE_MAX_PAGE_SIZE: Maximum session listing page size (default: 100)
- LEGISVOTE_RECENT_SESSIONS_LIMIT: Sessions returned by "recent" (default: 5)
- LEGISVOTE_HISTORY_LIMIT: Audit entries returned with session details (default: 100)
- LEGISVOTE_NOTIFICATION_QUEUE_SIZE: Per-subscriber buffer (default: 100)
- LEGISVOTE_SSE_KEEPALIVE_SECONDS: SSE keepalive interval (default: 30.0)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class ChamberConfig:
    """Configuration for the chamber voting core.

    Attributes:
        session_code_prefix: Prefix of generated session codes.
        default_page_size: Page size when a listing omits one.
        max_page_size: Upper bound on requested page sizes.
        recent_sessions_limit: Sessions returned by the "recent" listing.
        history_limit: Audit entries attached to session details.
        notification_queue_size: Buffered notifications per subscriber
            before the oldest are dropped.
        sse_keepalive_seconds: Idle interval before an SSE keepalive comment.
    """

    session_code_prefix: str = "SES"
    default_page_size: int = 10
    max_page_size: int = 100
    recent_sessions_limit: int = 5
    history_limit: int = 100
    notification_queue_size: int = 100
    sse_keepalive_seconds: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.session_code_prefix.strip():
            raise ValueError("session_code_prefix must not be blank")
        if self.default_page_size < 1:
            raise ValueError(
                f"default_page_size must be positive, got {self.default_page_size}"
            )
        if self.max_page_size < self.default_page_size:
            raise ValueError(
                f"max_page_size ({self.max_page_size}) must be >= "
                f"default_page_size ({self.default_page_size})"
            )
        if self.recent_sessions_limit < 1:
            raise ValueError(
                f"recent_sessions_limit must be positive, got {self.recent_sessions_limit}"
            )
        if self.history_limit < 1:
            raise ValueError(f"history_limit must be positive, got {self.history_limit}")
        if self.notification_queue_size < 1:
            raise ValueError(
                "notification_queue_size must be positive, "
                f"got {self.notification_queue_size}"
            )
        if self.sse_keepalive_seconds <= 0:
            raise ValueError(
                f"sse_keepalive_seconds must be positive, got {self.sse_keepalive_seconds}"
            )

    def clamp_page_size(self, limit: int | None) -> int:
        """Resolve a requested page size against the configured bounds."""
        if limit is None or limit < 1:
            return self.default_page_size
        return min(limit, self.max_page_size)

    @classmethod
    def from_environment(cls) -> ChamberConfig:
        """Create config from environment variables with defaults."""
        return cls(
            session_code_prefix=os.environ.get("LEGISVOTE_SESSION_CODE_PREFIX", "SES"),
            default_page_size=_get_int_env("LEGISVOTE_DEFAULT_PAGE_SIZE", 10),
            max_page_size=_get_int_env("LEGISVOTE_MAX_PAGE_SIZE", 100),
            recent_sessions_limit=_get_int_env("LEGISVOTE_RECENT_SESSIONS_LIMIT", 5),
            history_limit=_get_int_env("LEGISVOTE_HISTORY_LIMIT", 100),
            notification_queue_size=_get_int_env(
                "LEGISVOTE_NOTIFICATION_QUEUE_SIZE", 100
            ),
            sse_keepalive_seconds=_get_float_env("LEGISVOTE_SSE_KEEPALIVE_SECONDS", 30.0),
        )


# Default config (library defaults, no environment lookup)
DEFAULT_CHAMBER_CONFIG = ChamberConfig()

# Testing config with small pages and short keepalive
TEST_CHAMBER_CONFIG = ChamberConfig(
    default_page_size=2,
    max_page_size=5,
    recent_sessions_limit=2,
    history_limit=10,
    notification_queue_size=4,
    sse_keepalive_seconds=0.1,
)
