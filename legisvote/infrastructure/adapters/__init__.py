"""Infrastructure adapters."""

from legisvote.infrastructure.adapters.in_process_notification_bus import (
    InProcessNotificationBus,
)

__all__ = ["InProcessNotificationBus"]
