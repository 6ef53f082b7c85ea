"""
Domain events for legisvote.

Notification events represent lifecycle changes broadcast to real-time
collaborators. All events are immutable and timestamped.
"""

from legisvote.domain.events.notification import (
    ChamberNotification,
    NotificationType,
    to_payload,
)

__all__: list[str] = ["ChamberNotification", "NotificationType", "to_payload"]
