"""Notification bus port.

The bus is the seam to the real-time transport collaborator (websocket or
SSE fan-out). Publishing is fire-and-forget:
- publish() must return without waiting on delivery
- a failed or slow subscriber never affects the caller
- there are no retries

Services call publish() only after their state change is committed and
never roll back on a publish failure.
"""

from __future__ import annotations

from typing import Protocol

from legisvote.domain.events.notification import ChamberNotification


class NotificationBusPort(Protocol):
    """Protocol for broadcasting chamber notifications."""

    def publish(self, notification: ChamberNotification) -> None:
        """Hand a notification to the transport without blocking."""
        ...
