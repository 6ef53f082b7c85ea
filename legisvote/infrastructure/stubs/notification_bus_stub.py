"""Recording stub of NotificationBusPort for testing.

Usage in tests:
    bus = NotificationBusStub()
    recorder = LifecycleRecorder(event_log, bus=bus)

    await session_service.activate(session_id, operator)

    assert bus.types() == [NotificationType.SESSION_ACTIVATED]

    # Failure path: services must not roll back
    bus.fail_exception = RuntimeError("transport down")
"""

from __future__ import annotations

from legisvote.application.ports.notification_bus import NotificationBusPort
from legisvote.domain.events.notification import (
    ChamberNotification,
    NotificationType,
)


class NotificationBusStub(NotificationBusPort):
    """Captures published notifications for assertions.

    Attributes:
        published: Every notification handed to publish(), in order.
        fail_exception: If set, publish() raises it instead of recording.
    """

    def __init__(self) -> None:
        self.published: list[ChamberNotification] = []
        self.fail_exception: Exception | None = None

    def publish(self, notification: ChamberNotification) -> None:
        if self.fail_exception is not None:
            raise self.fail_exception
        self.published.append(notification)

    def types(self) -> list[NotificationType]:
        """Event types published so far, in order."""
        return [n.event_type for n in self.published]

    def of_type(self, event_type: NotificationType) -> list[ChamberNotification]:
        """Published notifications of one type."""
        return [n for n in self.published if n.event_type is event_type]

    def reset(self) -> None:
        """Forget recorded notifications and clear failure injection."""
        self.published.clear()
        self.fail_exception = None
