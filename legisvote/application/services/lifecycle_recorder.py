"""Lifecycle recorder: audit trail and notification glue.

Every lifecycle service reports its committed transitions through this
recorder, which does two things:

1. Appends an EventLogEntry to the session's audit trail.
2. Publishes a ChamberNotification on the bus.

Both happen AFTER the conditional write has committed. Neither may undo
it, so both are best-effort here: failures are logged and swallowed.

Developer Golden Rules:
1. EVENT AFTER SAVE - record only committed transitions
2. NOTIFICATION FIRE-AND-FORGET - never block, retry or roll back
3. LOG FAILURES LOUDLY - a missed audit entry is an error-level log
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from legisvote.application.ports.event_log import EventLogPort
from legisvote.application.ports.notification_bus import NotificationBusPort
from legisvote.application.services.base import LoggingMixin
from legisvote.domain.events.notification import (
    ChamberNotification,
    NotificationType,
)
from legisvote.domain.models.event_log_entry import EventLogEntry, EventLogKind


class LifecycleRecorder(LoggingMixin):
    """Writes the audit trail and broadcasts notifications.

    Attributes:
        _event_log: Append-only audit trail.
        _bus: Notification bus, optional. If None, notifications are skipped.
    """

    def __init__(
        self,
        event_log: EventLogPort,
        bus: NotificationBusPort | None = None,
    ) -> None:
        """Initialize the recorder.

        Args:
            event_log: Audit trail port.
            bus: Optional notification bus.
        """
        self._event_log = event_log
        self._bus = bus
        self._init_logger(component="audit")

    async def record(
        self,
        session_id: UUID,
        kind: EventLogKind,
        description: str,
        actor_id: UUID | None,
    ) -> EventLogEntry | None:
        """Append an audit entry for a committed transition.

        Returns:
            The stored entry, or None if the append failed.
        """
        log = self._log_operation(
            "record",
            session_id=str(session_id),
            kind=kind.value,
        )
        entry = EventLogEntry(
            session_id=session_id,
            kind=kind,
            description=description,
            actor_id=actor_id,
        )
        try:
            stored = await self._event_log.append(entry)
        except Exception as e:
            # The transition is already committed; surface, do not undo
            log.error("audit_append_failed", error=str(e))
            return None
        log.debug("audit_recorded", entry_id=str(stored.entry_id))
        return stored

    def notify(
        self,
        event_type: NotificationType,
        session_id: UUID | None = None,
        **records: Any,
    ) -> ChamberNotification | None:
        """Broadcast a notification without waiting for delivery.

        Returns:
            The notification handed to the bus, or None if skipped or failed.
        """
        if self._bus is None:
            return None

        log = self._log_operation("notify", event_type=event_type.value)
        try:
            notification = ChamberNotification.build(
                event_type, session_id=session_id, **records
            )
            self._bus.publish(notification)
        except Exception as e:
            # Fire-and-forget - log but don't fail
            log.warning("notification_publish_failed", error=str(e))
            return None
        log.debug(
            "notification_published",
            notification_id=str(notification.notification_id),
        )
        return notification
