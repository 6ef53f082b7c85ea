"""In-process notification fan-out for SSE subscribers.

Each SSE connection registers a bounded asyncio.Queue. publish() pushes
to every matching queue with put_nowait(), so it never awaits. When a
subscriber falls behind and its queue is full, the oldest queued
notification is dropped to make room; the subscriber is expected to
re-read state after a gap.
"""

from __future__ import annotations

import asyncio
from collections.abc import Collection
from dataclasses import dataclass
from uuid import UUID, uuid4

import structlog

from legisvote.application.ports.notification_bus import NotificationBusPort
from legisvote.domain.events.notification import (
    ChamberNotification,
    NotificationType,
)

logger = structlog.get_logger(__name__)

DEFAULT_QUEUE_SIZE = 100


@dataclass
class _Subscription:
    queue: asyncio.Queue[ChamberNotification]
    event_types: frozenset[NotificationType]
    session_id: UUID | None

    def wants(self, notification: ChamberNotification) -> bool:
        if self.event_types and notification.event_type not in self.event_types:
            return False
        if self.session_id is not None and notification.session_id != self.session_id:
            return False
        return True


class InProcessNotificationBus(NotificationBusPort):
    """Fans notifications out to registered SSE connections.

    Attributes:
        _connections: connection_id -> subscription.
        _queue_size: Capacity of each connection queue.
    """

    def __init__(self, queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        if queue_size < 1:
            raise ValueError(f"queue_size must be >= 1, got {queue_size}")
        self._connections: dict[UUID, _Subscription] = {}
        self._queue_size = queue_size

    def register_connection(
        self,
        event_types: Collection[NotificationType] = (),
        session_id: UUID | None = None,
    ) -> tuple[UUID, asyncio.Queue[ChamberNotification]]:
        """Register an SSE connection.

        Args:
            event_types: Types to receive; empty means all.
            session_id: Only receive notifications of this session.

        Returns:
            Tuple of (connection_id, queue to drain).
        """
        connection_id = uuid4()
        queue: asyncio.Queue[ChamberNotification] = asyncio.Queue(
            maxsize=self._queue_size
        )
        self._connections[connection_id] = _Subscription(
            queue=queue,
            event_types=frozenset(event_types),
            session_id=session_id,
        )
        logger.info(
            "sse_connection_registered",
            connection_id=str(connection_id),
            event_types=sorted(t.value for t in event_types),
            session_id=str(session_id) if session_id else None,
        )
        return connection_id, queue

    def unregister_connection(self, connection_id: UUID) -> None:
        """Remove an SSE connection. Unknown ids are ignored."""
        if self._connections.pop(connection_id, None) is not None:
            logger.info("sse_connection_closed", connection_id=str(connection_id))

    def connection_count(self) -> int:
        """Number of registered SSE connections."""
        return len(self._connections)

    def publish(self, notification: ChamberNotification) -> None:
        delivered = 0
        for connection_id, subscription in list(self._connections.items()):
            if not subscription.wants(notification):
                continue
            queue = subscription.queue
            if queue.full():
                queue.get_nowait()
                logger.warning(
                    "sse_queue_overflow",
                    connection_id=str(connection_id),
                    dropped=1,
                )
            queue.put_nowait(notification)
            delivered += 1

        logger.debug(
            "notification_fanned_out",
            event_type=notification.event_type.value,
            notification_id=str(notification.notification_id),
            connections=delivered,
        )
