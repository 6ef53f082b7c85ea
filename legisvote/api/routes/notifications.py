"""Notification stream (Server-Sent Events).

GET /v1/notifications/stream pushes every chamber notification to the
connected client. Delivery is best-effort: a slow client loses its
oldest queued notifications, and clients should re-read state after a
reconnect.
"""

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query, Request
from sse_starlette.sse import EventSourceResponse

from legisvote.api.dependencies.chamber import (
    get_chamber_config,
    get_notification_bus,
)
from legisvote.config.chamber_config import ChamberConfig
from legisvote.domain.events.notification import NotificationType
from legisvote.infrastructure.adapters.in_process_notification_bus import (
    InProcessNotificationBus,
)

router = APIRouter(prefix="/v1/notifications", tags=["notifications"])

logger = structlog.get_logger(__name__)


def parse_event_types(raw: str | None) -> list[NotificationType]:
    """Parse a comma-separated type filter. Unknown names are skipped."""
    if not raw:
        return []
    parsed = []
    for name in raw.split(","):
        try:
            parsed.append(NotificationType(name.strip().lower()))
        except ValueError:
            logger.debug("unknown_event_type_ignored", event_type=name)
    return parsed


@router.get("/stream")
async def stream_notifications(
    request: Request,
    bus: Annotated[InProcessNotificationBus, Depends(get_notification_bus)],
    config: Annotated[ChamberConfig, Depends(get_chamber_config)],
    event_types: str | None = Query(
        default=None,
        description="Notification types, comma-separated "
        "(session-activated,vote-update,...). Default: all",
    ),
    session_id: UUID | None = Query(
        default=None, description="Only notifications of this session"
    ),
) -> EventSourceResponse:
    """Stream chamber notifications via SSE.

    Each event carries the notification type as SSE event name, the
    notification id as SSE id, and the JSON payload (updated records plus
    server timestamp) as data. A keepalive comment is sent when idle.
    """
    connection_id, queue = bus.register_connection(
        parse_event_types(event_types), session_id=session_id
    )

    async def event_generator() -> AsyncIterator[dict[str, str]]:
        try:
            while True:
                try:
                    notification = await asyncio.wait_for(
                        queue.get(), timeout=config.sse_keepalive_seconds
                    )
                    yield {
                        "event": notification.event_type.value,
                        "id": str(notification.notification_id),
                        "data": json.dumps(notification.to_dict()),
                    }
                except asyncio.TimeoutError:
                    yield {"comment": "keepalive"}
        finally:
            bus.unregister_connection(connection_id)

    return EventSourceResponse(
        event_generator(),
        headers={
            "X-Accel-Buffering": "no",  # Disable nginx buffering
            "Cache-Control": "no-cache",
        },
    )
