"""Health check endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from legisvote import __version__
from legisvote.api.dependencies.chamber import get_notification_bus
from legisvote.api.models.health import HealthResponse
from legisvote.infrastructure.adapters.in_process_notification_bus import (
    InProcessNotificationBus,
)

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    bus: Annotated[InProcessNotificationBus, Depends(get_notification_bus)],
) -> HealthResponse:
    """Return health status with 200 OK."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        sse_connections=bus.connection_count(),
    )
