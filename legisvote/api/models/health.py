"""Health check response models."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Health status string (e.g., "healthy").
        version: Package version.
        sse_connections: Open notification streams.
    """

    status: str
    version: str
    sse_connections: int = 0
