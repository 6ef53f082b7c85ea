"""HTTP middleware."""

from legisvote.api.middleware.logging_middleware import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
