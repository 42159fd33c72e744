"""API middleware for Photobook."""

from photobook.api.middleware.logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
]
