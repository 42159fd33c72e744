"""Request logging middleware for the layout service."""

import logging
import time
import uuid
from typing import Sequence

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("photobook.api")

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time-Ms"


def status_log_level(status_code: int) -> int:
    """INFO for success, WARNING for client errors, ERROR for server errors."""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every layout and catalog request with a correlation id.

    The editor may send its own X-Request-ID so a layout run can be traced
    from the browser to the server log; otherwise a short id is generated.
    The id and the handling time are echoed in the response headers, and
    the id is available to handlers as request.state.request_id.
    """

    def __init__(self, app, exclude_paths: Sequence[str] = ("/health",)):
        super().__init__(app)
        self.exclude_paths = tuple(exclude_paths)

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path.startswith(self.exclude_paths):
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        label = f"[{request_id}] {request.method} {request.url.path}"

        logger.info(f"{label} from {client_address(request)}")
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(f"{label} failed after {elapsed_ms:.2f}ms: {e}")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.log(
            status_log_level(response.status_code),
            f"{label} -> {response.status_code} in {elapsed_ms:.2f}ms",
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[RESPONSE_TIME_HEADER] = f"{elapsed_ms:.2f}"
        return response


def client_address(request: Request) -> str:
    """First hop of X-Forwarded-For, else the socket peer."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
