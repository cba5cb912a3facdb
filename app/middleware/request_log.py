"""Request logging middleware — one log line per request with status and duration."""


import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app.requests")

# Methods that mutate state are logged at INFO, reads at DEBUG
_WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs ``METHOD path -> status (N ms)`` for every request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000)

        level = logging.INFO if request.method in _WRITE_METHODS else logging.DEBUG
        if response.status_code >= 500:
            level = logging.ERROR
        logger.log(
            level,
            "%s %s -> %s (%sms)",
            request.method, request.url.path, response.status_code, duration_ms,
        )
        return response
