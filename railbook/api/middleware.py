"""
HTTP client hooks for logging, timing, and request ID tracking.
"""

import time
import uuid
import weakref

import httpx
import structlog

from railbook.core.logging import get_logger
from railbook.core.metrics import record_api_request

logger = get_logger(__name__)


class RequestLoggingHooks:
    """
    httpx event hooks that:
    1. Assign a short request ID to each outgoing request
    2. Log request method, path, status code, and duration
    3. Bind request context to structlog for correlation
    """

    def __init__(self):
        self._started = weakref.WeakKeyDictionary()

    def install(self, client: httpx.AsyncClient) -> None:
        client.event_hooks["request"].append(self.on_request)
        client.event_hooks["response"].append(self.on_response)

    async def on_request(self, request: httpx.Request) -> None:
        request_id = str(uuid.uuid4())[:8]
        request.headers["X-Request-ID"] = request_id
        self._started[request] = time.perf_counter()

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

    async def on_response(self, response: httpx.Response) -> None:
        request = response.request
        duration = time.perf_counter() - self._started.pop(request, time.perf_counter())
        duration_ms = round(duration * 1000, 2)

        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        record_api_request(request.method, str(response.status_code), duration)
        structlog.contextvars.unbind_contextvars("request_id", "method", "path")

    def failed(self, request: httpx.Request, error: Exception) -> None:
        """Called by the client when the transport raised before any response."""
        duration = time.perf_counter() - self._started.pop(request, time.perf_counter())
        logger.error(
            "request_failed",
            error=str(error) or type(error).__name__,
            duration_ms=round(duration * 1000, 2),
        )
        record_api_request(request.method, "error", duration)
        structlog.contextvars.unbind_contextvars("request_id", "method", "path")
