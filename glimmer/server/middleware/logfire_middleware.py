"""
Request tracing middleware.

Times every HTTP request, reports it to Logfire, tags it with a request id
(echoed in ``X-Request-ID``) and adds ``X-Process-Time`` in milliseconds.
Requests slower than ``SLOW_REQUEST_MS`` are logged as warnings. WebSocket
traffic does not pass through here; the relay reports its own events.
"""

import time
import uuid
from typing import Awaitable, Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from glimmer.core.logging_config import get_logger
from glimmer.core.monitoring import log_api_request

logger = get_logger(__name__)

SLOW_REQUEST_MS = 1000
REQUEST_ID_HEADER = "X-Request-ID"


class LogfireMiddleware(BaseHTTPMiddleware):
    """Trace each HTTP request with Logfire and the standard logger."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()
        method, path = request.method, request.url.path

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                f"{method} {path} raised after {elapsed_ms:.1f}ms",
                exc_info=True,
                extra={"request_id": request_id, "method": method, "path": path, "duration_ms": elapsed_ms},
            )
            log_api_request(method=method, path=path, status_code=500, duration_ms=elapsed_ms)
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        log_api_request(method=method, path=path, status_code=response.status_code, duration_ms=elapsed_ms)
        response.headers["X-Process-Time"] = f"{elapsed_ms:.2f}"
        response.headers[REQUEST_ID_HEADER] = request_id

        if elapsed_ms > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow request {method} {path}: {elapsed_ms:.0f}ms",
                extra={"request_id": request_id, "status_code": response.status_code, "duration_ms": elapsed_ms},
            )
        return response
