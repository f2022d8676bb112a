"""
Catch-all exception handling.

Anything that escapes a route and is not a :class:`GlimmerError` becomes a
500 with an ``error_id`` the client can quote. When the tracing middleware
tagged the request, its request id doubles as the error id so the log line,
the Logfire event and the response can be matched up.
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from glimmer.core.logging_config import get_logger
from glimmer.core.monitoring import log_error
from glimmer.errors import GlimmerError

from .domain_handler import glimmer_error_handler

logger = get_logger(__name__)


def _error_id(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    return request_id if isinstance(request_id, str) and request_id else uuid.uuid4().hex[:12]


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception with its request context and answer 500.

    Args:
        request: The request being served
        exc: The exception that escaped the route

    Returns:
        JSONResponse carrying ``detail``, ``error_id`` and ``error_type``
    """
    error_id = _error_id(request)
    error_type = type(exc).__name__

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {exc}",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": error_type,
        },
    )
    log_error(error_type, str(exc), {"error_id": error_id, "path": request.url.path})

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error_id": error_id, "error_type": error_type},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the domain error handler and the catch-all handler on ``app``."""
    app.add_exception_handler(GlimmerError, glimmer_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered")
