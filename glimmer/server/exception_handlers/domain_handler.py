"""
Domain Exception Handler.

Maps the ``GlimmerError`` hierarchy raised by services to HTTP responses:
not found 404, permission denied 403, conflict 409, invalid moves and
validation errors 400, authentication 401.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from glimmer.core.logging_config import get_logger
from glimmer.errors import GlimmerError

logger = get_logger(__name__)


async def glimmer_error_handler(request: Request, exc: GlimmerError) -> JSONResponse:
    """
    Convert a domain error into a JSON response with its status code.

    The body carries the human-readable ``detail`` and the machine-readable
    ``code`` (the same code the WebSocket relay sends in ``error`` messages).
    """
    logger.debug(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.detail}")
    headers = {"WWW-Authenticate": "X-User-Id"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code},
        headers=headers,
    )
