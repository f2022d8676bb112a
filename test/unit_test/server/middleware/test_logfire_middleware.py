"""
Unit tests for Logfire middleware.

This test suite covers request metrics, the X-Process-Time and X-Request-ID
headers, slow request warnings and failure logging.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from glimmer.server.middleware.logfire_middleware import LogfireMiddleware


def make_request(method: str = "GET", path: str = "/api/v1/memories", headers=None):
    request = AsyncMock(spec=Request)
    request.method = method
    request.url.path = path
    request.headers = headers or {}
    request.state = MagicMock()
    return request


class TestLogfireMiddlewareDispatch:
    """Test LogfireMiddleware.dispatch method."""

    @pytest.mark.asyncio
    async def test_logs_successful_request(self):
        async def call_next(request):
            return Response(content="ok", status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch("glimmer.server.middleware.logfire_middleware.log_api_request") as mock_log:
            response = await middleware.dispatch(make_request(), call_next)

        assert response.status_code == 200
        assert "X-Process-Time" in response.headers
        kwargs = mock_log.call_args[1]
        assert kwargs["method"] == "GET"
        assert kwargs["path"] == "/api/v1/memories"
        assert kwargs["status_code"] == 200
        assert kwargs["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_failed_request_is_logged_and_reraised(self):
        async def call_next(request):
            raise RuntimeError("boom")

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch("glimmer.server.middleware.logfire_middleware.log_api_request") as mock_log, patch(
            "glimmer.server.middleware.logfire_middleware.logger"
        ) as mock_logger:
            with pytest.raises(RuntimeError):
                await middleware.dispatch(make_request("POST", "/api/v1/pet/action"), call_next)

        assert mock_log.call_args[1]["status_code"] == 500
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_slow_request_warns(self):
        async def call_next(request):
            return Response(status_code=201)

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch("glimmer.server.middleware.logfire_middleware.log_api_request"), patch(
            "glimmer.server.middleware.logfire_middleware.logger"
        ) as mock_logger, patch(
            "glimmer.server.middleware.logfire_middleware.SLOW_REQUEST_MS", -1
        ):
            await middleware.dispatch(make_request(), call_next)

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[1]["extra"]["status_code"] == 201


class TestRequestId:
    """Test request id propagation."""

    @pytest.mark.asyncio
    async def test_generates_request_id(self):
        seen = {}

        async def call_next(request):
            seen["id"] = request.state.request_id
            return Response(status_code=204)

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch("glimmer.server.middleware.logfire_middleware.log_api_request"):
            response = await middleware.dispatch(make_request(), call_next)

        assert len(response.headers["X-Request-ID"]) == 32
        assert response.headers["X-Request-ID"] == seen["id"]

    @pytest.mark.asyncio
    async def test_keeps_client_request_id(self):
        async def call_next(request):
            return Response(status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch("glimmer.server.middleware.logfire_middleware.log_api_request"):
            response = await middleware.dispatch(make_request(headers={"X-Request-ID": "abc123"}), call_next)

        assert response.headers["X-Request-ID"] == "abc123"
