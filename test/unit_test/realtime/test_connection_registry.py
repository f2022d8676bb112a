"""Unit tests for the WebSocket connection registry."""

from typing import Any, List, Optional

import pytest

from glimmer.realtime.registry import ConnectionRegistry


class FakeSocket:
    """Records what the registry sends; optionally fails every send."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: List[Any] = []
        self.closed_with: Optional[int] = None

    async def send_json(self, data: Any, mode: str = "text") -> None:
        if self.fail:
            raise RuntimeError("socket is gone")
        self.sent.append(data)

    async def close(self, code: int = 1000, reason: Optional[str] = None) -> None:
        self.closed_with = code


@pytest.fixture
def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


class TestConnectionRegistry:
    async def test_connect_and_send(self, registry):
        socket = FakeSocket()
        await registry.connect("u1", socket)
        assert registry.is_online("u1")
        assert await registry.send_to("u1", {"type": "pong"}) is True
        assert socket.sent == [{"type": "pong"}]

    async def test_send_to_offline_user_is_dropped(self, registry):
        assert await registry.send_to("nobody", {"type": "pong"}) is False

    async def test_new_connection_replaces_and_closes_old_one(self, registry):
        old, new = FakeSocket(), FakeSocket()
        await registry.connect("u1", old)
        await registry.connect("u1", new)
        assert registry.connection_for("u1") is new
        assert old.closed_with == 1000
        assert len(registry) == 1

    async def test_stale_disconnect_keeps_newer_socket(self, registry):
        old, new = FakeSocket(), FakeSocket()
        await registry.connect("u1", old)
        await registry.connect("u1", new)
        assert await registry.disconnect("u1", old) is False
        assert registry.is_online("u1")
        assert await registry.disconnect("u1", new) is True
        assert not registry.is_online("u1")

    async def test_failed_send_unregisters_socket(self, registry):
        broken = FakeSocket(fail=True)
        await registry.connect("u1", broken)
        assert await registry.send_to("u1", {"type": "pong"}) is False
        assert not registry.is_online("u1")
        assert broken.closed_with == 1000

    async def test_broadcast_reports_delivered_users(self, registry):
        a, b = FakeSocket(), FakeSocket(fail=True)
        await registry.connect("a", a)
        await registry.connect("b", b)
        delivered = await registry.broadcast(["a", "b", "c", "a"], {"type": "presence"})
        assert delivered == {"a"}
        assert a.sent == [{"type": "presence"}]
        assert sorted(registry.online_users()) == ["a"]
