"""Fixtures for API tests.

Each test gets its own in-memory database, connection registry, game locks
and an offline assistant, wired into the application through dependency
overrides. Requests go through ``httpx.AsyncClient`` on the ASGI transport,
so the lifespan (and its database initialization) never runs.
"""

from typing import Any, AsyncGenerator, Awaitable, Callable, Dict, List, Optional

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from glimmer.ai.assistant import CosmicAssistant, get_assistant
from glimmer.core.database import create_all, create_engine, create_sessionmaker, get_session_factory
from glimmer.games import GameLocks, get_game_locks
from glimmer.realtime.registry import ConnectionRegistry, get_registry
from glimmer.server.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for one test."""
    engine = create_engine(TEST_DATABASE_URL)
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return create_sessionmaker(test_engine)


@pytest_asyncio.fixture
async def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


@pytest_asyncio.fixture
async def assistant() -> CosmicAssistant:
    return CosmicAssistant()


@pytest_asyncio.fixture(name="client")
async def client_fixture(session_factory, registry, assistant) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    locks = GameLocks()
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_assistant] = lambda: assistant
    app.dependency_overrides[get_game_locks] = lambda: locks

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


def _auth(user: Dict) -> Dict[str, str]:
    """Headers acting as ``user``."""
    return {"X-User-Id": user["id"]}


@pytest_asyncio.fixture
async def make_user(client) -> Callable[..., Awaitable[Dict]]:
    """Factory registering a user through the API."""

    async def _make(username: str, display_name: Optional[str] = None) -> Dict:
        response = await client.post(
            "/api/v1/users",
            json={
                "username": username,
                "email": f"{username}@glimmer.test",
                "display_name": display_name or username.title(),
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest_asyncio.fixture
async def befriend(client) -> Callable[[Dict, Dict], Awaitable[Dict]]:
    """Factory making two users accepted friends through the API."""

    async def _befriend(requester: Dict, addressee: Dict) -> Dict:
        response = await client.post("/api/v1/friends", json={"friend_id": addressee["id"]}, headers=_auth(requester))
        assert response.status_code == 201, response.text
        friendship_id = response.json()["id"]
        response = await client.patch(
            f"/api/v1/friends/{friendship_id}", json={"status": "accepted"}, headers=_auth(addressee)
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _befriend


class RecordingSocket:
    """Stands in for a user's WebSocket and keeps what the server pushes."""

    def __init__(self) -> None:
        self.sent: List[Dict[str, Any]] = []

    async def send_json(self, data: Any, mode: str = "text") -> None:
        self.sent.append(data)

    async def close(self, code: int = 1000, reason: Optional[str] = None) -> None:
        pass

    def of_type(self, message_type: str) -> List[Dict[str, Any]]:
        return [message for message in self.sent if message["type"] == message_type]


@pytest_asyncio.fixture
async def listen(registry) -> Callable[[Dict], Awaitable[RecordingSocket]]:
    """Factory putting a user online with a recording socket."""

    async def _listen(user: Dict) -> RecordingSocket:
        socket = RecordingSocket()
        await registry.connect(user["id"], socket)
        return socket

    return _listen
