"""Requests racing on the same rows.

These run on a SQLite file instead of the shared in-memory connection so each
request gets its own connection and transaction, as it would in production.
"""

import asyncio

import pytest
import pytest_asyncio
from httpx import AsyncClient

from glimmer.core.database import create_all, create_engine

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'glimmer.db'}")
    await create_all(engine)
    yield engine
    await engine.dispose()


def auth(user):
    return {"X-User-Id": user["id"]}


async def test_crossed_friend_requests_keep_one_friendship(client: AsyncClient, make_user):
    ada, bea = await make_user("ada"), await make_user("bea")

    responses = await asyncio.gather(
        client.post("/api/v1/friends", json={"friend_id": bea["id"]}, headers=auth(ada)),
        client.post("/api/v1/friends", json={"friend_id": ada["id"]}, headers=auth(bea)),
    )

    assert sorted(r.status_code for r in responses) == [201, 400]
    [rejected] = [r for r in responses if r.status_code == 400]
    assert rejected.json()["code"] == "friendship_exists"
    for user in (ada, bea):
        friendships = (await client.get("/api/v1/friends", headers=auth(user))).json()
        assert len(friendships) == 1


async def test_simultaneous_moves_apply_one_at_a_time(client: AsyncClient, make_user, befriend):
    ada, bea = await make_user("ada"), await make_user("bea")
    await befriend(ada, bea)
    response = await client.post(
        "/api/v1/games", json={"player2_id": bea["id"], "game_type": "tic-tac-toe"}, headers=auth(ada)
    )
    game = response.json()

    responses = await asyncio.gather(
        *(
            client.post(f"/api/v1/games/{game['id']}/moves", json={"move": {"cell": cell}}, headers=auth(ada))
            for cell in (0, 1, 2)
        )
    )

    statuses = sorted(r.status_code for r in responses)
    assert statuses == [200, 400, 400]
    assert {r.json()["code"] for r in responses if r.status_code == 400} == {"not_your_turn"}
    state = (await client.get(f"/api/v1/games/{game['id']}", headers=auth(ada))).json()
    assert state["move_count"] == 1
    assert state["current_turn"] == bea["id"]
    assert sum(cell is not None for cell in state["game_state"]["board"]) == 1
