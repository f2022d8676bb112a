import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


def auth(user):
    return {"X-User-Id": user["id"]}


async def create_memory(client, user, title="First light", **extra):
    response = await client.post(
        "/api/v1/memories", json={"title": title, "content": "We watched the sunrise.", **extra}, headers=auth(user)
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_memory_counts_and_logs(client: AsyncClient, make_user):
    user = await make_user("nova")
    memory = await create_memory(client, user, is_public=True)
    assert memory["type"] == "text"
    assert set(memory["star_position"]) == {"x", "y", "z"}

    me = (await client.get("/api/v1/users/me", headers=auth(user))).json()
    assert me["memories_count"] == 1
    activities = (await client.get("/api/v1/activities", headers=auth(user))).json()
    assert activities[0]["type"] == "memory_shared"
    assert activities[0]["data"]["memory_id"] == memory["id"]


async def test_explicit_star_position_is_kept(client: AsyncClient, make_user):
    user = await make_user("sirius")
    memory = await create_memory(client, user, star_position={"x": 1.5, "y": -2, "z": 3})
    assert memory["star_position"] == {"x": 1.5, "y": -2.0, "z": 3.0}


async def test_list_own_memories_newest_first(client: AsyncClient, make_user):
    user = await make_user("rigel")
    await create_memory(client, user, "one")
    await create_memory(client, user, "two")
    titles = [m["title"] for m in (await client.get("/api/v1/memories", headers=auth(user))).json()]
    assert titles == ["two", "one"]


async def test_private_memory_hidden_from_others(client: AsyncClient, make_user):
    owner, other = await make_user("deneb"), await make_user("mira")
    private = await create_memory(client, owner, "secret")
    public = await create_memory(client, owner, "open", is_public=True)

    assert (await client.get(f"/api/v1/memories/{private['id']}", headers=auth(owner))).status_code == 200
    assert (await client.get(f"/api/v1/memories/{private['id']}", headers=auth(other))).status_code == 404
    assert (await client.get(f"/api/v1/memories/{public['id']}", headers=auth(other))).status_code == 200


async def test_public_memories_only_from_accepted_friends(client: AsyncClient, make_user, befriend):
    user, friend, stranger = await make_user("ceres"), await make_user("pallas"), await make_user("juno")
    await befriend(user, friend)
    await create_memory(client, friend, "shared", is_public=True)
    await create_memory(client, friend, "kept")
    await create_memory(client, stranger, "unknown", is_public=True)

    titles = [m["title"] for m in (await client.get("/api/v1/memories/public", headers=auth(user))).json()]
    assert titles == ["shared"]


async def test_delete_memory_rules(client: AsyncClient, make_user):
    owner, other = await make_user("hydra"), await make_user("draco")
    memory = await create_memory(client, owner)

    response = await client.delete(f"/api/v1/memories/{memory['id']}", headers=auth(other))
    assert response.status_code == 403
    response = await client.delete(f"/api/v1/memories/{memory['id']}", headers=auth(owner))
    assert response.status_code == 204
    response = await client.delete(f"/api/v1/memories/{memory['id']}", headers=auth(owner))
    assert response.status_code == 404

    me = (await client.get("/api/v1/users/me", headers=auth(owner))).json()
    assert me["memories_count"] == 0
    activities = (await client.get("/api/v1/activities", headers=auth(owner))).json()
    assert activities[0]["type"] == "memory_deleted"


async def test_insights_offline(client: AsyncClient, make_user):
    user = await make_user("lyra")
    empty = (await client.get("/api/v1/memories/insights", headers=auth(user))).json()
    assert empty["insight"].startswith("No memories yet")

    await create_memory(client, user)
    insight = (await client.get("/api/v1/memories/insights", headers=auth(user))).json()
    assert set(insight) == {"insight", "suggestion"}
    assert insight["insight"]
