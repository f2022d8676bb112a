"""Unit tests for friendship, chat and activity queries."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from glimmer.core.database.base import utc_now
from glimmer.core.database.entities import ChatMessage, Friendship, Memory, Pet
from glimmer.core.database.entities.friends import make_pair_key
from glimmer.core.models.domain.enums import FriendshipStatus


class TestFriendshipRepository:
    async def test_pair_lookup_is_symmetric(self, repos, make_user):
        a, b = await make_user("ada"), await make_user("bea")
        friendship = await repos.friends.create(Friendship(user_id=a.id, friend_id=b.id))
        await repos.commit()
        assert (await repos.friends.get_between(b.id, a.id)).id == friendship.id
        assert not await repos.friends.are_friends(a.id, b.id)

    async def test_reverse_request_for_the_same_pair_is_rejected(self, repos, make_user):
        a, b = await make_user("kit"), await make_user("lux")
        friendship = await repos.friends.create(Friendship(user_id=a.id, friend_id=b.id))
        await repos.commit()
        assert friendship.pair_key == make_pair_key(b.id, a.id)

        a_id, b_id = a.id, b.id
        with pytest.raises(IntegrityError):
            await repos.friends.create(Friendship(user_id=b_id, friend_id=a_id))
        await repos.rollback()
        assert len(await repos.friends.list_for_user(a_id)) == 1

    async def test_accepted_friend_ids(self, repos, make_user):
        a, b, c = await make_user("cal"), await make_user("dax"), await make_user("eli")
        await repos.friends.create(
            Friendship(user_id=a.id, friend_id=b.id, status=FriendshipStatus.accepted.value)
        )
        await repos.friends.create(Friendship(user_id=c.id, friend_id=a.id))
        await repos.commit()
        assert await repos.friends.accepted_friend_ids(a.id) == [b.id]
        assert await repos.friends.are_friends(b.id, a.id)
        assert len(await repos.friends.list_for_user(a.id)) == 2
        pending = await repos.friends.list_for_user(a.id, FriendshipStatus.pending)
        assert [f.user_id for f in pending] == [c.id]


class TestChatMessageRepository:
    async def test_direct_history_is_oldest_first_and_paginated(self, repos, make_user):
        a, b, c = await make_user("fox"), await make_user("gil"), await make_user("hal")
        start = utc_now()
        for i, (sender, receiver) in enumerate([(a, b), (b, a), (a, c), (a, b)]):
            await repos.chat.create(
                ChatMessage(
                    sender_id=sender.id,
                    receiver_id=receiver.id,
                    content=f"m{i}",
                    created_at=start + timedelta(seconds=i),
                )
            )
        await repos.commit()

        history = await repos.chat.list_direct(b.id, a.id)
        assert [m.content for m in history] == ["m0", "m1", "m3"]
        page = await repos.chat.list_direct(a.id, b.id, limit=1, offset=1)
        assert [m.content for m in page] == ["m1"]
        assert (await repos.chat.last_direct(a.id, b.id)).content == "m3"

    async def test_room_history(self, repos, make_user):
        a = await make_user("ivy")
        await repos.chat.create(ChatMessage(sender_id=a.id, room_id="lobby", content="hello"))
        await repos.chat.create(ChatMessage(sender_id=a.id, room_id="other", content="elsewhere"))
        await repos.commit()
        assert [m.content for m in await repos.chat.list_room("lobby")] == ["hello"]


class TestMemoryAndPetRepositories:
    async def test_public_memories_of_friends_newest_first(self, repos, make_user):
        a, b = await make_user("jun"), await make_user("kai")
        start = utc_now()
        await repos.memories.create(
            Memory(user_id=a.id, title="old", content="c", is_public=True, created_at=start)
        )
        await repos.memories.create(
            Memory(user_id=a.id, title="new", content="c", is_public=True, created_at=start + timedelta(seconds=1))
        )
        await repos.memories.create(Memory(user_id=a.id, title="secret", content="c", is_public=False))
        await repos.memories.create(Memory(user_id=b.id, title="mine", content="c", is_public=True))
        await repos.commit()

        public = await repos.memories.list_public_for_users([a.id])
        assert [m.title for m in public] == ["new", "old"]
        assert await repos.memories.list_public_for_users([]) == []
        assert len(await repos.memories.list_for_user(a.id, limit=2)) == 2

    async def test_co_carer_can_reach_the_pet(self, repos, make_user):
        owner, helper = await make_user("leo"), await make_user("mia")
        pet = await repos.pets.create(Pet(user_id=owner.id, co_carer_id=helper.id))
        await repos.commit()
        assert (await repos.pets.get_owned(owner.id)).id == pet.id
        assert await repos.pets.get_owned(helper.id) is None
        assert (await repos.pets.get_accessible(helper.id)).id == pet.id


class TestActivityRepository:
    async def test_feed_is_newest_first_and_limited(self, repos, make_user):
        user = await make_user("nia")
        for i in range(3):
            activity = await repos.activities.record(user.id, "memory_shared", f"a{i}", {"i": i})
            activity.created_at = utc_now() + timedelta(seconds=i)
            await repos.activities.update(activity)
        await repos.commit()
        feed = await repos.activities.list_for_user(user.id, limit=2)
        assert [a.description for a in feed] == ["a2", "a1"]
        assert feed[0].data == {"i": 2}


class TestTimestamps:
    async def test_timestamps_come_back_as_utc(self, repos, make_user):
        a, b = await make_user("mae"), await make_user("ned")
        naive = datetime(2026, 5, 1, 8, 30)
        friendship = await repos.friends.create(
            Friendship(user_id=a.id, friend_id=b.id, last_interaction=naive)
        )
        await repos.commit()
        ids = (a.id, b.id, friendship.id)
        repos.session.expire_all()

        reloaded = await repos.friends.get_between(ids[0], ids[1])
        assert reloaded.created_at.tzinfo is not None
        assert reloaded.created_at.utcoffset() == timedelta(0)
        assert reloaded.last_interaction == naive.replace(tzinfo=timezone.utc)
        assert reloaded.id == ids[2]
