"""
Memory service.

Creating or deleting a memory keeps the author's ``memories_count`` in step
and appends to the activity feed in the same commit.
"""

from __future__ import annotations

import hashlib
from typing import Dict, List

from glimmer.ai.assistant import CosmicAssistant
from glimmer.core.database.entities import Memory, User
from glimmer.core.database.repositories import RepoBundle
from glimmer.core.logging_config import get_logger
from glimmer.core.models.domain.enums import ActivityType
from glimmer.core.models.io import MemoryCreate, MemoryInsight
from glimmer.errors import NotFoundError, PermissionDeniedError

from .activities import ActivityService

logger = get_logger(__name__)

STAR_FIELD_RADIUS = 50.0
INSIGHT_MEMORY_COUNT = 6


def star_position_for(memory_id: str) -> Dict[str, float]:
    """Place a star inside the scene's cube, derived from the memory id."""
    digest = hashlib.sha256(memory_id.encode()).digest()
    coords = []
    for offset in (0, 4, 8):
        fraction = int.from_bytes(digest[offset : offset + 4], "big") / 0xFFFFFFFF
        coords.append(round((fraction * 2 - 1) * STAR_FIELD_RADIUS, 3))
    return {"x": coords[0], "y": coords[1], "z": coords[2]}


class MemoryService:
    """Business rules for memories."""

    def __init__(self, repos: RepoBundle, assistant: CosmicAssistant) -> None:
        self.repos = repos
        self.assistant = assistant
        self.activities = ActivityService(repos)

    async def create_memory(self, user: User, data: MemoryCreate) -> Memory:
        memory = Memory(
            user_id=user.id,
            title=data.title,
            content=data.content,
            type=data.type.value,
            is_public=data.is_public,
        )
        memory.star_position = (
            data.star_position.model_dump() if data.star_position else star_position_for(memory.id)
        )
        memory = await self.repos.memories.create(memory)
        await self.repos.users.adjust_memories_count(user.id, 1)
        await self.activities.log(
            user.id,
            ActivityType.memory_shared,
            f"Added a new star: {memory.title}",
            {"memory_id": memory.id, "is_public": memory.is_public},
        )
        await self.repos.commit()
        logger.debug(f"User {user.id} created memory {memory.id}")
        return memory

    async def list_own(self, user: User) -> List[Memory]:
        return await self.repos.memories.list_for_user(user.id)

    async def list_friends_public(self, user: User) -> List[Memory]:
        """Public memories of the user's accepted friends, newest first."""
        friend_ids = await self.repos.friends.accepted_friend_ids(user.id)
        return await self.repos.memories.list_public_for_users(friend_ids)

    async def get_memory(self, user: User, memory_id: str) -> Memory:
        """A memory the user owns, or any public memory.

        Raises:
            NotFoundError: Missing, or private and owned by someone else.
        """
        memory = await self.repos.memories.get_by_id(memory_id)
        if memory is None or (memory.user_id != user.id and not memory.is_public):
            raise NotFoundError("Memory", memory_id)
        return memory

    async def delete_memory(self, user: User, memory_id: str) -> None:
        """Delete one of the user's memories.

        Raises:
            NotFoundError: No such memory.
            PermissionDeniedError: The memory belongs to someone else.
        """
        memory = await self.repos.memories.get_by_id(memory_id)
        if memory is None:
            raise NotFoundError("Memory", memory_id)
        if memory.user_id != user.id:
            raise PermissionDeniedError("You can only delete your own memories")

        title = memory.title
        await self.repos.memories.delete(memory_id)
        await self.repos.users.adjust_memories_count(user.id, -1)
        await self.activities.log(
            user.id, ActivityType.memory_deleted, f"Let a star fade: {title}", {"memory_id": memory_id}
        )
        await self.repos.commit()
        logger.debug(f"User {user.id} deleted memory {memory_id}")

    async def insights(self, user: User) -> MemoryInsight:
        memories = await self.repos.memories.list_for_user(user.id, limit=INSIGHT_MEMORY_COUNT)
        payload = [
            {"title": m.title, "content": m.content, "type": m.type, "created_at": m.created_at.isoformat()}
            for m in memories
        ]
        return MemoryInsight(**await self.assistant.memory_insight(payload))
