"""
Friendship repository.

Lookups are symmetric: a pair of users matches regardless of who sent the
request.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from glimmer.core.models.domain.enums import FriendshipStatus

from ..entities.friends import Friendship, make_pair_key
from .base import AsyncBaseRepository


class FriendshipRepository(AsyncBaseRepository[Friendship]):
    """Repository for friendship data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Friendship)

    async def get_between(self, user_a: str, user_b: str) -> Optional[Friendship]:
        """Get the friendship row for an unordered pair of users."""
        stmt = select(Friendship).where(Friendship.pair_key == make_pair_key(user_a, user_b))
        result = await self.session.exec(stmt)
        return result.first()

    async def list_for_user(self, user_id: str, status: Optional[FriendshipStatus] = None) -> List[Friendship]:
        """List friendships involving ``user_id``, optionally by status."""
        stmt = select(Friendship).where(or_(Friendship.user_id == user_id, Friendship.friend_id == user_id))
        if status is not None:
            stmt = stmt.where(Friendship.status == status.value)
        stmt = stmt.order_by(Friendship.created_at.desc())  # type: ignore[attr-defined]
        result = await self.session.exec(stmt)
        return list(result.all())

    async def accepted_friend_ids(self, user_id: str) -> List[str]:
        friendships = await self.list_for_user(user_id, FriendshipStatus.accepted)
        return [f.other_id(user_id) for f in friendships]

    async def are_friends(self, user_a: str, user_b: str) -> bool:
        friendship = await self.get_between(user_a, user_b)
        return friendship is not None and friendship.status == FriendshipStatus.accepted.value
