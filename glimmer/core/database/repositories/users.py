"""
User repository.

Counter updates are issued as single UPDATE statements so concurrent requests
cannot lose increments.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import case, or_, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..base import utc_now
from ..entities.users import User
from .base import AsyncBaseRepository


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.exec(select(User).where(User.username == username))
        return result.first()

    async def find_conflicting(self, username: str, email: str) -> Optional[User]:
        """Return a user already holding ``username`` or ``email``, if any."""
        stmt = select(User).where(or_(User.username == username, User.email == email))
        result = await self.session.exec(stmt)
        return result.first()

    async def get_many(self, user_ids: Iterable[str]) -> List[User]:
        ids = list(set(user_ids))
        if not ids:
            return []
        result = await self.session.exec(select(User).where(User.id.in_(ids)))  # type: ignore[attr-defined]
        return list(result.all())

    async def adjust_memories_count(self, user_id: str, delta: int) -> None:
        """Add ``delta`` to the user's memory counter, never going below zero."""
        new_value = User.memories_count + delta
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(memories_count=case((new_value < 0, 0), else_=new_value))
        )
        await self.session.execute(stmt)

    async def adjust_friends_count(self, user_ids: Iterable[str], delta: int) -> None:
        """Add ``delta`` to each user's friend counter, never going below zero."""
        new_value = User.friends_count + delta
        stmt = (
            update(User)
            .where(User.id.in_(list(user_ids)))  # type: ignore[attr-defined]
            .values(friends_count=case((new_value < 0, 0), else_=new_value))
        )
        await self.session.execute(stmt)

    async def set_pet_level(self, user_id: str, level: int) -> None:
        await self.session.execute(update(User).where(User.id == user_id).values(pet_level=level))

    async def set_streaks(self, user_id: str, current_streak: int) -> None:
        """Set the current streak and raise the longest streak if it was exceeded."""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(
                current_streak=current_streak,
                longest_streak=case(
                    (User.longest_streak < current_streak, current_streak), else_=User.longest_streak
                ),
            )
        )
        await self.session.execute(stmt)

    async def touch(self, user_id: str) -> None:
        """Record activity by the user."""
        await self.session.execute(update(User).where(User.id == user_id).values(last_active=utc_now()))
