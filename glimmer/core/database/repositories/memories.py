"""
Memory repository.
"""

from __future__ import annotations

from typing import Iterable, List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.memories import Memory
from .base import AsyncBaseRepository


class MemoryRepository(AsyncBaseRepository[Memory]):
    """Repository for memory data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Memory)

    async def list_for_user(self, user_id: str, limit: int | None = None) -> List[Memory]:
        """List a user's memories, newest first."""
        stmt = select(Memory).where(Memory.user_id == user_id).order_by(Memory.created_at.desc())  # type: ignore[attr-defined]
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_public_for_users(self, user_ids: Iterable[str]) -> List[Memory]:
        """List public memories authored by any of ``user_ids``, newest first."""
        ids = list(user_ids)
        if not ids:
            return []
        stmt = (
            select(Memory)
            .where(Memory.user_id.in_(ids), Memory.is_public == True)  # type: ignore[attr-defined]  # noqa: E712
            .order_by(Memory.created_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.exec(stmt)
        return list(result.all())
