"""
Chat message repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.chat_messages import ChatMessage
from .base import AsyncBaseRepository, QueryBuilder


def _between(user_a: str, user_b: str):
    return or_(
        and_(ChatMessage.sender_id == user_a, ChatMessage.receiver_id == user_b),
        and_(ChatMessage.sender_id == user_b, ChatMessage.receiver_id == user_a),
    )


class ChatMessageRepository(AsyncBaseRepository[ChatMessage]):
    """Repository for chat message data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ChatMessage)

    async def list_direct(
        self, user_a: str, user_b: str, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[ChatMessage]:
        """List direct messages between two users, oldest first."""
        stmt = select(ChatMessage).where(_between(user_a, user_b)).order_by(ChatMessage.created_at)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def last_direct(self, user_a: str, user_b: str) -> Optional[ChatMessage]:
        stmt = (
            select(ChatMessage)
            .where(_between(user_a, user_b))
            .order_by(ChatMessage.created_at.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_room(
        self, room_id: str, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[ChatMessage]:
        """List group-room messages, oldest first."""
        stmt = select(ChatMessage).where(ChatMessage.room_id == room_id).order_by(ChatMessage.created_at)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.exec(stmt)
        return list(result.all())
