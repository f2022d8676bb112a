"""
Game repository.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from glimmer.core.models.domain.enums import GameStatus

from ..entities.games import Game
from .base import AsyncBaseRepository


class GameRepository(AsyncBaseRepository[Game]):
    """Repository for game data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Game)

    async def list_active_for_user(self, user_id: str) -> List[Game]:
        """List active games the user plays in, most recently updated first."""
        stmt = (
            select(Game)
            .where(
                or_(Game.player1_id == user_id, Game.player2_id == user_id),
                Game.status == GameStatus.active.value,
            )
            .order_by(Game.updated_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.exec(stmt)
        return list(result.all())
