"""
Activity repository.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.activities import Activity
from .base import AsyncBaseRepository


class ActivityRepository(AsyncBaseRepository[Activity]):
    """Repository for the append-only activity feed."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Activity)

    async def record(
        self, user_id: str, type: str, description: str, data: Optional[Dict[str, Any]] = None
    ) -> Activity:
        return await self.create(Activity(user_id=user_id, type=type, description=description, data=data or {}))

    async def list_for_user(self, user_id: str, limit: int = 20) -> List[Activity]:
        """List the user's activities, newest first."""
        stmt = (
            select(Activity)
            .where(Activity.user_id == user_id)
            .order_by(Activity.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
