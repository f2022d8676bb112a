"""
Pet repository.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..entities.pets import Pet
from .base import AsyncBaseRepository


class PetRepository(AsyncBaseRepository[Pet]):
    """Repository for pet data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Pet)

    async def get_owned(self, user_id: str) -> Optional[Pet]:
        result = await self.session.exec(select(Pet).where(Pet.user_id == user_id).order_by(Pet.created_at))
        return result.first()

    async def get_accessible(self, user_id: str) -> Optional[Pet]:
        """Get the user's own pet, or else a pet they co-care."""
        pet = await self.get_owned(user_id)
        if pet is not None:
            return pet
        result = await self.session.exec(select(Pet).where(Pet.co_carer_id == user_id).order_by(Pet.created_at))
        return result.first()
