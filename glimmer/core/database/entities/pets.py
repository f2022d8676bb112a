"""
Pet entity model.

Each user gets one cosmic pet on sign-up; an accepted friend may be granted
co-care of it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class Pet(Base, table=True):
    """Virtual pet owned by a user.

    Table: pets
    """

    __tablename__ = "pets"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    name: str = Field(default="Stardust", max_length=64)
    species: str = Field(default="Cosmic Fairy", max_length=64)
    level: int = Field(default=1)
    happiness: int = Field(default=50)
    energy: int = Field(default=50)
    bond: int = Field(default=30)
    experience: int = Field(default=0)
    mood: str = Field(default="Neutral", max_length=32)
    co_carer_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True, max_length=36)
    last_fed: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    last_played: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    def __repr__(self) -> str:
        return f"Pet(id={self.id}, user_id={self.user_id}, level={self.level}, mood={self.mood})"
