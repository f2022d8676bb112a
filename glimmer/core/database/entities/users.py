"""
User entity model.

A user owns memories and a pet, and carries denormalized counters that the
dashboard shows without aggregating other tables.
"""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class User(Base, table=True):
    """Registered Glimmer user.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    username: str = Field(max_length=64, unique=True, index=True)
    email: str = Field(max_length=255, unique=True)
    display_name: str = Field(max_length=128)

    # Denormalized counters
    current_streak: int = Field(default=0)
    longest_streak: int = Field(default=0)
    memories_count: int = Field(default=0)
    friends_count: int = Field(default=0)
    pet_level: int = Field(default=1)

    last_active: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username})"
