"""
User I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    username: str = Field(min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    email: str = Field(max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    display_name: str = Field(min_length=1, max_length=128)


class UserSummary(BaseModel):
    """Public profile of a user, as shown to friends."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    display_name: str
    current_streak: int
    pet_level: int
    last_active: datetime


class UserRead(UserSummary):
    """Full user record, returned to the user themselves."""

    email: str
    longest_streak: int
    memories_count: int
    friends_count: int
    created_at: datetime
