"""
Memory I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from glimmer.core.models.domain.enums import MemoryType


class StarPosition(BaseModel):
    """Position of a memory's star in the client's 3D scene."""

    x: float
    y: float
    z: float


class MemoryCreate(BaseModel):
    """Schema for creating a memory."""

    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    type: MemoryType = MemoryType.text
    star_position: Optional[StarPosition] = Field(
        default=None, description="Star placement; derived from the memory id when omitted"
    )
    is_public: bool = False


class MemoryRead(BaseModel):
    """Schema for reading a memory."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    content: str
    type: MemoryType
    star_position: StarPosition
    is_public: bool
    created_at: datetime


class MemoryInsight(BaseModel):
    """AI reflection over a user's recent memories."""

    insight: str
    suggestion: str
