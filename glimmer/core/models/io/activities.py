"""
Activity, dashboard and chatbot I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .pets import PetRead
from .users import UserRead


class ActivityRead(BaseModel):
    """Schema for reading an activity feed entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    type: str
    description: str
    data: Dict[str, Any]
    created_at: datetime


class DashboardRead(BaseModel):
    """Summary shown on the user's home screen."""

    user: UserRead
    memories: int = Field(description="Number of memories the user has")
    friends: int = Field(description="Number of accepted friendships")
    pet: Optional[PetRead] = None
    activities: List[ActivityRead]


class ChatbotRequest(BaseModel):
    """Schema for a message to the cosmic assistant."""

    message: str = Field(min_length=1, max_length=2000)
    context: Optional[str] = Field(default=None, max_length=2000)


class ChatbotResponse(BaseModel):
    response: str
