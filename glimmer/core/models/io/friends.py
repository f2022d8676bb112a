"""
Friendship I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from glimmer.core.models.domain.enums import FriendshipStatus

from .chat import ChatMessageRead
from .users import UserSummary


class FriendRequestCreate(BaseModel):
    """Schema for sending a friend request."""

    friend_id: str = Field(min_length=1, description="Target user's id or username")


class FriendshipUpdate(BaseModel):
    """Schema for changing a friendship's status."""

    status: FriendshipStatus


class FriendshipRead(BaseModel):
    """A friendship seen from one participant, with the other user's details."""

    id: str
    status: FriendshipStatus
    streak_count: int
    last_interaction: Optional[datetime] = None
    created_at: datetime
    is_requester: bool = Field(description="Whether the viewing user sent the request")
    friend: UserSummary


class ConversationRead(BaseModel):
    """An accepted friend with the last message exchanged."""

    friendship_id: str
    friend: UserSummary
    streak_count: int
    online: bool
    last_message: Optional[ChatMessageRead] = None
