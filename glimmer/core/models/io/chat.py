"""
Chat I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from glimmer.core.models.domain.enums import ChatMessageType


class ChatMessageCreate(BaseModel):
    """Schema for sending a direct message over REST."""

    content: str = Field(min_length=1, max_length=4000)
    type: ChatMessageType = ChatMessageType.text


class ChatMessageRead(BaseModel):
    """Schema for reading a chat message."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    sender_id: str
    receiver_id: Optional[str] = None
    room_id: Optional[str] = None
    content: str
    type: ChatMessageType
    created_at: datetime
