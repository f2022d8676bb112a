"""
Chat message entity model.

Direct messages carry a ``receiver_id``; group-room messages carry a
``room_id`` instead.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class ChatMessage(Base, table=True):
    """Message exchanged between users.

    Table: chat_messages
    """

    __tablename__ = "chat_messages"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    sender_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    receiver_id: Optional[str] = Field(default=None, foreign_key="users.id", index=True, max_length=36)
    room_id: Optional[str] = Field(default=None, index=True, max_length=64)
    content: str
    type: str = Field(default="text", max_length=16)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)

    def __repr__(self) -> str:
        return f"ChatMessage(id={self.id}, sender_id={self.sender_id}, type={self.type})"
