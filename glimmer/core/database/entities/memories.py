"""
Memory entity model.

Memories are short user-authored notes rendered as stars; each keeps the
position of its star in the client's scene.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class Memory(Base, table=True):
    """User memory rendered as a star.

    Table: memories
    """

    __tablename__ = "memories"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    title: str = Field(max_length=200)
    content: str
    type: str = Field(default="text", max_length=16)
    star_position: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    is_public: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)

    def __repr__(self) -> str:
        return f"Memory(id={self.id}, user_id={self.user_id}, title={self.title})"
