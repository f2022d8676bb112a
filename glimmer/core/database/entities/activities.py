"""
Activity entity model.

Append-only feed of things users did.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class Activity(Base, table=True):
    """Activity feed entry.

    Table: activities
    """

    __tablename__ = "activities"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    type: str = Field(max_length=32)
    description: str
    data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)

    def __repr__(self) -> str:
        return f"Activity(id={self.id}, user_id={self.user_id}, type={self.type})"
