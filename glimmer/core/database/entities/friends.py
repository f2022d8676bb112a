"""
Friendship entity model.

One row per unordered pair of users; ``user_id`` is the requester and
``friend_id`` the addressee. ``pair_key`` names the pair independently of who
asked, and its unique constraint rejects a second row for the same two users
even when both send a request at the same moment.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint, event
from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


def make_pair_key(user_a: str, user_b: str) -> str:
    """Order-independent key of two user ids."""
    low, high = sorted((user_a, user_b))
    return f"{low}:{high}"


class Friendship(Base, table=True):
    """Friend request or accepted friendship between two users.

    Table: friends
    """

    __tablename__ = "friends"
    __table_args__ = (
        UniqueConstraint("pair_key", name="uq_friends_pair"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    friend_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    pair_key: Optional[str] = Field(default=None, max_length=73, nullable=False)
    status: str = Field(default="pending", max_length=16)
    streak_count: int = Field(default=0)
    last_interaction: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    def other_id(self, user_id: str) -> str:
        """Return the id of the participant that is not ``user_id``."""
        return self.friend_id if self.user_id == user_id else self.user_id

    def __repr__(self) -> str:
        return f"Friendship(id={self.id}, {self.user_id}->{self.friend_id}, status={self.status})"


@event.listens_for(Friendship, "before_insert")
def _fill_pair_key(mapper, connection, target: Friendship) -> None:
    target.pair_key = make_pair_key(target.user_id, target.friend_id)
