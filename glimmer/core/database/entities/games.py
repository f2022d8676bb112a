"""
Game entity model.

``game_state`` holds the engine's full state, including information hidden
from one of the players; API responses go through per-player views.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import Base, UTCDateTime, new_id, utc_now


class Game(Base, table=True):
    """Turn-based mini-game between two friends.

    Table: games
    """

    __tablename__ = "games"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    player1_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    player2_id: str = Field(foreign_key="users.id", index=True, max_length=36)
    game_type: str = Field(max_length=32)
    game_state: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    status: str = Field(default="active", max_length=16, index=True)
    winner_id: Optional[str] = Field(default=None, foreign_key="users.id", max_length=36)
    current_turn: Optional[str] = Field(default=None, max_length=36)
    move_count: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    def slot_of(self, user_id: str) -> Optional[str]:
        """Return ``player1``/``player2`` for a participant, None otherwise."""
        if user_id == self.player1_id:
            return "player1"
        if user_id == self.player2_id:
            return "player2"
        return None

    def player_for(self, slot: str) -> str:
        return self.player1_id if slot == "player1" else self.player2_id

    def __repr__(self) -> str:
        return f"Game(id={self.id}, type={self.game_type}, status={self.status})"
