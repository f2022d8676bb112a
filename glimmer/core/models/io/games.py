"""
Game I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from glimmer.core.models.domain.enums import GameStatus, GameType


class GameCreate(BaseModel):
    """Schema for inviting a friend to a game."""

    player2_id: str
    game_type: GameType


class GameMoveRequest(BaseModel):
    """Schema for submitting a move; its shape depends on the game type."""

    move: Dict[str, Any] = Field(description="e.g. {'cell': 4}, {'choice': 'rock'}, {'card_index': 0}")


class GameRead(BaseModel):
    """A game as seen by one participant; hidden information is redacted."""

    id: str
    player1_id: str
    player2_id: str
    game_type: GameType
    game_state: Dict[str, Any]
    status: GameStatus
    winner_id: Optional[str] = None
    current_turn: Optional[str] = None
    move_count: int
    created_at: datetime
    updated_at: datetime
