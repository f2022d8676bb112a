"""Turn-based mini-game engines.

Engines are pure functions of (state, player slot, move); persistence, turn
ownership and notifications live in the game service.
"""

from .base import PLAYER1, PLAYER2, GameEngine, MoveOutcome, other_slot
from .locks import GameLocks, get_game_locks
from .registry import ENGINES, get_engine

__all__ = [
    "ENGINES",
    "PLAYER1",
    "PLAYER2",
    "GameEngine",
    "GameLocks",
    "MoveOutcome",
    "get_engine",
    "get_game_locks",
    "other_slot",
]
