"""Engine interface shared by the turn-based mini-games.

Engines are pure: they take a JSON-serializable state and return a new one,
never mutating their input and never touching the database or sockets. The
game service decides who may move; the engine decides whether the move is
legal and what happens next.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from glimmer.errors import InvalidMoveError

PLAYER1 = "player1"
PLAYER2 = "player2"

GameState = Dict[str, Any]


def other_slot(slot: str) -> str:
    return PLAYER2 if slot == PLAYER1 else PLAYER1


@dataclass(frozen=True)
class MoveOutcome:
    """Result of applying one move.

    Attributes:
        state: The new game state.
        next_slot: Slot whose turn it is next; None once the game is finished.
        finished: Whether the game ended with this move.
        winner_slot: Winning slot when finished; None while running or on a draw.
    """

    state: GameState
    next_slot: Optional[str]
    finished: bool = False
    winner_slot: Optional[str] = None


class GameEngine(ABC):
    """Rules of one game type."""

    game_type: str

    @abstractmethod
    def initial_state(self, seed: Optional[int] = None) -> GameState:
        """Build the state of a new game.

        Args:
            seed: Seed for any randomness (card deals); None draws a fresh one.
        """

    def first_slot(self, state: GameState) -> str:
        """Slot that holds the first turn."""
        return PLAYER1

    @abstractmethod
    def apply(self, state: GameState, slot: str, move: Dict[str, Any]) -> MoveOutcome:
        """Validate and apply ``move`` by ``slot``.

        Raises:
            InvalidMoveError: The move is malformed or illegal in this state.
        """

    def view(self, state: GameState, slot: Optional[str]) -> GameState:
        """State as seen by ``slot``; engines with hidden information redact it."""
        return copy.deepcopy(state)

    @staticmethod
    def _copy(state: GameState) -> GameState:
        return copy.deepcopy(state)

    @staticmethod
    def _require_int(move: Dict[str, Any], key: str) -> int:
        value = move.get(key)
        # bool is an int subclass but never a valid index
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidMoveError(f"Move must contain an integer '{key}'")
        return value
