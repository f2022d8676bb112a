"""Tic-tac-toe on a 3x3 board; player1 plays X and moves first."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from glimmer.errors import InvalidMoveError

from .base import PLAYER1, PLAYER2, GameEngine, GameState, MoveOutcome, other_slot

WINNING_LINES = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

MARKS = {PLAYER1: "X", PLAYER2: "O"}


def find_winner(board: List[Optional[str]]) -> Optional[str]:
    """Return the mark that completes a line, or None."""
    for a, b, c in WINNING_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
    return None


class TicTacToeEngine(GameEngine):
    game_type = "tic-tac-toe"

    def initial_state(self, seed: Optional[int] = None) -> GameState:
        return {"board": [None] * 9, "marks": dict(MARKS), "winner": None, "is_draw": False, "last_move": None}

    def apply(self, state: GameState, slot: str, move: Dict[str, Any]) -> MoveOutcome:
        cell = self._require_int(move, "cell")
        if not 0 <= cell <= 8:
            raise InvalidMoveError(f"Cell {cell} is off the board")

        new_state = self._copy(state)
        board = new_state["board"]
        if board[cell] is not None:
            raise InvalidMoveError(f"Cell {cell} is already taken")

        mark = MARKS[slot]
        board[cell] = mark
        new_state["last_move"] = {"slot": slot, "cell": cell}

        if find_winner(board) == mark:
            new_state["winner"] = slot
            return MoveOutcome(state=new_state, next_slot=None, finished=True, winner_slot=slot)
        if all(square is not None for square in board):
            new_state["is_draw"] = True
            return MoveOutcome(state=new_state, next_slot=None, finished=True)
        return MoveOutcome(state=new_state, next_slot=other_slot(slot))
