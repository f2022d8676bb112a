"""Rock-paper-scissors, best of three.

Both players choose each round without seeing the other's choice. The player
who has not chosen yet holds the turn; once both have chosen the round is
resolved. Drawn rounds are replayed and the first player to win two rounds
wins the game.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from glimmer.errors import InvalidMoveError

from .base import PLAYER1, PLAYER2, GameEngine, GameState, MoveOutcome, other_slot

CHOICES = ("rock", "paper", "scissors")
BEATS = {"rock": "scissors", "scissors": "paper", "paper": "rock"}
WINS_NEEDED = 2
HIDDEN = "hidden"


def round_winner(choice1: str, choice2: str) -> Optional[str]:
    """Return the winning slot of a round, or None on a draw."""
    if choice1 == choice2:
        return None
    return PLAYER1 if BEATS[choice1] == choice2 else PLAYER2


class RockPaperScissorsEngine(GameEngine):
    game_type = "rock-paper-scissors"

    def initial_state(self, seed: Optional[int] = None) -> GameState:
        return {
            "round": 1,
            "wins_needed": WINS_NEEDED,
            "scores": {PLAYER1: 0, PLAYER2: 0},
            "pending": {PLAYER1: None, PLAYER2: None},
            "history": [],
            "winner": None,
        }

    def apply(self, state: GameState, slot: str, move: Dict[str, Any]) -> MoveOutcome:
        choice = move.get("choice")
        if choice not in CHOICES:
            raise InvalidMoveError(f"Choice must be one of {', '.join(CHOICES)}")

        new_state = self._copy(state)
        pending = new_state["pending"]
        if pending[slot] is not None:
            raise InvalidMoveError("You already chose this round")
        pending[slot] = choice

        opponent = other_slot(slot)
        if pending[opponent] is None:
            return MoveOutcome(state=new_state, next_slot=opponent)

        choice1, choice2 = pending[PLAYER1], pending[PLAYER2]
        winner = round_winner(choice1, choice2)
        new_state["history"].append(
            {"round": new_state["round"], PLAYER1: choice1, PLAYER2: choice2, "winner": winner}
        )
        new_state["pending"] = {PLAYER1: None, PLAYER2: None}

        if winner is None:
            return MoveOutcome(state=new_state, next_slot=PLAYER1)

        new_state["scores"][winner] += 1
        if new_state["scores"][winner] >= new_state["wins_needed"]:
            new_state["winner"] = winner
            return MoveOutcome(state=new_state, next_slot=None, finished=True, winner_slot=winner)

        new_state["round"] += 1
        return MoveOutcome(state=new_state, next_slot=PLAYER1)

    def view(self, state: GameState, slot: Optional[str]) -> GameState:
        visible = self._copy(state)
        for other in (PLAYER1, PLAYER2):
            if other != slot and visible["pending"][other] is not None:
                visible["pending"][other] = HIDDEN
        return visible
