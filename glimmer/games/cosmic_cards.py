"""Cosmic cards: three cards each, three rounds, higher card takes the round.

Each round player1 leads a card from their hand and player2 answers. After
three rounds the player with more round wins takes the game; equal scores
are a draw.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

from glimmer.errors import InvalidMoveError

from .base import PLAYER1, PLAYER2, GameEngine, GameState, MoveOutcome, other_slot

SUITS = ("stars", "moons", "comets", "suns")
RANKS = {"2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8, "9": 9, "10": 10, "J": 11, "Q": 12, "K": 13, "A": 14}
HAND_SIZE = 3
ROUNDS = 3


def build_deck(seed: int) -> List[Dict[str, Any]]:
    """Full 52-card deck shuffled deterministically from ``seed``."""
    deck = [{"rank": rank, "suit": suit, "value": value} for suit in SUITS for rank, value in RANKS.items()]
    random.Random(seed).shuffle(deck)
    return deck


class CosmicCardsEngine(GameEngine):
    game_type = "cosmic-cards"

    def initial_state(self, seed: Optional[int] = None) -> GameState:
        if seed is None:
            seed = random.SystemRandom().randrange(2**31)
        deck = build_deck(seed)
        return {
            "seed": seed,
            "hands": {PLAYER1: deck[:HAND_SIZE], PLAYER2: deck[HAND_SIZE : HAND_SIZE * 2]},
            "table": {PLAYER1: None, PLAYER2: None},
            "round": 1,
            "rounds_total": ROUNDS,
            "scores": {PLAYER1: 0, PLAYER2: 0},
            "history": [],
            "winner": None,
            "is_draw": False,
        }

    def apply(self, state: GameState, slot: str, move: Dict[str, Any]) -> MoveOutcome:
        index = self._require_int(move, "card_index")

        new_state = self._copy(state)
        hand = new_state["hands"][slot]
        if not 0 <= index < len(hand):
            raise InvalidMoveError(f"Card index {index} is not in your hand")
        if new_state["table"][slot] is not None:
            raise InvalidMoveError("You already played a card this round")

        new_state["table"][slot] = hand.pop(index)
        opponent = other_slot(slot)
        if new_state["table"][opponent] is None:
            return MoveOutcome(state=new_state, next_slot=opponent)

        card1, card2 = new_state["table"][PLAYER1], new_state["table"][PLAYER2]
        if card1["value"] > card2["value"]:
            round_winner: Optional[str] = PLAYER1
        elif card2["value"] > card1["value"]:
            round_winner = PLAYER2
        else:
            round_winner = None
        if round_winner is not None:
            new_state["scores"][round_winner] += 1
        new_state["history"].append(
            {"round": new_state["round"], PLAYER1: card1, PLAYER2: card2, "winner": round_winner}
        )
        new_state["table"] = {PLAYER1: None, PLAYER2: None}

        if new_state["round"] < new_state["rounds_total"]:
            new_state["round"] += 1
            return MoveOutcome(state=new_state, next_slot=PLAYER1)

        score1, score2 = new_state["scores"][PLAYER1], new_state["scores"][PLAYER2]
        if score1 == score2:
            new_state["is_draw"] = True
            return MoveOutcome(state=new_state, next_slot=None, finished=True)
        winner = PLAYER1 if score1 > score2 else PLAYER2
        new_state["winner"] = winner
        return MoveOutcome(state=new_state, next_slot=None, finished=True, winner_slot=winner)

    def view(self, state: GameState, slot: Optional[str]) -> GameState:
        # The seed reproduces both hands
        visible = self._copy(state)
        visible.pop("seed", None)
        for other in (PLAYER1, PLAYER2):
            if other != slot:
                visible["hands"][other] = [{"hidden": True} for _ in visible["hands"][other]]
        return visible
