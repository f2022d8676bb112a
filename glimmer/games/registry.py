"""Lookup of game engines by game type."""

from __future__ import annotations

from typing import Dict

from glimmer.errors import ValidationError

from .base import GameEngine
from .cosmic_cards import CosmicCardsEngine
from .rock_paper_scissors import RockPaperScissorsEngine
from .tic_tac_toe import TicTacToeEngine

ENGINES: Dict[str, GameEngine] = {
    engine.game_type: engine
    for engine in (TicTacToeEngine(), RockPaperScissorsEngine(), CosmicCardsEngine())
}


def get_engine(game_type: str) -> GameEngine:
    """Return the engine for ``game_type``.

    Raises:
        ValidationError: No engine handles this game type.
    """
    try:
        return ENGINES[game_type]
    except KeyError:
        raise ValidationError(f"Unknown game type: '{game_type}'") from None
