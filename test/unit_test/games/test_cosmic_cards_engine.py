"""Unit tests for the cosmic cards engine."""

import pytest

from glimmer.errors import InvalidMoveError
from glimmer.games import PLAYER1, PLAYER2
from glimmer.games.cosmic_cards import CosmicCardsEngine, build_deck


@pytest.fixture
def engine() -> CosmicCardsEngine:
    return CosmicCardsEngine()


def state_with_hands(engine, hand1, hand2):
    state = engine.initial_state(seed=1)
    state["hands"] = {
        PLAYER1: [{"rank": str(v), "suit": "stars", "value": v} for v in hand1],
        PLAYER2: [{"rank": str(v), "suit": "moons", "value": v} for v in hand2],
    }
    return state


def test_deck_is_complete_and_deterministic():
    deck = build_deck(42)
    assert len(deck) == 52
    assert len({(card["rank"], card["suit"]) for card in deck}) == 52
    assert deck == build_deck(42)
    assert deck != build_deck(43)


class TestCosmicCardsEngine:
    def test_deal_gives_three_distinct_cards_each(self, engine):
        state = engine.initial_state(seed=7)
        hand1, hand2 = state["hands"][PLAYER1], state["hands"][PLAYER2]
        assert len(hand1) == len(hand2) == 3
        assert not [card for card in hand1 if card in hand2]
        assert state["round"] == 1
        assert state["rounds_total"] == 3

    def test_deal_can_be_replayed_from_the_stored_seed(self, engine):
        state = engine.initial_state()
        deck = build_deck(state["seed"])
        assert state["hands"][PLAYER1] == deck[:3]
        assert state["hands"][PLAYER2] == deck[3:6]

    def test_opponent_hand_is_hidden(self, engine):
        state = engine.initial_state(seed=7)
        view = engine.view(state, PLAYER1)
        assert view["hands"][PLAYER1] == state["hands"][PLAYER1]
        assert view["hands"][PLAYER2] == [{"hidden": True}] * 3
        assert "seed" not in view
        assert "seed" not in engine.view(state, None)
        assert state["seed"] == 7

    def test_card_index_out_of_hand_is_rejected(self, engine):
        with pytest.raises(InvalidMoveError):
            engine.apply(engine.initial_state(seed=1), PLAYER1, {"card_index": 3})

    def test_higher_card_takes_the_round(self, engine):
        state = state_with_hands(engine, [14, 2, 3], [10, 11, 12])
        outcome = engine.apply(state, PLAYER1, {"card_index": 0})
        assert outcome.next_slot == PLAYER2
        outcome = engine.apply(outcome.state, PLAYER2, {"card_index": 0})
        assert outcome.state["scores"] == {PLAYER1: 1, PLAYER2: 0}
        assert outcome.state["round"] == 2
        assert outcome.next_slot == PLAYER1
        assert len(outcome.state["hands"][PLAYER1]) == 2

    def test_game_ends_after_three_rounds(self, engine):
        state = state_with_hands(engine, [2, 3, 14], [10, 11, 12])
        outcome = None
        for _ in range(3):
            outcome = engine.apply(state, PLAYER1, {"card_index": 0})
            outcome = engine.apply(outcome.state, PLAYER2, {"card_index": 0})
            state = outcome.state
        assert outcome.finished
        assert outcome.winner_slot == PLAYER2
        assert outcome.state["scores"] == {PLAYER1: 1, PLAYER2: 2}

    def test_equal_scores_are_a_draw(self, engine):
        state = state_with_hands(engine, [5, 9, 14], [5, 10, 2])
        outcome = None
        for _ in range(3):
            outcome = engine.apply(state, PLAYER1, {"card_index": 0})
            outcome = engine.apply(outcome.state, PLAYER2, {"card_index": 0})
            state = outcome.state
        assert outcome.finished
        assert outcome.winner_slot is None
        assert outcome.state["is_draw"] is True
