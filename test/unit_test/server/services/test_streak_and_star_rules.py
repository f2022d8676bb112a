"""Unit tests for friendship streak arithmetic and star placement."""

from datetime import datetime, timedelta

from glimmer.server.services.friends import next_streak
from glimmer.server.services.memories import STAR_FIELD_RADIUS, star_position_for

WINDOW = timedelta(hours=48)
DAY1 = datetime(2026, 3, 1, 9, 0, 0)


class TestNextStreak:
    def test_first_interaction_starts_at_one(self):
        assert next_streak(0, None, DAY1, WINDOW) == 1

    def test_same_day_does_not_extend(self):
        assert next_streak(3, DAY1, DAY1 + timedelta(hours=5), WINDOW) == 3
        assert next_streak(0, DAY1, DAY1 + timedelta(minutes=1), WINDOW) == 1

    def test_next_day_extends(self):
        assert next_streak(3, DAY1, DAY1 + timedelta(days=1), WINDOW) == 4

    def test_gap_longer_than_window_resets(self):
        assert next_streak(7, DAY1, DAY1 + timedelta(hours=49), WINDOW) == 1


class TestStarPosition:
    def test_position_is_stable_per_id(self):
        assert star_position_for("memory-1") == star_position_for("memory-1")
        assert star_position_for("memory-1") != star_position_for("memory-2")

    def test_position_stays_inside_the_field(self):
        for i in range(50):
            position = star_position_for(f"memory-{i}")
            assert set(position) == {"x", "y", "z"}
            assert all(-STAR_FIELD_RADIUS <= value <= STAR_FIELD_RADIUS for value in position.values())
