"""
Unit tests for goals.py module.

Tests yearly_goal_pace, GoalProgressTracker and goal_status.
"""

import pytest
from datetime import date

from wealthplan.goals import GoalProgressTracker, goal_status, yearly_goal_pace
from wealthplan.models import Goal


class TestYearlyGoalPace:

    def test_linear_pace(self):
        goal = Goal("g", "c", "House", 100_000, date(2030, 1, 1))
        assert yearly_goal_pace(goal, 2025) == pytest.approx(20_000)

    def test_due_at_start_is_zero(self):
        goal = Goal("g", "c", "House", 100_000, date(2025, 12, 31))
        assert yearly_goal_pace(goal, 2025) == 0.0
        assert yearly_goal_pace(goal, 2026) == 0.0


class TestGoalProgressTracker:

    def test_accumulates_until_target_year(self):
        goal = Goal("g", "c", "House", 100_000, date(2030, 1, 1))
        tracker = GoalProgressTracker([goal], start_year=2025)
        values = [tracker.advance(y) for y in range(2025, 2032)]
        assert values == pytest.approx(
            [20_000, 40_000, 60_000, 80_000, 100_000, 100_000, 100_000]
        )

    def test_multiple_goals(self, goals):
        tracker = GoalProgressTracker(goals, start_year=2025)
        values = [tracker.advance(y) for y in range(2025, 2029)]
        # house: 400k over 2 years, retirement: 1M over 20 years
        assert values == pytest.approx([250_000, 500_000, 550_000, 600_000])

    def test_past_goals_skipped(self):
        past = Goal("g", "c", "Old", 50_000, date(2020, 1, 1))
        tracker = GoalProgressTracker([past], start_year=2025)
        assert tracker.goals == []
        assert tracker.advance(2025) == 0.0


class TestGoalStatus:

    def test_table_sorted_by_target_date(self, goals, as_of):
        df = goal_status(goals, as_of=as_of)
        assert list(df.index) == ["g-house", "g-retire"]
        assert df.loc["g-house", "progress_pct"] == pytest.approx(10.0)
        assert df.loc["g-house", "years_to_target"] == 3
        assert df.loc["g-retire", "years_to_target"] == 21

    def test_empty(self):
        df = goal_status([])
        assert df.empty
        assert "progress_pct" in df.columns
