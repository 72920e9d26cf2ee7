"""
Goal tracking module.

Purpose
-------
Linear progress estimate toward each goal's target, accumulated across a
projection horizon, plus a tabular status view of a client's goals.

Progress model
--------------
A goal with target year Y_g seen from a projection starting in year S
is credited, for every simulated year y with y < Y_g:

    target_value / (Y_g - S)

The running sum over goals and years is the projection's
``total_goal_progress``. Goals with Y_g - S <= 0 (due at or before the
projection start) have no meaningful yearly pace and are skipped.

This accumulation uses the goals' own time base, so it runs as a pass
separate from the cash-flow accumulation in ``projection.py``.

Example
-------
>>> from datetime import date
>>> from wealthplan.models import Goal
>>> from wealthplan.goals import GoalProgressTracker
>>> goal = Goal("g1", "c1", "House", 100_000, date(2030, 1, 1))
>>> tracker = GoalProgressTracker([goal], start_year=2025)
>>> [tracker.advance(y) for y in range(2025, 2032)]
[20000.0, 40000.0, 60000.0, 80000.0, 100000.0, 100000.0, 100000.0]
"""

from __future__ import annotations
from datetime import date
from typing import Iterable, List, Optional

import pandas as pd

from .models import Goal
from .utils import years_to_target

__all__ = [
    "yearly_goal_pace",
    "GoalProgressTracker",
    "goal_status",
]


def yearly_goal_pace(goal: Goal, start_year: int) -> float:
    """
    Linear yearly amount needed to reach ``goal.target_value`` by its
    target year, counting from ``start_year``.

    Returns 0.0 when the target year is not after ``start_year``.
    """
    years_from_start = goal.target_year - start_year
    if years_from_start <= 0:
        return 0.0
    return goal.target_value / years_from_start


class GoalProgressTracker:
    """
    Running goal-progress accumulator for a year-by-year simulation.

    Parameters
    ----------
    goals : Iterable[Goal]
        Client goals. Goals due at or before ``start_year`` never
        contribute.
    start_year : int
        First simulated year; the denominator base of every goal pace.

    Notes
    -----
    ``advance`` must be called once per simulated year, in increasing
    order. The tracker holds per-call state only; create one per
    simulation.
    """

    def __init__(self, goals: Iterable[Goal], start_year: int):
        self.start_year = start_year
        self.goals: List[Goal] = [
            g for g in goals if g.target_year - start_year > 0
        ]
        self.accumulated = 0.0

    def advance(self, year: int) -> float:
        """Credit every goal still pending in *year*; return the running total."""
        for goal in self.goals:
            if goal.target_year > year:
                self.accumulated += yearly_goal_pace(goal, self.start_year)
        return self.accumulated


def goal_status(goals: Iterable[Goal], as_of: Optional[date] = None) -> pd.DataFrame:
    """
    Status table of goals ordered by target date.

    Columns: name, target_value, current_value, progress_pct, target_date,
    years_to_target. Indexed by goal id. Empty input gives an empty frame
    with the same columns.
    """
    columns = [
        "name", "target_value", "current_value",
        "progress_pct", "target_date", "years_to_target",
    ]
    rows = [
        {
            "id": g.id,
            "name": g.name,
            "target_value": g.target_value,
            "current_value": g.current_value,
            "progress_pct": g.progress_pct,
            "target_date": g.target_date,
            "years_to_target": years_to_target(g.target_date, as_of),
        }
        for g in sorted(goals, key=lambda g: g.target_date)
    ]
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows).set_index("id")[columns]
