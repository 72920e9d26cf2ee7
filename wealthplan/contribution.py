"""
Contribution solver.

Purpose
-------
Closed-form level periodic contribution that bridges the gap between
current and target wealth over N years at a given annual rate, and the
goal-level contribution plan built on top of it.

Mathematical Framework
----------------------
With current wealth W_0, target W*, n years and rate r ≠ 0, a level
end-of-year contribution C satisfies

    W_0·(1+r)^n + C·AF = W*,      AF = ((1+r)^n − 1) / r

so that

    C = max(0, (W* − W_0·(1+r)^n) / AF)

Degenerate cases are handled explicitly so the arithmetic is total:

    W_0 ≥ W*   → 0
    n = 0      → W* − W_0           (the whole gap, immediately)
    r = 0      → (W* − W_0) / n

Example
-------
>>> from wealthplan.contribution import required_contribution
>>> round(required_contribution(100_000, 500_000, 10, 0.04))
29316
>>> required_contribution(100_000, 500_000, 0, 0.04)
400000.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .config import ContributionPlanConfig
from .constants import MONTHS_PER_YEAR
from .exceptions import InvalidInputError, NotFoundError
from .repository import ClientRepository, load_snapshot
from .utils import compound_factor, months_between

logger = logging.getLogger(__name__)

__all__ = [
    "required_contribution",
    "GoalContributionPlan",
    "plan_goal_contribution",
]


def required_contribution(
    current_wealth: float,
    target_wealth: float,
    years: float,
    annual_rate: float,
) -> float:
    """
    Level yearly contribution needed to grow *current_wealth* into
    *target_wealth* in *years* years at *annual_rate*.

    Parameters
    ----------
    current_wealth : float
        Wealth today.
    target_wealth : float
        Wealth to reach.
    years : float
        Horizon in years (fractional values allowed, must be >= 0).
    annual_rate : float
        Annual compound rate (must be > -1).

    Returns
    -------
    float
        Non-negative contribution per year.

    Raises
    ------
    InvalidInputError
        If ``years`` is negative or ``annual_rate <= -1``.
    """
    if years < 0:
        raise InvalidInputError(f"years must be non-negative, got {years}")
    if annual_rate <= -1:
        raise InvalidInputError(f"annual_rate must be > -1, got {annual_rate}")

    if current_wealth >= target_wealth:
        return 0.0
    if years == 0:
        return float(target_wealth - current_wealth)
    if annual_rate == 0:
        return float((target_wealth - current_wealth) / years)

    growth = compound_factor(annual_rate, years)
    future_value_of_current = current_wealth * growth
    annuity_factor = (growth - 1.0) / annual_rate
    return max(0.0, (target_wealth - future_value_of_current) / annuity_factor)


# ---------------------------------------------------------------------------
# Goal contribution plan
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GoalContributionPlan:
    """
    Contribution needed to reach one goal from the client's current wealth.

    Attributes
    ----------
    months_to_goal : int
        Calendar months until the target date (at least 1).
    yearly_contribution : float
        Level yearly contribution from ``required_contribution``.
    total_contribution : float
        ``yearly_contribution`` times the horizon in years.
    achievable : bool
        ``0 < yearly_contribution < current_wealth * achievable_ratio``.
    """
    goal_id: str
    goal_name: str
    target_value: float
    target_date: date
    current_wealth: float
    months_to_goal: int
    yearly_contribution: float
    total_contribution: float
    achievable: bool

    @property
    def years_to_goal(self) -> float:
        return self.months_to_goal / MONTHS_PER_YEAR

    @property
    def monthly_contribution(self) -> float:
        """Yearly contribution spread evenly across twelve months."""
        return self.yearly_contribution / MONTHS_PER_YEAR


def plan_goal_contribution(
    repository: ClientRepository,
    client_id: str,
    goal_id: str,
    config: Optional[ContributionPlanConfig] = None,
    as_of: Optional[date] = None,
) -> GoalContributionPlan:
    """
    Plan the contribution required to reach ``goal_id``.

    Current wealth is the client's wallet total; the horizon is the
    calendar-month distance from *as_of* (default today) to the goal's
    target date, floored at one month.

    Raises
    ------
    NotFoundError
        If the client, or the goal within that client, does not exist.
    """
    config = config or ContributionPlanConfig()
    as_of = as_of or date.today()
    snapshot = load_snapshot(repository, client_id)

    goal = next((g for g in snapshot.goals if g.id == goal_id), None)
    if goal is None:
        raise NotFoundError(f"Goal {goal_id!r} not found for client {client_id!r}")

    current_wealth = float(sum(w.current_value for w in snapshot.wallets))
    months = max(1, months_between(as_of, goal.target_date))
    years = months / MONTHS_PER_YEAR

    yearly = required_contribution(current_wealth, goal.target_value, years, config.real_rate)
    achievable = 0 < yearly < current_wealth * config.achievable_ratio

    logger.debug(
        "Goal %s: %d months, yearly contribution %.2f (achievable=%s)",
        goal_id, months, yearly, achievable,
    )
    return GoalContributionPlan(
        goal_id=goal.id,
        goal_name=goal.name,
        target_value=goal.target_value,
        target_date=goal.target_date,
        current_wealth=current_wealth,
        months_to_goal=months,
        yearly_contribution=yearly,
        total_contribution=yearly * years,
        achievable=achievable,
    )
