"""Wealth-curve simulator for WealthPlan

Drives the year-by-year loop combining starting wealth, scheduled
cash-flow deltas (``events.py``) and a fixed real growth rate into a
trajectory of immutable yearly snapshots, with goal progress accumulated
in a separate pass (``goals.py``).

Yearly dynamics
---------------
For each calendar year y in [start_year, end_year]:

    start_y  = W
    W       += Σ inflows_y − Σ outflows_y          (if include_events)
    growth_y = W · r
    W       += growth_y
    W        = max(W, 0)                           (no debt is modeled)
    end_y    = W

Growth is computed on the wealth after the year's cash flows, so the
full year's flows earn the full year's return. Floating point throughout,
no internal rounding; ``r`` may be zero or negative.

Typical usage
-------------
>>> from wealthplan.config import ProjectionParameters
>>> from wealthplan.projection import simulate_wealth_curve, summarize_projection
>>> params = ProjectionParameters(client_id="c1", initial_wealth=100_000,
...                               real_rate=0.04, start_year=2025,
...                               end_year=2027, include_events=False)
>>> years = simulate_wealth_curve(params)
>>> round(years[0].end_value, 2)
104000.0
>>> summarize_projection(100_000, years).annualized_return
0.04...
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np
import pandas as pd

from .config import ProjectionParameters, get_settings
from .constants import DEFAULT_END_YEAR
from .events import AppliedEvent, EventSchedule
from .exceptions import HorizonLimitError
from .goals import GoalProgressTracker
from .models import Event, Goal
from .repository import ClientRepository, load_snapshot
from .types import ProjectionSummaryDict
from .utils import annualized_return

logger = logging.getLogger(__name__)

__all__ = [
    "ProjectionYearResult",
    "ProjectionSummary",
    "ProjectionResult",
    "simulate_wealth_curve",
    "summarize_projection",
    "compute_projection",
    "projection_parameters_for_client",
]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectionYearResult:
    year: int
    start_value: float
    end_value: float
    contribution: float
    withdrawal: float
    growth: float
    events: Tuple[AppliedEvent, ...] = ()
    total_goal_progress: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["events"] = [
            {"type": e.type.value, "value": e.value, "description": e.description}
            for e in self.events
        ]
        return data


@dataclass(frozen=True)
class ProjectionSummary:
    initial_wealth: float
    final_wealth: float
    total_growth: float
    total_contributions: float
    total_withdrawals: float
    annualized_return: float

    def to_dict(self) -> ProjectionSummaryDict:
        return ProjectionSummaryDict(**asdict(self))


@dataclass(frozen=True)
class ProjectionResult:
    """Yearly trajectory plus its summary, as returned by ``compute_projection``."""
    parameters: ProjectionParameters
    years: Tuple[ProjectionYearResult, ...]
    summary: ProjectionSummary
    created_at: date = field(default_factory=date.today)

    def __len__(self) -> int:
        return len(self.years)

    def __iter__(self) -> Iterator[ProjectionYearResult]:
        return iter(self.years)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per year indexed by ``year``; events are reduced to a count."""
        columns = [
            "start_value", "end_value", "contribution", "withdrawal",
            "growth", "n_events", "total_goal_progress",
        ]
        if not self.years:
            return pd.DataFrame(columns=columns, index=pd.Index([], name="year"))
        df = pd.DataFrame(
            {
                "year": [y.year for y in self.years],
                "start_value": [y.start_value for y in self.years],
                "end_value": [y.end_value for y in self.years],
                "contribution": [y.contribution for y in self.years],
                "withdrawal": [y.withdrawal for y in self.years],
                "growth": [y.growth for y in self.years],
                "n_events": [len(y.events) for y in self.years],
                "total_goal_progress": [y.total_goal_progress for y in self.years],
            }
        )
        return df.set_index("year")[columns]


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

def simulate_wealth_curve(
    params: ProjectionParameters,
    events: Iterable[Event] = (),
    goals: Iterable[Goal] = (),
    *,
    max_years: Optional[int] = None,
) -> List[ProjectionYearResult]:
    """
    Project wealth year by year over ``[start_year, end_year]``.

    Parameters
    ----------
    params : ProjectionParameters
        Initial wealth, real rate and year window.
    events : Iterable[Event]
        Client cash flows; ignored when ``params.include_events`` is False.
    goals : Iterable[Goal]
        Client goals feeding ``total_goal_progress``.
    max_years : int, optional
        Horizon bound. Defaults to ``AppSettings.max_horizon_years``.

    Returns
    -------
    List[ProjectionYearResult]
        One entry per year; empty when ``end_year < start_year``.

    Raises
    ------
    HorizonLimitError
        If the window spans more than ``max_years`` years.
    ConfigurationError
        If ``max_years`` is omitted and the environment settings are invalid.
    """
    n_years = params.n_years
    if max_years is None:
        max_years = get_settings().max_horizon_years
    if n_years > max_years:
        raise HorizonLimitError(
            f"Projection spans {n_years} years ({params.start_year}-"
            f"{params.end_year}); maximum is {max_years}. "
            f"Narrow the year range or raise WEALTHPLAN_MAX_HORIZON_YEARS."
        )

    schedule = EventSchedule(events if params.include_events else [])
    tracker = GoalProgressTracker(goals, params.start_year)

    current_wealth = float(params.initial_wealth)
    results: List[ProjectionYearResult] = []

    for year in range(params.start_year, params.end_year + 1):
        start_value = current_wealth
        contribution = 0.0
        withdrawal = 0.0

        applied = schedule.applied_for_year(year)
        for flow in applied:
            if flow.type.is_inflow:
                current_wealth += flow.value
                contribution += flow.value
            else:
                current_wealth -= flow.value
                withdrawal += flow.value

        growth = current_wealth * params.real_rate
        current_wealth += growth

        if current_wealth < 0:
            current_wealth = 0.0

        results.append(
            ProjectionYearResult(
                year=year,
                start_value=start_value,
                end_value=current_wealth,
                contribution=contribution,
                withdrawal=withdrawal,
                growth=growth,
                events=tuple(applied),
                total_goal_progress=tracker.advance(year),
            )
        )

    logger.debug(
        "Simulated %d years for client %s (rate=%s, events=%d, skipped=%d)",
        len(results), params.client_id, params.real_rate,
        len(schedule), len(schedule.skipped),
    )
    return results


def summarize_projection(
    initial_wealth: float, years: List[ProjectionYearResult]
) -> ProjectionSummary:
    """
    Aggregate a trajectory.

    ``annualized_return = (final / initial) ** (1 / n_years) - 1``, or 0
    when ``initial <= 0`` or the trajectory is empty. An empty trajectory
    reports ``final_wealth == initial_wealth``.
    """
    if not years:
        return ProjectionSummary(
            initial_wealth=float(initial_wealth),
            final_wealth=float(initial_wealth),
            total_growth=0.0,
            total_contributions=0.0,
            total_withdrawals=0.0,
            annualized_return=0.0,
        )
    final_wealth = years[-1].end_value
    contributions = np.array([y.contribution for y in years], dtype=float)
    withdrawals = np.array([y.withdrawal for y in years], dtype=float)
    return ProjectionSummary(
        initial_wealth=float(initial_wealth),
        final_wealth=float(final_wealth),
        total_growth=float(final_wealth - initial_wealth),
        total_contributions=float(contributions.sum()),
        total_withdrawals=float(withdrawals.sum()),
        annualized_return=annualized_return(initial_wealth, final_wealth, len(years)),
    )


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

def compute_projection(
    repository: ClientRepository,
    params: ProjectionParameters,
    *,
    max_years: Optional[int] = None,
) -> ProjectionResult:
    """
    Run a projection for ``params.client_id`` using its stored events and goals.

    Raises
    ------
    NotFoundError
        If the client does not exist.
    HorizonLimitError
        If the year window exceeds the horizon bound.
    """
    snapshot = load_snapshot(repository, params.client_id)
    years = simulate_wealth_curve(
        params, snapshot.events, snapshot.goals, max_years=max_years
    )
    return ProjectionResult(
        parameters=params,
        years=tuple(years),
        summary=summarize_projection(params.initial_wealth, years),
    )


def projection_parameters_for_client(
    repository: ClientRepository,
    client_id: str,
    *,
    real_rate: Optional[float] = None,
    start_year: Optional[int] = None,
    end_year: int = DEFAULT_END_YEAR,
    include_events: bool = True,
) -> ProjectionParameters:
    """
    Build ProjectionParameters whose initial wealth is the client's
    current wallet total.

    ``start_year`` defaults to the current calendar year and ``real_rate``
    to ``AppSettings.default_real_rate``.

    Raises
    ------
    NotFoundError
        If the client does not exist.
    """
    snapshot = load_snapshot(repository, client_id)
    initial_wealth = float(sum(w.current_value for w in snapshot.wallets))
    return ProjectionParameters(
        client_id=client_id,
        initial_wealth=initial_wealth,
        real_rate=get_settings().default_real_rate if real_rate is None else real_rate,
        start_year=date.today().year if start_year is None else start_year,
        end_year=end_year,
        include_events=include_events,
    )
