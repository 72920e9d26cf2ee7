"""
Event normalization module for WealthPlan.

Purpose
-------
Converts heterogeneous scheduled cash-flow records (one-time, monthly,
yearly) into per-year monetary deltas for a simulation window. Produces
both the per-year list of applied events consumed by the wealth-curve
simulator and a compact (n_years, 2) inflow/outflow array for reporting.

Yearly magnitude of an event active in year y
---------------------------------------------
    MONTHLY  → value × 12
    YEARLY   → value
    ONCE     → value if y == start year, else 0

An event is active in year y when ``start_year <= y <= end_year`` where
``end_year`` falls back to ``start_year`` without an end date. Months are
not prorated: a monthly event active in a year counts all twelve months.

Sign convention
---------------
INCOME and DEPOSIT are inflows (added to wealth, counted as contribution);
EXPENSE and WITHDRAWAL are outflows (subtracted, counted as withdrawal).
Magnitudes are always non-negative; the direction comes from the type.

Unsupported frequencies
-----------------------
Events whose frequency is not ONCE/MONTHLY/YEARLY contribute nothing and
are dropped when the schedule is built, with one WARNING log record per
dropped event.

Example
-------
>>> from datetime import date
>>> from wealthplan.models import Event
>>> from wealthplan.events import EventSchedule
>>> schedule = EventSchedule([
...     Event("e1", "c1", "INCOME", 1_000, "MONTHLY",
...           date(2025, 1, 1), date(2026, 12, 31)),
...     Event("e2", "c1", "EXPENSE", 30_000, "ONCE", date(2026, 3, 1)),
... ])
>>> [(a.type.value, a.value) for a in schedule.applied_for_year(2026)]
[('INCOME', 12000.0), ('EXPENSE', 30000.0)]
>>> schedule.to_array(2025, 2027)
array([[12000.,     0.],
       [12000., 30000.],
       [    0.,     0.]])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

import numpy as np

from .constants import MONTHS_PER_YEAR
from .models import Event
from .types import EventType, Frequency

logger = logging.getLogger(__name__)

__all__ = [
    "AppliedEvent",
    "yearly_amount",
    "EventSchedule",
]


# ---------------------------------------------------------------------------
# Applied Event
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AppliedEvent:
    """
    Cash flow applied to one simulated year.

    Parameters
    ----------
    type : EventType
        Direction of the flow.
    value : float
        Yearly magnitude (non-negative).
    description : str
        Label copied from the source event.
    """
    type: EventType
    value: float
    description: str = ""

    @property
    def signed_value(self) -> float:
        """Magnitude with inflows positive and outflows negative."""
        return self.value if self.type.is_inflow else -self.value


def yearly_amount(event: Event, year: int) -> float:
    """
    Yearly magnitude of *event* in calendar *year*.

    Returns 0.0 when the event is inactive in that year, when a ONCE event
    is past its start year, and for unsupported frequencies.

    Examples
    --------
    >>> e = Event("e", "c", "INCOME", 500, "MONTHLY", date(2025, 1, 1))
    >>> yearly_amount(e, 2025)
    6000.0
    >>> yearly_amount(e, 2026)
    0.0
    """
    if not event.is_active(year):
        return 0.0
    if event.frequency == Frequency.MONTHLY:
        return float(event.value * MONTHS_PER_YEAR)
    if event.frequency == Frequency.YEARLY:
        return float(event.value)
    if event.frequency == Frequency.ONCE:
        return float(event.value) if year == event.start_year else 0.0
    return 0.0


# ---------------------------------------------------------------------------
# Event Schedule (Collection)
# ---------------------------------------------------------------------------

@dataclass
class EventSchedule:
    """
    Collection of scheduled cash flows for one client.

    Parameters
    ----------
    events : Iterable[Event]
        Events to schedule. Events with unsupported frequencies are
        dropped (and logged) on construction; see ``skipped``.

    Methods
    -------
    applied_for_year(year) -> List[AppliedEvent]
        Non-zero flows of one calendar year, in input order.
    to_array(start_year, end_year) -> np.ndarray
        (n_years, 2) array of [inflow, outflow] per year.
    totals(start_year, end_year) -> Tuple[float, float]
        Total inflow and outflow over the window.

    Notes
    -----
    - Empty events list is valid (all deltas are zero)
    - Multiple events in the same year are summed by ``to_array``
    """
    events: Iterable[Event] = field(default_factory=list)
    skipped: List[Event] = field(init=False, default_factory=list)

    def __post_init__(self):
        supported: List[Event] = []
        for event in self.events:
            if isinstance(event.frequency, Frequency):
                supported.append(event)
                continue
            logger.warning(
                "Skipping event %r (%s): unsupported frequency %r contributes 0",
                event.id, event.label or "unnamed", event.frequency,
            )
            self.skipped.append(event)
        self.events = supported

    def __len__(self) -> int:
        return len(self.events)

    def applied_for_year(self, year: int) -> List[AppliedEvent]:
        """
        Flows applied in calendar *year*.

        Events whose yearly magnitude is zero (inactive, or ONCE events
        after their start year) are omitted.
        """
        applied = []
        for event in self.events:
            amount = yearly_amount(event, year)
            if amount == 0.0:
                continue
            applied.append(AppliedEvent(event.event_type, amount, event.label))
        return applied

    def to_array(self, start_year: int, end_year: int) -> np.ndarray:
        """
        Per-year inflow/outflow array for ``[start_year, end_year]``.

        Returns
        -------
        np.ndarray, shape (n_years, 2)
            Column 0 = inflows (INCOME + DEPOSIT), column 1 = outflows
            (EXPENSE + WITHDRAWAL). Shape (0, 2) for an empty window.
        """
        n_years = max(0, end_year - start_year + 1)
        flows = np.zeros((n_years, 2), dtype=float)
        for i in range(n_years):
            for applied in self.applied_for_year(start_year + i):
                col = 0 if applied.type.is_inflow else 1
                flows[i, col] += applied.value
        return flows

    def totals(self, start_year: int, end_year: int) -> Tuple[float, float]:
        """Total (inflow, outflow) over the window."""
        flows = self.to_array(start_year, end_year)
        if flows.size == 0:
            return 0.0, 0.0
        inflow, outflow = flows.sum(axis=0)
        return float(inflow), float(outflow)
