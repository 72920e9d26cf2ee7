"""General utilities for WealthPlan

Contents
--------
- Validation helpers
- Calendar helpers (years/months to a target date)
- Finance helpers (annualized return, compound factor)
- Reporting helpers (format_currency, format_pct)
"""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

from .constants import DAYS_PER_YEAR, MONTHS_PER_YEAR
from .exceptions import InvalidInputError

__all__ = [
    # Validation
    "check_non_negative",
    # Calendar
    "years_to_target",
    "months_between",
    # Finance
    "compound_factor",
    "annualized_return",
    # Reporting
    "format_currency",
    "format_pct",
]

# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def check_non_negative(name: str, value: float) -> None:
    """Raise if *value* is negative (strict)."""
    if value < 0:
        raise InvalidInputError(f"{name} must be non-negative (got {value}).")


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def years_to_target(target: date, as_of: Optional[date] = None) -> int:
    """Whole years until *target*, rounded up: ceil(days / 365).

    Past targets give zero or negative values. *as_of* defaults to today.
    """
    as_of = as_of or date.today()
    days = (target - as_of).days
    return math.ceil(days / DAYS_PER_YEAR)


def months_between(start: date, end: date) -> int:
    """Calendar-month difference ``end - start`` (day of month ignored).

    >>> months_between(date(2025, 1, 15), date(2025, 7, 1))
    6
    """
    return (end.year - start.year) * MONTHS_PER_YEAR + (end.month - start.month)


# ---------------------------------------------------------------------------
# Finance helpers
# ---------------------------------------------------------------------------

def compound_factor(rate: float, years: float) -> float:
    """Growth of one unit after *years* at annual *rate*: (1 + r) ** n."""
    return float((1.0 + rate) ** years)


def annualized_return(initial: float, final: float, years: int) -> float:
    """Geometric average annual return: (final / initial) ** (1 / years) - 1.

    Returns 0 when ``initial <= 0`` or ``years <= 0`` to avoid division by
    zero in contribution-driven projections that start from nothing.
    """
    if initial <= 0 or years <= 0:
        return 0.0
    return float((final / initial) ** (1.0 / years) - 1.0)


# ---------------------------------------------------------------------------
# Reporting helpers
# ---------------------------------------------------------------------------

def format_currency(value: float, decimals: int = 0, symbol: str = "$") -> str:
    """
    Format a monetary value with thousands separators.

    Examples
    --------
    >>> format_currency(1_234_567.891)
    '$1,234,568'
    >>> format_currency(-2500, decimals=2)
    '-$2,500.00'
    """
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"


def format_pct(value: float, decimals: int = 1) -> str:
    """Format a percent-valued number (60.0 -> '60.0%')."""
    return f"{value:.{decimals}f}%"
