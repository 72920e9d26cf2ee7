"""
Global constants for WealthPlan.

Purpose
-------
Centralizes default values used throughout the package. Advisory
thresholds live in ``config.AdvisoryConfig``; the values here are the
calendar, projection and persistence defaults that are not tunable per
analysis.

Categories
----------
- Time: calendar conversions
- Projection: default rate, end year, horizon bound
- Suggestions: priority ranking
- Persistence: schema version of saved runs
"""

from typing import Dict

__all__ = [
    # Time
    "MONTHS_PER_YEAR",
    "DAYS_PER_YEAR",
    # Projection
    "DEFAULT_REAL_RATE",
    "DEFAULT_END_YEAR",
    "DEFAULT_MAX_HORIZON_YEARS",
    "DEFAULT_ACHIEVABLE_RATIO",
    # Suggestions
    "PRIORITY_RANK",
    # Persistence
    "SCHEMA_VERSION",
]


# =============================================================================
# Time
# =============================================================================

MONTHS_PER_YEAR: int = 12
"""Number of months in a year (monthly events are annualized with it)."""

DAYS_PER_YEAR: int = 365
"""Days per year used to convert a date distance into years to target."""


# =============================================================================
# Projection Defaults
# =============================================================================

DEFAULT_REAL_RATE: float = 0.04
"""Default real (inflation-adjusted) annual growth rate (4%)."""

DEFAULT_END_YEAR: int = 2060
"""Default last calendar year of a projection."""

DEFAULT_MAX_HORIZON_YEARS: int = 150
"""Upper bound on the number of simulated years per projection."""

DEFAULT_ACHIEVABLE_RATIO: float = 0.5
"""A goal plan is achievable when the contribution is below this share of current wealth."""


# =============================================================================
# Suggestions
# =============================================================================

PRIORITY_RANK: Dict[str, int] = {"HIGH": 3, "MEDIUM": 2, "LOW": 1}
"""Sort rank per priority; higher ranks come first."""


# =============================================================================
# Persistence
# =============================================================================

SCHEMA_VERSION: str = "0.1.0"
"""Schema version stamped on saved projection runs."""
