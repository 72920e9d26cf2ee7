"""
Configuration management module for WealthPlan.

Purpose
-------
Centralized configuration using Pydantic models for type-safe parameter
management, validation, and serialization:

- ProjectionParameters: inputs of one wealth-curve simulation
- AdvisoryConfig: every heuristic threshold, rate and confidence score
  used by the suggestion analyzers, injected into each analyzer so that
  they can be tuned without code changes
- ContributionPlanConfig: inputs of a goal contribution plan
- AppSettings: environment-driven settings (WEALTHPLAN_ prefix)

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: model_dump() / model_validate() round trips
- Defaults: Sensible defaults for all tunable parameters

Example
-------
>>> from wealthplan.config import ProjectionParameters, AdvisoryConfig
>>> params = ProjectionParameters(client_id="c-1", initial_wealth=100_000,
...                               real_rate=0.04, start_year=2025,
...                               end_year=2045)
>>> strict = AdvisoryConfig(concentration_threshold=50.0)
>>> strict.model_dump()["concentration_threshold"]
50.0
"""

from __future__ import annotations
from typing import Literal, Tuple
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, ConfigDict, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_ACHIEVABLE_RATIO,
    DEFAULT_END_YEAR,
    DEFAULT_MAX_HORIZON_YEARS,
    DEFAULT_REAL_RATE,
)
from .exceptions import ConfigurationError

__all__ = [
    "ProjectionParameters",
    "AdvisoryConfig",
    "ContributionPlanConfig",
    "AppSettings",
    "get_settings",
]


# ---------------------------------------------------------------------------
# Projection Parameters
# ---------------------------------------------------------------------------

class ProjectionParameters(BaseModel):
    """
    Inputs of one wealth-curve simulation.

    Attributes
    ----------
    client_id : str
        Client whose events and goals feed the simulation.
    initial_wealth : float
        Wealth at the start of ``start_year``.
    real_rate : float
        Annual real growth rate. Usually within [0, 0.5]; negative rates
        are allowed (must stay above -1).
    start_year : int
        First simulated calendar year.
    end_year : int
        Last simulated calendar year (inclusive). A value below
        ``start_year`` yields an empty projection.
    include_events : bool
        Apply the client's scheduled cash flows.

    Examples
    --------
    >>> params = ProjectionParameters(client_id="c-1", initial_wealth=0,
    ...                               start_year=2025, end_year=2030)
    >>> params.real_rate
    0.04
    >>> params.n_years
    6
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    client_id: str = Field(
        min_length=1,
        description="Client identifier"
    )
    initial_wealth: float = Field(
        ge=0,
        description="Wealth at the start of the first simulated year"
    )
    real_rate: float = Field(
        default=DEFAULT_REAL_RATE,
        gt=-1.0,
        le=1.0,
        description="Annual inflation-adjusted growth rate"
    )
    start_year: int = Field(
        ge=1900,
        le=2500,
        description="First simulated calendar year"
    )
    end_year: int = Field(
        default=DEFAULT_END_YEAR,
        ge=1900,
        le=2500,
        description="Last simulated calendar year (inclusive)"
    )
    include_events: bool = Field(
        default=True,
        description="Apply scheduled cash-flow events"
    )

    @property
    def n_years(self) -> int:
        """Number of simulated years (0 when end_year < start_year)."""
        return max(0, self.end_year - self.start_year + 1)


# ---------------------------------------------------------------------------
# Advisory Configuration
# ---------------------------------------------------------------------------

class AdvisoryConfig(BaseModel):
    """
    Heuristic constants of the suggestion analyzers.

    The values are rules of thumb, not statistically derived estimates.
    Percent-valued thresholds are expressed in percent (60.0 = 60%);
    rates are fractions (0.02 = 2%). Confidence scores lie in [0, 100].

    Examples
    --------
    >>> config = AdvisoryConfig()
    >>> config.coverage_multiplier
    3.0
    >>> AdvisoryConfig(tax_contribution_cap=50_000).tax_contribution_cap
    50000.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Portfolio concentration
    concentration_threshold: float = Field(
        default=60.0, ge=0, le=100,
        description="Asset-class share (%) above which rebalancing is suggested"
    )
    concentration_high_threshold: float = Field(
        default=80.0, ge=0, le=100, validate_default=True,
        description="Asset-class share (%) above which rebalancing is HIGH priority"
    )
    concentration_target: float = Field(
        default=50.0, ge=0, le=100, validate_default=True,
        description="Share (%) the concentrated class should be brought down to"
    )
    rebalancing_gain_rate: float = Field(
        default=0.02, ge=0, le=1,
        description="Assumed risk-adjusted return uplift from rebalancing"
    )
    rebalancing_confidence: float = Field(default=75.0, ge=0, le=100)

    # Cash drag
    cash_threshold: float = Field(
        default=15.0, ge=0, le=100,
        description="Cash share (%) above which deployment is suggested"
    )
    cash_target: float = Field(
        default=10.0, ge=0, le=100, validate_default=True,
        description="Cash share (%) to keep after deployment"
    )
    cash_drag_rate: float = Field(
        default=0.05, ge=0, le=1,
        description="Return forgone per unit of idle cash"
    )
    cash_confidence: float = Field(default=70.0, ge=0, le=100)

    # Goal feasibility
    goal_short_horizon_years: int = Field(
        default=5, ge=0,
        description="Goals due in fewer years are checked for over-ambition"
    )
    goal_low_progress_pct: float = Field(
        default=30.0, ge=0, le=100,
        description="Progress (%) below which a short-horizon goal is over-ambitious"
    )
    goal_target_cut: float = Field(
        default=0.30, ge=0, le=1,
        description="Suggested reduction of an over-ambitious target"
    )
    goal_deadline_extension_years: int = Field(
        default=3, ge=0,
        description="Suggested deadline extension for an over-ambitious goal"
    )
    goal_overambitious_confidence: float = Field(default=60.0, ge=0, le=100)
    goal_long_horizon_years: int = Field(
        default=15, ge=0,
        description="Goals due in more years are checked for under-ambition"
    )
    goal_high_progress_pct: float = Field(
        default=80.0, ge=0,
        description="Progress (%) above which a long-horizon goal is under-ambitious"
    )
    goal_target_raise: float = Field(
        default=0.50, ge=0,
        description="Suggested increase of an under-ambitious target"
    )
    goal_expansion_confidence: float = Field(default=55.0, ge=0, le=100)

    # Risk coverage
    coverage_multiplier: float = Field(
        default=3.0, ge=0,
        description="Recommended insurance coverage as a multiple of wealth"
    )
    coverage_age_limit: int = Field(
        default=60, ge=0,
        description="Coverage is only checked for clients younger than this"
    )
    coverage_confidence: float = Field(default=80.0, ge=0, le=100)

    # Tax optimization
    tax_age_limit: int = Field(
        default=50, ge=0,
        description="Retirement-vehicle advice only for clients younger than this"
    )
    tax_contribution_share: float = Field(
        default=0.10, ge=0, le=1,
        description="Suggested retirement contribution as a share of wealth"
    )
    tax_contribution_cap: float = Field(
        default=100_000.0, ge=0,
        description="Upper bound of the suggested retirement contribution"
    )
    tax_marginal_rate: float = Field(
        default=0.275, ge=0, le=1,
        description="Marginal income-tax rate used to estimate the saving"
    )
    tax_confidence: float = Field(default=65.0, ge=0, le=100)
    retirement_keywords: Tuple[str, ...] = Field(
        default=("retirement", "pension", "previdência", "pgbl", "vgbl", "401k", "401(k)"),
        description="Wallet description fragments identifying a retirement vehicle"
    )

    @field_validator("concentration_high_threshold")
    @classmethod
    def validate_high_threshold(cls, v, info):
        """Ensure the HIGH threshold is not below the base threshold."""
        base = info.data.get("concentration_threshold", 60.0)
        if v < base:
            raise ValueError(
                f"concentration_high_threshold ({v}) must be >= "
                f"concentration_threshold ({base})"
            )
        return v

    @field_validator("concentration_target")
    @classmethod
    def validate_concentration_target(cls, v, info):
        """Ensure the rebalancing target does not exceed the concentration threshold."""
        threshold = info.data.get("concentration_threshold", 60.0)
        if v > threshold:
            raise ValueError(
                f"concentration_target ({v}) must be <= "
                f"concentration_threshold ({threshold})"
            )
        return v

    @field_validator("cash_target")
    @classmethod
    def validate_cash_target(cls, v, info):
        """Ensure the cash target does not exceed the cash threshold."""
        threshold = info.data.get("cash_threshold", 15.0)
        if v > threshold:
            raise ValueError(f"cash_target ({v}) must be <= cash_threshold ({threshold})")
        return v

    @field_validator("retirement_keywords")
    @classmethod
    def normalize_keywords(cls, v):
        """Lower-case keywords; matching is case-insensitive."""
        return tuple(k.lower() for k in v if k)


# ---------------------------------------------------------------------------
# Contribution Plan Configuration
# ---------------------------------------------------------------------------

class ContributionPlanConfig(BaseModel):
    """
    Inputs of a goal contribution plan.

    Attributes
    ----------
    real_rate : float
        Annual real growth rate assumed while saving.
    achievable_ratio : float
        The plan is flagged achievable when the required contribution is
        positive and below this share of current wealth.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    real_rate: float = Field(
        default=DEFAULT_REAL_RATE,
        gt=-1.0,
        le=1.0,
        description="Annual inflation-adjusted growth rate"
    )
    achievable_ratio: float = Field(
        default=DEFAULT_ACHIEVABLE_RATIO,
        gt=0,
        description="Achievability threshold as a share of current wealth"
    )


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    are prefixed with WEALTHPLAN_ (e.g., WEALTHPLAN_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    debug : bool
        Enable debug mode (forces DEBUG logging in the CLI).
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR".
    max_horizon_years : int
        Upper bound on simulated years per projection.
    default_real_rate : float
        Real rate used by the CLI when none is given.
    archive_dir : Path
        Directory for saved projection runs.

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.max_horizon_years
    150
    """

    model_config = SettingsConfigDict(
        env_prefix="WEALTHPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    max_horizon_years: int = Field(
        default=DEFAULT_MAX_HORIZON_YEARS,
        ge=1,
        le=1_000,
        description="Maximum number of simulated years"
    )
    default_real_rate: float = Field(
        default=DEFAULT_REAL_RATE,
        gt=-1.0,
        le=1.0,
        description="Default real growth rate"
    )
    archive_dir: Path = Field(
        default=Path.home() / ".cache" / "wealthplan" / "projections",
        description="Directory for saved projection runs"
    )


def get_settings() -> AppSettings:
    """
    Read settings from the environment on every call (no caching).

    Raises
    ------
    ConfigurationError
        If a WEALTHPLAN_* variable (or .env entry) fails validation.
    """
    try:
        return AppSettings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid WEALTHPLAN_* settings: {e}") from e
