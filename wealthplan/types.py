"""
Type definitions for WealthPlan.

Purpose
-------
Enumerations for the categorical fields of the domain entities, plus
TypedDict definitions for the structured dictionaries returned by the
portfolio and projection helpers.

All enumerations subclass ``str`` so that members compare equal to the
raw strings stored by the record layer (``EventType.INCOME == "INCOME"``).

Usage
-----
>>> from wealthplan.types import AssetClass, Frequency
>>> AssetClass("CASH") is AssetClass.CASH
True
>>> Frequency.MONTHLY == "MONTHLY"
True
"""

from enum import Enum

from typing_extensions import TypedDict

__all__ = [
    "AssetClass",
    "EventType",
    "Frequency",
    "SuggestionType",
    "Priority",
    "ActionFrequency",
    "TradeAction",
    "AllocationDict",
    "ProjectionSummaryDict",
]


class AssetClass(str, Enum):
    """Asset class tag carried by every wallet."""

    STOCKS = "STOCKS"
    BONDS = "BONDS"
    REAL_ESTATE = "REAL_ESTATE"
    COMMODITIES = "COMMODITIES"
    CASH = "CASH"
    CRYPTO = "CRYPTO"
    PRIVATE_EQUITY = "PRIVATE_EQUITY"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        """Human-readable name used in suggestion texts."""
        return _ASSET_CLASS_LABELS[self]


_ASSET_CLASS_LABELS = {
    AssetClass.STOCKS: "Stocks",
    AssetClass.BONDS: "Bonds",
    AssetClass.REAL_ESTATE: "Real Estate Funds",
    AssetClass.COMMODITIES: "Commodities",
    AssetClass.CASH: "Cash",
    AssetClass.CRYPTO: "Crypto",
    AssetClass.PRIVATE_EQUITY: "Private Equity",
    AssetClass.OTHER: "Other",
}


class EventType(str, Enum):
    """Direction of a scheduled cash flow."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"

    @property
    def is_inflow(self) -> bool:
        return self in (EventType.INCOME, EventType.DEPOSIT)


class Frequency(str, Enum):
    """Recurrence policy of a scheduled cash flow."""

    ONCE = "ONCE"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class SuggestionType(str, Enum):
    REBALANCING = "REBALANCING"
    GOAL_ADJUSTMENT = "GOAL_ADJUSTMENT"
    RISK_ANALYSIS = "RISK_ANALYSIS"
    TAX_OPTIMIZATION = "TAX_OPTIMIZATION"
    CONTRIBUTION_INCREASE = "CONTRIBUTION_INCREASE"


class Priority(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ActionFrequency(str, Enum):
    """Cadence hint attached to a suggested action."""

    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    ANNUAL = "ANNUAL"


class TradeAction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class AllocationDict(TypedDict):
    """
    Aggregated holdings of one asset class.

    Attributes
    ----------
    value : float
        Sum of wallet values in the class.
    percentage : float
        Share of total portfolio value, in percent (0-100).
    count : int
        Number of wallets in the class.
    """

    value: float
    percentage: float
    count: int


class ProjectionSummaryDict(TypedDict):
    """Serialized form of ``projection.ProjectionSummary``."""

    initial_wealth: float
    final_wealth: float
    total_growth: float
    total_contributions: float
    total_withdrawals: float
    annualized_return: float
