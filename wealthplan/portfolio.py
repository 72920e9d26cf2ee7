"""
Portfolio bookkeeping module.

Purpose
-------
Derived views over a client's wallets:

- allocation_by_asset_class: value, share and wallet count per asset class
- recalculate_portfolio: refresh wallet percentages and the cached total
- rebalance_plan: BUY/SELL amounts moving the portfolio to a target mix
- allocation_table: the allocation as a pandas DataFrame

All functions are pure: they return new frozen objects and never write to
the record store. Persisting recalculated values is the caller's job.

Invariants
----------
After ``recalculate_portfolio`` with a positive total value:

    Σ wallet.percentage ≈ 100
    client.total_wealth == Σ wallet.current_value
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from .exceptions import InvalidInputError
from .models import Client, Wallet
from .types import AllocationDict, AssetClass, TradeAction
from .utils import check_non_negative

__all__ = [
    "total_value",
    "allocation_by_asset_class",
    "allocation_table",
    "RecalculatedPortfolio",
    "recalculate_portfolio",
    "RebalanceTrade",
    "rebalance_plan",
]


def total_value(wallets: Iterable[Wallet]) -> float:
    return float(sum(w.current_value for w in wallets))


def allocation_by_asset_class(wallets: Iterable[Wallet]) -> Dict[AssetClass, AllocationDict]:
    """
    Aggregate wallets per asset class.

    Percentages are 0 for every class when the total value is 0. Classes
    without wallets are absent from the result.

    Examples
    --------
    >>> alloc = allocation_by_asset_class([
    ...     Wallet("w1", "c1", "STOCKS", 75_000),
    ...     Wallet("w2", "c1", "CASH", 25_000),
    ... ])
    >>> alloc[AssetClass.STOCKS]["percentage"]
    75.0
    """
    wallets = list(wallets)
    total = total_value(wallets)
    allocation: Dict[AssetClass, AllocationDict] = {}
    for wallet in wallets:
        entry = allocation.setdefault(
            wallet.asset_class, AllocationDict(value=0.0, percentage=0.0, count=0)
        )
        entry["value"] += wallet.current_value
        entry["count"] += 1
    for entry in allocation.values():
        entry["percentage"] = entry["value"] / total * 100 if total > 0 else 0.0
    return allocation


def allocation_table(wallets: Iterable[Wallet]) -> pd.DataFrame:
    """Allocation as a DataFrame indexed by asset class, largest share first."""
    allocation = allocation_by_asset_class(wallets)
    if not allocation:
        return pd.DataFrame(
            columns=["value", "percentage", "count"],
            index=pd.Index([], name="asset_class"),
        )
    df = pd.DataFrame.from_dict(
        {cls.value: dict(entry) for cls, entry in allocation.items()}, orient="index"
    )
    df.index.name = "asset_class"
    return df.sort_values("percentage", ascending=False)


# ---------------------------------------------------------------------------
# Recalculation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RecalculatedPortfolio:
    wallets: Tuple[Wallet, ...]
    total_value: float
    client: Optional[Client] = None


def recalculate_portfolio(
    wallets: Iterable[Wallet], client: Optional[Client] = None
) -> RecalculatedPortfolio:
    """
    Recompute each wallet's share of the portfolio and the client total.

    Wallet percentages are left untouched when the total value is 0. When
    *client* is given, a copy with ``total_wealth`` set to the wallet sum
    is returned alongside.
    """
    wallets = list(wallets)
    total = total_value(wallets)
    if total > 0:
        wallets = [
            replace(w, percentage=w.current_value / total * 100) for w in wallets
        ]
    updated_client = replace(client, total_wealth=total) if client is not None else None
    return RecalculatedPortfolio(tuple(wallets), total, updated_client)


# ---------------------------------------------------------------------------
# Rebalancing
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RebalanceTrade:
    """Move required in one asset class; ``difference > 0`` means buy."""
    asset_class: AssetClass
    current_value: float
    current_percentage: float
    target_percentage: float
    target_value: float
    difference: float

    @property
    def action(self) -> TradeAction:
        return TradeAction.BUY if self.difference > 0 else TradeAction.SELL


def rebalance_plan(
    wallets: Iterable[Wallet],
    target_allocation: Mapping[Union[AssetClass, str], float],
    min_difference: float = 100.0,
) -> List[RebalanceTrade]:
    """
    Trades that move the portfolio to *target_allocation*.

    Parameters
    ----------
    wallets : Iterable[Wallet]
        Current holdings.
    target_allocation : Mapping
        Asset class → target share in percent (0-100). Classes not listed
        are left alone.
    min_difference : float
        Trades with ``|difference| <= min_difference`` are dropped.

    Returns
    -------
    List[RebalanceTrade]
        Sorted by ``|difference|`` descending.

    Raises
    ------
    InvalidInputError
        On unknown asset classes, target shares outside [0, 100] or a
        negative ``min_difference``.
    """
    check_non_negative("min_difference", min_difference)
    wallets = list(wallets)
    total = total_value(wallets)
    trades = []
    for raw_class, target_pct in target_allocation.items():
        try:
            asset_class = AssetClass(raw_class)
        except ValueError:
            raise InvalidInputError(f"Unknown asset class {raw_class!r}") from None
        if not (0 <= target_pct <= 100):
            raise InvalidInputError(
                f"Target share for {asset_class.value} must be within [0, 100], "
                f"got {target_pct}"
            )
        current = total_value(w for w in wallets if w.asset_class == asset_class)
        target = total * target_pct / 100
        difference = target - current
        if abs(difference) > min_difference:
            trades.append(
                RebalanceTrade(
                    asset_class=asset_class,
                    current_value=current,
                    current_percentage=current / total * 100 if total > 0 else 0.0,
                    target_percentage=float(target_pct),
                    target_value=target,
                    difference=difference,
                )
            )
    return sorted(trades, key=lambda t: abs(t.difference), reverse=True)
