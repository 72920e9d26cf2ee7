"""
Heuristic advisory analyzers.

Purpose
-------
Four independent inspectors over one ``ClientSnapshot``. Each is a pure
function ``(snapshot, config[, as_of]) -> List[Suggestion]`` that returns
an empty list, never an error, on empty collections.

- analyze_portfolio: asset-class concentration and idle cash
- analyze_goals: goals that look over- or under-ambitious
- analyze_risk: life-insurance coverage relative to wealth
- analyze_tax: missing retirement vehicle for younger clients

Every threshold, rate and confidence comes from ``AdvisoryConfig``. These
are rules of thumb; confidence scores are fixed per rule and not
statistically derived.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from .config import AdvisoryConfig
from .models import ClientSnapshot
from .portfolio import allocation_by_asset_class
from .suggestions import ActionRequired, Suggestion
from .types import AssetClass, Priority, SuggestionType
from .utils import format_currency, years_to_target

__all__ = [
    "analyze_portfolio",
    "analyze_goals",
    "analyze_risk",
    "analyze_tax",
]


# ---------------------------------------------------------------------------
# Portfolio
# ---------------------------------------------------------------------------

def analyze_portfolio(snapshot: ClientSnapshot, config: AdvisoryConfig) -> List[Suggestion]:
    """
    Concentration and cash-drag checks.

    REBALANCING when the largest asset-class share exceeds
    ``concentration_threshold`` (HIGH above ``concentration_high_threshold``);
    TAX_OPTIMIZATION when the cash share exceeds ``cash_threshold``.
    """
    wallets = snapshot.wallets
    total = float(sum(w.current_value for w in wallets))
    if not wallets or total <= 0:
        return []

    client_id = snapshot.client.id
    shares = {
        asset_class: entry["percentage"]
        for asset_class, entry in allocation_by_asset_class(wallets).items()
    }
    suggestions = []

    concentrated, max_share = max(shares.items(), key=lambda kv: kv[1])
    if max_share > config.concentration_threshold:
        excess = max_share - config.concentration_target
        priority = (
            Priority.HIGH if max_share > config.concentration_high_threshold
            else Priority.MEDIUM
        )
        suggestions.append(Suggestion(
            id=f"rebalancing_{client_id}",
            type=SuggestionType.REBALANCING,
            priority=priority,
            title="Portfolio rebalancing needed",
            description=(
                f"Excessive concentration in {concentrated.label} ({max_share:.1f}%)"
            ),
            impact="Reduce risk through better diversification",
            action_required=ActionRequired(
                percentage=round(excess),
                action=f"Redistribute {excess:.1f}% to other asset classes",
            ),
            reasoning=(
                f"Holding {max_share:.1f}% in a single asset class significantly "
                f"raises portfolio risk. Keep each main class at or below "
                f"{config.concentration_target:.0f}%."
            ),
            potential_gain=total * config.rebalancing_gain_rate,
            confidence=config.rebalancing_confidence,
        ))

    cash_share = shares.get(AssetClass.CASH, 0.0)
    if cash_share > config.cash_threshold:
        excess = cash_share - config.cash_target
        suggestions.append(Suggestion(
            id=f"cash_optimization_{client_id}",
            type=SuggestionType.TAX_OPTIMIZATION,
            priority=Priority.MEDIUM,
            title="Excess cash identified",
            description=f"{cash_share:.1f}% of the portfolio held in cash or equivalents",
            impact=(
                f"Potential increase of {cash_share * config.cash_drag_rate:.1f}% "
                f"in annual return"
            ),
            action_required=ActionRequired(
                percentage=round(excess),
                action="Invest excess cash in assets with higher expected return",
            ),
            reasoning=(
                f"Holding more than {config.cash_threshold:.0f}% in cash forgoes "
                f"growth, especially while inflation is running."
            ),
            potential_gain=total * excess / 100 * config.cash_drag_rate,
            confidence=config.cash_confidence,
        ))

    return suggestions


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

def analyze_goals(
    snapshot: ClientSnapshot,
    config: AdvisoryConfig,
    as_of: Optional[date] = None,
) -> List[Suggestion]:
    """
    Goal feasibility check.

    ``years = ceil(days_to_target / 365)`` counted from *as_of* (default
    today); ``progress = current / target * 100``.

    - years < goal_short_horizon_years and progress < goal_low_progress_pct
      → MEDIUM adjustment (cut target or extend deadline)
    - years > goal_long_horizon_years and progress > goal_high_progress_pct
      → LOW adjustment (raise target)
    """
    as_of = as_of or date.today()
    suggestions = []
    for goal in snapshot.goals:
        years = years_to_target(goal.target_date, as_of)
        progress = goal.progress_pct

        if years < config.goal_short_horizon_years and progress < config.goal_low_progress_pct:
            cut = config.goal_target_cut * 100
            extension = config.goal_deadline_extension_years
            suggestions.append(Suggestion(
                id=f"goal_adjustment_{goal.id}",
                type=SuggestionType.GOAL_ADJUSTMENT,
                priority=Priority.MEDIUM,
                title=f"Goal review: {goal.name}",
                description=(
                    f"Goal may be too ambitious ({progress:.1f}% complete, "
                    f"{years} years left)"
                ),
                impact="Consider adjusting the amount or deadline to keep it feasible",
                action_required=ActionRequired(
                    action=(
                        f"Review goal: reduce target by {cut:.0f}% "
                        f"or extend deadline by {extension} years"
                    ),
                ),
                reasoning=(
                    f"With only {progress:.1f}% of the goal reached and {years} "
                    f"years left, a very high savings effort would be needed."
                ),
                potential_gain=0.0,
                confidence=config.goal_overambitious_confidence,
            ))

        if years > config.goal_long_horizon_years and progress > config.goal_high_progress_pct:
            raise_amount = goal.target_value * config.goal_target_raise
            suggestions.append(Suggestion(
                id=f"goal_expansion_{goal.id}",
                type=SuggestionType.GOAL_ADJUSTMENT,
                priority=Priority.LOW,
                title=f"Expansion opportunity: {goal.name}",
                description=f"Goal is well on track ({progress:.1f}% complete)",
                impact=(
                    f"Consider raising the target by "
                    f"{config.goal_target_raise * 100:.0f}% for more growth"
                ),
                action_required=ActionRequired(
                    amount=round(raise_amount),
                    action="Raise the goal amount while the situation is favourable",
                ),
                reasoning=(
                    f"With {progress:.1f}% already reached and {years} years ahead, "
                    f"there is room for a more ambitious target."
                ),
                potential_gain=raise_amount,
                confidence=config.goal_expansion_confidence,
            ))

    return suggestions


# ---------------------------------------------------------------------------
# Risk coverage
# ---------------------------------------------------------------------------

def analyze_risk(snapshot: ClientSnapshot, config: AdvisoryConfig) -> List[Suggestion]:
    """
    Insurance coverage check.

    ``coverage_ratio = total_coverage / total_wealth`` (0 when wealth is 0).
    Suggests raising coverage to ``coverage_multiplier`` × wealth when the
    ratio is below the multiplier and the client is younger than
    ``coverage_age_limit``. The suggested amount never goes below 0.
    """
    client = snapshot.client
    wealth = snapshot.total_wealth
    coverage = snapshot.total_coverage
    ratio = coverage / wealth if wealth > 0 else 0.0

    if not (ratio < config.coverage_multiplier and client.age < config.coverage_age_limit):
        return []

    gap = max(0.0, wealth * config.coverage_multiplier - coverage)
    return [Suggestion(
        id=f"insurance_{client.id}",
        type=SuggestionType.RISK_ANALYSIS,
        priority=Priority.MEDIUM,
        title="Insufficient insurance coverage",
        description=f"Current coverage represents only {ratio * 100:.1f}% of net worth",
        impact="Protect the family against unexpected events",
        action_required=ActionRequired(
            amount=round(gap),
            action="Increase life insurance coverage",
        ),
        reasoning=(
            f"Life insurance coverage of at least {config.coverage_multiplier:g}x "
            f"net worth is recommended, especially below age "
            f"{config.coverage_age_limit} with dependents."
        ),
        potential_gain=0.0,
        confidence=config.coverage_confidence,
    )]


# ---------------------------------------------------------------------------
# Tax optimization
# ---------------------------------------------------------------------------

def _has_retirement_vehicle(snapshot: ClientSnapshot, config: AdvisoryConfig) -> bool:
    for wallet in snapshot.wallets:
        text = (wallet.description or "").lower()
        if any(keyword in text for keyword in config.retirement_keywords):
            return True
    return False


def analyze_tax(snapshot: ClientSnapshot, config: AdvisoryConfig) -> List[Suggestion]:
    """
    Retirement-vehicle check.

    When no wallet description mentions a retirement vehicle and the
    client is younger than ``tax_age_limit``, suggests contributing
    ``min(tax_contribution_share × wealth, tax_contribution_cap)`` with an
    estimated saving at ``tax_marginal_rate``.
    """
    client = snapshot.client
    if _has_retirement_vehicle(snapshot, config) or client.age >= config.tax_age_limit:
        return []

    amount = min(snapshot.total_wealth * config.tax_contribution_share, config.tax_contribution_cap)
    saving = amount * config.tax_marginal_rate
    return [Suggestion(
        id=f"tax_optimization_{client.id}",
        type=SuggestionType.TAX_OPTIMIZATION,
        priority=Priority.LOW,
        title="Tax optimization with a retirement plan",
        description="No retirement-plan holdings identified",
        impact=f"Tax saving of up to {format_currency(saving)} per year",
        action_required=ActionRequired(
            amount=round(amount),
            action="Consider tax-deductible retirement plan contributions",
        ),
        reasoning=(
            "Contributions to tax-deductible retirement plans reduce taxable "
            "income, a significant advantage at higher marginal rates."
        ),
        potential_gain=saving,
        confidence=config.tax_confidence,
    )]
