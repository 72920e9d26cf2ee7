"""
Command-Line Interface for WealthPlan.

Purpose
-------
Runs the planning engines over a JSON client document without writing
Python code.

Commands
--------
- project: Year-by-year wealth projection for a client
- contribution: Required yearly contribution for a wealth gap
- goal-plan: Contribution plan for one of a client's goals
- suggest: Ranked advisory suggestions for a client
- portfolio: Allocation by asset class and optional rebalancing trades

Example Usage
-------------
    # Project wealth until 2050 at a 4% real rate and save the run
    $ wealthplan project -c clients.json --client c-1 --end-year 2050 --save "Base"

    # Required contribution to go from 100k to 500k in 10 years at 4%
    $ wealthplan contribution 100000 500000 10 --rate 0.04

    # Advisory suggestions as JSON
    $ wealthplan suggest -c clients.json --client c-1 --json
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
import pydantic
from rich.console import Console
from rich.table import Table

from .config import AdvisoryConfig, ContributionPlanConfig, ProjectionParameters, get_settings
from .constants import DEFAULT_END_YEAR
from .exceptions import WealthPlanError
from .repository import InMemoryRepository
from .utils import format_currency, format_pct

__version__ = "0.1.0"


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load(path: Path) -> InMemoryRepository:
    from .serialization import load_repository

    try:
        return load_repository(path)
    except WealthPlanError as e:
        _fail(f"loading {path}: {e}")


def _resolve_client(repo: InMemoryRepository, client_id: Optional[str]) -> str:
    """Use the given id, or the only client of the document."""
    if client_id:
        return client_id
    ids = repo.client_ids()
    if len(ids) != 1:
        _fail(f"document holds {len(ids)} clients; pass --client")
    return ids[0]


def _client_options(func):
    func = click.option(
        "--client", "client_id", type=str, default=None,
        help="Client id (optional when the document holds a single client)"
    )(func)
    func = click.option(
        "--config", "-c", type=click.Path(exists=True, path_type=Path), required=True,
        help="Path to client document (JSON)"
    )(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="wealthplan")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def main(ctx: click.Context, quiet: bool) -> None:
    """
    WealthPlan - long-range wealth planning and advisory suggestions.

    Use 'wealthplan COMMAND --help' for command-specific help.
    """
    try:
        settings = get_settings()
    except WealthPlanError as e:
        _fail(str(e))
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = Console()
    ctx.obj["settings"] = settings


# ---------------------------------------------------------------------------
# project
# ---------------------------------------------------------------------------

@main.command()
@_client_options
@click.option("--rate", "-r", type=float, default=None,
              help="Annual real growth rate (default: WEALTHPLAN_DEFAULT_REAL_RATE)")
@click.option("--start-year", type=int, default=None,
              help="First simulated year (default: current year)")
@click.option("--end-year", type=int, default=DEFAULT_END_YEAR, show_default=True,
              help="Last simulated year")
@click.option("--no-events", is_flag=True, help="Ignore scheduled cash flows")
@click.option("--save", "save_name", type=str, default=None,
              help="Save the run under this name in the archive directory")
@click.option("--json", "as_json", is_flag=True, help="Print the run as JSON")
@click.pass_context
def project(
    ctx: click.Context,
    config: Path,
    client_id: Optional[str],
    rate: Optional[float],
    start_year: Optional[int],
    end_year: int,
    no_events: bool,
    save_name: Optional[str],
    as_json: bool,
) -> None:
    """
    Project wealth year by year.

    Initial wealth is the client's current wallet total.

    Example:
        wealthplan project -c clients.json --client c-1 -r 0.05 --end-year 2045
    """
    from .projection import compute_projection, projection_parameters_for_client
    from .serialization import projection_to_dict, save_projection

    console: Console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    settings = ctx.obj["settings"]
    repo = _load(config)
    client_id = _resolve_client(repo, client_id)

    try:
        params = projection_parameters_for_client(
            repo, client_id,
            real_rate=rate,
            start_year=start_year,
            end_year=end_year,
            include_events=not no_events,
        )
        result = compute_projection(repo, params, max_years=settings.max_horizon_years)
    except pydantic.ValidationError as e:
        _fail(f"invalid projection parameters: {e}")
    except WealthPlanError as e:
        _fail(str(e))

    if save_name:
        try:
            path = save_projection(result, settings.archive_dir, save_name)
        except OSError as e:
            _fail(f"saving projection to {settings.archive_dir}: {e}")
        except WealthPlanError as e:
            _fail(str(e))
        if not quiet:
            click.echo(f"Projection saved to {path}", err=True)

    if as_json:
        click.echo(json.dumps(projection_to_dict(result, name=save_name or ""), indent=2))
        return

    summary = result.summary
    if quiet:
        click.echo(f"Final wealth: {format_currency(summary.final_wealth)}")
        return

    table = Table(title=f"Wealth projection - {client_id}", show_header=True)
    table.add_column("Year", style="cyan")
    table.add_column("Start", justify="right")
    table.add_column("In", justify="right", style="green")
    table.add_column("Out", justify="right", style="red")
    table.add_column("Growth", justify="right")
    table.add_column("End", justify="right", style="bold")
    for y in result:
        table.add_row(
            str(y.year),
            format_currency(y.start_value),
            format_currency(y.contribution),
            format_currency(y.withdrawal),
            format_currency(y.growth),
            format_currency(y.end_value),
        )
    console.print(table)

    totals = Table(title="Summary", show_header=False)
    totals.add_column("Metric", style="cyan")
    totals.add_column("Value", justify="right", style="green")
    totals.add_row("Initial wealth", format_currency(summary.initial_wealth))
    totals.add_row("Final wealth", format_currency(summary.final_wealth))
    totals.add_row("Total growth", format_currency(summary.total_growth))
    totals.add_row("Contributions", format_currency(summary.total_contributions))
    totals.add_row("Withdrawals", format_currency(summary.total_withdrawals))
    totals.add_row("Annualized return", format_pct(summary.annualized_return * 100, 2))
    console.print(totals)


# ---------------------------------------------------------------------------
# contribution
# ---------------------------------------------------------------------------

@main.command()
@click.argument("current", type=float)
@click.argument("target", type=float)
@click.argument("years", type=float)
@click.option("--rate", "-r", type=float, default=None,
              help="Annual real growth rate (default: WEALTHPLAN_DEFAULT_REAL_RATE)")
@click.pass_context
def contribution(
    ctx: click.Context,
    current: float,
    target: float,
    years: float,
    rate: Optional[float],
) -> None:
    """
    Required yearly contribution to grow CURRENT into TARGET in YEARS.

    Example:
        wealthplan contribution 100000 500000 10 --rate 0.04
    """
    from .contribution import required_contribution

    rate = ctx.obj["settings"].default_real_rate if rate is None else rate
    try:
        value = required_contribution(current, target, years, rate)
    except WealthPlanError as e:
        _fail(str(e))
    click.echo(f"{value:.2f}")


# ---------------------------------------------------------------------------
# goal-plan
# ---------------------------------------------------------------------------

@main.command("goal-plan")
@_client_options
@click.option("--goal", "goal_id", type=str, required=True, help="Goal id")
@click.option("--rate", "-r", type=float, default=None,
              help="Annual real growth rate (default: WEALTHPLAN_DEFAULT_REAL_RATE)")
@click.pass_context
def goal_plan(
    ctx: click.Context,
    config: Path,
    client_id: Optional[str],
    goal_id: str,
    rate: Optional[float],
) -> None:
    """
    Contribution plan for one goal.

    Example:
        wealthplan goal-plan -c clients.json --client c-1 --goal g-1
    """
    from .contribution import plan_goal_contribution

    console: Console = ctx.obj["console"]
    repo = _load(config)
    client_id = _resolve_client(repo, client_id)
    rate = ctx.obj["settings"].default_real_rate if rate is None else rate

    try:
        plan = plan_goal_contribution(
            repo, client_id, goal_id, ContributionPlanConfig(real_rate=rate)
        )
    except pydantic.ValidationError as e:
        _fail(f"invalid plan parameters: {e}")
    except WealthPlanError as e:
        _fail(str(e))

    if ctx.obj["quiet"]:
        click.echo(f"{plan.yearly_contribution:.2f}")
        return

    table = Table(title=f"Goal plan - {plan.goal_name}", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Target", format_currency(plan.target_value))
    table.add_row("Target date", plan.target_date.isoformat())
    table.add_row("Current wealth", format_currency(plan.current_wealth))
    table.add_row("Months to goal", str(plan.months_to_goal))
    table.add_row("Yearly contribution", format_currency(plan.yearly_contribution, 2))
    table.add_row("Monthly equivalent", format_currency(plan.monthly_contribution, 2))
    table.add_row("Total contribution", format_currency(plan.total_contribution))
    table.add_row("Achievable", "yes" if plan.achievable else "no")
    console.print(table)


# ---------------------------------------------------------------------------
# suggest
# ---------------------------------------------------------------------------

@main.command()
@_client_options
@click.option("--json", "as_json", is_flag=True, help="Print suggestions as JSON")
@click.pass_context
def suggest(
    ctx: click.Context,
    config: Path,
    client_id: Optional[str],
    as_json: bool,
) -> None:
    """
    Ranked advisory suggestions.

    Example:
        wealthplan suggest -c clients.json --client c-1
    """
    from .advisor import compute_suggestions

    console: Console = ctx.obj["console"]
    repo = _load(config)
    client_id = _resolve_client(repo, client_id)

    try:
        suggestions = compute_suggestions(repo, client_id, AdvisoryConfig())
    except WealthPlanError as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps([s.to_dict() for s in suggestions], indent=2))
        return
    if not suggestions:
        click.echo("No suggestions.")
        return

    table = Table(title=f"Suggestions - {client_id}", show_header=True)
    table.add_column("Priority", style="bold")
    table.add_column("Type", style="cyan")
    table.add_column("Title")
    table.add_column("Confidence", justify="right")
    table.add_column("Potential gain", justify="right", style="green")
    for s in suggestions:
        table.add_row(
            s.priority.value, s.type.value, s.title,
            f"{s.confidence:.0f}", format_currency(s.potential_gain),
        )
    console.print(table)


# ---------------------------------------------------------------------------
# portfolio
# ---------------------------------------------------------------------------

def _parse_targets(values: Tuple[str, ...]) -> dict:
    targets = {}
    for item in values:
        asset_class, sep, pct = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected CLASS=PCT, got {item!r}", param_hint="--target")
        try:
            targets[asset_class.strip().upper()] = float(pct)
        except ValueError:
            raise click.BadParameter(f"invalid percentage in {item!r}", param_hint="--target")
    return targets


@main.command()
@_client_options
@click.option("--target", "-t", multiple=True,
              help="Target share as CLASS=PCT (repeatable), e.g. -t STOCKS=50 -t BONDS=40")
@click.pass_context
def portfolio(
    ctx: click.Context,
    config: Path,
    client_id: Optional[str],
    target: Tuple[str, ...],
) -> None:
    """
    Allocation by asset class, with rebalancing trades when targets are given.

    Example:
        wealthplan portfolio -c clients.json -t STOCKS=50 -t BONDS=40 -t CASH=10
    """
    from .portfolio import allocation_table, rebalance_plan
    from .repository import load_snapshot

    console: Console = ctx.obj["console"]
    repo = _load(config)
    client_id = _resolve_client(repo, client_id)
    targets = _parse_targets(target)

    try:
        snapshot = load_snapshot(repo, client_id)
        trades = rebalance_plan(snapshot.wallets, targets) if targets else []
    except WealthPlanError as e:
        _fail(str(e))

    df = allocation_table(snapshot.wallets)
    table = Table(title=f"Allocation - {client_id}", show_header=True)
    table.add_column("Asset class", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Share", justify="right", style="green")
    table.add_column("Wallets", justify="right")
    for asset_class, row in df.iterrows():
        table.add_row(
            str(asset_class), format_currency(row["value"]),
            format_pct(row["percentage"]), str(int(row["count"])),
        )
    console.print(table)

    for trade in trades:
        click.echo(
            f"{trade.action.value} {trade.asset_class.value}: "
            f"{format_currency(abs(trade.difference))} "
            f"({format_pct(trade.current_percentage)} -> {format_pct(trade.target_percentage)})"
        )


if __name__ == "__main__":
    main()
