"""
Pytest configuration and fixtures for the WealthPlan test suite.

Fixtures describe one reference client ("c-1", 35 years old) with a
stock-heavy portfolio of 100,000, two goals, two scheduled cash flows and
one life-insurance policy.
"""

from datetime import date
from typing import List

import pytest

from wealthplan.config import AdvisoryConfig, ProjectionParameters
from wealthplan.models import Client, ClientSnapshot, Event, Goal, Insurance, Wallet
from wealthplan.repository import InMemoryRepository


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def as_of() -> date:
    """Reference 'today' for date-dependent analyses."""
    return date(2025, 1, 1)


# ---------------------------------------------------------------------------
# Client Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def client() -> Client:
    """35-year-old client with no cached wealth."""
    return Client(id="c-1", name="Ana Souza", age=35)


@pytest.fixture
def concentrated_wallets() -> List[Wallet]:
    """
    Stock-heavy portfolio.

    Total: 100,000; STOCKS 85%, BONDS 10%, CASH 5%
    """
    return [
        Wallet("w-1", "c-1", "STOCKS", 60_000, description="Brokerage account"),
        Wallet("w-2", "c-1", "STOCKS", 25_000, description="Index fund"),
        Wallet("w-3", "c-1", "BONDS", 10_000, description="Treasury bonds"),
        Wallet("w-4", "c-1", "CASH", 5_000, description="Checking account"),
    ]


@pytest.fixture
def diversified_wallets() -> List[Wallet]:
    """
    Balanced portfolio.

    Total: 100,000; STOCKS 50%, BONDS 30%, CASH 10%, REAL_ESTATE 10%
    """
    return [
        Wallet("w-1", "c-1", "STOCKS", 50_000),
        Wallet("w-2", "c-1", "BONDS", 30_000),
        Wallet("w-3", "c-1", "CASH", 10_000),
        Wallet("w-4", "c-1", "REAL_ESTATE", 10_000),
    ]


@pytest.fixture
def goals() -> List[Goal]:
    """
    Two goals seen from 2025-01-01.

    - House: 10% done, due in 3 years (over-ambitious)
    - Retirement: 90% done, due in 21 years (under-ambitious)
    """
    return [
        Goal("g-retire", "c-1", "Retirement", 1_000_000, date(2045, 1, 1),
             current_value=900_000, goal_type="RETIREMENT"),
        Goal("g-house", "c-1", "House", 400_000, date(2027, 6, 1),
             current_value=40_000, goal_type="PURCHASE"),
    ]


@pytest.fixture
def events() -> List[Event]:
    """Monthly salary surplus during 2025-2026 and a one-off car purchase in 2026."""
    return [
        Event("e-salary", "c-1", "INCOME", 1_000, "MONTHLY",
              date(2025, 1, 1), date(2026, 12, 31), name="Salary surplus"),
        Event("e-car", "c-1", "EXPENSE", 30_000, "ONCE",
              date(2026, 3, 1), name="Car", description="New car"),
    ]


@pytest.fixture
def insurance() -> List[Insurance]:
    """Life policy covering 1x the portfolio."""
    return [Insurance("i-1", "c-1", "LIFE", coverage=100_000, premium=50)]


@pytest.fixture
def repository(client, concentrated_wallets, goals, events, insurance) -> InMemoryRepository:
    """Repository holding the reference client and all of its records."""
    return InMemoryRepository(
        clients=[client],
        wallets=concentrated_wallets,
        goals=goals,
        events=events,
        insurance=insurance,
    )


@pytest.fixture
def snapshot(client, concentrated_wallets, goals, events, insurance) -> ClientSnapshot:
    return ClientSnapshot(
        client=client,
        wallets=tuple(concentrated_wallets),
        goals=tuple(goals),
        events=tuple(events),
        insurance=tuple(insurance),
    )


# ---------------------------------------------------------------------------
# Configuration Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def advisory_config() -> AdvisoryConfig:
    return AdvisoryConfig()


@pytest.fixture
def base_params() -> ProjectionParameters:
    """100,000 at 4% real over 2025-2030, events applied."""
    return ProjectionParameters(
        client_id="c-1",
        initial_wealth=100_000,
        real_rate=0.04,
        start_year=2025,
        end_year=2030,
        include_events=True,
    )


# ---------------------------------------------------------------------------
# Document Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def client_document() -> dict:
    """JSON-ready client document equivalent to the repository fixture."""
    return {
        "schema_version": "0.1.0",
        "clients": [
            {
                "id": "c-1",
                "name": "Ana Souza",
                "age": 35,
                "wallets": [
                    {"id": "w-1", "asset_class": "STOCKS", "current_value": 85000,
                     "description": "Brokerage account"},
                    {"id": "w-3", "asset_class": "BONDS", "current_value": 10000},
                    {"id": "w-4", "asset_class": "CASH", "current_value": 5000},
                ],
                "goals": [
                    {"id": "g-house", "name": "House", "target_value": 400000,
                     "target_date": "2027-06-01", "current_value": 40000},
                ],
                "events": [
                    {"id": "e-salary", "event_type": "INCOME", "value": 1000,
                     "frequency": "MONTHLY", "start_date": "2025-01-01",
                     "end_date": "2026-12-31", "name": "Salary surplus"},
                ],
                "insurance": [
                    {"id": "i-1", "insurance_type": "LIFE", "coverage": 100000},
                ],
            }
        ],
    }
