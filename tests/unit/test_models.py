"""
Unit tests for models.py module.

Tests Client, Wallet, Goal, Event, Insurance and ClientSnapshot.
"""

import pytest
from datetime import date

from wealthplan.exceptions import InvalidInputError
from wealthplan.models import Client, ClientSnapshot, Event, Goal, Insurance, Wallet
from wealthplan.types import AssetClass, EventType, Frequency


# ============================================================================
# CLIENT / WALLET TESTS
# ============================================================================

class TestClient:

    def test_defaults(self):
        client = Client("c-1", "Ana", 35)
        assert client.total_wealth == 0.0

    def test_negative_age_raises(self):
        with pytest.raises(InvalidInputError, match="age"):
            Client("c-1", "Ana", -1)

    def test_frozen(self):
        client = Client("c-1", "Ana", 35)
        with pytest.raises(Exception):
            client.age = 40


class TestWallet:

    def test_asset_class_coerced_from_string(self):
        wallet = Wallet("w-1", "c-1", "STOCKS", 1_000)
        assert wallet.asset_class is AssetClass.STOCKS

    def test_unknown_asset_class_raises(self):
        with pytest.raises(InvalidInputError, match="asset_class"):
            Wallet("w-1", "c-1", "BEANIE_BABIES", 1_000)

    def test_negative_value_raises(self):
        with pytest.raises(InvalidInputError, match="current_value"):
            Wallet("w-1", "c-1", "CASH", -5)

    @pytest.mark.parametrize("pct", [-0.1, 100.5])
    def test_percentage_out_of_range_raises(self, pct):
        with pytest.raises(InvalidInputError, match="percentage"):
            Wallet("w-1", "c-1", "CASH", 5, percentage=pct)

    def test_asset_class_label(self):
        assert AssetClass.REAL_ESTATE.label == "Real Estate Funds"


# ============================================================================
# GOAL TESTS
# ============================================================================

class TestGoal:

    def test_progress_pct(self):
        goal = Goal("g-1", "c-1", "House", 400_000, date(2030, 6, 1), current_value=100_000)
        assert goal.progress_pct == pytest.approx(25.0)
        assert goal.target_year == 2030

    def test_non_positive_target_raises(self):
        with pytest.raises(InvalidInputError, match="target_value"):
            Goal("g-1", "c-1", "House", 0, date(2030, 1, 1))

    def test_negative_current_value_raises(self):
        with pytest.raises(InvalidInputError, match="current_value"):
            Goal("g-1", "c-1", "House", 1_000, date(2030, 1, 1), current_value=-1)


# ============================================================================
# EVENT TESTS
# ============================================================================

class TestEvent:

    def test_enums_coerced(self):
        event = Event("e-1", "c-1", "DEPOSIT", 100, "YEARLY", date(2025, 1, 1))
        assert event.event_type is EventType.DEPOSIT
        assert event.frequency is Frequency.YEARLY
        assert event.event_type.is_inflow

    def test_unknown_frequency_kept_verbatim(self):
        event = Event("e-1", "c-1", "INCOME", 100, "WEEKLY", date(2025, 1, 1))
        assert event.frequency == "WEEKLY"
        assert not isinstance(event.frequency, Frequency)

    def test_enum_instances_accepted(self):
        event = Event(
            "e-1", "c-1", EventType.EXPENSE, 100, Frequency.ONCE, date(2025, 1, 1)
        )
        assert event.frequency is Frequency.ONCE
        assert event.event_type is EventType.EXPENSE

    def test_unknown_event_type_raises(self):
        with pytest.raises(InvalidInputError, match="event_type"):
            Event("e-1", "c-1", "GIFT", 100, "ONCE", date(2025, 1, 1))

    def test_non_positive_value_raises(self):
        with pytest.raises(InvalidInputError, match="value"):
            Event("e-1", "c-1", "INCOME", 0, "ONCE", date(2025, 1, 1))

    def test_end_before_start_raises(self):
        with pytest.raises(InvalidInputError, match="end_date"):
            Event("e-1", "c-1", "INCOME", 100, "MONTHLY",
                  date(2025, 6, 1), date(2025, 1, 1))

    def test_without_end_date_active_only_in_start_year(self):
        event = Event("e-1", "c-1", "INCOME", 100, "MONTHLY", date(2025, 6, 1))
        assert event.end_year == 2025
        assert event.is_active(2025)
        assert not event.is_active(2024)
        assert not event.is_active(2026)

    def test_active_window_inclusive(self):
        event = Event("e-1", "c-1", "EXPENSE", 100, "YEARLY",
                      date(2025, 6, 1), date(2027, 2, 1))
        assert [event.is_active(y) for y in range(2024, 2029)] == [
            False, True, True, True, False
        ]

    def test_label_prefers_description(self):
        event = Event("e-1", "c-1", "EXPENSE", 1, "ONCE", date(2025, 1, 1),
                      name="Car", description="New car")
        assert event.label == "New car"
        assert Event("e-2", "c-1", "EXPENSE", 1, "ONCE", date(2025, 1, 1),
                     name="Car").label == "Car"


# ============================================================================
# INSURANCE / SNAPSHOT TESTS
# ============================================================================

class TestInsurance:

    def test_negative_coverage_raises(self):
        with pytest.raises(InvalidInputError, match="coverage"):
            Insurance("i-1", "c-1", "LIFE", coverage=-1)


class TestClientSnapshot:

    def test_total_wealth_from_wallets(self, snapshot):
        assert snapshot.total_wealth == pytest.approx(100_000)
        assert snapshot.total_coverage == pytest.approx(100_000)

    def test_total_wealth_falls_back_to_client(self):
        snap = ClientSnapshot(client=Client("c-1", "Ana", 35, total_wealth=42_000))
        assert snap.total_wealth == 42_000
        assert snap.total_coverage == 0.0
