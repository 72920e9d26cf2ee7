"""
Unit tests for utils.py module.
"""

import pytest
from datetime import date

from wealthplan.exceptions import InvalidInputError
from wealthplan.utils import (
    annualized_return,
    check_non_negative,
    compound_factor,
    format_currency,
    format_pct,
    months_between,
    years_to_target,
)


class TestValidation:

    def test_check_non_negative(self):
        check_non_negative("x", 0)
        with pytest.raises(InvalidInputError, match="x must be non-negative"):
            check_non_negative("x", -0.01)


class TestCalendar:

    def test_years_to_target_rounds_up(self):
        as_of = date(2025, 1, 1)
        assert years_to_target(date(2026, 1, 1), as_of) == 1
        assert years_to_target(date(2026, 1, 2), as_of) == 2
        assert years_to_target(date(2025, 1, 1), as_of) == 0

    def test_years_to_target_past(self):
        assert years_to_target(date(2020, 1, 1), date(2025, 1, 1)) <= 0

    def test_months_between(self):
        assert months_between(date(2025, 1, 15), date(2025, 7, 1)) == 6
        assert months_between(date(2025, 1, 1), date(2027, 6, 1)) == 29
        assert months_between(date(2025, 6, 1), date(2025, 1, 1)) == -5


class TestFinance:

    def test_compound_factor(self):
        assert compound_factor(0.1, 2) == pytest.approx(1.21)
        assert compound_factor(0.0, 10) == 1.0

    def test_annualized_return(self):
        assert annualized_return(100, 121, 2) == pytest.approx(0.1)
        assert annualized_return(0, 100, 5) == 0.0
        assert annualized_return(100, 200, 0) == 0.0


class TestFormatting:

    def test_format_currency(self):
        assert format_currency(1_234_567.891) == "$1,234,568"
        assert format_currency(-2_500, decimals=2) == "-$2,500.00"
        assert format_currency(10, symbol="R$ ") == "R$ 10"

    def test_format_pct(self):
        assert format_pct(60) == "60.0%"
        assert format_pct(4.2, 2) == "4.20%"
