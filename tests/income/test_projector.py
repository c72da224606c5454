"""Tests for annual income projection."""

from datetime import date
from decimal import Decimal

import pytest

from paywise.income.projector import (
    Frequency,
    effective_start_date,
    income_from_annual,
    income_from_monthly,
    project_annual_income,
    to_monthly,
)
from paywise.loans.amortization import round_currency


class TestProjectAnnualIncome:
    def test_projection_from_paystub(self) -> None:
        result = project_annual_income(date(2025, 1, 15), date(2025, 6, 30), Decimal("45230"))

        assert result is not None
        assert result.days_worked == 167
        assert round_currency(result.daily_rate) == Decimal("270.84")
        assert result.weekly_rate == result.daily_rate * 7
        assert result.annual_rate == result.daily_rate * 365
        assert result.monthly_rate == result.annual_rate / 12

    def test_start_date_in_prior_year_clamps_to_january_first(self) -> None:
        result = project_annual_income(date(2019, 3, 1), date(2025, 1, 10), Decimal("1000"))

        assert result is not None
        assert result.days_worked == 10
        assert result.daily_rate == Decimal("100")

    def test_same_day_counts_as_one_day(self) -> None:
        result = project_annual_income(date(2025, 4, 1), date(2025, 4, 1), Decimal("200"))
        assert result is not None
        assert result.days_worked == 1

    def test_as_of_before_start_returns_none(self) -> None:
        assert project_annual_income(date(2025, 6, 1), date(2025, 5, 1), Decimal("5000")) is None

    def test_affordability_hints(self) -> None:
        result = project_annual_income(date(2025, 1, 1), date(2025, 12, 31), Decimal("73000"))
        assert result is not None
        assert result.max_auto_payment == result.monthly_rate * Decimal("0.12")
        assert result.max_rent == result.monthly_rate * Decimal("0.30")


class TestManualIncome:
    def test_from_annual(self) -> None:
        result = income_from_annual(Decimal("73000"))
        assert result is not None
        assert result.days_worked == 0
        assert result.daily_rate == Decimal("200")

    def test_from_monthly(self) -> None:
        result = income_from_monthly(Decimal("5000"))
        assert result is not None
        assert round_currency(result.annual_rate) == Decimal("60000.00")

    @pytest.mark.parametrize("amount", ["0", "-100"])
    def test_non_positive_returns_none(self, amount: str) -> None:
        assert income_from_annual(Decimal(amount)) is None
        assert income_from_monthly(Decimal(amount)) is None


def test_effective_start_date() -> None:
    assert effective_start_date(date(2024, 11, 1), date(2025, 2, 1)) == date(2025, 1, 1)
    assert effective_start_date(date(2025, 3, 1), date(2025, 4, 1)) == date(2025, 3, 1)


@pytest.mark.parametrize(
    ("frequency", "expected"),
    [
        (Frequency.WEEKLY, Decimal("52")),
        (Frequency.BIWEEKLY, Decimal("26")),
        (Frequency.MONTHLY, Decimal("12")),
        (Frequency.ANNUALLY, Decimal("1")),
    ],
)
def test_to_monthly(frequency: Frequency, expected: Decimal) -> None:
    assert to_monthly(Decimal("12"), frequency) == expected


def test_to_monthly_accepts_raw_value() -> None:
    assert to_monthly(Decimal("10"), "daily") == Decimal("10") * 365 / 12
