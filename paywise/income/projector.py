"""Year-to-date income projection.

Paystub YTD figures reset every January, so projections only count days
from the later of the start date and January 1 of the paystub's year.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

ZERO = Decimal("0")
DAYS_PER_YEAR = Decimal("365")
DAYS_PER_WEEK = Decimal("7")
MONTHS_PER_YEAR = Decimal("12")

MAX_AUTO_PAYMENT_RATIO = Decimal("0.12")
MAX_RENT_RATIO = Decimal("0.30")


class Frequency(str, Enum):
    """How often a recurring amount occurs."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    ANNUALLY = "annually"

    @property
    def per_year(self) -> Decimal:
        return _OCCURRENCES_PER_YEAR[self]


_OCCURRENCES_PER_YEAR = {
    Frequency.DAILY: DAYS_PER_YEAR,
    Frequency.WEEKLY: Decimal("52"),
    Frequency.BIWEEKLY: Decimal("26"),
    Frequency.MONTHLY: MONTHS_PER_YEAR,
    Frequency.ANNUALLY: Decimal("1"),
}


@dataclass(frozen=True)
class IncomeInputs:
    """Paystub data for a projection."""

    start_date: date
    as_of_date: date
    ytd_gross: Decimal


@dataclass(frozen=True)
class IncomeResult:
    """Gross income at four granularities.

    Attributes:
        days_worked: Inclusive day count used for the projection, 0 for
            manually entered income.
    """

    days_worked: int
    daily_rate: Decimal
    weekly_rate: Decimal
    monthly_rate: Decimal
    annual_rate: Decimal

    @property
    def max_auto_payment(self) -> Decimal:
        return self.monthly_rate * MAX_AUTO_PAYMENT_RATIO

    @property
    def max_rent(self) -> Decimal:
        return self.monthly_rate * MAX_RENT_RATIO


def effective_start_date(start_date: date, as_of_date: date) -> date:
    """Clamp a start date to January 1 of the as-of year."""
    year_start = date(as_of_date.year, 1, 1)
    return max(start_date, year_start)


def _from_daily(daily: Decimal, days_worked: int) -> IncomeResult:
    annual = daily * DAYS_PER_YEAR
    return IncomeResult(
        days_worked=days_worked,
        daily_rate=daily,
        weekly_rate=daily * DAYS_PER_WEEK,
        monthly_rate=annual / MONTHS_PER_YEAR,
        annual_rate=annual,
    )


def project_annual_income(
    start_date: date, as_of_date: date, ytd_gross: Decimal
) -> IncomeResult | None:
    """Extrapolate annual income from year-to-date earnings.

    Args:
        start_date: First day of employment.
        as_of_date: Paystub date the YTD figure covers through.
        ytd_gross: Gross earnings year to date.

    Returns:
        IncomeResult, or None when there is not enough data to project
        (as_of_date before start_date, or no elapsed days).

    Example:
        >>> result = project_annual_income(date(2025, 1, 15), date(2025, 6, 30), Decimal("45230"))
        >>> result.days_worked
        167
    """
    if as_of_date < start_date:
        return None

    start = effective_start_date(start_date, as_of_date)
    days_worked = (as_of_date - start).days + 1
    if days_worked <= 0:
        return None

    return _from_daily(ytd_gross / days_worked, days_worked)


def income_from_annual(annual: Decimal) -> IncomeResult | None:
    """Manual-entry variant for a known annual salary."""
    if annual <= ZERO:
        return None
    return _from_daily(annual / DAYS_PER_YEAR, 0)


def income_from_monthly(monthly: Decimal) -> IncomeResult | None:
    """Manual-entry variant for a known monthly salary."""
    if monthly <= ZERO:
        return None
    return income_from_annual(monthly * MONTHS_PER_YEAR)


def to_monthly(amount: Decimal, frequency: Frequency) -> Decimal:
    """Convert a per-occurrence amount into its monthly average."""
    return amount * Frequency(frequency).per_year / MONTHS_PER_YEAR
