"""Take-home pay estimation for a single W-2 earner.

This module provides pure functions for:
- Federal income tax using marginal brackets after the standard deduction
- FICA (Social Security + Medicare) as a flat rate on gross
- Net pay at annual, monthly, weekly and daily granularity

All monetary values use Decimal. Nothing here validates or rounds; callers
coerce input and round for display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from paywise.tax.year_config import DEFAULT_TAX_YEAR, TaxYearConfig

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")
WEEKS_PER_YEAR = Decimal("52")
DAYS_PER_YEAR = Decimal("365")


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class TaxInputs:
    """Inputs to the take-home estimator.

    Attributes:
        gross_annual_income: Gross yearly wages.
        state_rate_percent: Flat state income tax rate, e.g. 5 for 5%.
        retirement_contribution_percent: 401(k) contribution as % of gross.
        monthly_health_premium: Employee health insurance premium per month.
    """

    gross_annual_income: Decimal
    state_rate_percent: Decimal = ZERO
    retirement_contribution_percent: Decimal = ZERO
    monthly_health_premium: Decimal = ZERO


@dataclass(frozen=True)
class TaxResult:
    """Annual tax and deduction figures with net pay at four granularities.

    Attributes:
        effective_tax_rate: Federal + FICA + state as a percent of gross.
        bracket_breakdown: Per-bracket dicts with bracket, rate and tax_in_bracket.
    """

    gross_annual: Decimal
    federal_tax: Decimal
    fica_tax: Decimal
    social_security: Decimal
    medicare: Decimal
    state_tax: Decimal
    retirement_contribution: Decimal
    health_premiums: Decimal
    net_annual: Decimal
    net_monthly: Decimal
    net_weekly: Decimal
    net_daily: Decimal
    effective_tax_rate: Decimal
    bracket_breakdown: list[dict] = field(default_factory=list)

    @property
    def total_deductions(self) -> Decimal:
        return self.gross_annual - self.net_annual


# =============================================================================
# Federal Tax
# =============================================================================


def federal_bracket_breakdown(
    gross_income: Decimal, config: TaxYearConfig = DEFAULT_TAX_YEAR
) -> list[dict]:
    """Walk the marginal brackets and return the tax owed in each.

    Args:
        gross_income: Gross annual income before the standard deduction.
        config: Tax year whose brackets and deduction apply.

    Returns:
        One dict per bracket that holds income: bracket upper bound (None for
        the top bracket), rate and tax_in_bracket.
    """
    remaining = max(ZERO, gross_income - config.standard_deduction)
    breakdown: list[dict] = []
    prev_bound = ZERO

    for upper_bound, rate in config.brackets:
        if remaining <= ZERO:
            break

        if upper_bound is None:
            amount_in_bracket = remaining
        else:
            amount_in_bracket = min(remaining, upper_bound - prev_bound)
            prev_bound = upper_bound

        breakdown.append(
            {
                "bracket": upper_bound,
                "rate": rate,
                "tax_in_bracket": amount_in_bracket * rate,
            }
        )
        remaining -= amount_in_bracket

    return breakdown


def compute_federal_tax(
    gross_income: Decimal, config: TaxYearConfig = DEFAULT_TAX_YEAR
) -> Decimal:
    """Calculate federal income tax after the standard deduction.

    Example:
        >>> compute_federal_tax(Decimal("50000"))
        Decimal('4016.00')
    """
    return sum(
        (row["tax_in_bracket"] for row in federal_bracket_breakdown(gross_income, config)),
        ZERO,
    )


def compute_fica_tax(
    gross_income: Decimal, config: TaxYearConfig = DEFAULT_TAX_YEAR
) -> tuple[Decimal, Decimal, Decimal]:
    """Calculate FICA on the full gross (no Social Security wage-base cap).

    Returns:
        Tuple of (total, social_security, medicare).
    """
    social_security = gross_income * config.ss_rate
    medicare = gross_income * config.medicare_rate
    return social_security + medicare, social_security, medicare


# =============================================================================
# Take-home
# =============================================================================


def estimate_take_home(
    inputs: TaxInputs, config: TaxYearConfig = DEFAULT_TAX_YEAR
) -> TaxResult:
    """Estimate net pay from gross income.

    State tax and retirement contribution are flat percentages of gross, the
    health premium is annualized, and every figure is subtracted from gross.
    Net pay is then split with calendar-average divisors (12/52/365).

    Args:
        inputs: Gross income and deduction settings.
        config: Tax year configuration.

    Returns:
        TaxResult with every component and net pay.
    """
    gross = inputs.gross_annual_income

    breakdown = federal_bracket_breakdown(gross, config)
    federal_tax = sum((row["tax_in_bracket"] for row in breakdown), ZERO)
    fica_tax, social_security, medicare = compute_fica_tax(gross, config)
    state_tax = gross * inputs.state_rate_percent / HUNDRED
    retirement = gross * inputs.retirement_contribution_percent / HUNDRED
    health_premiums = inputs.monthly_health_premium * MONTHS_PER_YEAR

    net_annual = gross - federal_tax - fica_tax - state_tax - retirement - health_premiums

    taxes_only = federal_tax + fica_tax + state_tax
    effective_rate = taxes_only / gross * HUNDRED if gross > ZERO else ZERO

    return TaxResult(
        gross_annual=gross,
        federal_tax=federal_tax,
        fica_tax=fica_tax,
        social_security=social_security,
        medicare=medicare,
        state_tax=state_tax,
        retirement_contribution=retirement,
        health_premiums=health_premiums,
        net_annual=net_annual,
        net_monthly=net_annual / MONTHS_PER_YEAR,
        net_weekly=net_annual / WEEKS_PER_YEAR,
        net_daily=net_annual / DAYS_PER_YEAR,
        effective_tax_rate=effective_rate,
        bracket_breakdown=breakdown,
    )
