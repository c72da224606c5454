"""Tax year-specific constants and thresholds.

This module centralizes the bracket tables, standard deduction and payroll tax
rates used by the take-home estimator so no calculator hardcodes them.

Example:
    >>> from paywise.tax.year_config import get_tax_year_config
    >>> config = get_tax_year_config(2024)
    >>> print(f"Standard deduction: {config.standard_deduction}")
    Standard deduction: 14600
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

# (upper_bound, rate); None for upper_bound means no limit
Bracket = tuple[Decimal | None, Decimal]


@dataclass(frozen=True)
class TaxYearConfig:
    """Tax year-specific constants for a single filer.

    All monetary values are Decimal. Frozen to prevent accidental modification.

    Attributes:
        tax_year: The tax year these values apply to.
        brackets: Ordered marginal brackets, lowest rate first.
        standard_deduction: Standard deduction subtracted before brackets apply.
        ss_rate: Employee Social Security rate.
        medicare_rate: Employee Medicare rate.
        ss_wage_base: Social Security wage base. Recorded for reference only;
            the estimator applies FICA to the full gross.
    """

    tax_year: int
    brackets: tuple[Bracket, ...]
    standard_deduction: Decimal
    ss_wage_base: Decimal
    ss_rate: Decimal = Decimal("0.062")
    medicare_rate: Decimal = Decimal("0.0145")

    def __post_init__(self) -> None:
        bounds = [upper for upper, _ in self.brackets]
        if not bounds or bounds[-1] is not None:
            raise ValueError(f"{self.tax_year}: top bracket must be unbounded")
        finite = [upper for upper in bounds if upper is not None]
        if finite != sorted(finite) or len(finite) != len(bounds) - 1:
            raise ValueError(f"{self.tax_year}: bracket bounds must be increasing")
        rates = [rate for _, rate in self.brackets]
        if rates != sorted(rates):
            raise ValueError(f"{self.tax_year}: bracket rates must be increasing")

    @property
    def fica_rate(self) -> Decimal:
        """Combined employee FICA rate (7.65%)."""
        return self.ss_rate + self.medicare_rate


# 2024 Configuration - IRS published values
TAX_YEAR_2024 = TaxYearConfig(
    tax_year=2024,
    brackets=(
        (Decimal("11600"), Decimal("0.10")),
        (Decimal("47150"), Decimal("0.12")),
        (Decimal("100525"), Decimal("0.22")),
        (Decimal("191950"), Decimal("0.24")),
        (Decimal("243725"), Decimal("0.32")),
        (Decimal("609350"), Decimal("0.35")),
        (None, Decimal("0.37")),
    ),
    standard_deduction=Decimal("14600"),
    ss_wage_base=Decimal("168600"),
)

# 2025 Configuration - IRS published values
TAX_YEAR_2025 = TaxYearConfig(
    tax_year=2025,
    brackets=(
        (Decimal("11925"), Decimal("0.10")),
        (Decimal("48475"), Decimal("0.12")),
        (Decimal("103350"), Decimal("0.22")),
        (Decimal("197300"), Decimal("0.24")),
        (Decimal("250525"), Decimal("0.32")),
        (Decimal("626350"), Decimal("0.35")),
        (None, Decimal("0.37")),
    ),
    standard_deduction=Decimal("15000"),
    ss_wage_base=Decimal("176100"),
)

# Registry of available tax year configurations
TAX_YEAR_CONFIGS: dict[int, TaxYearConfig] = {
    2024: TAX_YEAR_2024,
    2025: TAX_YEAR_2025,
}

DEFAULT_TAX_YEAR = TAX_YEAR_2024


def get_tax_year_config(year: int) -> TaxYearConfig:
    """Get configuration for a specific tax year.

    Args:
        year: The tax year (e.g., 2024).

    Returns:
        TaxYearConfig for the specified year.

    Raises:
        ValueError: If no configuration exists for the requested year.
    """
    if year not in TAX_YEAR_CONFIGS:
        available = sorted(TAX_YEAR_CONFIGS.keys())
        raise ValueError(
            f"No tax configuration for year {year}. Available years: {available}"
        )
    return TAX_YEAR_CONFIGS[year]
