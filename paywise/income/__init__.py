"""Income projection from paystub data."""

from paywise.income.projector import (
    Frequency,
    IncomeInputs,
    IncomeResult,
    effective_start_date,
    income_from_annual,
    income_from_monthly,
    project_annual_income,
    to_monthly,
)

__all__ = [
    "Frequency",
    "IncomeInputs",
    "IncomeResult",
    "effective_start_date",
    "income_from_annual",
    "income_from_monthly",
    "project_annual_income",
    "to_monthly",
]
