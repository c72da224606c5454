"""Housing affordability calculators.

Covers the questions a renter or first-time buyer asks:
- How much rent fits an income (30% guideline, 25% conservative)
- What a mortgage costs per month (PITI: principal and interest, property tax,
  insurance, PMI)
- Whether the payment qualifies under front-end and back-end DTI limits
- The most house an income supports

Mortgage math reuses the loan amortization engine. Like it, these functions do
not validate; the API rejects non-positive income, a zero term and down
payments of 100% or more.

Example:
    >>> from paywise.housing.affordability import compute_mortgage
    >>> result = compute_mortgage(Decimal("400000"), Decimal("10"), Decimal("6.5"), 30)
    >>> result.piti.pmi == 150
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from paywise.loans.amortization import (
    HUNDRED,
    MONTHS_PER_YEAR,
    ZERO,
    amortization_schedule,
    compute_loan_amount,
    compute_monthly_payment,
)

RENT_RATIO = Decimal("0.30")
CONSERVATIVE_RENT_RATIO = Decimal("0.25")

# Lenders require PMI below 20% down; it typically costs 0.5% of the loan a year.
PMI_THRESHOLD_PERCENT = Decimal("20")
PMI_ANNUAL_RATE = Decimal("0.005")

FRONT_END_DTI_LIMIT = Decimal("28")
BACK_END_DTI_LIMIT = Decimal("36")

# Share of the 28% housing budget assumed to go to principal and interest;
# the rest covers tax and insurance.
PRINCIPAL_INTEREST_SHARE = Decimal("0.80")

DEFAULT_TERM_YEARS = 30
DEFAULT_PROPERTY_TAX_RATE = Decimal("1.2")
DEFAULT_ANNUAL_INSURANCE = Decimal("1500")


@dataclass(frozen=True)
class RentAffordability:
    """Rent ceilings for an income, and how a current rent compares."""

    monthly_income: Decimal
    max_rent: Decimal
    conservative_max_rent: Decimal
    current_rent: Decimal | None = None
    rent_percent: Decimal | None = None
    is_affordable: bool | None = None


@dataclass(frozen=True)
class PitiBreakdown:
    """Monthly mortgage cost split into its parts."""

    principal_interest: Decimal
    property_tax: Decimal
    insurance: Decimal
    pmi: Decimal

    @property
    def total_monthly(self) -> Decimal:
        return self.principal_interest + self.property_tax + self.insurance + self.pmi


@dataclass(frozen=True)
class MortgageResult:
    """Purchase, loan and monthly cost figures for a home."""

    home_price: Decimal
    down_payment: Decimal
    down_payment_percent: Decimal
    loan_amount: Decimal
    annual_rate_percent: Decimal
    term_years: int
    piti: PitiBreakdown
    total_payments: Decimal
    total_interest: Decimal


class DtiQualification(str, Enum):
    """How lenders are likely to view a debt-to-income profile."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    AT_RISK = "at_risk"

    @property
    def description(self) -> str:
        return _DTI_DESCRIPTIONS[self]


_DTI_DESCRIPTIONS = {
    DtiQualification.EXCELLENT: "Well within guidelines",
    DtiQualification.GOOD: "May qualify with compensating factors",
    DtiQualification.FAIR: "FHA/VA loans may be available",
    DtiQualification.AT_RISK: "May not qualify for most loans",
}

# (front-end ceiling, back-end ceiling) per level, strictest first.
_DTI_LEVELS: tuple[tuple[Decimal, Decimal, DtiQualification], ...] = (
    (FRONT_END_DTI_LIMIT, BACK_END_DTI_LIMIT, DtiQualification.EXCELLENT),
    (Decimal("31"), Decimal("43"), DtiQualification.GOOD),
    (Decimal("36"), Decimal("50"), DtiQualification.FAIR),
)


@dataclass(frozen=True)
class DtiAnalysis:
    """Front-end (housing only) and back-end (all debts) ratios as percents."""

    monthly_income: Decimal
    housing_payment: Decimal
    other_debts: Decimal
    front_end_dti: Decimal
    back_end_dti: Decimal
    qualification: DtiQualification

    @property
    def is_affordable(self) -> bool:
        return self.qualification is DtiQualification.EXCELLENT


@dataclass(frozen=True)
class MaxHomePrice:
    """Highest price an income supports, with the assumptions used."""

    monthly_income: Decimal
    max_housing_payment: Decimal
    max_loan_amount: Decimal
    estimated_max_price: Decimal
    down_payment_percent: Decimal
    annual_rate_percent: Decimal
    term_years: int


@dataclass(frozen=True)
class MortgageScheduleRow:
    """One month of a mortgage schedule with running totals."""

    month: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal
    cumulative_interest: Decimal
    cumulative_principal: Decimal


def rent_affordability(
    monthly_income: Decimal, current_rent: Decimal | None = None
) -> RentAffordability:
    """Rent ceilings at 30% and 25% of gross monthly income.

    When a current rent is given, also reports its share of income and whether
    it stays within the 30% ceiling.
    """
    max_rent = monthly_income * RENT_RATIO
    conservative = monthly_income * CONSERVATIVE_RENT_RATIO
    if current_rent is None:
        return RentAffordability(
            monthly_income=monthly_income,
            max_rent=max_rent,
            conservative_max_rent=conservative,
        )

    return RentAffordability(
        monthly_income=monthly_income,
        max_rent=max_rent,
        conservative_max_rent=conservative,
        current_rent=current_rent,
        rent_percent=current_rent / monthly_income * HUNDRED,
        is_affordable=current_rent <= max_rent,
    )


def compute_mortgage(
    home_price: Decimal,
    down_payment_percent: Decimal,
    annual_rate_percent: Decimal,
    term_years: int = DEFAULT_TERM_YEARS,
    property_tax_rate_percent: Decimal = DEFAULT_PROPERTY_TAX_RATE,
    annual_insurance: Decimal = DEFAULT_ANNUAL_INSURANCE,
) -> MortgageResult:
    """Monthly PITI and lifetime totals for a home purchase.

    PMI applies only when the down payment is under 20%. Total payments and
    total interest cover principal and interest only.
    """
    down_payment = home_price * down_payment_percent / HUNDRED
    loan_amount = home_price - down_payment
    term_months = term_years * 12

    principal_interest = compute_monthly_payment(loan_amount, annual_rate_percent, term_months)
    pmi = (
        loan_amount * PMI_ANNUAL_RATE / MONTHS_PER_YEAR
        if down_payment_percent < PMI_THRESHOLD_PERCENT
        else ZERO
    )
    piti = PitiBreakdown(
        principal_interest=principal_interest,
        property_tax=home_price * property_tax_rate_percent / HUNDRED / MONTHS_PER_YEAR,
        insurance=annual_insurance / MONTHS_PER_YEAR,
        pmi=pmi,
    )

    total_payments = principal_interest * term_months
    return MortgageResult(
        home_price=home_price,
        down_payment=down_payment,
        down_payment_percent=down_payment_percent,
        loan_amount=loan_amount,
        annual_rate_percent=annual_rate_percent,
        term_years=term_years,
        piti=piti,
        total_payments=total_payments,
        total_interest=total_payments - loan_amount,
    )


def analyze_dti(
    monthly_income: Decimal, housing_payment: Decimal, other_debts: Decimal = ZERO
) -> DtiAnalysis:
    """Front-end and back-end DTI with a lender qualification level.

    Excellent needs front-end <= 28% and back-end <= 36%; good allows 31/43
    and fair 36/50. Anything above is at risk.
    """
    front_end = housing_payment / monthly_income * HUNDRED
    back_end = (housing_payment + other_debts) / monthly_income * HUNDRED

    qualification = DtiQualification.AT_RISK
    for front_limit, back_limit, level in _DTI_LEVELS:
        if front_end <= front_limit and back_end <= back_limit:
            qualification = level
            break

    return DtiAnalysis(
        monthly_income=monthly_income,
        housing_payment=housing_payment,
        other_debts=other_debts,
        front_end_dti=front_end,
        back_end_dti=back_end,
        qualification=qualification,
    )


def max_home_price(
    monthly_income: Decimal,
    down_payment_percent: Decimal,
    annual_rate_percent: Decimal,
    term_years: int = DEFAULT_TERM_YEARS,
) -> MaxHomePrice:
    """Estimate the most house an income supports.

    Housing is capped at the 28% front-end limit, 80% of which is assumed to
    pay principal and interest. Reverse amortization turns that payment into a
    loan, and the down payment share scales the loan up to a price.
    """
    max_housing_payment = monthly_income * FRONT_END_DTI_LIMIT / HUNDRED
    max_loan = compute_loan_amount(
        max_housing_payment * PRINCIPAL_INTEREST_SHARE,
        annual_rate_percent,
        term_years * 12,
    )
    return MaxHomePrice(
        monthly_income=monthly_income,
        max_housing_payment=max_housing_payment,
        max_loan_amount=max_loan,
        estimated_max_price=max_loan / (1 - down_payment_percent / HUNDRED),
        down_payment_percent=down_payment_percent,
        annual_rate_percent=annual_rate_percent,
        term_years=term_years,
    )


def mortgage_schedule(
    principal: Decimal, annual_rate_percent: Decimal, term_years: int = DEFAULT_TERM_YEARS
) -> list[MortgageScheduleRow]:
    """Month-by-month mortgage schedule with cumulative interest and principal."""
    cumulative_interest = ZERO
    cumulative_principal = ZERO
    rows: list[MortgageScheduleRow] = []
    for row in amortization_schedule(principal, annual_rate_percent, term_years * 12):
        cumulative_interest += row.interest
        cumulative_principal += row.principal
        rows.append(
            MortgageScheduleRow(
                month=row.month,
                payment=row.payment,
                principal=row.principal,
                interest=row.interest,
                balance=row.balance,
                cumulative_interest=cumulative_interest,
                cumulative_principal=cumulative_principal,
            )
        )
    return rows
