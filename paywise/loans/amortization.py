"""Fixed-rate loan amortization.

Pure functions over Decimal inputs:
- Monthly payment from principal, APR and term
- Total interest and term comparison tables
- Month-by-month amortization schedule
- Reverse amortization (loan amount a payment can support)

No function validates its inputs; callers reject negative principal or a
non-positive term before calling.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")

DEFAULT_COMPARISON_TERMS: tuple[int, ...] = (36, 48, 60, 72, 84)


@dataclass(frozen=True)
class LoanInputs:
    """A fixed-rate loan request."""

    principal: Decimal
    annual_rate_percent: Decimal
    term_months: int


@dataclass(frozen=True)
class LoanResult:
    """Payment figures for a loan.

    Attributes:
        monthly_payment: Level monthly payment.
        total_interest: Total paid over the term minus principal.
        total_paid: Monthly payment times term.
    """

    monthly_payment: Decimal
    total_interest: Decimal
    total_paid: Decimal


@dataclass(frozen=True)
class TermComparison:
    """One row of a term comparison table."""

    term_months: int
    monthly_payment: Decimal
    total_interest: Decimal
    total_paid: Decimal


@dataclass(frozen=True)
class AmortizationRow:
    """One month of an amortization schedule."""

    month: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    """Convert an APR percentage into a periodic monthly rate."""
    return annual_rate_percent / HUNDRED / MONTHS_PER_YEAR


def round_currency(value: Decimal) -> Decimal:
    """Round to cents, half up.

    Precision grows with the value so amounts past the default 28 digits still
    round instead of raising InvalidOperation.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def compute_monthly_payment(
    principal: Decimal, annual_rate_percent: Decimal, term_months: int
) -> Decimal:
    """Calculate the level monthly payment for a fixed-rate loan.

    PMT = P * r(1 + r)^n / ((1 + r)^n - 1), or P / n when the rate is zero.

    Example:
        >>> round_currency(compute_monthly_payment(Decimal("30000"), Decimal("6"), 60))
        Decimal('579.98')
    """
    rate = monthly_rate(annual_rate_percent)
    if rate == ZERO:
        return principal / term_months

    factor = (1 + rate) ** term_months
    return principal * rate * factor / (factor - 1)


def compute_loan(
    principal: Decimal, annual_rate_percent: Decimal, term_months: int
) -> LoanResult:
    """Calculate payment, total paid and total interest for a loan."""
    payment = compute_monthly_payment(principal, annual_rate_percent, term_months)
    total_paid = payment * term_months
    return LoanResult(
        monthly_payment=payment,
        total_interest=total_paid - principal,
        total_paid=total_paid,
    )


def compare_terms(
    principal: Decimal,
    annual_rate_percent: Decimal,
    terms: tuple[int, ...] = DEFAULT_COMPARISON_TERMS,
) -> list[TermComparison]:
    """Build a term comparison table at a fixed rate.

    Args:
        principal: Amount borrowed.
        annual_rate_percent: APR as a percent.
        terms: Terms in months, reported in the given order.

    Returns:
        One TermComparison per term.
    """
    rows: list[TermComparison] = []
    for term in terms:
        result = compute_loan(principal, annual_rate_percent, term)
        rows.append(
            TermComparison(
                term_months=term,
                monthly_payment=result.monthly_payment,
                total_interest=result.total_interest,
                total_paid=result.total_paid,
            )
        )
    return rows


def amortization_schedule(
    principal: Decimal, annual_rate_percent: Decimal, term_months: int
) -> list[AmortizationRow]:
    """Generate a month-by-month schedule rounded to cents.

    The final row absorbs rounding drift so the closing balance is exactly 0.
    """
    payment = round_currency(
        compute_monthly_payment(principal, annual_rate_percent, term_months)
    )
    rate = monthly_rate(annual_rate_percent)
    balance = round_currency(principal)
    schedule: list[AmortizationRow] = []

    for month in range(1, term_months + 1):
        interest = round_currency(balance * rate)
        if month == term_months:
            principal_portion = balance
            row_payment = principal_portion + interest
        else:
            principal_portion = min(payment - interest, balance)
            row_payment = payment
        balance -= principal_portion
        schedule.append(
            AmortizationRow(
                month=month,
                payment=row_payment,
                principal=principal_portion,
                interest=interest,
                balance=balance,
            )
        )

    return schedule


def compute_loan_amount(
    monthly_payment: Decimal, annual_rate_percent: Decimal, term_months: int
) -> Decimal:
    """Reverse amortization: the principal a payment supports.

    P = PMT * (1 - (1 + r)^-n) / r, or PMT * n when the rate is zero.
    """
    rate = monthly_rate(annual_rate_percent)
    if rate <= ZERO:
        return monthly_payment * term_months

    discount = (1 + rate) ** -term_months
    return monthly_payment * (1 - discount) / rate
