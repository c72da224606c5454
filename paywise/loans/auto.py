"""Auto-loan affordability estimates.

Combines payment-to-income (PTI) guidelines with reverse amortization to show
how much car a given income supports at each credit tier.

Example:
    >>> from paywise.loans.auto import auto_affordability
    >>> result = auto_affordability(Decimal("5000"))
    >>> result.loan_estimates[0].credit_tier.name
    'Excellent'
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from paywise.loans.amortization import ZERO, compute_loan_amount

DEFAULT_TERM_MONTHS = 60


@dataclass(frozen=True)
class CreditTier:
    """Typical auto APR for a credit score band."""

    name: str
    score_range: str
    apr: Decimal


CREDIT_TIERS: tuple[CreditTier, ...] = (
    CreditTier(name="Excellent", score_range="750+", apr=Decimal("5.99")),
    CreditTier(name="Good", score_range="700-749", apr=Decimal("8.49")),
    CreditTier(name="Fair", score_range="650-699", apr=Decimal("12.99")),
    CreditTier(name="Poor", score_range="550-649", apr=Decimal("18.99")),
)


class PtiRatio(str, Enum):
    """Payment-to-income guideline levels."""

    CONSERVATIVE = "conservative"
    STANDARD = "standard"
    AGGRESSIVE = "aggressive"

    @property
    def ratio(self) -> Decimal:
        return _PTI_RATIOS[self]

    @property
    def description(self) -> str:
        return _PTI_DESCRIPTIONS[self]


_PTI_RATIOS = {
    PtiRatio.CONSERVATIVE: Decimal("0.08"),
    PtiRatio.STANDARD: Decimal("0.12"),
    PtiRatio.AGGRESSIVE: Decimal("0.15"),
}

_PTI_DESCRIPTIONS = {
    PtiRatio.CONSERVATIVE: "Low risk, easier approval",
    PtiRatio.STANDARD: "Standard auto loan guideline",
    PtiRatio.AGGRESSIVE: "Maximum most lenders approve",
}


@dataclass(frozen=True)
class PaymentApproval:
    """Maximum monthly car payment at one PTI level."""

    pti: PtiRatio
    ratio: Decimal
    max_payment: Decimal
    description: str


@dataclass(frozen=True)
class LoanEstimate:
    """Loan size a fixed payment supports at one credit tier."""

    credit_tier: CreditTier
    loan_amount: Decimal
    total_interest: Decimal
    total_cost: Decimal


@dataclass(frozen=True)
class AutoAffordability:
    """Payment ceilings plus tiered loan estimates for an income."""

    monthly_income: Decimal
    term_months: int
    payment_approvals: list[PaymentApproval]
    loan_estimates: list[LoanEstimate]


def payment_approvals(monthly_income: Decimal) -> list[PaymentApproval]:
    """Maximum monthly payment at each PTI level, most conservative first."""
    return [
        PaymentApproval(
            pti=level,
            ratio=level.ratio,
            max_payment=monthly_income * level.ratio,
            description=level.description,
        )
        for level in PtiRatio
    ]


def loan_estimates(
    monthly_payment: Decimal, term_months: int = DEFAULT_TERM_MONTHS
) -> list[LoanEstimate]:
    """Loan amount, interest and total cost a payment supports per credit tier.

    Total interest is floored at zero.
    """
    total_cost = monthly_payment * term_months
    estimates: list[LoanEstimate] = []
    for tier in CREDIT_TIERS:
        loan_amount = compute_loan_amount(monthly_payment, tier.apr, term_months)
        estimates.append(
            LoanEstimate(
                credit_tier=tier,
                loan_amount=loan_amount,
                total_interest=max(ZERO, total_cost - loan_amount),
                total_cost=total_cost,
            )
        )
    return estimates


def auto_affordability(
    monthly_income: Decimal, term_months: int = DEFAULT_TERM_MONTHS
) -> AutoAffordability:
    """Full affordability analysis using the standard 12% PTI payment."""
    standard_payment = monthly_income * PtiRatio.STANDARD.ratio
    return AutoAffordability(
        monthly_income=monthly_income,
        term_months=term_months,
        payment_approvals=payment_approvals(monthly_income),
        loan_estimates=loan_estimates(standard_payment, term_months),
    )
