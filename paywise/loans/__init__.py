"""Loan amortization and auto-loan affordability calculators."""

from paywise.loans.amortization import (
    AmortizationRow,
    LoanInputs,
    LoanResult,
    TermComparison,
    amortization_schedule,
    compare_terms,
    compute_loan,
    compute_loan_amount,
    compute_monthly_payment,
    round_currency,
)
from paywise.loans.auto import (
    CREDIT_TIERS,
    AutoAffordability,
    CreditTier,
    LoanEstimate,
    PaymentApproval,
    PtiRatio,
    auto_affordability,
    loan_estimates,
    payment_approvals,
)

__all__ = [
    "AmortizationRow",
    "LoanInputs",
    "LoanResult",
    "TermComparison",
    "amortization_schedule",
    "compare_terms",
    "compute_loan",
    "compute_loan_amount",
    "compute_monthly_payment",
    "round_currency",
    "CREDIT_TIERS",
    "AutoAffordability",
    "CreditTier",
    "LoanEstimate",
    "PaymentApproval",
    "PtiRatio",
    "auto_affordability",
    "loan_estimates",
    "payment_approvals",
]
