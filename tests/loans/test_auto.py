"""Tests for auto-loan affordability estimates."""

from decimal import Decimal

from paywise.loans.auto import (
    CREDIT_TIERS,
    DEFAULT_TERM_MONTHS,
    PtiRatio,
    auto_affordability,
    loan_estimates,
    payment_approvals,
)


def test_payment_approvals_per_pti_level() -> None:
    approvals = payment_approvals(Decimal("5000"))

    assert [a.pti for a in approvals] == [
        PtiRatio.CONSERVATIVE,
        PtiRatio.STANDARD,
        PtiRatio.AGGRESSIVE,
    ]
    assert [a.max_payment for a in approvals] == [
        Decimal("400.00"),
        Decimal("600.00"),
        Decimal("750.00"),
    ]
    assert all(a.description for a in approvals)


def test_loan_estimates_cover_every_tier() -> None:
    estimates = loan_estimates(Decimal("600"))

    assert [e.credit_tier for e in estimates] == list(CREDIT_TIERS)
    amounts = [e.loan_amount for e in estimates]
    # Worse credit, higher APR, smaller loan for the same payment.
    assert amounts == sorted(amounts, reverse=True)
    for estimate in estimates:
        assert estimate.total_cost == Decimal("600") * DEFAULT_TERM_MONTHS
        assert estimate.total_interest == estimate.total_cost - estimate.loan_amount


def test_total_interest_never_negative() -> None:
    for estimate in loan_estimates(Decimal("0"), 48):
        assert estimate.total_interest == Decimal("0")


def test_auto_affordability_uses_standard_payment() -> None:
    result = auto_affordability(Decimal("5000"), term_months=72)

    assert result.term_months == 72
    assert len(result.payment_approvals) == 3
    assert result.loan_estimates[0].total_cost == Decimal("600.00") * 72
