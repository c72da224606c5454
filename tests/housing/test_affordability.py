"""Tests for housing affordability calculators."""

from decimal import Decimal

import pytest

from paywise.housing.affordability import (
    DtiQualification,
    analyze_dti,
    compute_mortgage,
    max_home_price,
    mortgage_schedule,
    rent_affordability,
)
from paywise.loans.amortization import compute_monthly_payment, round_currency


class TestRentAffordability:
    def test_ceilings_and_current_rent(self) -> None:
        result = rent_affordability(Decimal("5000"), Decimal("1400"))

        assert result.max_rent == Decimal("1500")
        assert result.conservative_max_rent == Decimal("1250")
        assert result.rent_percent == Decimal("28")
        assert result.is_affordable is True

    def test_rent_over_ceiling(self) -> None:
        result = rent_affordability(Decimal("5000"), Decimal("1600"))
        assert result.is_affordable is False
        assert result.rent_percent == Decimal("32")

    def test_without_current_rent(self) -> None:
        result = rent_affordability(Decimal("4000"))
        assert result.max_rent == Decimal("1200")
        assert result.current_rent is None
        assert result.rent_percent is None
        assert result.is_affordable is None


class TestMortgage:
    def test_twenty_percent_down_has_no_pmi(self) -> None:
        result = compute_mortgage(
            Decimal("400000"), Decimal("20"), Decimal("6.5"), 30, Decimal("1.2"), Decimal("1500")
        )

        assert result.down_payment == Decimal("80000")
        assert result.loan_amount == Decimal("320000")
        assert result.piti.pmi == 0
        assert round_currency(result.piti.principal_interest) == Decimal("2022.62")
        assert result.piti.property_tax == Decimal("400")
        assert result.piti.insurance == Decimal("125")
        assert round_currency(result.piti.total_monthly) == Decimal("2547.62")

    def test_small_down_payment_adds_pmi(self) -> None:
        result = compute_mortgage(Decimal("400000"), Decimal("10"), Decimal("6.5"), 30)
        assert result.piti.pmi == Decimal("150")

    @pytest.mark.parametrize(
        ("down_payment_percent", "has_pmi"),
        [("0", True), ("19.99", True), ("20", False), ("35", False)],
    )
    def test_pmi_threshold(self, down_payment_percent: str, has_pmi: bool) -> None:
        result = compute_mortgage(
            Decimal("300000"), Decimal(down_payment_percent), Decimal("7"), 30
        )
        assert (result.piti.pmi > 0) is has_pmi

    def test_totals_cover_principal_and_interest(self) -> None:
        result = compute_mortgage(Decimal("250000"), Decimal("20"), Decimal("6"), 15)
        assert result.total_payments == result.piti.principal_interest * 180
        assert result.total_interest == result.total_payments - result.loan_amount

    def test_zero_rate_splits_loan_evenly(self) -> None:
        result = compute_mortgage(Decimal("360000"), Decimal("0"), Decimal("0"), 30)
        assert result.piti.principal_interest == Decimal("1000")
        assert result.total_interest == 0


class TestDti:
    def test_within_guidelines(self) -> None:
        result = analyze_dti(Decimal("8000"), Decimal("2000"), Decimal("500"))

        assert result.front_end_dti == Decimal("25")
        assert result.back_end_dti == Decimal("31.25")
        assert result.qualification is DtiQualification.EXCELLENT
        assert result.is_affordable is True

    @pytest.mark.parametrize(
        ("housing", "other_debts", "expected"),
        [
            ("2800", "800", DtiQualification.EXCELLENT),
            ("2400", "1600", DtiQualification.GOOD),
            ("3500", "1000", DtiQualification.FAIR),
            ("4000", "0", DtiQualification.AT_RISK),
            ("2000", "4000", DtiQualification.AT_RISK),
        ],
    )
    def test_qualification_levels(
        self, housing: str, other_debts: str, expected: DtiQualification
    ) -> None:
        result = analyze_dti(Decimal("10000"), Decimal(housing), Decimal(other_debts))
        assert result.qualification is expected
        assert result.is_affordable is (expected is DtiQualification.EXCELLENT)
        assert result.qualification.description

    def test_other_debts_default_to_zero(self) -> None:
        result = analyze_dti(Decimal("6000"), Decimal("1500"))
        assert result.front_end_dti == result.back_end_dti == Decimal("25")


class TestMaxHomePrice:
    def test_price_from_income(self) -> None:
        result = max_home_price(Decimal("8000"), Decimal("20"), Decimal("6.5"), 30)

        assert result.max_housing_payment == Decimal("2240")
        assert Decimal("300000") < result.estimated_max_price < Decimal("500000")
        assert result.estimated_max_price * Decimal("0.8") == pytest.approx(
            result.max_loan_amount
        )

    def test_max_loan_pays_back_with_principal_interest_share(self) -> None:
        result = max_home_price(Decimal("8000"), Decimal("20"), Decimal("6.5"), 30)
        payment = compute_monthly_payment(result.max_loan_amount, Decimal("6.5"), 360)
        assert round_currency(payment) == Decimal("1792.00")

    def test_zero_rate(self) -> None:
        result = max_home_price(Decimal("5000"), Decimal("20"), Decimal("0"), 30)
        assert result.max_loan_amount == Decimal("403200")
        assert result.estimated_max_price == Decimal("504000")

    def test_larger_down_payment_raises_price(self) -> None:
        low = max_home_price(Decimal("7000"), Decimal("5"), Decimal("6"), 30)
        high = max_home_price(Decimal("7000"), Decimal("25"), Decimal("6"), 30)
        assert high.estimated_max_price > low.estimated_max_price


class TestMortgageSchedule:
    def test_fifteen_year_schedule(self) -> None:
        rows = mortgage_schedule(Decimal("100000"), Decimal("6"), 15)

        assert len(rows) == 180
        assert rows[-1].balance == 0
        assert rows[0].interest > rows[0].principal
        assert rows[-1].principal > rows[-1].interest

    def test_running_totals(self) -> None:
        rows = mortgage_schedule(Decimal("100000"), Decimal("6"), 15)

        assert rows[-1].cumulative_principal == Decimal("100000")
        assert rows[-1].cumulative_interest == sum(row.interest for row in rows)
        assert all(
            later.cumulative_interest >= earlier.cumulative_interest
            for earlier, later in zip(rows, rows[1:])
        )
