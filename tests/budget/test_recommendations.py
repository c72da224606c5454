"""Tests for the budget recommendation rules."""

from decimal import Decimal

import pytest

from paywise.budget.recommendations import (
    RULES,
    FinancialProfile,
    Recommendation,
    Severity,
    evaluate,
    housing_rule,
    leftover_rule,
    savings_rule,
)
from paywise.budget.reference import BudgetCategoryId

INCOME = Decimal("5000")


def _profile(**spending: str) -> FinancialProfile:
    return FinancialProfile(
        monthly_income=INCOME,
        spending={BudgetCategoryId(k): Decimal(v) for k, v in spending.items()},
    )


def _by_severity(recs: list[Recommendation], severity: Severity) -> list[Recommendation]:
    return [rec for rec in recs if rec.severity == severity]


# =============================================================================
# Housing
# =============================================================================


class TestHousing:
    def test_housing_over_30_percent_is_danger(self) -> None:
        recs = evaluate({"housing": Decimal("1750")}, INCOME)

        housing_dangers = [
            rec for rec in _by_severity(recs, Severity.DANGER) if "30%" in rec.message
        ]
        assert len(housing_dangers) == 1
        assert "Housing is 35%" in housing_dangers[0].message

    def test_housing_within_guideline_is_success(self) -> None:
        recs = evaluate({"housing": Decimal("1250")}, INCOME)

        successes = _by_severity(recs, Severity.SUCCESS)
        assert len(successes) == 1
        assert "Housing at 25%" in successes[0].message

    def test_no_housing_no_housing_message(self) -> None:
        assert housing_rule(_profile()) is None
        recs = evaluate({"food": Decimal("400")}, INCOME)
        assert not any("Housing" in rec.message for rec in recs)


# =============================================================================
# Savings and leftover
# =============================================================================


class TestSavings:
    @pytest.mark.parametrize(
        ("savings", "severity"),
        [
            ("250", Severity.DANGER),
            ("750", Severity.WARNING),
            ("1000", Severity.SUCCESS),
            ("1500", Severity.SUCCESS),
        ],
    )
    def test_savings_levels(self, savings: str, severity: Severity) -> None:
        rec = savings_rule(_profile(savings=savings))
        assert rec is not None
        assert rec.severity == severity

    def test_overspending_is_danger(self) -> None:
        rec = leftover_rule(_profile(housing="3000", car="1500", food="800"))
        assert rec is not None
        assert rec.severity == Severity.DANGER
        assert "$300 more than you earn" in rec.message

    def test_unallocated_with_low_savings_is_warning(self) -> None:
        rec = leftover_rule(_profile(housing="1500"))
        assert rec is not None
        assert rec.severity == Severity.WARNING
        assert "$3,500 unallocated" in rec.message

    def test_unallocated_with_healthy_savings_is_success(self) -> None:
        rec = leftover_rule(_profile(housing="1500", savings="1000"))
        assert rec is not None
        assert rec.severity == Severity.SUCCESS

    def test_fully_allocated_budget_has_no_leftover_message(self) -> None:
        assert leftover_rule(_profile(housing="1500", food="500", savings="3000")) is None


# =============================================================================
# Debt ratios
# =============================================================================


class TestDebt:
    def test_dti_above_43_is_danger(self) -> None:
        recs = evaluate(
            {"housing": Decimal("1400"), "car": Decimal("500"), "credit_cards": Decimal("400")},
            INCOME,
        )
        assert any(
            rec.severity == Severity.DANGER and "Debt payments are 46%" in rec.message
            for rec in recs
        )

    def test_dti_between_36_and_43_is_warning(self) -> None:
        recs = evaluate({"housing": Decimal("1400"), "car": Decimal("500")}, INCOME)
        assert any(
            rec.severity == Severity.WARNING and "Debt payments are 38%" in rec.message
            for rec in recs
        )

    def test_credit_cards_above_10_percent(self) -> None:
        recs = evaluate({"credit_cards": Decimal("600")}, INCOME)
        assert any("Credit card payments at 12%" in rec.message for rec in recs)

    def test_car_payment_above_12_percent(self) -> None:
        recs = evaluate({"car": Decimal("700")}, INCOME)
        assert any("Car payments are 14%" in rec.message for rec in recs)


# =============================================================================
# evaluate()
# =============================================================================


class TestEvaluate:
    def test_zero_income_returns_nothing(self) -> None:
        assert evaluate({"housing": Decimal("1000")}, Decimal("0")) == []

    def test_unknown_category_rejected(self) -> None:
        with pytest.raises(ValueError):
            evaluate({"yachts": Decimal("100")}, INCOME)

    def test_same_input_same_output(self) -> None:
        spending = {
            BudgetCategoryId.HOUSING: Decimal("1600"),
            BudgetCategoryId.FOOD: Decimal("900"),
            BudgetCategoryId.SUBSCRIPTIONS: Decimal("300"),
            BudgetCategoryId.SAVINGS: Decimal("400"),
        }
        assert evaluate(spending, INCOME) == evaluate(spending, INCOME)

    def test_results_follow_rule_order(self) -> None:
        recs = evaluate(
            {"housing": Decimal("2000"), "subscriptions": Decimal("400")},
            INCOME,
        )
        assert recs[0].message.startswith("Housing is 40%")
        assert recs[-1].message.startswith("You have")

    def test_custom_rule_set(self) -> None:
        recs = evaluate({"housing": Decimal("1000")}, INCOME, rules=(housing_rule,))
        assert recs == [
            Recommendation(
                Severity.SUCCESS,
                "Great job! Housing at 20% is within the recommended 30%.",
            )
        ]

    def test_every_rule_is_registered_once(self) -> None:
        assert len(RULES) == len(set(RULES)) == 16


class TestFinancialProfile:
    def test_bucket_percents(self) -> None:
        profile = _profile(housing="1000", food="500", entertainment="250", savings="500")
        assert profile.needs_percent == Decimal("30")
        assert profile.wants_percent == Decimal("5")
        assert profile.savings_percent == Decimal("10")
        assert profile.leftover == Decimal("2750")

    def test_consumer_debt_excludes_housing(self) -> None:
        profile = _profile(housing="1500", car="300", credit_cards="200")
        assert profile.debt_to_income_percent == Decimal("40")
        assert profile.consumer_debt_percent == Decimal("10")
