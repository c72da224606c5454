"""Budget recommendation rules.

Every rule is a pure function of a read-only FinancialProfile that returns one
Recommendation or None. Rules never look at each other's output, so
evaluate() simply runs all of them in declaration order.

Example:
    >>> recs = evaluate({BudgetCategoryId.HOUSING: Decimal("1750")}, Decimal("5000"))
    >>> [r.severity.value for r in recs if "Housing" in r.message][0]
    'danger'
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from paywise.budget.reference import (
    BUDGET_CATEGORIES,
    Bucket,
    BudgetCategoryId,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

HOUSING_CEILING = Decimal("30")
HOUSING_AND_UTILITIES_CEILING = Decimal("35")
NEEDS_CEILING = Decimal("50")
WANTS_CEILING = Decimal("30")
SAVINGS_TARGET = Decimal("20")
SAVINGS_FLOOR = Decimal("10")
CREDIT_CARD_CEILING = Decimal("10")
CAR_PTI_CEILING = Decimal("12")
CONSUMER_DEBT_CEILING = Decimal("20")
DTI_CEILING = Decimal("43")
DTI_COMFORT = Decimal("36")
FOOD_CEILING = Decimal("15")
UTILITIES_CEILING = Decimal("10")
INSURANCE_CEILING = Decimal("10")
SUBSCRIPTIONS_CEILING = Decimal("5")
ENTERTAINMENT_CEILING = Decimal("10")
PERSONAL_CEILING = Decimal("10")
UNALLOCATED_THRESHOLD = Decimal("10")

DEBT_CATEGORIES = (
    BudgetCategoryId.HOUSING,
    BudgetCategoryId.CAR,
    BudgetCategoryId.CREDIT_CARDS,
    BudgetCategoryId.OTHER_DEBT,
)
CONSUMER_DEBT_CATEGORIES = (
    BudgetCategoryId.CAR,
    BudgetCategoryId.CREDIT_CARDS,
    BudgetCategoryId.OTHER_DEBT,
)


class Severity(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class Recommendation:
    severity: Severity
    message: str


@dataclass(frozen=True)
class FinancialProfile:
    """Monthly income and spending per category.

    Percent helpers return 0 when income is not positive.
    """

    monthly_income: Decimal
    spending: Mapping[BudgetCategoryId, Decimal] = field(default_factory=dict)

    def amount(self, category: BudgetCategoryId) -> Decimal:
        return self.spending.get(category, ZERO)

    def percent_of_income(self, amount: Decimal) -> Decimal:
        if self.monthly_income <= ZERO:
            return ZERO
        return amount / self.monthly_income * HUNDRED

    def percent(self, category: BudgetCategoryId) -> Decimal:
        return self.percent_of_income(self.amount(category))

    def bucket_total(self, bucket: Bucket) -> Decimal:
        return sum(
            (
                amount
                for category, amount in self.spending.items()
                if BUDGET_CATEGORIES[category].bucket == bucket
            ),
            ZERO,
        )

    @property
    def total_spending(self) -> Decimal:
        return sum(self.spending.values(), ZERO)

    @property
    def needs_percent(self) -> Decimal:
        return self.percent_of_income(self.bucket_total(Bucket.NEEDS))

    @property
    def wants_percent(self) -> Decimal:
        return self.percent_of_income(self.bucket_total(Bucket.WANTS))

    @property
    def savings_percent(self) -> Decimal:
        return self.percent_of_income(self.bucket_total(Bucket.SAVINGS))

    @property
    def debt_to_income_percent(self) -> Decimal:
        return self.percent_of_income(sum((self.amount(c) for c in DEBT_CATEGORIES), ZERO))

    @property
    def consumer_debt_percent(self) -> Decimal:
        return self.percent_of_income(
            sum((self.amount(c) for c in CONSUMER_DEBT_CATEGORIES), ZERO)
        )

    @property
    def leftover(self) -> Decimal:
        return self.monthly_income - self.total_spending


Rule = Callable[[FinancialProfile], Optional[Recommendation]]


def _pct(value: Decimal) -> str:
    return f"{value:.0f}%"


def _money(value: Decimal) -> str:
    return f"${abs(value):,.0f}"


# =============================================================================
# Rules
# =============================================================================


def housing_rule(profile: FinancialProfile) -> Recommendation | None:
    housing = profile.percent(BudgetCategoryId.HOUSING)
    if housing > HOUSING_CEILING:
        return Recommendation(
            Severity.DANGER,
            f"Housing is {_pct(housing)} of income. Aim for under "
            f"{_pct(HOUSING_CEILING)} to avoid being house-poor.",
        )
    if housing > ZERO:
        return Recommendation(
            Severity.SUCCESS,
            f"Great job! Housing at {_pct(housing)} is within the recommended "
            f"{_pct(HOUSING_CEILING)}.",
        )
    return None


def needs_rule(profile: FinancialProfile) -> Recommendation | None:
    needs = profile.needs_percent
    if needs > NEEDS_CEILING:
        return Recommendation(
            Severity.DANGER,
            f"Needs are {_pct(needs)} of income. The 50/30/20 rule suggests keeping "
            f"needs under {_pct(NEEDS_CEILING)}.",
        )
    return None


def wants_rule(profile: FinancialProfile) -> Recommendation | None:
    wants = profile.wants_percent
    if wants > WANTS_CEILING:
        return Recommendation(
            Severity.WARNING,
            f"Wants are {_pct(wants)} of income. Try to keep discretionary spending "
            f"under {_pct(WANTS_CEILING)}.",
        )
    return None


def savings_rule(profile: FinancialProfile) -> Recommendation | None:
    savings = profile.savings_percent
    if savings < SAVINGS_FLOOR:
        return Recommendation(
            Severity.DANGER,
            f"Saving only {_pct(savings)} of income. Aim for at least "
            f"{_pct(SAVINGS_TARGET)} for financial security.",
        )
    if savings < SAVINGS_TARGET:
        return Recommendation(
            Severity.WARNING,
            f"Saving {_pct(savings)} is a good start. Work toward "
            f"{_pct(SAVINGS_TARGET)} to build long-term security.",
        )
    return Recommendation(
        Severity.SUCCESS,
        f"Excellent! Saving {_pct(savings)} puts you on track for financial independence.",
    )


def credit_card_rule(profile: FinancialProfile) -> Recommendation | None:
    cards = profile.percent(BudgetCategoryId.CREDIT_CARDS)
    if cards > CREDIT_CARD_CEILING:
        return Recommendation(
            Severity.DANGER,
            f"Credit card payments at {_pct(cards)} is high. Focus on paying down "
            "this high-interest debt.",
        )
    return None


def car_payment_rule(profile: FinancialProfile) -> Recommendation | None:
    car = profile.percent(BudgetCategoryId.CAR)
    if car > CAR_PTI_CEILING:
        return Recommendation(
            Severity.WARNING,
            f"Car payments are {_pct(car)} of income. Lenders prefer payments under "
            f"{_pct(CAR_PTI_CEILING)}.",
        )
    return None


def consumer_debt_rule(profile: FinancialProfile) -> Recommendation | None:
    debt = profile.consumer_debt_percent
    if debt > CONSUMER_DEBT_CEILING:
        return Recommendation(
            Severity.WARNING,
            f"Non-housing debt payments total {_pct(debt)} of income. Keep them under "
            f"{_pct(CONSUMER_DEBT_CEILING)}.",
        )
    return None


def debt_to_income_rule(profile: FinancialProfile) -> Recommendation | None:
    dti = profile.debt_to_income_percent
    if dti > DTI_CEILING:
        return Recommendation(
            Severity.DANGER,
            f"Debt payments are {_pct(dti)} of income, above the {_pct(DTI_CEILING)} "
            "most lenders allow for a mortgage.",
        )
    if dti > DTI_COMFORT:
        return Recommendation(
            Severity.WARNING,
            f"Debt payments are {_pct(dti)} of income. Lenders prefer a ratio under "
            f"{_pct(DTI_COMFORT)}.",
        )
    return None


def food_rule(profile: FinancialProfile) -> Recommendation | None:
    food = profile.percent(BudgetCategoryId.FOOD)
    if food > FOOD_CEILING:
        return Recommendation(
            Severity.WARNING,
            f"Food is {_pct(food)} of income. Meal planning can bring it under "
            f"{_pct(FOOD_CEILING)}.",
        )
    return None


def utilities_rule(profile: FinancialProfile) -> Recommendation | None:
    utilities = profile.percent(BudgetCategoryId.UTILITIES)
    if utilities > UTILITIES_CEILING:
        return Recommendation(
            Severity.WARNING,
            f"Utilities are {_pct(utilities)} of income. Compare providers and plans.",
        )
    return None


def insurance_rule(profile: FinancialProfile) -> Recommendation | None:
    insurance = profile.percent(BudgetCategoryId.INSURANCE)
    if insurance > INSURANCE_CEILING:
        return Recommendation(
            Severity.WARNING,
            f"Insurance is {_pct(insurance)} of income. Shop around or bundle policies.",
        )
    return None


def subscriptions_rule(profile: FinancialProfile) -> Recommendation | None:
    subscriptions = profile.percent(BudgetCategoryId.SUBSCRIPTIONS)
    if subscriptions > SUBSCRIPTIONS_CEILING:
        return Recommendation(
            Severity.WARNING,
            f"Subscriptions are {_pct(subscriptions)} of income. Cancel the ones you "
            "rarely use.",
        )
    return None


def entertainment_rule(profile: FinancialProfile) -> Recommendation | None:
    entertainment = profile.percent(BudgetCategoryId.ENTERTAINMENT)
    if entertainment > ENTERTAINMENT_CEILING:
        return Recommendation(
            Severity.WARNING,
            f"Entertainment and travel are {_pct(entertainment)} of income. Set a "
            "monthly fun budget.",
        )
    return None


def personal_rule(profile: FinancialProfile) -> Recommendation | None:
    personal = profile.percent(BudgetCategoryId.PERSONAL)
    if personal > PERSONAL_CEILING:
        return Recommendation(
            Severity.WARNING,
            f"Personal spending is {_pct(personal)} of income. Try a 48-hour wait "
            "before non-essential purchases.",
        )
    return None


def housing_and_utilities_rule(profile: FinancialProfile) -> Recommendation | None:
    combined = profile.percent_of_income(
        profile.amount(BudgetCategoryId.HOUSING) + profile.amount(BudgetCategoryId.UTILITIES)
    )
    if combined > HOUSING_AND_UTILITIES_CEILING:
        return Recommendation(
            Severity.WARNING,
            f"Housing plus utilities take {_pct(combined)} of income. Keep the total "
            f"under {_pct(HOUSING_AND_UTILITIES_CEILING)}.",
        )
    return None


def leftover_rule(profile: FinancialProfile) -> Recommendation | None:
    leftover = profile.leftover
    if leftover < ZERO:
        return Recommendation(
            Severity.DANGER,
            f"You're spending {_money(leftover)} more than you earn! Review expenses urgently.",
        )
    if profile.percent_of_income(leftover) > UNALLOCATED_THRESHOLD:
        if profile.savings_percent < SAVINGS_TARGET:
            return Recommendation(
                Severity.WARNING,
                f"You have {_money(leftover)} unallocated. Put it toward savings before "
                "it gets spent.",
            )
        return Recommendation(
            Severity.SUCCESS,
            f"You have {_money(leftover)} unallocated. Consider increasing investments.",
        )
    return None


RULES: tuple[Rule, ...] = (
    housing_rule,
    needs_rule,
    wants_rule,
    savings_rule,
    credit_card_rule,
    car_payment_rule,
    consumer_debt_rule,
    debt_to_income_rule,
    food_rule,
    utilities_rule,
    insurance_rule,
    subscriptions_rule,
    entertainment_rule,
    personal_rule,
    housing_and_utilities_rule,
    leftover_rule,
)


def evaluate(
    spending: Mapping[BudgetCategoryId | str, Decimal],
    monthly_income: Decimal,
    rules: tuple[Rule, ...] = RULES,
) -> list[Recommendation]:
    """Run every rule and collect the recommendations that fire.

    Args:
        spending: Monthly amount per category id; missing categories count as 0.
        monthly_income: Gross monthly income.
        rules: Rule functions to run, defaults to RULES.

    Returns:
        Recommendations in rule order, or an empty list when income is not
        positive.

    Raises:
        ValueError: If a spending key is not a known category id.
    """
    if monthly_income <= ZERO:
        return []

    profile = FinancialProfile(
        monthly_income=monthly_income,
        spending={BudgetCategoryId(key): amount for key, amount in spending.items()},
    )
    results = (rule(profile) for rule in rules)
    return [rec for rec in results if rec is not None]
