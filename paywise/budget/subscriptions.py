"""Subscription cost audit."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from paywise.budget.reference import SubscriptionCategory, SubscriptionPlan, get_subscription_plan

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")
TOP_PLANS = 3


@dataclass(frozen=True)
class SelectedPlan:
    plan_id: str
    plan: SubscriptionPlan


@dataclass(frozen=True)
class SubscriptionAudit:
    """Totals for a set of subscriptions.

    Attributes:
        by_category: Monthly subtotal per category, including custom amounts.
        percent_of_income: Monthly total as a percent of income, 0 without income.
        most_expensive: Up to three selected plans, priciest first.
    """

    monthly_total: Decimal
    annual_total: Decimal
    by_category: dict[SubscriptionCategory, Decimal]
    percent_of_income: Decimal
    most_expensive: list[SelectedPlan]


def audit_subscriptions(
    selected_ids: Iterable[str],
    custom_amounts: Mapping[SubscriptionCategory | str, Decimal] | None = None,
    monthly_income: Decimal = ZERO,
) -> SubscriptionAudit:
    """Total selected catalog plans plus custom per-category amounts.

    Duplicate ids count once.

    Raises:
        ValueError: If a selected id or custom category is unknown.
    """
    selected = [
        SelectedPlan(plan_id=plan_id, plan=get_subscription_plan(plan_id))
        for plan_id in dict.fromkeys(selected_ids)
    ]

    by_category: dict[SubscriptionCategory, Decimal] = {}
    for item in selected:
        category = item.plan.category
        by_category[category] = by_category.get(category, ZERO) + item.plan.monthly_price

    for key, amount in (custom_amounts or {}).items():
        category = SubscriptionCategory(key)
        by_category[category] = by_category.get(category, ZERO) + amount

    monthly_total = sum(by_category.values(), ZERO)
    percent = monthly_total / monthly_income * HUNDRED if monthly_income > ZERO else ZERO
    most_expensive = sorted(selected, key=lambda s: s.plan.monthly_price, reverse=True)

    return SubscriptionAudit(
        monthly_total=monthly_total,
        annual_total=monthly_total * MONTHS_PER_YEAR,
        by_category=by_category,
        percent_of_income=percent,
        most_expensive=most_expensive[:TOP_PLANS],
    )
