"""Roll a saved budget snapshot up into monthly spending per category."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from paywise.budget.reference import BudgetCategoryId
from paywise.budget.subscriptions import audit_subscriptions
from paywise.income.projector import Frequency, to_monthly

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce a JSON number or numeric string to Decimal; blanks become 0."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def summarize_snapshot(
    fixed_expenses: Mapping[str, Any],
    frequency_data: Mapping[str, Mapping[str, Any]],
    selected_subscriptions: Iterable[str] = (),
    custom_sub_amounts: Mapping[str, Any] | None = None,
) -> dict[BudgetCategoryId, Decimal]:
    """Monthly spending per category for a budget snapshot.

    Fixed expenses are already monthly. Frequency entries are
    ``{"frequency": ..., "amount": ...}`` and get converted to a monthly
    average. Selected subscriptions and custom amounts are added to the
    subscriptions category.

    Raises:
        ValueError: For unknown category ids, frequencies or subscriptions.
    """
    spending: dict[BudgetCategoryId, Decimal] = {}

    def add(category_id: str, amount: Decimal) -> None:
        category = BudgetCategoryId(category_id)
        spending[category] = spending.get(category, ZERO) + amount

    for category_id, amount in fixed_expenses.items():
        add(category_id, to_decimal(amount))

    for category_id, entry in frequency_data.items():
        frequency = Frequency(entry.get("frequency", Frequency.MONTHLY.value))
        add(category_id, to_monthly(to_decimal(entry.get("amount")), frequency))

    custom = {key: to_decimal(value) for key, value in (custom_sub_amounts or {}).items()}
    selected = list(selected_subscriptions)
    if selected or custom:
        audit = audit_subscriptions(selected, custom)
        add(BudgetCategoryId.SUBSCRIPTIONS.value, audit.monthly_total)

    return spending
