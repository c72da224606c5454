"""50/30/20 allocation of net monthly income."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from paywise.budget.reference import Bucket

HUNDRED = Decimal("100")
WEEKS_PER_MONTH = Decimal("4.33")
DAYS_PER_MONTH = Decimal("30")

BUCKET_PERCENTS: dict[Bucket, Decimal] = {
    Bucket.NEEDS: Decimal("50"),
    Bucket.WANTS: Decimal("30"),
    Bucket.SAVINGS: Decimal("20"),
}

# Percent of net income per line item; each bucket's items sum to its share.
BUCKET_SPLITS: dict[Bucket, tuple[tuple[str, Decimal], ...]] = {
    Bucket.NEEDS: (
        ("Housing", Decimal("25")),
        ("Utilities", Decimal("5")),
        ("Groceries", Decimal("10")),
        ("Transportation", Decimal("10")),
    ),
    Bucket.WANTS: (
        ("Dining", Decimal("5")),
        ("Subscriptions", Decimal("5")),
        ("Travel/Fun", Decimal("10")),
        ("Personal", Decimal("10")),
    ),
    Bucket.SAVINGS: (
        ("Emergency Fund", Decimal("10")),
        ("Investments", Decimal("5")),
        ("Goals", Decimal("5")),
    ),
}


@dataclass(frozen=True)
class AllocationItem:
    label: str
    percent: Decimal
    monthly: Decimal


@dataclass(frozen=True)
class BucketAllocation:
    """One bucket of the 50/30/20 split."""

    bucket: Bucket
    percent: Decimal
    monthly: Decimal
    weekly: Decimal
    daily: Decimal
    items: list[AllocationItem]


@dataclass(frozen=True)
class BudgetAllocation:
    net_monthly: Decimal
    buckets: list[BucketAllocation]

    @property
    def total_monthly(self) -> Decimal:
        return sum((b.monthly for b in self.buckets), Decimal("0"))


def allocate_50_30_20(net_monthly: Decimal) -> BudgetAllocation:
    """Split net monthly income into needs, wants and savings.

    Weekly figures divide by 4.33 weeks per month and daily by 30 days.
    """
    buckets: list[BucketAllocation] = []
    for bucket, percent in BUCKET_PERCENTS.items():
        monthly = net_monthly * percent / HUNDRED
        items = [
            AllocationItem(label=label, percent=item_percent, monthly=net_monthly * item_percent / HUNDRED)
            for label, item_percent in BUCKET_SPLITS[bucket]
        ]
        buckets.append(
            BucketAllocation(
                bucket=bucket,
                percent=percent,
                monthly=monthly,
                weekly=monthly / WEEKS_PER_MONTH,
                daily=monthly / DAYS_PER_MONTH,
                items=items,
            )
        )
    return BudgetAllocation(net_monthly=net_monthly, buckets=buckets)
