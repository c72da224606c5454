"""Tests for the 50/30/20 allocation."""

from decimal import Decimal

from paywise.budget.allocation import allocate_50_30_20
from paywise.budget.reference import Bucket


def test_buckets_split_50_30_20() -> None:
    allocation = allocate_50_30_20(Decimal("4000"))

    assert [b.bucket for b in allocation.buckets] == [Bucket.NEEDS, Bucket.WANTS, Bucket.SAVINGS]
    assert [b.monthly for b in allocation.buckets] == [
        Decimal("2000"),
        Decimal("1200"),
        Decimal("800"),
    ]
    assert allocation.total_monthly == Decimal("4000")


def test_items_sum_to_their_bucket() -> None:
    allocation = allocate_50_30_20(Decimal("5250"))
    for bucket in allocation.buckets:
        assert sum(item.percent for item in bucket.items) == bucket.percent
        assert sum(item.monthly for item in bucket.items) == bucket.monthly


def test_weekly_and_daily_figures() -> None:
    needs = allocate_50_30_20(Decimal("4330")).buckets[0]
    assert needs.weekly == Decimal("500")
    assert needs.daily == Decimal("2165") / 30


def test_zero_income() -> None:
    allocation = allocate_50_30_20(Decimal("0"))
    assert allocation.total_monthly == Decimal("0")
