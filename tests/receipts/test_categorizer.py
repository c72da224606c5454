"""Tests for merchant categorization."""

import pytest

from paywise.receipts.categorizer import (
    DEFAULT_CATEGORY,
    LearnedMapping,
    categorize_merchant,
    normalize_merchant,
)


@pytest.mark.parametrize(
    ("merchant", "expected"),
    [
        ("WALMART SUPERCENTER", ("needs", "groceries")),
        ("Trader Joe's", ("needs", "groceries")),
        ("Shell Gas Station", ("needs", "gas")),
        ("Verizon Wireless", ("needs", "phone")),
        ("GEICO", ("needs", "insurance")),
        ("CVS", ("needs", "healthcare")),
        ("Starbucks", ("wants", "dining")),
        ("Uber Eats", ("wants", "dining")),
        ("Netflix.com", ("wants", "entertainment")),
        ("Nordstrom", ("wants", "shopping")),
        ("Uber", ("wants", "travel")),
    ],
)
def test_builtin_rules(merchant: str, expected: tuple[str, str]) -> None:
    assert categorize_merchant(merchant) == expected


def test_unknown_merchant_defaults_to_wants() -> None:
    assert categorize_merchant("Quiet Bistro") == (DEFAULT_CATEGORY, None)


@pytest.mark.parametrize("merchant", [None, ""])
def test_missing_merchant(merchant: str | None) -> None:
    assert categorize_merchant(merchant) == ("wants", None)


def test_learned_mapping_matches_substring() -> None:
    learned = [LearnedMapping("joe's corner", "needs", "groceries")]
    assert categorize_merchant("Joe's Corner Store #2", learned) == ("needs", "groceries")


def test_learned_mapping_beats_builtin_rule() -> None:
    learned = [LearnedMapping("starbucks", "needs", "work meals")]
    assert categorize_merchant("STARBUCKS 0421", learned) == ("needs", "work meals")


def test_first_matching_learned_mapping_wins() -> None:
    learned = [
        LearnedMapping("shell rewards", "wants", "shopping"),
        LearnedMapping("shell", "needs", "gas"),
    ]
    assert categorize_merchant("Shell Rewards Card", learned) == ("wants", "shopping")
    assert categorize_merchant("Shell 1234", learned) == ("needs", "gas")


def test_normalize_merchant() -> None:
    assert normalize_merchant("  Costco Wholesale ") == "costco wholesale"
