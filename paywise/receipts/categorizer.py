"""Merchant to category matching for transactions."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

DEFAULT_CATEGORY = "wants"
VALID_CATEGORIES = ("needs", "wants", "savings")


@dataclass(frozen=True)
class MerchantRule:
    pattern: re.Pattern[str]
    category: str
    subcategory: str


@dataclass(frozen=True)
class LearnedMapping:
    """A user's saved merchant mapping; pattern is stored lowercased."""

    merchant_pattern: str
    category: str
    subcategory: str | None = None


def _rule(alternatives: str, category: str, subcategory: str) -> MerchantRule:
    return MerchantRule(re.compile(alternatives, re.IGNORECASE), category, subcategory)


# First match wins, so broader patterns (travel's "uber") come after narrower
# ones (dining's "uber eats").
MERCHANT_RULES: tuple[MerchantRule, ...] = (
    _rule(
        r"walmart|target|costco|kroger|safeway|publix|trader joe|whole foods|aldi|grocery"
        r"|food lion|wegmans|heb|meijer|sprouts",
        "needs",
        "groceries",
    ),
    _rule(
        r"shell|chevron|exxon|mobil|bp|76|gas|fuel|valero|speedway|marathon|circle k|wawa"
        r"|sheetz|quiktrip",
        "needs",
        "gas",
    ),
    _rule(
        r"electric|water|gas company|utility|power|energy|pge|con edison|duke energy",
        "needs",
        "utilities",
    ),
    _rule(r"verizon|at&t|t-mobile|sprint|comcast|xfinity|spectrum|cox|frontier", "needs", "phone"),
    _rule(
        r"geico|progressive|state farm|allstate|liberty mutual|farmers|usaa|nationwide",
        "needs",
        "insurance",
    ),
    _rule(
        r"pharmacy|cvs|walgreens|rite aid|hospital|medical|clinic|doctor|dentist|optometrist",
        "needs",
        "healthcare",
    ),
    _rule(
        r"mcdonald|starbucks|chipotle|pizza|restaurant|cafe|doordash|uber eats|grubhub|dunkin"
        r"|chick-fil-a|wendy|burger|subway|taco bell|panera|olive garden|applebee",
        "wants",
        "dining",
    ),
    _rule(
        r"netflix|spotify|hulu|disney|amc|cinema|theater|gaming|playstation|xbox|nintendo"
        r"|steam|twitch",
        "wants",
        "entertainment",
    ),
    _rule(
        r"amazon|ebay|etsy|mall|clothing|shoes|apparel|nordstrom|macys|kohls|tj maxx"
        r"|marshalls|ross|old navy|gap|h&m|zara",
        "wants",
        "shopping",
    ),
    _rule(
        r"uber|lyft|airline|delta|united|american|southwest|hotel|marriott|hilton|airbnb"
        r"|expedia|booking",
        "wants",
        "travel",
    ),
)


def normalize_merchant(merchant: str) -> str:
    """Form a merchant name is stored in as a learned pattern."""
    return merchant.strip().lower()


def categorize_merchant(
    merchant: str | None, learned: Iterable[LearnedMapping] = ()
) -> tuple[str, str | None]:
    """Pick a (category, subcategory) for a merchant name.

    Learned mappings are checked first and match when their pattern appears
    anywhere in the merchant name. Built-in rules come next. Anything else is
    filed under wants with no subcategory.
    """
    if not merchant:
        return DEFAULT_CATEGORY, None

    lowered = normalize_merchant(merchant)
    for mapping in learned:
        if mapping.merchant_pattern and mapping.merchant_pattern in lowered:
            return mapping.category, mapping.subcategory

    for rule in MERCHANT_RULES:
        if rule.pattern.search(lowered):
            return rule.category, rule.subcategory

    return DEFAULT_CATEGORY, None
