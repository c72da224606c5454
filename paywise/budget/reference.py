"""Static budget reference data.

Budget categories and the subscription catalog are closed enumerations mapped
to frozen records. Both tables are checked once at import so a missing or
malformed entry fails loudly at startup instead of at lookup time.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Bucket(str, Enum):
    """50/30/20 bucket a category belongs to."""

    NEEDS = "needs"
    WANTS = "wants"
    SAVINGS = "savings"


class BudgetCategoryId(str, Enum):
    """Spending categories the budget planner asks about."""

    HOUSING = "housing"
    CAR = "car"
    CREDIT_CARDS = "credit_cards"
    FOOD = "food"
    UTILITIES = "utilities"
    INSURANCE = "insurance"
    OTHER_DEBT = "other_debt"
    SUBSCRIPTIONS = "subscriptions"
    ENTERTAINMENT = "entertainment"
    PERSONAL = "personal"
    SAVINGS = "savings"


@dataclass(frozen=True)
class BudgetCategory:
    """Display title, guideline share of income and bucket for a category."""

    title: str
    guideline_percent: Decimal
    bucket: Bucket


BUDGET_CATEGORIES: dict[BudgetCategoryId, BudgetCategory] = {
    BudgetCategoryId.HOUSING: BudgetCategory("Housing", Decimal("0.28"), Bucket.NEEDS),
    BudgetCategoryId.CAR: BudgetCategory("Car Payments", Decimal("0.10"), Bucket.NEEDS),
    BudgetCategoryId.CREDIT_CARDS: BudgetCategory("Credit Cards", Decimal("0.05"), Bucket.NEEDS),
    BudgetCategoryId.FOOD: BudgetCategory("Groceries & Food", Decimal("0.12"), Bucket.NEEDS),
    BudgetCategoryId.UTILITIES: BudgetCategory("Utilities", Decimal("0.05"), Bucket.NEEDS),
    BudgetCategoryId.INSURANCE: BudgetCategory("Insurance", Decimal("0.05"), Bucket.NEEDS),
    BudgetCategoryId.OTHER_DEBT: BudgetCategory("Other Debt", Decimal("0.05"), Bucket.NEEDS),
    BudgetCategoryId.SUBSCRIPTIONS: BudgetCategory("Subscriptions", Decimal("0.03"), Bucket.WANTS),
    BudgetCategoryId.ENTERTAINMENT: BudgetCategory(
        "Entertainment & Travel", Decimal("0.05"), Bucket.WANTS
    ),
    BudgetCategoryId.PERSONAL: BudgetCategory("Personal & Shopping", Decimal("0.05"), Bucket.WANTS),
    BudgetCategoryId.SAVINGS: BudgetCategory("Savings", Decimal("0.20"), Bucket.SAVINGS),
}


class SubscriptionCategory(str, Enum):
    """Grouping used when auditing subscriptions."""

    STREAMING = "streaming"
    MUSIC = "music"
    SOFTWARE = "software"
    CLOUD = "cloud"
    FITNESS = "fitness"
    NEWS = "news"
    GAMING = "gaming"
    SHOPPING = "shopping"
    OTHER = "other"


@dataclass(frozen=True)
class SubscriptionPlan:
    """A known subscription and its typical monthly price."""

    name: str
    category: SubscriptionCategory
    monthly_price: Decimal


SUBSCRIPTION_CATALOG: dict[str, SubscriptionPlan] = {
    "netflix": SubscriptionPlan("Netflix", SubscriptionCategory.STREAMING, Decimal("15.49")),
    "hulu": SubscriptionPlan("Hulu", SubscriptionCategory.STREAMING, Decimal("7.99")),
    "disney_plus": SubscriptionPlan("Disney+", SubscriptionCategory.STREAMING, Decimal("13.99")),
    "max": SubscriptionPlan("Max", SubscriptionCategory.STREAMING, Decimal("15.99")),
    "youtube_premium": SubscriptionPlan(
        "YouTube Premium", SubscriptionCategory.STREAMING, Decimal("13.99")
    ),
    "peacock": SubscriptionPlan("Peacock", SubscriptionCategory.STREAMING, Decimal("7.99")),
    "paramount_plus": SubscriptionPlan(
        "Paramount+", SubscriptionCategory.STREAMING, Decimal("7.99")
    ),
    "apple_tv": SubscriptionPlan("Apple TV+", SubscriptionCategory.STREAMING, Decimal("9.99")),
    "spotify": SubscriptionPlan("Spotify", SubscriptionCategory.MUSIC, Decimal("11.99")),
    "apple_music": SubscriptionPlan("Apple Music", SubscriptionCategory.MUSIC, Decimal("10.99")),
    "microsoft_365": SubscriptionPlan(
        "Microsoft 365", SubscriptionCategory.SOFTWARE, Decimal("9.99")
    ),
    "adobe_cc": SubscriptionPlan(
        "Adobe Creative Cloud", SubscriptionCategory.SOFTWARE, Decimal("59.99")
    ),
    "chatgpt_plus": SubscriptionPlan("ChatGPT Plus", SubscriptionCategory.SOFTWARE, Decimal("20.00")),
    "icloud": SubscriptionPlan("iCloud+", SubscriptionCategory.CLOUD, Decimal("2.99")),
    "google_one": SubscriptionPlan("Google One", SubscriptionCategory.CLOUD, Decimal("1.99")),
    "dropbox": SubscriptionPlan("Dropbox Plus", SubscriptionCategory.CLOUD, Decimal("11.99")),
    "gym": SubscriptionPlan("Gym Membership", SubscriptionCategory.FITNESS, Decimal("40.00")),
    "peloton": SubscriptionPlan("Peloton App", SubscriptionCategory.FITNESS, Decimal("12.99")),
    "nyt": SubscriptionPlan("New York Times", SubscriptionCategory.NEWS, Decimal("17.00")),
    "wsj": SubscriptionPlan("Wall Street Journal", SubscriptionCategory.NEWS, Decimal("38.99")),
    "xbox_game_pass": SubscriptionPlan(
        "Xbox Game Pass", SubscriptionCategory.GAMING, Decimal("16.99")
    ),
    "playstation_plus": SubscriptionPlan(
        "PlayStation Plus", SubscriptionCategory.GAMING, Decimal("9.99")
    ),
    "amazon_prime": SubscriptionPlan("Amazon Prime", SubscriptionCategory.SHOPPING, Decimal("14.99")),
    "costco": SubscriptionPlan("Costco Membership", SubscriptionCategory.SHOPPING, Decimal("5.42")),
}


def _validate_reference_tables() -> None:
    missing = set(BudgetCategoryId) - set(BUDGET_CATEGORIES)
    if missing:
        raise ValueError(f"Budget categories missing: {sorted(m.value for m in missing)}")

    for category_id, category in BUDGET_CATEGORIES.items():
        if not Decimal("0") < category.guideline_percent <= Decimal("1"):
            raise ValueError(f"Guideline for {category_id.value} must be in (0, 1]")

    for plan_id, plan in SUBSCRIPTION_CATALOG.items():
        if plan.monthly_price <= Decimal("0"):
            raise ValueError(f"Subscription {plan_id} must have a positive price")


_validate_reference_tables()


def get_budget_category(category_id: str | BudgetCategoryId) -> BudgetCategory:
    """Look up a category, raising ValueError for unknown ids."""
    return BUDGET_CATEGORIES[BudgetCategoryId(category_id)]


def get_subscription_plan(plan_id: str) -> SubscriptionPlan:
    """Look up a catalog entry, raising ValueError for unknown ids."""
    try:
        return SUBSCRIPTION_CATALOG[plan_id]
    except KeyError:
        raise ValueError(f"Unknown subscription: {plan_id}") from None


def categories_in_bucket(bucket: Bucket) -> list[BudgetCategoryId]:
    """Category ids belonging to a 50/30/20 bucket, in declaration order."""
    return [cid for cid, category in BUDGET_CATEGORIES.items() if category.bucket == bucket]
