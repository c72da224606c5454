"""Budget planning: reference data, allocation, recommendations and audits."""

from paywise.budget.allocation import BudgetAllocation, allocate_50_30_20
from paywise.budget.recommendations import (
    RULES,
    FinancialProfile,
    Recommendation,
    Severity,
    evaluate,
)
from paywise.budget.reference import (
    BUDGET_CATEGORIES,
    SUBSCRIPTION_CATALOG,
    Bucket,
    BudgetCategory,
    BudgetCategoryId,
    SubscriptionCategory,
    SubscriptionPlan,
)
from paywise.budget.spending import summarize_snapshot
from paywise.budget.subscriptions import SubscriptionAudit, audit_subscriptions

__all__ = [
    "BudgetAllocation",
    "allocate_50_30_20",
    "RULES",
    "FinancialProfile",
    "Recommendation",
    "Severity",
    "evaluate",
    "BUDGET_CATEGORIES",
    "SUBSCRIPTION_CATALOG",
    "Bucket",
    "BudgetCategory",
    "BudgetCategoryId",
    "SubscriptionCategory",
    "SubscriptionPlan",
    "summarize_snapshot",
    "SubscriptionAudit",
    "audit_subscriptions",
]
