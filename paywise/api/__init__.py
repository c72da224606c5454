"""API module exports."""

from paywise.api.admin import router as admin_router
from paywise.api.affiliates import router as affiliates_router
from paywise.api.budgets import router as budgets_router
from paywise.api.calculators import router as calculators_router
from paywise.api.deps import get_current_user, get_db, get_redis, verify_admin_key
from paywise.api.health import router as health_router
from paywise.api.leads import router as leads_router
from paywise.api.receipts import router as receipts_router
from paywise.api.transactions import router as transactions_router
from paywise.api.users import router as users_router

__all__ = [
    "admin_router",
    "affiliates_router",
    "budgets_router",
    "calculators_router",
    "get_current_user",
    "get_db",
    "get_redis",
    "health_router",
    "leads_router",
    "receipts_router",
    "transactions_router",
    "users_router",
    "verify_admin_key",
]
