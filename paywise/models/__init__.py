"""SQLAlchemy models for the Paywise application."""

from paywise.models.base import Base
from paywise.models.budget import BudgetSnapshot
from paywise.models.marketing import AffiliateClick, AffiliateSession, Lead
from paywise.models.transaction import MerchantCategory, Transaction, TransactionSource
from paywise.models.user import User

__all__ = [
    "Base",
    "User",
    "BudgetSnapshot",
    "Transaction",
    "TransactionSource",
    "MerchantCategory",
    "Lead",
    "AffiliateClick",
    "AffiliateSession",
]
