"""User SQLAlchemy model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paywise.models.base import Base, TimestampMixin, new_uuid

if TYPE_CHECKING:
    from paywise.models.budget import BudgetSnapshot
    from paywise.models.transaction import MerchantCategory, Transaction


class User(Base, TimestampMixin):
    """Represents an account holder.

    Credentials live with the upstream auth provider; this row only anchors
    ownership of budgets, transactions and learned merchant mappings.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255))

    # Relationships
    budget_snapshots: Mapped[list["BudgetSnapshot"]] = relationship(
        back_populates="user", passive_deletes=True
    )
    transactions: Mapped[list["Transaction"]] = relationship(
        back_populates="user", passive_deletes=True
    )
    merchant_categories: Mapped[list["MerchantCategory"]] = relationship(
        back_populates="user", passive_deletes=True
    )
