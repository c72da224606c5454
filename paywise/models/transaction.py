"""Expense tracking SQLAlchemy models."""

import enum
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paywise.models.base import Base, TimestampMixin, new_uuid, utcnow

if TYPE_CHECKING:
    from paywise.models.user import User


class TransactionSource(enum.Enum):
    """Where a transaction came from."""

    MANUAL = "manual"
    RECEIPT_SCAN = "receipt_scan"


class Transaction(Base, TimestampMixin):
    """A single expense recorded by a user."""

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_user_date", "user_id", "transaction_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    merchant: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    subcategory: Mapped[str | None] = mapped_column(String(50))
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    source: Mapped[TransactionSource] = mapped_column(
        Enum(TransactionSource), default=TransactionSource.MANUAL, nullable=False
    )
    receipt_path: Mapped[str | None] = mapped_column(String(500))
    ocr_raw_text: Mapped[str | None] = mapped_column(Text)
    confidence_score: Mapped[float | None] = mapped_column(Float)

    # Relationships
    user: Mapped["User"] = relationship(back_populates="transactions")


class MerchantCategory(Base):
    """A learned merchant -> category mapping for auto-categorization."""

    __tablename__ = "merchant_categories"
    __table_args__ = (
        UniqueConstraint("user_id", "merchant_pattern", name="uq_merchant_user_pattern"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    merchant_pattern: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    subcategory: Mapped[str | None] = mapped_column(String(50))
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="merchant_categories")
