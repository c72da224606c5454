"""Budget snapshot SQLAlchemy model."""

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paywise.models.base import Base, JSONType, TimestampMixin, new_uuid

if TYPE_CHECKING:
    from paywise.models.user import User


class BudgetSnapshot(Base, TimestampMixin):
    """A saved state of the budget questionnaire.

    The questionnaire answers are stored as JSON maps keyed by budget
    category id; amounts inside them are plain JSON numbers.
    """

    __tablename__ = "budget_snapshots"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str | None] = mapped_column(String(255))
    fixed_expenses: Mapped[dict] = mapped_column(JSONType, nullable=False)
    frequency_data: Mapped[dict] = mapped_column(JSONType, nullable=False)
    selected_subscriptions: Mapped[list] = mapped_column(JSONType, nullable=False)
    custom_sub_amounts: Mapped[dict | None] = mapped_column(JSONType)
    monthly_income: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    # Relationships
    user: Mapped["User"] = relationship(back_populates="budget_snapshots")
