"""create_core_tables

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    """Create users, budgets, transactions, merchant mappings, leads and clicks."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "budget_snapshots",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("fixed_expenses", JSONType, nullable=False),
        sa.Column("frequency_data", JSONType, nullable=False),
        sa.Column("selected_subscriptions", JSONType, nullable=False),
        sa.Column("custom_sub_amounts", JSONType, nullable=True),
        sa.Column("monthly_income", sa.Numeric(12, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_budget_snapshots_user_id", "budget_snapshots", ["user_id"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("merchant", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("subcategory", sa.String(length=50), nullable=True),
        sa.Column("transaction_date", sa.Date(), nullable=False),
        sa.Column(
            "source",
            sa.Enum("MANUAL", "RECEIPT_SCAN", name="transactionsource"),
            nullable=False,
        ),
        sa.Column("receipt_path", sa.String(length=500), nullable=True),
        sa.Column("ocr_raw_text", sa.Text(), nullable=True),
        sa.Column("confidence_score", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_transactions_user_id", "transactions", ["user_id"])
    op.create_index(
        "ix_transactions_user_date", "transactions", ["user_id", "transaction_date"]
    )

    op.create_table(
        "merchant_categories",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("merchant_pattern", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("subcategory", sa.String(length=50), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("user_id", "merchant_pattern", name="uq_merchant_user_pattern"),
    )
    op.create_index(
        "ix_merchant_categories_merchant_pattern", "merchant_categories", ["merchant_pattern"]
    )

    op.create_table(
        "leads",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("income_range", sa.String(length=50), nullable=True),
        sa.Column("source", sa.String(length=100), nullable=False),
        sa.Column("unsubscribed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "affiliate_clicks",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("affiliate_name", sa.String(length=100), nullable=False),
        sa.Column("affiliate_url", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("page_source", sa.String(length=255), nullable=False),
        sa.Column("session_id", sa.String(length=100), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("referrer", sa.Text(), nullable=True),
        sa.Column("device_type", sa.String(length=20), nullable=False),
        sa.Column("browser", sa.String(length=50), nullable=False),
        sa.Column("clicked_at", sa.DateTime(), nullable=False),
    )
    op.create_index(
        "ix_affiliate_clicks_affiliate_name", "affiliate_clicks", ["affiliate_name"]
    )
    op.create_index("ix_affiliate_clicks_clicked_at", "affiliate_clicks", ["clicked_at"])


def downgrade() -> None:
    """Drop every table created by upgrade()."""
    op.drop_index("ix_affiliate_clicks_clicked_at", table_name="affiliate_clicks")
    op.drop_index("ix_affiliate_clicks_affiliate_name", table_name="affiliate_clicks")
    op.drop_table("affiliate_clicks")
    op.drop_table("leads")
    op.drop_index("ix_merchant_categories_merchant_pattern", table_name="merchant_categories")
    op.drop_table("merchant_categories")
    op.drop_index("ix_transactions_user_date", table_name="transactions")
    op.drop_index("ix_transactions_user_id", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_budget_snapshots_user_id", table_name="budget_snapshots")
    op.drop_table("budget_snapshots")
    op.drop_table("users")
    sa.Enum(name="transactionsource").drop(op.get_bind(), checkfirst=True)
