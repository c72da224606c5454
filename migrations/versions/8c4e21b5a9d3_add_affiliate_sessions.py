"""add_affiliate_sessions

Revision ID: 8c4e21b5a9d3
Revises: 3f2a9c1d7b10
Create Date: 2026-10-19 15:40:02.871553

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c4e21b5a9d3'
down_revision: Union[str, Sequence[str], None] = '3f2a9c1d7b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create affiliate_sessions for click-through and bounce rates."""
    op.create_table(
        "affiliate_sessions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("session_id", sa.String(length=100), nullable=False, unique=True),
        sa.Column("first_page", sa.String(length=255), nullable=True),
        sa.Column("pages_visited", sa.Integer(), nullable=False),
        sa.Column("affiliate_clicks", sa.Integer(), nullable=False),
        sa.Column("started_at", sa.DateTime(), nullable=False),
        sa.Column("last_activity_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_affiliate_sessions_started_at", "affiliate_sessions", ["started_at"])


def downgrade() -> None:
    """Drop affiliate_sessions."""
    op.drop_index("ix_affiliate_sessions_started_at", table_name="affiliate_sessions")
    op.drop_table("affiliate_sessions")
