"""Lead capture and affiliate analytics SQLAlchemy models."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from paywise.models.base import Base, TimestampMixin, new_uuid, utcnow


class Lead(Base, TimestampMixin):
    """Newsletter subscriber captured from a calculator page."""

    __tablename__ = "leads"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255))
    income_range: Mapped[str | None] = mapped_column(String(50))
    source: Mapped[str] = mapped_column(String(100), default="calculator", nullable=False)
    unsubscribed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class AffiliateClick(Base):
    """One outbound click on an affiliate link.

    Append-only; aggregated by the admin dashboard.
    """

    __tablename__ = "affiliate_clicks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    affiliate_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    affiliate_url: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    page_source: Mapped[str] = mapped_column(String(255), nullable=False)
    session_id: Mapped[str | None] = mapped_column(String(100))
    user_agent: Mapped[str | None] = mapped_column(Text)
    referrer: Mapped[str | None] = mapped_column(Text)
    device_type: Mapped[str] = mapped_column(String(20), default="desktop", nullable=False)
    browser: Mapped[str] = mapped_column(String(50), default="unknown", nullable=False)
    clicked_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, nullable=False, index=True
    )


class AffiliateSession(Base):
    """One browsing session on the site, for click-through and bounce rates.

    Created on the first tracked page view; later page views and affiliate
    clicks with the same session id update the counters.
    """

    __tablename__ = "affiliate_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    session_id: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    first_page: Mapped[str | None] = mapped_column(String(255))
    pages_visited: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    affiliate_clicks: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    started_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, nullable=False, index=True
    )
    last_activity_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
