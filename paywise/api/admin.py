"""Admin dashboard endpoints: leads and affiliate analytics.

Every route requires the X-Admin-Key header.
"""

import csv
import io
import math
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel
from sqlalchemy import and_, case, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from paywise.api.deps import get_db, verify_admin_key
from paywise.api.leads import LeadResponse, to_lead_response
from paywise.core.logging import get_logger
from paywise.models import AffiliateClick, AffiliateSession, Lead
from paywise.models.base import utcnow

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(verify_admin_key)],
)

TOP_REFERRERS = 10


class LeadListResponse(BaseModel):
    """Paginated lead list response."""

    items: list[LeadResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class CountBucket(BaseModel):
    key: str | None
    count: int


class LeadStatsResponse(BaseModel):
    total: int
    today: int
    this_week: int
    this_month: int
    unsubscribed: int
    by_income_range: list[CountBucket]
    by_source: list[CountBucket]


class AffiliateSummary(BaseModel):
    """Click totals plus session engagement.

    ctr is the percent of sessions with at least one affiliate click;
    bounce_rate the percent that viewed one page and clicked nothing.
    """

    total_clicks: int
    unique_sessions: int
    unique_affiliates: int
    total_sessions: int
    sessions_with_clicks: int
    ctr: float
    bounce_rate: float
    avg_pages_per_session: float


class AffiliateOverviewResponse(BaseModel):
    start_date: date
    end_date: date
    summary: AffiliateSummary
    by_affiliate: list[CountBucket]
    by_page: list[CountBucket]
    by_device: list[CountBucket]
    by_browser: list[CountBucket]
    daily_clicks: list[CountBucket]
    top_referrers: list[CountBucket]


def _csv_response(filename: str, header: Sequence[str], rows: Iterable[Sequence]) -> Response:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(header)
    writer.writerows(rows)
    return Response(
        content=buffer.getvalue(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _date_range_filters(column, start_date: date, end_date: date) -> list:
    if start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must be on or before end_date")
    return [
        column >= datetime.combine(start_date, time.min),
        column < datetime.combine(end_date + timedelta(days=1), time.min),
    ]


async def _count(db: AsyncSession, *filters) -> int:
    result = await db.execute(select(func.count(Lead.id)).where(*filters))
    return int(result.scalar() or 0)


async def _group_counts(
    db: AsyncSession, column, filters: list, limit: int | None = None
) -> list[CountBucket]:
    count = func.count()
    stmt = select(column, count).where(*filters).group_by(column).order_by(count.desc(), column)
    if limit is not None:
        stmt = stmt.limit(limit)
    result = await db.execute(stmt)
    return [
        CountBucket(key=str(key) if key is not None else None, count=int(n))
        for key, n in result.all()
    ]


# =============================================================================
# Leads
# =============================================================================


@router.get("/leads", response_model=LeadListResponse)
async def list_leads(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    search: str | None = Query(default=None, min_length=1),
    db: AsyncSession = Depends(get_db),
) -> LeadListResponse:
    """List leads newest first with optional email/name search."""
    filters = []
    if search:
        search_pattern = f"%{search.strip().lower()}%"
        filters.append(
            or_(
                func.lower(Lead.email).like(search_pattern),
                func.lower(func.coalesce(Lead.name, "")).like(search_pattern),
            )
        )

    total = await _count(db, *filters)
    result = await db.execute(
        select(Lead)
        .where(*filters)
        .order_by(Lead.created_at.desc(), Lead.id.desc())
        .limit(limit)
        .offset((page - 1) * limit)
    )
    return LeadListResponse(
        items=[to_lead_response(lead) for lead in result.scalars().all()],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )


@router.get("/leads/stats", response_model=LeadStatsResponse)
async def lead_stats(db: AsyncSession = Depends(get_db)) -> LeadStatsResponse:
    """Lead counts over time and by income range and source."""
    now = utcnow()
    today_start = datetime.combine(now.date(), time.min)

    return LeadStatsResponse(
        total=await _count(db),
        today=await _count(db, Lead.created_at >= today_start),
        this_week=await _count(db, Lead.created_at >= now - timedelta(days=7)),
        this_month=await _count(db, Lead.created_at >= now - timedelta(days=30)),
        unsubscribed=await _count(db, Lead.unsubscribed.is_(True)),
        by_income_range=await _group_counts(
            db, Lead.income_range, [Lead.income_range.is_not(None)]
        ),
        by_source=await _group_counts(db, Lead.source, []),
    )


@router.get("/leads/export")
async def export_leads(db: AsyncSession = Depends(get_db)) -> Response:
    """Download every lead as CSV."""
    result = await db.execute(select(Lead).order_by(Lead.created_at.desc(), Lead.id.desc()))
    leads = result.scalars().all()
    logger.info("leads_exported", count=len(leads))
    return _csv_response(
        f"leads-{date.today().isoformat()}.csv",
        ("email", "name", "income_range", "source", "unsubscribed", "created_at"),
        (
            (
                lead.email,
                lead.name or "",
                lead.income_range or "",
                lead.source,
                "yes" if lead.unsubscribed else "no",
                lead.created_at.isoformat(),
            )
            for lead in leads
        ),
    )


@router.delete("/leads/{lead_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lead(lead_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    result = await db.execute(delete(Lead).where(Lead.id == lead_id))
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="Lead not found")
    logger.info("lead_deleted", lead_id=lead_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Affiliate analytics
# =============================================================================


async def _session_stats(
    db: AsyncSession, start_date: date, end_date: date
) -> tuple[int, int, int, float]:
    """(total, with clicks, bounced, average pages) for sessions started in range."""
    bounced = and_(AffiliateSession.pages_visited <= 1, AffiliateSession.affiliate_clicks == 0)
    result = await db.execute(
        select(
            func.count(AffiliateSession.id),
            func.sum(case((AffiliateSession.affiliate_clicks > 0, 1), else_=0)),
            func.sum(case((bounced, 1), else_=0)),
            func.avg(AffiliateSession.pages_visited),
        ).where(*_date_range_filters(AffiliateSession.started_at, start_date, end_date))
    )
    total, with_clicks, bounced_count, avg_pages = result.one()
    return int(total or 0), int(with_clicks or 0), int(bounced_count or 0), float(avg_pages or 0)


def _rate(part: int, whole: int) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


@router.get("/affiliates/overview", response_model=AffiliateOverviewResponse)
async def affiliate_overview(
    start_date: date = Query(),
    end_date: date = Query(),
    db: AsyncSession = Depends(get_db),
) -> AffiliateOverviewResponse:
    """Click totals, session engagement and breakdowns for a date range (inclusive)."""
    filters = _date_range_filters(AffiliateClick.clicked_at, start_date, end_date)

    totals = await db.execute(
        select(
            func.count(AffiliateClick.id),
            func.count(func.distinct(AffiliateClick.session_id)),
            func.count(func.distinct(AffiliateClick.affiliate_name)),
        ).where(*filters)
    )
    total_clicks, unique_sessions, unique_affiliates = totals.one()
    total_sessions, sessions_with_clicks, bounced, avg_pages = await _session_stats(
        db, start_date, end_date
    )

    return AffiliateOverviewResponse(
        start_date=start_date,
        end_date=end_date,
        summary=AffiliateSummary(
            total_clicks=int(total_clicks or 0),
            unique_sessions=int(unique_sessions or 0),
            unique_affiliates=int(unique_affiliates or 0),
            total_sessions=total_sessions,
            sessions_with_clicks=sessions_with_clicks,
            ctr=_rate(sessions_with_clicks, total_sessions),
            bounce_rate=_rate(bounced, total_sessions),
            avg_pages_per_session=round(avg_pages, 1),
        ),
        by_affiliate=await _group_counts(db, AffiliateClick.affiliate_name, filters),
        by_page=await _group_counts(db, AffiliateClick.page_source, filters),
        by_device=await _group_counts(db, AffiliateClick.device_type, filters),
        by_browser=await _group_counts(db, AffiliateClick.browser, filters),
        daily_clicks=sorted(
            await _group_counts(db, func.date(AffiliateClick.clicked_at), filters),
            key=lambda bucket: bucket.key or "",
        ),
        top_referrers=await _group_counts(
            db,
            AffiliateClick.referrer,
            [*filters, AffiliateClick.referrer.is_not(None)],
            limit=TOP_REFERRERS,
        ),
    )


@router.get("/affiliates/export")
async def export_affiliate_clicks(
    start_date: date = Query(),
    end_date: date = Query(),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Download clicks in a date range as CSV."""
    filters = _date_range_filters(AffiliateClick.clicked_at, start_date, end_date)
    result = await db.execute(
        select(AffiliateClick).where(*filters).order_by(AffiliateClick.clicked_at.desc())
    )
    clicks = result.scalars().all()
    logger.info("affiliate_clicks_exported", count=len(clicks))
    return _csv_response(
        f"affiliate-clicks-{start_date.isoformat()}-to-{end_date.isoformat()}.csv",
        (
            "clicked_at",
            "affiliate_name",
            "category",
            "page_source",
            "device_type",
            "browser",
            "session_id",
            "referrer",
        ),
        (
            (
                click.clicked_at.isoformat(),
                click.affiliate_name,
                click.category,
                click.page_source,
                click.device_type,
                click.browser,
                click.session_id or "",
                click.referrer or "",
            )
            for click in clicks
        ),
    )
