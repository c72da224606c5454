"""Affiliate click and session tracking."""

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from user_agents import parse as parse_ua_string

from paywise.api.deps import get_db
from paywise.core.config import settings
from paywise.core.logging import get_logger
from paywise.models import AffiliateClick, AffiliateSession
from paywise.models.base import utcnow
from paywise.security.rate_limiter import RateLimiter

logger = get_logger(__name__)

router = APIRouter(prefix="/api/affiliates", tags=["affiliates"])

click_rate_limiter = RateLimiter(
    "affiliate-clicks",
    max_requests=settings.click_rate_limit,
    window_seconds=60,
)
session_rate_limiter = RateLimiter(
    "affiliate-sessions",
    max_requests=settings.click_rate_limit,
    window_seconds=60,
)

# ua-parser reports mobile builds as separate families; clicks are grouped by
# the browser itself, and device type is tracked on its own.
_BROWSER_ALIASES = {
    "Mobile Safari": "Safari",
    "Mobile Safari UI/WKWebView": "Safari",
    "Chrome Mobile": "Chrome",
    "Chrome Mobile iOS": "Chrome",
    "Chrome Mobile WebView": "Chrome",
    "Firefox Mobile": "Firefox",
    "Firefox iOS": "Firefox",
    "Edge Mobile": "Edge",
    "Opera Mobile": "Opera",
}
UNKNOWN_FAMILY = "Other"


def parse_user_agent(user_agent: str | None) -> tuple[str, str]:
    """Classify a User-Agent header into (device_type, browser).

    Anything that is neither a tablet nor a phone counts as desktop; a browser
    ua-parser cannot name is "unknown".
    """
    if not user_agent:
        return "unknown", "unknown"

    parsed = parse_ua_string(user_agent)
    if parsed.is_tablet:
        device = "tablet"
    elif parsed.is_mobile:
        device = "mobile"
    else:
        device = "desktop"

    family = parsed.browser.family
    if not family or family == UNKNOWN_FAMILY:
        return device, "unknown"
    return device, _BROWSER_ALIASES.get(family, family)


class TrackClickRequest(BaseModel):
    affiliate_name: str = Field(min_length=1, max_length=100)
    affiliate_url: str = Field(min_length=1, max_length=2000)
    category: str = Field(min_length=1, max_length=100)
    page_source: str = Field(min_length=1, max_length=255)
    session_id: str | None = Field(default=None, max_length=100)


class TrackClickResponse(BaseModel):
    id: str


@router.post(
    "/track-click",
    response_model=TrackClickResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(click_rate_limiter)],
)
async def track_click(
    payload: TrackClickRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> TrackClickResponse:
    """Record an outbound affiliate click."""
    user_agent = request.headers.get("User-Agent")
    device, browser = parse_user_agent(user_agent)

    click = AffiliateClick(
        affiliate_name=payload.affiliate_name,
        affiliate_url=payload.affiliate_url,
        category=payload.category,
        page_source=payload.page_source,
        session_id=payload.session_id,
        user_agent=user_agent,
        referrer=request.headers.get("Referer"),
        device_type=device,
        browser=browser,
    )
    db.add(click)
    await db.flush()
    if payload.session_id:
        await _count_session_click(db, payload.session_id)
    logger.info("affiliate_click_tracked", affiliate=payload.affiliate_name, device=device)
    return TrackClickResponse(id=click.id)


class TrackSessionRequest(BaseModel):
    session_id: str = Field(min_length=1, max_length=100)
    page: str | None = Field(default=None, max_length=255)


class TrackSessionResponse(BaseModel):
    session_id: str
    pages_visited: int
    affiliate_clicks: int


async def _count_session_click(db: AsyncSession, session_id: str) -> None:
    """Bump the click counter of a tracked session; untracked sessions are ignored."""
    await db.execute(
        update(AffiliateSession)
        .where(AffiliateSession.session_id == session_id)
        .values(
            affiliate_clicks=AffiliateSession.affiliate_clicks + 1,
            last_activity_at=utcnow(),
        )
    )


async def _count_page_view(db: AsyncSession, session_id: str) -> bool:
    """Add a page view to an existing session. False when the session is new."""
    result = await db.execute(
        update(AffiliateSession)
        .where(AffiliateSession.session_id == session_id)
        .values(
            pages_visited=AffiliateSession.pages_visited + 1,
            last_activity_at=utcnow(),
        )
    )
    return result.rowcount > 0


async def _start_session(db: AsyncSession, payload: TrackSessionRequest) -> bool:
    """Insert a session inside a savepoint; False if another request inserted it first."""
    try:
        async with db.begin_nested():
            db.add(AffiliateSession(session_id=payload.session_id, first_page=payload.page))
    except IntegrityError:
        logger.info("affiliate_session_insert_conflict", session_id=payload.session_id)
        return False
    return True


@router.post(
    "/track-session",
    response_model=TrackSessionResponse,
    dependencies=[Depends(session_rate_limiter)],
)
async def track_session(
    payload: TrackSessionRequest,
    db: AsyncSession = Depends(get_db),
) -> TrackSessionResponse:
    """Record a page view for a browsing session.

    The first view starts the session and remembers its landing page; later
    views with the same session id count toward pages visited.
    """
    if await _count_page_view(db, payload.session_id):
        event = "affiliate_session_page_viewed"
    elif await _start_session(db, payload):
        event = "affiliate_session_started"
    else:
        await _count_page_view(db, payload.session_id)
        event = "affiliate_session_page_viewed"

    result = await db.execute(
        select(AffiliateSession).where(AffiliateSession.session_id == payload.session_id)
    )
    session = result.scalar_one()
    logger.info(event, session_id=session.session_id, pages_visited=session.pages_visited)
    return TrackSessionResponse(
        session_id=session.session_id,
        pages_visited=session.pages_visited,
        affiliate_clicks=session.affiliate_clicks,
    )
