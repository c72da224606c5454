"""Newsletter lead capture endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from paywise.api.deps import get_db
from paywise.core.config import settings
from paywise.core.logging import get_logger
from paywise.models import Lead
from paywise.security.rate_limiter import RateLimiter

logger = get_logger(__name__)

router = APIRouter(prefix="/api/leads", tags=["leads"])

lead_rate_limiter = RateLimiter(
    "leads",
    max_requests=settings.lead_rate_limit,
    window_seconds=settings.lead_rate_window_seconds,
    message="Too many signups from this address. Please try again later.",
)


class LeadCreateRequest(BaseModel):
    """Payload for capturing a lead."""

    email: EmailStr
    name: str | None = Field(default=None, max_length=255)
    income_range: str | None = Field(default=None, max_length=50)
    source: str | None = Field(default=None, max_length=100)


class UnsubscribeRequest(BaseModel):
    email: EmailStr


class LeadResponse(BaseModel):
    """Lead response model."""

    id: int
    email: str
    name: str | None
    income_range: str | None
    source: str
    unsubscribed: bool
    created_at: datetime
    updated_at: datetime | None


def to_lead_response(lead: Lead) -> LeadResponse:
    """Map SQLAlchemy lead model to response model."""
    return LeadResponse(
        id=lead.id,
        email=lead.email,
        name=lead.name,
        income_range=lead.income_range,
        source=lead.source,
        unsubscribed=lead.unsubscribed,
        created_at=lead.created_at,
        updated_at=lead.updated_at,
    )


async def _find_lead(db: AsyncSession, email: str) -> Lead | None:
    result = await db.execute(select(Lead).where(Lead.email == email))
    return result.scalar_one_or_none()


async def _insert_lead(db: AsyncSession, email: str, payload: LeadCreateRequest) -> Lead | None:
    """Insert a new lead inside a savepoint.

    Returns None when a concurrent signup inserted the same email first; the
    savepoint rollback leaves the rest of the transaction usable.
    """
    lead = Lead(
        email=email,
        name=payload.name,
        income_range=payload.income_range,
        source=payload.source or "calculator",
    )
    try:
        async with db.begin_nested():
            db.add(lead)
    except IntegrityError:
        logger.info("lead_insert_conflict", email=email)
        return None
    return lead


def _apply_resubmission(lead: Lead, payload: LeadCreateRequest) -> None:
    if payload.name is not None:
        lead.name = payload.name
    if payload.income_range is not None:
        lead.income_range = payload.income_range
    if payload.source is not None:
        lead.source = payload.source
    lead.unsubscribed = False


@router.post(
    "",
    response_model=LeadResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(lead_rate_limiter)],
)
async def capture_lead(
    payload: LeadCreateRequest,
    db: AsyncSession = Depends(get_db),
) -> LeadResponse:
    """Capture a newsletter signup.

    Re-submitting an email updates the fields that were provided and
    resubscribes the lead.
    """
    email = payload.email.strip().lower()
    lead = await _find_lead(db, email)

    if lead is None:
        lead = await _insert_lead(db, email, payload)
        if lead is not None:
            logger.info("lead_captured", lead_id=lead.id, email=lead.email, source=lead.source)
            return to_lead_response(lead)

        lead = await _find_lead(db, email)
        if lead is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Signup conflicted with another request, please retry",
            )

    _apply_resubmission(lead, payload)
    await db.flush()
    logger.info("lead_updated", lead_id=lead.id, email=lead.email, source=lead.source)
    return to_lead_response(lead)


@router.post("/unsubscribe", status_code=status.HTTP_200_OK)
async def unsubscribe(
    payload: UnsubscribeRequest,
    db: AsyncSession = Depends(get_db),
) -> dict[str, bool]:
    """Opt a lead out of email."""
    lead = await _find_lead(db, payload.email.strip().lower())
    if lead is None:
        raise HTTPException(status_code=404, detail="Email not found")

    lead.unsubscribed = True
    await db.flush()
    logger.info("lead_unsubscribed", lead_id=lead.id, email=lead.email)
    return {"unsubscribed": True}
