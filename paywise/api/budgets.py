"""Budget snapshot endpoints.

Snapshots are scoped to the authenticated user: another user's snapshot id
behaves exactly like a missing one (404).
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paywise.api.calculators import (
    Amount,
    PositiveAmount,
    RecommendationResponse,
    money,
    to_recommendation_responses,
)
from paywise.api.deps import get_current_user, get_db
from paywise.budget.recommendations import evaluate
from paywise.budget.reference import SUBSCRIPTION_CATALOG, BudgetCategoryId, SubscriptionCategory
from paywise.budget.spending import summarize_snapshot, to_decimal
from paywise.core.logging import get_logger
from paywise.income.projector import Frequency
from paywise.models import BudgetSnapshot, User

logger = get_logger(__name__)

router = APIRouter(prefix="/api/budgets", tags=["budgets"])


class FrequencyEntry(BaseModel):
    """A recurring expense answered as an amount per occurrence."""

    frequency: Frequency
    amount: Amount


class BudgetSnapshotRequest(BaseModel):
    """Payload for saving or replacing a budget snapshot.

    Every field except name is required; custom_sub_amounts may be null.
    """

    name: str | None = Field(default=None, max_length=255)
    fixed_expenses: dict[BudgetCategoryId, Amount]
    frequency_data: dict[BudgetCategoryId, FrequencyEntry]
    selected_subscriptions: list[str]
    custom_sub_amounts: dict[SubscriptionCategory, Amount] | None
    monthly_income: PositiveAmount

    @field_validator("selected_subscriptions")
    @classmethod
    def validate_selected(cls, value: list[str]) -> list[str]:
        unknown = [plan_id for plan_id in value if plan_id not in SUBSCRIPTION_CATALOG]
        if unknown:
            raise ValueError(f"Unknown subscriptions: {', '.join(unknown)}")
        return list(dict.fromkeys(value))


class FrequencyEntryResponse(BaseModel):
    frequency: str
    amount: float


class BudgetSnapshotResponse(BaseModel):
    """Budget snapshot response model."""

    id: str
    name: str | None
    fixed_expenses: dict[str, float]
    frequency_data: dict[str, FrequencyEntryResponse]
    selected_subscriptions: list[str]
    custom_sub_amounts: dict[str, float] | None
    monthly_income: float
    created_at: datetime
    updated_at: datetime | None


class SnapshotRecommendationsResponse(BaseModel):
    snapshot_id: str
    monthly_income: float
    spending: dict[str, float]
    recommendations: list[RecommendationResponse]


def _amounts_to_json(amounts: dict) -> dict[str, float]:
    """Store amounts as plain JSON numbers keyed by enum value."""
    return {getattr(key, "value", key): float(amount) for key, amount in amounts.items()}


def _apply_payload(snapshot: BudgetSnapshot, payload: BudgetSnapshotRequest) -> None:
    snapshot.name = payload.name.strip() if payload.name else None
    snapshot.fixed_expenses = _amounts_to_json(payload.fixed_expenses)
    snapshot.frequency_data = {
        key.value: {"frequency": entry.frequency.value, "amount": float(entry.amount)}
        for key, entry in payload.frequency_data.items()
    }
    snapshot.selected_subscriptions = list(payload.selected_subscriptions)
    snapshot.custom_sub_amounts = (
        _amounts_to_json(payload.custom_sub_amounts)
        if payload.custom_sub_amounts is not None
        else None
    )
    snapshot.monthly_income = payload.monthly_income


def _to_snapshot_response(snapshot: BudgetSnapshot) -> BudgetSnapshotResponse:
    """Map SQLAlchemy snapshot model to response model."""
    return BudgetSnapshotResponse(
        id=snapshot.id,
        name=snapshot.name,
        fixed_expenses={k: float(v) for k, v in snapshot.fixed_expenses.items()},
        frequency_data={
            k: FrequencyEntryResponse(frequency=v["frequency"], amount=float(v["amount"]))
            for k, v in snapshot.frequency_data.items()
        },
        selected_subscriptions=list(snapshot.selected_subscriptions),
        custom_sub_amounts=(
            {k: float(v) for k, v in snapshot.custom_sub_amounts.items()}
            if snapshot.custom_sub_amounts is not None
            else None
        ),
        monthly_income=float(snapshot.monthly_income),
        created_at=snapshot.created_at,
        updated_at=snapshot.updated_at,
    )


async def _get_owned_snapshot(
    db: AsyncSession, snapshot_id: str, user: User
) -> BudgetSnapshot:
    result = await db.execute(
        select(BudgetSnapshot).where(
            BudgetSnapshot.id == snapshot_id,
            BudgetSnapshot.user_id == user.id,
        )
    )
    snapshot = result.scalar_one_or_none()
    if snapshot is None:
        raise HTTPException(status_code=404, detail="Budget snapshot not found")
    return snapshot


@router.post("", response_model=BudgetSnapshotResponse, status_code=status.HTTP_201_CREATED)
async def create_snapshot(
    payload: BudgetSnapshotRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> BudgetSnapshotResponse:
    """Save the current budget questionnaire answers."""
    snapshot = BudgetSnapshot(user_id=user.id)
    _apply_payload(snapshot, payload)
    db.add(snapshot)
    await db.flush()
    logger.info("budget_snapshot_saved", snapshot_id=snapshot.id)
    return _to_snapshot_response(snapshot)


@router.get("/latest", response_model=BudgetSnapshotResponse)
async def get_latest_snapshot(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> BudgetSnapshotResponse:
    """Most recently saved snapshot."""
    result = await db.execute(
        select(BudgetSnapshot)
        .where(BudgetSnapshot.user_id == user.id)
        .order_by(BudgetSnapshot.created_at.desc())
        .limit(1)
    )
    snapshot = result.scalar_one_or_none()
    if snapshot is None:
        raise HTTPException(status_code=404, detail="No budget snapshots saved")
    return _to_snapshot_response(snapshot)


@router.get("/history", response_model=list[BudgetSnapshotResponse])
async def list_snapshots(
    limit: int = Query(default=10, ge=1, le=50),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[BudgetSnapshotResponse]:
    """Saved snapshots, newest first."""
    result = await db.execute(
        select(BudgetSnapshot)
        .where(BudgetSnapshot.user_id == user.id)
        .order_by(BudgetSnapshot.created_at.desc())
        .limit(limit)
    )
    return [_to_snapshot_response(s) for s in result.scalars().all()]


@router.get("/{snapshot_id}", response_model=BudgetSnapshotResponse)
async def get_snapshot(
    snapshot_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> BudgetSnapshotResponse:
    """Get snapshot by ID."""
    snapshot = await _get_owned_snapshot(db, snapshot_id, user)
    return _to_snapshot_response(snapshot)


@router.put("/{snapshot_id}", response_model=BudgetSnapshotResponse)
async def update_snapshot(
    snapshot_id: str,
    payload: BudgetSnapshotRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> BudgetSnapshotResponse:
    """Replace a snapshot's answers. Last write wins."""
    snapshot = await _get_owned_snapshot(db, snapshot_id, user)
    _apply_payload(snapshot, payload)
    await db.flush()
    logger.info("budget_snapshot_updated", snapshot_id=snapshot.id)
    return _to_snapshot_response(snapshot)


@router.delete("/{snapshot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_snapshot(
    snapshot_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Response:
    snapshot = await _get_owned_snapshot(db, snapshot_id, user)
    await db.delete(snapshot)
    await db.flush()
    logger.info("budget_snapshot_deleted", snapshot_id=snapshot_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{snapshot_id}/recommendations", response_model=SnapshotRecommendationsResponse)
async def snapshot_recommendations(
    snapshot_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> SnapshotRecommendationsResponse:
    """Evaluate a saved snapshot against the budgeting guidelines."""
    snapshot = await _get_owned_snapshot(db, snapshot_id, user)
    spending = summarize_snapshot(
        snapshot.fixed_expenses,
        snapshot.frequency_data,
        snapshot.selected_subscriptions,
        snapshot.custom_sub_amounts,
    )
    monthly_income = to_decimal(snapshot.monthly_income)
    return SnapshotRecommendationsResponse(
        snapshot_id=snapshot.id,
        monthly_income=money(monthly_income),
        spending={category.value: money(amount) for category, amount in spending.items()},
        recommendations=to_recommendation_responses(evaluate(spending, monthly_income)),
    )
