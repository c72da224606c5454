"""Expense transaction endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, Field
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from paywise.api.deps import get_current_user, get_db
from paywise.core.logging import get_logger
from paywise.models import Transaction, TransactionSource, User
from paywise.receipts.mappings import categorize_for_user, learn_merchant_category

logger = get_logger(__name__)

router = APIRouter(prefix="/api/transactions", tags=["transactions"])

Category = Literal["needs", "wants", "savings"]


class TransactionCreateRequest(BaseModel):
    """Payload for recording an expense.

    When category is omitted it is derived from the merchant name.
    """

    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    merchant: str | None = Field(default=None, max_length=255)
    description: str | None = None
    category: Category | None = None
    subcategory: str | None = Field(default=None, max_length=50)
    transaction_date: date = Field(default_factory=date.today)


class TransactionUpdateRequest(BaseModel):
    """Payload for updating a transaction."""

    amount: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    merchant: str | None = Field(default=None, max_length=255)
    description: str | None = None
    category: Category | None = None
    subcategory: str | None = Field(default=None, max_length=50)
    transaction_date: date | None = None


class LearnCategoryRequest(BaseModel):
    merchant: str = Field(min_length=1, max_length=255)
    category: Category
    subcategory: str | None = Field(default=None, max_length=50)


class TransactionResponse(BaseModel):
    """Transaction response model."""

    id: str
    amount: float
    merchant: str | None
    description: str | None
    category: str
    subcategory: str | None
    transaction_date: date
    source: str
    confidence_score: float | None
    created_at: datetime
    updated_at: datetime | None


class TransactionListResponse(BaseModel):
    """Paginated transaction list response."""

    items: list[TransactionResponse]
    total: int
    page: int
    limit: int


class CategoryTotal(BaseModel):
    category: str
    total: float
    count: int


class SubcategoryTotal(BaseModel):
    category: str
    subcategory: str | None
    total: float
    count: int


class TransactionSummaryResponse(BaseModel):
    start_date: date
    end_date: date
    total: float
    count: int
    by_category: list[CategoryTotal]
    by_subcategory: list[SubcategoryTotal]


def to_transaction_response(transaction: Transaction) -> TransactionResponse:
    """Map SQLAlchemy transaction model to response model."""
    return TransactionResponse(
        id=transaction.id,
        amount=float(transaction.amount),
        merchant=transaction.merchant,
        description=transaction.description,
        category=transaction.category,
        subcategory=transaction.subcategory,
        transaction_date=transaction.transaction_date,
        source=transaction.source.value,
        confidence_score=transaction.confidence_score,
        created_at=transaction.created_at,
        updated_at=transaction.updated_at,
    )


async def get_owned_transaction(
    db: AsyncSession, transaction_id: str, user: User
) -> Transaction:
    """Load a transaction owned by the user or raise 404."""
    result = await db.execute(
        select(Transaction).where(
            Transaction.id == transaction_id,
            Transaction.user_id == user.id,
        )
    )
    transaction = result.scalar_one_or_none()
    if transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


def _month_bounds(today: date) -> tuple[date, date]:
    start = today.replace(day=1)
    if start.month == 12:
        next_month = start.replace(year=start.year + 1, month=1)
    else:
        next_month = start.replace(month=start.month + 1)
    return start, date.fromordinal(next_month.toordinal() - 1)


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionListResponse:
    """List transactions newest first, optionally within a date range."""
    filters = [Transaction.user_id == user.id]
    if start_date is not None:
        filters.append(Transaction.transaction_date >= start_date)
    if end_date is not None:
        filters.append(Transaction.transaction_date <= end_date)
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must be on or before end_date")

    total_result = await db.execute(select(func.count(Transaction.id)).where(*filters))
    total = int(total_result.scalar() or 0)

    result = await db.execute(
        select(Transaction)
        .where(*filters)
        .order_by(Transaction.transaction_date.desc(), Transaction.created_at.desc())
        .limit(limit)
        .offset((page - 1) * limit)
    )
    return TransactionListResponse(
        items=[to_transaction_response(t) for t in result.scalars().all()],
        total=total,
        page=page,
        limit=limit,
    )


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: TransactionCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    """Record a manual expense."""
    merchant = payload.merchant.strip() if payload.merchant else None

    if payload.category is None:
        category, subcategory = await categorize_for_user(db, user.id, merchant)
    else:
        category, subcategory = payload.category, payload.subcategory
        if merchant:
            await learn_merchant_category(db, user.id, merchant, category, subcategory)

    transaction = Transaction(
        user_id=user.id,
        amount=payload.amount,
        merchant=merchant,
        description=payload.description,
        category=category,
        subcategory=subcategory,
        transaction_date=payload.transaction_date,
        source=TransactionSource.MANUAL,
    )
    db.add(transaction)
    await db.flush()
    logger.info("transaction_created", transaction_id=transaction.id, category=category)
    return to_transaction_response(transaction)


@router.get("/stats/summary", response_model=TransactionSummaryResponse)
async def transaction_summary(
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionSummaryResponse:
    """Spending totals per category and subcategory. Defaults to this month."""
    month_start, month_end = _month_bounds(date.today())
    start = start_date or month_start
    end = end_date or month_end

    filters = [
        Transaction.user_id == user.id,
        Transaction.transaction_date >= start,
        Transaction.transaction_date <= end,
    ]
    result = await db.execute(
        select(
            Transaction.category,
            Transaction.subcategory,
            func.sum(Transaction.amount),
            func.count(Transaction.id),
        )
        .where(*filters)
        .group_by(Transaction.category, Transaction.subcategory)
        .order_by(Transaction.category, Transaction.subcategory)
    )
    rows = result.all()

    by_subcategory: list[SubcategoryTotal] = []
    category_totals: dict[str, tuple[Decimal, int]] = {}
    for category, subcategory, amount, count in rows:
        amount = Decimal(str(amount or 0))
        by_subcategory.append(
            SubcategoryTotal(
                category=category, subcategory=subcategory, total=float(amount), count=count
            )
        )
        total, total_count = category_totals.get(category, (Decimal("0"), 0))
        category_totals[category] = (total + amount, total_count + count)

    return TransactionSummaryResponse(
        start_date=start,
        end_date=end,
        total=float(sum((t for t, _ in category_totals.values()), Decimal("0"))),
        count=sum(c for _, c in category_totals.values()),
        by_category=[
            CategoryTotal(category=category, total=float(total), count=count)
            for category, (total, count) in category_totals.items()
        ],
        by_subcategory=by_subcategory,
    )


@router.post("/learn-category", status_code=status.HTTP_204_NO_CONTENT)
async def learn_category(
    payload: LearnCategoryRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Remember a category for a merchant."""
    mapping = await learn_merchant_category(
        db, user.id, payload.merchant, payload.category, payload.subcategory
    )
    if mapping is None:
        raise HTTPException(status_code=400, detail="Merchant is required")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    """Get transaction by ID."""
    return to_transaction_response(await get_owned_transaction(db, transaction_id, user))


@router.patch("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: str,
    payload: TransactionUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    """Partially update transaction fields."""
    transaction = await get_owned_transaction(db, transaction_id, user)

    updates = payload.model_dump(exclude_unset=True)
    for field_name in ("amount", "description", "subcategory", "transaction_date", "category"):
        if field_name in updates and (
            updates[field_name] is not None or field_name in ("description", "subcategory")
        ):
            setattr(transaction, field_name, updates[field_name])
    if "merchant" in updates:
        transaction.merchant = updates["merchant"].strip() if updates["merchant"] else None

    await db.flush()
    return to_transaction_response(transaction)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Response:
    transaction = await get_owned_transaction(db, transaction_id, user)
    await db.delete(transaction)
    await db.flush()
    logger.info("transaction_deleted", transaction_id=transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
