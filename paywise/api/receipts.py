"""Receipt scan endpoints.

OCR runs on the client or an upstream service; this API receives the
recognized text and its confidence, extracts the transaction fields and
records a pending transaction the user can confirm.
"""

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from paywise.api.deps import get_current_user, get_db
from paywise.api.transactions import (
    Category,
    TransactionResponse,
    get_owned_transaction,
    to_transaction_response,
)
from paywise.core.logging import get_logger
from paywise.models import Transaction, TransactionSource, User
from paywise.receipts.mappings import categorize_for_user, learn_merchant_category
from paywise.receipts.parser import needs_review, parse_receipt_text

logger = get_logger(__name__)

router = APIRouter(prefix="/api/receipts", tags=["receipts"])


class ReceiptScanRequest(BaseModel):
    """OCR output for one receipt."""

    ocr_text: str = Field(min_length=1)
    confidence: float = Field(ge=0, le=1)
    receipt_path: str | None = Field(default=None, max_length=500)


class ExtractedFields(BaseModel):
    total: float | None
    merchant: str | None
    transaction_date: date | None


class ReceiptScanResponse(BaseModel):
    """Result of a scan.

    transaction_id is null when no positive total could be extracted.
    """

    transaction_id: str | None
    extracted: ExtractedFields
    category: str
    subcategory: str | None
    confidence: float
    needs_review: bool


class ReceiptConfirmRequest(BaseModel):
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    merchant: str | None = Field(default=None, max_length=255)
    category: Category
    subcategory: str | None = Field(default=None, max_length=50)
    transaction_date: date


@router.post("/scan", response_model=ReceiptScanResponse)
async def scan_receipt(
    payload: ReceiptScanRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> ReceiptScanResponse:
    """Extract a transaction from receipt text."""
    extracted = parse_receipt_text(payload.ocr_text)
    category, subcategory = await categorize_for_user(db, user.id, extracted.merchant)

    transaction_id: str | None = None
    if extracted.has_total:
        transaction = Transaction(
            user_id=user.id,
            amount=extracted.total,
            merchant=extracted.merchant,
            category=category,
            subcategory=subcategory,
            transaction_date=extracted.date or date.today(),
            source=TransactionSource.RECEIPT_SCAN,
            receipt_path=payload.receipt_path,
            ocr_raw_text=payload.ocr_text,
            confidence_score=payload.confidence,
        )
        db.add(transaction)
        await db.flush()
        transaction_id = transaction.id

    review = needs_review(extracted, payload.confidence)
    logger.info(
        "receipt_scanned",
        transaction_id=transaction_id,
        confidence=payload.confidence,
        needs_review=review,
    )
    return ReceiptScanResponse(
        transaction_id=transaction_id,
        extracted=ExtractedFields(
            total=float(extracted.total) if extracted.total is not None else None,
            merchant=extracted.merchant,
            transaction_date=extracted.date,
        ),
        category=category,
        subcategory=subcategory,
        confidence=payload.confidence,
        needs_review=review,
    )


@router.post("/confirm/{transaction_id}", response_model=TransactionResponse)
async def confirm_receipt(
    transaction_id: str,
    payload: ReceiptConfirmRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    """Apply the user's corrections to a scanned transaction.

    The confirmed category is remembered for the merchant.
    """
    transaction = await get_owned_transaction(db, transaction_id, user)
    merchant = payload.merchant.strip() if payload.merchant else None

    transaction.amount = payload.amount
    transaction.merchant = merchant
    transaction.category = payload.category
    transaction.subcategory = payload.subcategory
    transaction.transaction_date = payload.transaction_date

    if merchant:
        await learn_merchant_category(
            db, user.id, merchant, payload.category, payload.subcategory
        )

    await db.flush()
    logger.info("receipt_confirmed", transaction_id=transaction.id)
    return to_transaction_response(transaction)
