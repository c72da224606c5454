"""Receipt text parsing and merchant categorization."""

from paywise.receipts.categorizer import (
    MERCHANT_RULES,
    LearnedMapping,
    categorize_merchant,
    normalize_merchant,
)
from paywise.receipts.parser import (
    ExtractedReceipt,
    extract_date,
    extract_merchant,
    extract_total,
    needs_review,
    parse_receipt_text,
)

__all__ = [
    "MERCHANT_RULES",
    "LearnedMapping",
    "categorize_merchant",
    "normalize_merchant",
    "ExtractedReceipt",
    "extract_date",
    "extract_merchant",
    "extract_total",
    "needs_review",
    "parse_receipt_text",
]
