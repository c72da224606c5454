"""Extract total, merchant and date from OCR'd receipt text.

Receipts vary wildly, so every extractor is a heuristic that returns None
rather than guessing when nothing matches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation

REVIEW_CONFIDENCE_THRESHOLD = 0.7
MERCHANT_SEARCH_LINES = 5
# Column limits of the transaction a scan is stored as.
MAX_MERCHANT_LENGTH = 255
MAX_TOTAL = Decimal("9999999999.99")

# Ordered by preference; each is tried against every line, bottom-up.
TOTAL_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(rf"\b{label}\b[^\d$]*\$?\s*([\d,]+\.\d{{2}})", re.IGNORECASE)
    for label in (
        r"grand\s+total",
        r"amount\s+due",
        r"total",
        r"balance",
        r"subtotal",
        r"payment",
    )
)
AMOUNT_PATTERN = re.compile(r"\$?([\d,]+\.\d{2})")

_MONTHS = "jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec"
DATE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b"), "ymd"),
    (re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})\b"), "mdy"),
    (re.compile(r"\b(\d{1,2})-(\d{1,2})-(\d{4}|\d{2})\b"), "mdy"),
    (re.compile(rf"\b({_MONTHS})[a-z]*\.?\s+(\d{{1,2}}),?\s+(\d{{4}})\b", re.IGNORECASE), "bdy"),
    (re.compile(rf"\b(\d{{1,2}})\s+({_MONTHS})[a-z]*\.?,?\s+(\d{{4}})\b", re.IGNORECASE), "dby"),
)
_DATE_LIKE = re.compile(r"^[\d/\-.\s:]+$")
_MERCHANT_CLEAN = re.compile(r"[^\w\s&'-]")


@dataclass(frozen=True)
class ExtractedReceipt:
    total: Decimal | None
    merchant: str | None
    date: date | None

    @property
    def has_total(self) -> bool:
        """Whether the total can be recorded as a transaction amount."""
        return self.total is not None and 0 < self.total <= MAX_TOTAL


def _to_amount(raw: str) -> Decimal | None:
    try:
        return Decimal(raw.replace(",", ""))
    except InvalidOperation:
        return None


def extract_total(text: str) -> Decimal | None:
    """Find the receipt total.

    Labelled lines win, searched from the bottom of the receipt up since the
    final total follows any subtotals. Without a label the largest amount on
    the receipt is used.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]

    for pattern in TOTAL_PATTERNS:
        for line in reversed(lines):
            match = pattern.search(line)
            if match:
                amount = _to_amount(match.group(1))
                if amount is not None and amount > 0:
                    return amount

    amounts = [_to_amount(match) for match in AMOUNT_PATTERN.findall(text)]
    amounts = [a for a in amounts if a is not None and a > 0]
    return max(amounts) if amounts else None


def extract_merchant(text: str) -> str | None:
    """Take the first plausible store name from the top of the receipt."""
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    for line in lines[:MERCHANT_SEARCH_LINES]:
        if line.isdigit() or _DATE_LIKE.match(line):
            continue
        if line.startswith(("#", "*")):
            continue
        cleaned = " ".join(_MERCHANT_CLEAN.sub("", line).split())
        if len(cleaned) >= 2 and not cleaned.isdigit():
            return cleaned[:MAX_MERCHANT_LENGTH].rstrip()
    return None


def _build_date(year: int, month: int, day: int) -> date | None:
    if year < 100:
        year += 2000
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _month_number(name: str) -> int:
    return _MONTHS.split("|").index(name[:3].lower()) + 1


def extract_date(text: str) -> date | None:
    """Find the first recognizable purchase date."""
    for pattern, order in DATE_PATTERNS:
        for match in pattern.finditer(text):
            a, b, c = match.groups()
            if order == "ymd":
                parsed = _build_date(int(a), int(b), int(c))
            elif order == "mdy":
                parsed = _build_date(int(c), int(a), int(b))
            elif order == "bdy":
                parsed = _build_date(int(c), _month_number(a), int(b))
            else:
                parsed = _build_date(int(c), _month_number(b), int(a))
            if parsed is not None:
                return parsed
    return None


def parse_receipt_text(text: str) -> ExtractedReceipt:
    """Run every extractor over OCR text."""
    return ExtractedReceipt(
        total=extract_total(text),
        merchant=extract_merchant(text),
        date=extract_date(text),
    )


def needs_review(receipt: ExtractedReceipt, confidence: float) -> bool:
    """Whether a scan should be confirmed by the user before it is trusted."""
    return confidence < REVIEW_CONFIDENCE_THRESHOLD or not receipt.has_total
