"""Persistence for learned merchant -> category mappings.

A mapping is learned whenever a user confirms or sets a category on a
transaction with a merchant. Later transactions from a merchant whose name
contains the stored pattern get that category automatically.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paywise.core.logging import get_logger
from paywise.models.transaction import MerchantCategory
from paywise.receipts.categorizer import LearnedMapping, categorize_merchant, normalize_merchant

logger = get_logger(__name__)


async def load_learned_mappings(
    session: AsyncSession,
    user_id: str,
) -> list[LearnedMapping]:
    """Get a user's learned mappings, longest pattern first.

    Longer patterns are more specific, so "shell gas" beats "shell".

    Args:
        session: Database session
        user_id: Owner of the mappings

    Returns:
        LearnedMapping values ready for categorize_merchant().
    """
    result = await session.execute(
        select(MerchantCategory).where(MerchantCategory.user_id == user_id)
    )
    rows = result.scalars().all()
    mappings = [
        LearnedMapping(
            merchant_pattern=row.merchant_pattern,
            category=row.category,
            subcategory=row.subcategory,
        )
        for row in rows
    ]
    return sorted(mappings, key=lambda m: len(m.merchant_pattern), reverse=True)


async def categorize_for_user(
    session: AsyncSession,
    user_id: str,
    merchant: str | None,
) -> tuple[str, str | None]:
    """categorize_merchant() with the user's learned mappings applied first."""
    if not merchant:
        return categorize_merchant(merchant)
    learned = await load_learned_mappings(session, user_id)
    return categorize_merchant(merchant, learned)


async def learn_merchant_category(
    session: AsyncSession,
    user_id: str,
    merchant: str,
    category: str,
    subcategory: str | None = None,
) -> MerchantCategory | None:
    """Insert or update the mapping for a merchant.

    Args:
        session: Database session
        user_id: Owner of the mapping
        merchant: Merchant name as entered; stored trimmed and lowercased
        category: needs, wants or savings
        subcategory: Optional finer grouping

    Returns:
        The stored mapping, or None when the merchant is blank.
    """
    pattern = normalize_merchant(merchant)
    if not pattern:
        return None

    result = await session.execute(
        select(MerchantCategory).where(
            MerchantCategory.user_id == user_id,
            MerchantCategory.merchant_pattern == pattern,
        )
    )
    mapping = result.scalar_one_or_none()
    if mapping is None:
        mapping = MerchantCategory(
            user_id=user_id,
            merchant_pattern=pattern,
            category=category,
            subcategory=subcategory,
        )
        session.add(mapping)
    else:
        mapping.category = category
        mapping.subcategory = subcategory

    await session.flush()
    logger.info("merchant_category_learned", merchant_pattern=pattern, category=category)
    return mapping
