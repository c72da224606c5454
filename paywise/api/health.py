"""Liveness endpoint reporting database and Redis connectivity."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from paywise import __version__
from paywise.api.deps import get_db, get_redis
from paywise.core.config import settings
from paywise.core.logging import get_logger
from paywise.core.redis import check_redis_health

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["health"])

Connectivity = Literal["connected", "disconnected"]


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    db: Connectivity
    redis: Connectivity
    version: str
    tax_year: int


async def _database_reachable(db: AsyncSession) -> bool:
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.exception("database_health_check_failed", error=str(e))
        return False
    return True


def _connectivity(ok: bool) -> Connectivity:
    return "connected" if ok else "disconnected"


@router.get("/health", response_model=HealthResponse)
async def health_check(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> HealthResponse:
    """Always answers 200; "degraded" when either dependency is down.

    Calculators keep working without Redis (rate limiting fails open), so
    the check never fails hard.
    """
    db_ok = await _database_reachable(db)
    redis_ok = await check_redis_health(await get_redis(request))

    return HealthResponse(
        status="ok" if db_ok and redis_ok else "degraded",
        db=_connectivity(db_ok),
        redis=_connectivity(redis_ok),
        version=__version__,
        tax_year=settings.tax_year,
    )
