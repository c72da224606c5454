"""Redis connection pool. Redis holds the rate limiter's per-client counters."""

import asyncio

import redis.asyncio as redis

from paywise.core.config import settings
from paywise.core.logging import get_logger

logger = get_logger(__name__)

KEY_PREFIX = "paywise"
HEALTH_TIMEOUT_SECONDS = 2.0


def build_key(*parts: str) -> str:
    """Join key parts under the application prefix, e.g. ``paywise:ratelimit:leads:1.2.3.4``."""
    return ":".join((KEY_PREFIX, *parts))


async def create_redis_pool() -> redis.Redis:
    """Create the shared Redis client from ``settings.redis_url``.

    Responses are decoded to str. The lifespan closes it with ``aclose()``.
    """
    return redis.Redis.from_url(
        settings.redis_url,
        decode_responses=True,
        max_connections=20,
    )


async def check_redis_health(pool: redis.Redis, timeout: float = HEALTH_TIMEOUT_SECONDS) -> bool:
    """Return True if Redis answers a PING within ``timeout`` seconds."""
    try:
        await asyncio.wait_for(pool.ping(), timeout=timeout)
    except Exception as e:
        logger.exception("redis_health_check_failed", error=str(e))
        return False
    return True
