"""Tests for Redis helpers."""

import asyncio

import pytest

from paywise.core.redis import build_key, check_redis_health


class PingingRedis:
    def __init__(self, delay: float = 0.0, error: Exception | None = None) -> None:
        self.delay = delay
        self.error = error

    async def ping(self) -> bool:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return True


def test_build_key_namespaces_parts() -> None:
    assert build_key("ratelimit", "leads", "203.0.113.7") == "paywise:ratelimit:leads:203.0.113.7"


@pytest.mark.asyncio
async def test_health_true_when_ping_answers() -> None:
    assert await check_redis_health(PingingRedis()) is True


@pytest.mark.asyncio
async def test_health_false_on_error() -> None:
    assert await check_redis_health(PingingRedis(error=ConnectionError("refused"))) is False


@pytest.mark.asyncio
async def test_health_false_on_slow_ping() -> None:
    assert await check_redis_health(PingingRedis(delay=0.2), timeout=0.01) is False
