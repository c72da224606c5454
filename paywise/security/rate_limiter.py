"""Fixed-window rate limiting backed by Redis.

Each client gets one counter per window: INCR on every request, EXPIRE when
the counter is created. Counters disappear on their own once the window ends,
so nothing needs periodic cleanup.

Usage as a route dependency:
    lead_limiter = RateLimiter("leads", max_requests=5, window_seconds=3600)

    @router.post("/leads", dependencies=[Depends(lead_limiter)])
    async def capture_lead(...): ...
"""

from fastapi import HTTPException, Request, Response, status
from redis.exceptions import RedisError

from paywise.core.config import settings
from paywise.core.logging import get_logger
from paywise.core.redis import build_key

logger = get_logger(__name__)


def client_identity(request: Request, trusted_hops: int | None = None) -> str:
    """Identify the caller for rate limiting.

    X-Forwarded-For is client-controlled except for the entries our own proxies
    append, so only the last ``trusted_hops`` entries are believed. With no
    trusted hops the socket peer is used and the header is ignored.
    """
    hops = settings.trusted_proxy_hops if trusted_hops is None else trusted_hops
    peer = request.client.host if request.client is not None else "unknown"
    if not hops:
        return peer

    forwarded = [
        part.strip()
        for part in request.headers.get("X-Forwarded-For", "").split(",")
        if part.strip()
    ]
    # Walk back from the peer: each trusted proxy vouches for the entry before it.
    chain = [peer, *reversed(forwarded)]
    return chain[min(hops, len(chain) - 1)]


class RateLimiter:
    """FastAPI dependency enforcing ``max_requests`` per ``window_seconds``.

    Sets X-RateLimit-Limit and X-RateLimit-Remaining on allowed responses and
    raises 429 with Retry-After once the limit is exceeded. If Redis is
    unreachable the request is allowed and the failure is logged.
    """

    def __init__(
        self,
        name: str,
        max_requests: int,
        window_seconds: int,
        message: str = "Too many requests, please try again later",
    ) -> None:
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message

    def key_for(self, identity: str) -> str:
        return build_key("ratelimit", self.name, identity)

    async def hit(self, redis_client, identity: str) -> tuple[int, int]:
        """Count one request.

        Returns:
            Tuple of (requests so far in this window, seconds until it resets).
        """
        key = self.key_for(identity)
        count = await redis_client.incr(key)
        if count == 1:
            await redis_client.expire(key, self.window_seconds)
            return count, self.window_seconds

        ttl = await redis_client.ttl(key)
        if ttl is None or ttl < 0:
            # Counter lost its expiry; restart the window.
            await redis_client.expire(key, self.window_seconds)
            ttl = self.window_seconds
        return count, ttl

    async def __call__(self, request: Request, response: Response) -> None:
        identity = client_identity(request)
        try:
            count, retry_after = await self.hit(request.app.state.redis, identity)
        except RedisError as e:
            logger.warning("rate_limit_unavailable", limiter=self.name, error=str(e))
            return

        if count > self.max_requests:
            logger.info(
                "rate_limit_exceeded",
                limiter=self.name,
                client=identity,
                count=count,
            )
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=self.message,
                headers={"Retry-After": str(retry_after)},
            )

        response.headers["X-RateLimit-Limit"] = str(self.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(max(0, self.max_requests - count))
