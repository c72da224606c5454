"""Request throttling."""

from paywise.security.rate_limiter import RateLimiter, client_identity

__all__ = ["RateLimiter", "client_identity"]
