"""Request context middleware for correlation ID tracking."""

import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from paywise.core.logging import request_id_ctx, user_id_ctx

RequestResponseEndpoint = Callable[[Request], Awaitable[Response]]


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id to every log line emitted while handling a request.

    Honors an incoming X-Request-ID header, otherwise generates one, and
    echoes it back on the response. The user id context is reset per request;
    the auth dependency fills it in.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_token = request_id_ctx.set(request_id)
        user_token = user_id_ctx.set(None)

        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(request_token)
            user_id_ctx.reset(user_token)

        response.headers["X-Request-ID"] = request_id
        return response
