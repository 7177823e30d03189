"""Per-client request rate limiting middleware."""

import hashlib
import logging
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.config import Settings
from app.services.rate_limiter import SlidingWindowLimiter

logger = logging.getLogger(__name__)

_SKIP_PATHS = ("/health", "/health/ready", "/metrics")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding window limit per bearer token or client IP."""

    def __init__(self, app, settings: Settings) -> None:
        super().__init__(app)
        self._limiter = SlidingWindowLimiter(
            redis_url=settings.redis_url,
            limit=settings.rate_limit_per_minute,
            window_seconds=60,
        )

    def _extract_identifier(self, request: Request) -> str | None:
        auth = request.headers.get("authorization", "")
        if auth.startswith("Bearer "):
            # Hash the token; never keep it
            return hashlib.sha256(auth[7:].encode()).hexdigest()[:16]
        if request.client:
            return f"ip:{request.client.host}"
        return None

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        identifier = self._extract_identifier(request)
        if not identifier:
            return await call_next(request)

        try:
            window = await self._limiter.hit(identifier)
        except Exception as e:
            # If Redis is down, allow the request (fail open)
            logger.warning("Rate limit Redis error: %s", e)
            return await call_next(request)

        if not window.allowed:
            return JSONResponse(
                status_code=429,
                content={"error": "Rate limit exceeded. Try again later."},
                headers={
                    "Retry-After": str(self._limiter.window_seconds),
                    "X-RateLimit-Limit": str(window.limit),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(window.limit)
        response.headers["X-RateLimit-Remaining"] = str(window.remaining)
        return response
