"""Redis sorted-set sliding window limiter."""

import time
from dataclasses import dataclass

import redis.asyncio as redis


@dataclass
class WindowResult:
    allowed: bool
    count: int
    limit: int

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count - 1)


class SlidingWindowLimiter:
    """Counts hits per key over the last ``window_seconds``."""

    def __init__(self, redis_url: str, limit: int, window_seconds: int = 60, prefix: str = "ratelimit") -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._prefix = prefix
        self._redis_url = redis_url
        self._redis: redis.Redis | None = None

    async def _get_redis(self) -> redis.Redis:
        if self._redis is None:
            self._redis = redis.from_url(self._redis_url, decode_responses=True)
        return self._redis

    async def hit(self, identifier: str) -> WindowResult:
        """Record one hit and report whether it fits in the window.

        Raises redis errors to the caller.
        """
        r = await self._get_redis()
        key = f"{self._prefix}:{identifier}"
        now = time.time()
        window_start = now - self.window_seconds

        pipe = r.pipeline()
        # Remove expired entries
        pipe.zremrangebyscore(key, 0, window_start)
        # Count requests in window
        pipe.zcard(key)
        # Add current request
        pipe.zadd(key, {str(now): now})
        pipe.expire(key, self.window_seconds)
        results = await pipe.execute()

        count = results[1]
        return WindowResult(allowed=count < self.limit, count=count, limit=self.limit)
