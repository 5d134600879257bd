# application_service/infrastructure/rate_limiter.py
"""Moving-window request limits backed by the ``limits`` package.

Only accepted requests take a slot in the window. A client that keeps
retrying over the cap is let through again once its oldest accepted request
falls out of the window.
"""
import logging
import math
import time
from dataclasses import dataclass

from limits import RateLimitItemPerSecond
from limits.aio.storage import Storage
from limits.aio.strategies import MovingWindowRateLimiter
from limits.storage import storage_from_string


@dataclass
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    retry_after: int


class RateLimiter:
    def __init__(
        self, storage: Storage, logger: logging.Logger, namespace: str = "ratelimit"
    ):
        self.storage = storage
        self.logger = logger
        self.namespace = namespace
        self.strategy = MovingWindowRateLimiter(storage)

    async def connect(self) -> None:
        if not await self.storage.check():
            self.logger.error(
                f"Rate limit storage {type(self.storage).__name__} is unreachable"
            )
            raise ConnectionError("Rate limit storage is unreachable")
        self.logger.info(f"Rate limit storage ready: {type(self.storage).__name__}")

    async def hit(self, key: str, limit: int, window_seconds: int) -> RateLimitResult:
        item = RateLimitItemPerSecond(limit, window_seconds, namespace=self.namespace)
        allowed = await self.strategy.hit(item, key)
        stats = await self.strategy.get_window_stats(item, key)

        if allowed:
            return RateLimitResult(True, limit, stats.remaining, 0)

        retry_after = max(1, math.ceil(stats.reset_time - time.time()))
        return RateLimitResult(False, limit, stats.remaining, retry_after)


def create_rate_limiter(storage_url: str, logger: logging.Logger) -> RateLimiter:
    return RateLimiter(storage_from_string(storage_url), logger)
