import logging
import time
from unittest.mock import AsyncMock

import pytest
from limits.aio.storage import MemoryStorage

from application_service.infrastructure.rate_limiter import (
    RateLimiter,
    create_rate_limiter,
)


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(time, "time", fake)
    return fake


@pytest.fixture
def rate_limiter():
    return RateLimiter(MemoryStorage(), logging.getLogger("test_rate_limiter"))


async def test_allows_up_to_limit(rate_limiter):
    results = [await rate_limiter.hit("user-1", limit=3, window_seconds=60) for _ in range(3)]

    assert all(result.allowed for result in results)
    assert [result.remaining for result in results] == [2, 1, 0]


async def test_rejects_over_limit_with_retry_after(rate_limiter, clock):
    for _ in range(60):
        assert (await rate_limiter.hit("user-1", limit=60, window_seconds=60)).allowed

    clock.now += 15
    result = await rate_limiter.hit("user-1", limit=60, window_seconds=60)

    assert result.allowed is False
    assert result.remaining == 0
    assert result.retry_after == 45


async def test_client_polling_over_limit_regains_access(rate_limiter, clock):
    for _ in range(5):
        assert (await rate_limiter.hit("user-1", limit=5, window_seconds=10)).allowed

    allowed = 0
    for _ in range(59):
        clock.now += 1
        if (await rate_limiter.hit("user-1", limit=5, window_seconds=10)).allowed:
            allowed += 1

    # about five per ten-second window once the first burst expires
    assert 20 <= allowed <= 30


async def test_rejected_hits_do_not_extend_the_window(rate_limiter, clock):
    assert (await rate_limiter.hit("user-1", limit=1, window_seconds=10)).allowed
    for _ in range(9):
        clock.now += 1
        assert not (await rate_limiter.hit("user-1", limit=1, window_seconds=10)).allowed

    clock.now += 2
    assert (await rate_limiter.hit("user-1", limit=1, window_seconds=10)).allowed


async def test_keys_are_independent(rate_limiter):
    assert (await rate_limiter.hit("user-1", limit=1, window_seconds=60)).allowed
    assert not (await rate_limiter.hit("user-1", limit=1, window_seconds=60)).allowed
    assert (await rate_limiter.hit("127.0.0.1", limit=1, window_seconds=60)).allowed


async def test_connect_checks_storage(caplog):
    caplog.set_level(logging.INFO)
    limiter = create_rate_limiter("async+memory://", logging.getLogger("test_rate_limiter"))

    await limiter.connect()

    assert "Rate limit storage ready: MemoryStorage" in caplog.text


async def test_connect_fails_when_storage_unreachable(caplog):
    storage = AsyncMock(spec=MemoryStorage)
    storage.check.return_value = False
    limiter = RateLimiter(storage, logging.getLogger("test_rate_limiter"))

    with pytest.raises(ConnectionError):
        await limiter.connect()
    assert "is unreachable" in caplog.text
