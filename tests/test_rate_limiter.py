# File: tests/test_rate_limiter.py
import asyncio
import time

import pytest

from site_mapper.crawler.rate_limiter import RateLimiter


@pytest.mark.asyncio()
async def test_permits_are_spaced():
    limiter = RateLimiter(20)
    start = time.monotonic()
    for _ in range(5):
        await limiter.acquire()
    elapsed = time.monotonic() - start
    # first permit is immediate, the next four wait 1/20 s each
    assert elapsed >= 4 * 0.05 * 0.9


@pytest.mark.asyncio()
async def test_permits_are_shared_between_tasks():
    limiter = RateLimiter(10)
    stamps: list[float] = []

    async def worker():
        for _ in range(2):
            await limiter.acquire()
            stamps.append(time.monotonic())

    await asyncio.gather(worker(), worker())
    stamps.sort()
    gaps = [b - a for a, b in zip(stamps, stamps[1:])]
    assert all(gap >= 0.1 * 0.9 for gap in gaps)


def test_rate_must_be_positive():
    with pytest.raises(ValueError):
        RateLimiter(0)
