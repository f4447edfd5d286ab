"""Rate Limiter — token bucket burst, refill, per-client isolation."""

import asyncio

import pytest

from costing_master.core.errors import RateLimitedError
from costing_master.infrastructure import rate_limit as rate_limit_module
from costing_master.infrastructure.rate_limit import (
    RateLimiter, TokenBucket, cleanup_loop, start_cleanup, stop_cleanup,
)


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_bucket_allows_burst_then_refuses():
    clock = _Clock()
    bucket = TokenBucket(capacity=3, refill_rate=1.0, clock=clock)
    assert [bucket.allow() for _ in range(4)] == [True, True, True, False]


def test_bucket_refills_over_time_capped_at_capacity():
    clock = _Clock()
    bucket = TokenBucket(capacity=2, refill_rate=2.0, clock=clock)
    bucket.allow()
    bucket.allow()
    assert bucket.allow() is False
    clock.now += 0.5
    assert bucket.allow() is True
    clock.now += 100
    assert [bucket.allow() for _ in range(3)] == [True, True, False]


def test_clients_are_isolated():
    limiter = RateLimiter(burst=1, per_second=0.0, clock=_Clock())
    limiter.check("10.0.0.1")
    limiter.check("10.0.0.2")
    with pytest.raises(RateLimitedError) as exc_info:
        limiter.check("10.0.0.1")
    assert exc_info.value.client == "10.0.0.1"
    assert str(exc_info.value) == "Rate limit exceeded"


def test_cleanup_drops_idle_buckets():
    clock = _Clock()
    limiter = RateLimiter(burst=5, per_second=1.0, clock=clock)
    limiter.allow("a")
    clock.now += 120
    limiter.allow("b")
    assert limiter.cleanup(max_idle_seconds=60) == 1
    assert limiter.cleanup(max_idle_seconds=60) == 0


async def test_cleanup_loop_releases_buckets_of_departed_clients():
    clock = _Clock()
    limiter = RateLimiter(burst=5, per_second=1.0, clock=clock)
    for i in range(10_000):
        limiter.check(f"10.{i // 65536}.{(i // 256) % 256}.{i % 256}")
    assert len(limiter) == 10_000

    clock.now += 400
    task = asyncio.create_task(
        cleanup_loop(limiter, interval_seconds=0.001, max_idle_seconds=300),
    )
    await asyncio.sleep(0.05)
    await stop_cleanup(task)

    assert len(limiter) == 0
    assert task.cancelled()


async def test_cleanup_loop_keeps_active_clients():
    clock = _Clock()
    limiter = RateLimiter(burst=5, per_second=1.0, clock=clock)
    limiter.check("idle")
    clock.now += 400
    limiter.check("busy")
    task = asyncio.create_task(
        cleanup_loop(limiter, interval_seconds=0.001, max_idle_seconds=300),
    )
    await asyncio.sleep(0.02)
    await stop_cleanup(task)
    assert len(limiter) == 1


async def test_start_cleanup_follows_enabled_limiter(monkeypatch):
    monkeypatch.setattr(rate_limit_module, "rate_limiter", None)
    assert start_cleanup(60, 300) is None
    await stop_cleanup(None)

    monkeypatch.setattr(
        rate_limit_module, "rate_limiter", RateLimiter(burst=1, per_second=1.0),
    )
    task = start_cleanup(60, 300)
    assert task is not None and not task.done()
    await stop_cleanup(task)
    assert task.cancelled()
