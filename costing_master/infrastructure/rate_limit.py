"""Rate Limiter — per-client token buckets.

Invariants:
    - A new client starts with a full bucket (burst tokens)
    - Tokens refill continuously at per_second, capped at burst
    - check() consumes one token or raises RateLimitedError; it never blocks
    - Buckets idle longer than max_idle_seconds are dropped by cleanup()
    - While the app runs, cleanup_loop() sweeps idle buckets every interval_seconds;
      stop_cleanup() cancels it on shutdown

Design Decisions:
    - Token bucket over fixed window: bursts allowed up to capacity, no edge spikes
    - No locks: the event loop is single-threaded and allow() never awaits
"""

import asyncio
import logging
import time
from typing import Callable

from costing_master.core.errors import RateLimitedError

logger = logging.getLogger(__name__)


class TokenBucket:
    """Single client's bucket."""

    def __init__(
        self, capacity: float, refill_rate: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.capacity = capacity
        self.refill_rate = refill_rate
        self._clock = clock
        self.tokens = capacity
        self.last_refill = clock()

    def allow(self) -> bool:
        now = self._clock()
        elapsed = now - self.last_refill
        self.tokens = min(self.capacity, self.tokens + elapsed * self.refill_rate)
        self.last_refill = now
        if self.tokens >= 1:
            self.tokens -= 1
            return True
        return False


class RateLimiter:
    """Token buckets keyed by client identifier (remote host)."""

    def __init__(
        self, burst: float, per_second: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.burst = burst
        self.per_second = per_second
        self._clock = clock
        self._buckets: dict[str, TokenBucket] = {}

    def allow(self, client: str) -> bool:
        bucket = self._buckets.get(client)
        if bucket is None:
            bucket = TokenBucket(self.burst, self.per_second, self._clock)
            self._buckets[client] = bucket
        return bucket.allow()

    def check(self, client: str) -> None:
        """Consume a token for client or raise RateLimitedError."""
        if not self.allow(client):
            logger.warning(
                f"Rate limit exceeded for {client}",
                extra={"client": client, "error_code": "RATE_LIMITED"},
            )
            raise RateLimitedError(client)

    def cleanup(self, max_idle_seconds: float) -> int:
        """Drop idle buckets. Returns the number removed."""
        threshold = self._clock() - max_idle_seconds
        stale = [k for k, b in self._buckets.items() if b.last_refill < threshold]
        for key in stale:
            del self._buckets[key]
        return len(stale)

    def __len__(self) -> int:
        return len(self._buckets)


# Singleton (initialized on startup); None means rate limiting is disabled
rate_limiter: RateLimiter | None = None


def init_rate_limiter(enabled: bool, burst: float, per_second: float) -> None:
    global rate_limiter
    rate_limiter = RateLimiter(burst, per_second) if enabled else None


async def cleanup_loop(
    limiter: RateLimiter, interval_seconds: float, max_idle_seconds: float,
) -> None:
    """Sweep idle buckets forever; ends only by cancellation."""
    try:
        while True:
            await asyncio.sleep(interval_seconds)
            removed = limiter.cleanup(max_idle_seconds)
            if removed:
                logger.debug(f"Dropped {removed} idle rate limit buckets")
    except asyncio.CancelledError:
        logger.info("Rate limit cleanup stopped")
        raise


def start_cleanup(
    interval_seconds: float, max_idle_seconds: float,
) -> asyncio.Task | None:
    """Schedule cleanup_loop for the active limiter; None when limiting is off."""
    if rate_limiter is None:
        return None
    return asyncio.create_task(
        cleanup_loop(rate_limiter, interval_seconds, max_idle_seconds),
    )


async def stop_cleanup(task: asyncio.Task | None) -> None:
    if task is None:
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
