"""Read Cache — implementations of core.repository_protocols.CacheLike.

Invariants:
    - Misses return (False, None); hits return (True, value) with a fresh copy
    - Values are stored JSON-serialised: callers get plain dicts/lists back, never
      shared mutable objects
    - Expired entries are never returned (checked on read, swept on write)
    - Keys are namespaced with the configured prefix; patterns match after the prefix

Design Decisions:
    - In-process TTL cache over an external store: single-replica deployment, no
      extra service to operate; the CacheLike Protocol keeps the seam for one
    - NoOpCache when caching is disabled: decorators stay in place, every read misses
    - Glob patterns via fnmatch.fnmatchcase: same "uom:list:*" syntax as KEYS/SCAN
"""

import asyncio
import fnmatch
import json
import logging
import time
from typing import Any, Callable

from costing_master.core.errors import CacheError

logger = logging.getLogger(__name__)


class NoOpCache:
    """Cache that stores nothing."""

    async def get(self, key: str) -> tuple[bool, Any]:
        return False, None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        return None

    async def delete(self, *keys: str) -> None:
        return None

    async def delete_by_pattern(self, pattern: str) -> None:
        return None

    async def health_check(self) -> bool:
        return True


class InMemoryCache:
    """TTL cache held in process memory, guarded by an asyncio.Lock."""

    def __init__(
        self, prefix: str = "",
        clock: Callable[[], float] = time.monotonic,
    ):
        self._prefix = prefix
        self._clock = clock
        self._entries: dict[str, tuple[float, str]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> tuple[bool, Any]:
        async with self._lock:
            entry = self._entries.get(self._prefix + key)
            if entry is None:
                return False, None
            expires_at, payload = entry
            if expires_at <= self._clock():
                del self._entries[self._prefix + key]
                return False, None
        try:
            return True, json.loads(payload)
        except ValueError as e:
            raise CacheError(str(e), "get") from e

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheError(str(e), "set") from e
        async with self._lock:
            self._sweep()
            self._entries[self._prefix + key] = (
                self._clock() + ttl_seconds, payload,
            )

    async def delete(self, *keys: str) -> None:
        async with self._lock:
            for key in keys:
                self._entries.pop(self._prefix + key, None)

    async def delete_by_pattern(self, pattern: str) -> None:
        full_pattern = self._prefix + pattern
        async with self._lock:
            matched = [
                k for k in self._entries if fnmatch.fnmatchcase(k, full_pattern)
            ]
            for k in matched:
                del self._entries[k]
        if matched:
            logger.debug(f"Cache invalidated {len(matched)} keys for {pattern}")

    async def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)

    def _sweep(self) -> None:
        now = self._clock()
        expired = [k for k, (exp, _) in self._entries.items() if exp <= now]
        for k in expired:
            del self._entries[k]


# Singleton (initialized on startup)
cache_backend: NoOpCache | InMemoryCache = NoOpCache()


def init_cache(enabled: bool, prefix: str = "") -> None:
    global cache_backend
    cache_backend = InMemoryCache(prefix) if enabled else NoOpCache()
    logger.info(
        f"Cache backend: {type(cache_backend).__name__}",
    )
