"""Cache — in-memory TTL semantics, pattern deletion, and the no-op backend."""

import pytest

from costing_master.core.errors import CacheError
from costing_master.infrastructure.cache import InMemoryCache, NoOpCache


class _Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


async def test_get_set_round_trip_returns_copies():
    cache = InMemoryCache()
    value = {"items": [1, 2]}
    await cache.set("k", value, 60)
    value["items"].append(3)

    hit, cached = await cache.get("k")
    assert hit is True
    assert cached == {"items": [1, 2]}


async def test_miss_returns_false_none():
    assert await InMemoryCache().get("absent") == (False, None)


async def test_expired_entries_are_misses():
    clock = _Clock()
    cache = InMemoryCache(clock=clock)
    await cache.set("k", 1, 10)
    clock.now += 9.9
    assert (await cache.get("k"))[0] is True
    clock.now += 0.2
    assert await cache.get("k") == (False, None)


async def test_delete_and_pattern_delete():
    cache = InMemoryCache(prefix="costing:")
    await cache.set("uom:KG", 1, 60)
    await cache.set("uom:list:all:1:10", 2, 60)
    await cache.set("uom:list:WEIGHT:1:10", 3, 60)
    await cache.set("param:list:all:all:1:10", 4, 60)

    await cache.delete_by_pattern("uom:list:*")
    assert (await cache.get("uom:list:all:1:10"))[0] is False
    assert (await cache.get("uom:list:WEIGHT:1:10"))[0] is False
    assert (await cache.get("uom:KG"))[0] is True
    assert (await cache.get("param:list:all:all:1:10"))[0] is True

    await cache.delete("uom:KG", "missing")
    assert (await cache.get("uom:KG"))[0] is False


async def test_unserialisable_value_raises_cache_error():
    with pytest.raises(CacheError):
        await InMemoryCache().set("k", object(), 60)


async def test_noop_cache_always_misses():
    cache = NoOpCache()
    await cache.set("k", 1, 60)
    assert await cache.get("k") == (False, None)
    assert await cache.health_check() is True
