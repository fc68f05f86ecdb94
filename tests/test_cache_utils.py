"""Tests for the async TTL cache"""
import pytest

from clients.cache_utils import TTLCache, async_ttl_cache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_entries_expire():
    clock = FakeClock()
    cache = TTLCache(clock=clock)

    await cache.set("k", [1], ttl=5)
    assert await cache.get("k") == [1]

    clock.now += 5
    assert await cache.get("k") is None
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_decorator_caches_per_arguments_and_keeps_empty_results():
    calls = []

    @async_ttl_cache(ttl=lambda: 30)
    async def fetch(key):
        calls.append(key)
        return []

    assert await fetch("a") == []
    assert await fetch("a") == []
    await fetch("b")
    assert calls == ["a", "b"]

    await fetch.clear_cache()
    await fetch("a")
    assert calls == ["a", "b", "a"]


@pytest.mark.asyncio
async def test_zero_ttl_bypasses_cache():
    calls = []

    @async_ttl_cache(ttl=lambda: 0)
    async def fetch():
        calls.append(1)
        return "x"

    await fetch()
    await fetch()
    assert len(calls) == 2
    assert len(fetch.cache) == 0
