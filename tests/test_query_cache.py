"""
Query cache tests: freshness, background refresh, request sharing and invalidation.
"""

import asyncio

import pytest

from educard.core.cache import QueryCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingFetcher:
    def __init__(self, values=None, delay: float = 0):
        self.calls = 0
        self.values = values
        self.delay = delay

    async def __call__(self):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.values is not None:
            return self.values[min(self.calls, len(self.values)) - 1]
        return self.calls


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return QueryCache(cache_time=3600, clock=clock)


async def test_fresh_entry_is_served_without_refetch(cache):
    fetcher = CountingFetcher()

    assert await cache.fetch(("holidays",), fetcher, stale_time=60) == 1
    assert await cache.fetch(("holidays",), fetcher, stale_time=60) == 1
    assert fetcher.calls == 1


async def test_stale_entry_is_served_then_refreshed(cache, clock):
    fetcher = CountingFetcher(values=["old", "new"])
    key = ("holidays", "2025-01")

    assert await cache.fetch(key, fetcher, stale_time=60) == "old"
    clock.advance(61)

    assert await cache.fetch(key, fetcher, stale_time=60) == "old"
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert fetcher.calls == 2
    assert cache.get(key) == "new"


async def test_concurrent_misses_share_one_request(cache):
    fetcher = CountingFetcher(delay=0.01)

    results = await asyncio.gather(*(cache.fetch(("students",), fetcher, 60) for _ in range(5)))

    assert results == [1] * 5
    assert fetcher.calls == 1


async def test_failed_fetch_is_not_cached(cache):
    async def failing():
        raise RuntimeError("upstream down")

    with pytest.raises(RuntimeError):
        await cache.fetch(("preferences",), failing, 60)

    assert ("preferences",) not in cache


async def test_invalidate_drops_keys_with_prefix(cache):
    cache.set(("holidays", "list", "a"), 1)
    cache.set(("holidays", "detail", "b"), 2)
    cache.set(("students", "list"), 3)

    assert cache.invalidate(("holidays",)) == 2
    assert len(cache) == 1
    assert ("students", "list") in cache


async def test_invalidate_during_fetch_does_not_repopulate(cache):
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow():
        started.set()
        await release.wait()
        return "stale"

    task = asyncio.create_task(cache.fetch(("holidays", "list"), slow, 60))
    await started.wait()
    cache.invalidate(("holidays",))
    release.set()

    assert await task == "stale"
    assert ("holidays", "list") not in cache


async def test_unused_entries_are_collected(cache, clock):
    cache.set(("old",), 1)
    clock.advance(3600)

    await cache.fetch(("new",), CountingFetcher(), 60)

    assert ("old",) not in cache
    assert ("new",) in cache


def test_is_stale(cache, clock):
    assert cache.is_stale(("missing",), 60)
    cache.set(("k",), 1)
    assert not cache.is_stale(("k",), 60)
    clock.advance(60)
    assert cache.is_stale(("k",), 60)
