"""
In-process query cache with stale-while-revalidate semantics.

Entries are keyed by tuples of request parameters, for example
``("holidays", "2025-01-01", "2025-01-31")``. A fresh entry is served as is,
a stale entry is served while a single background refresh runs, and a
missing entry is fetched with concurrent callers sharing one request.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional, Tuple

logger = logging.getLogger(__name__)

QueryKey = Tuple[Hashable, ...]
Fetcher = Callable[[], Awaitable[Any]]


@dataclass
class CacheEntry:
    value: Any
    fetched_at: float
    last_used: float = field(default=0.0)


class QueryCache:
    """Query cache keyed by request parameters."""

    def __init__(
        self,
        cache_time: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            cache_time: Seconds an unused entry is kept before it is dropped
            clock: Monotonic time source, replaceable in tests
        """
        self.cache_time = cache_time
        self._clock = clock
        self._entries: Dict[QueryKey, CacheEntry] = {}
        self._in_flight: Dict[QueryKey, asyncio.Task] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._entries

    def get(self, key: QueryKey) -> Optional[Any]:
        entry = self._entries.get(key)
        return entry.value if entry else None

    def set(self, key: QueryKey, value: Any) -> None:
        now = self._clock()
        self._entries[key] = CacheEntry(value=value, fetched_at=now, last_used=now)

    def is_stale(self, key: QueryKey, stale_time: float) -> bool:
        entry = self._entries.get(key)
        return entry is None or self._clock() - entry.fetched_at >= stale_time

    async def fetch(self, key: QueryKey, fetcher: Fetcher, stale_time: float) -> Any:
        """
        Return the cached value for ``key`` or fetch it.

        Args:
            key: Query key
            fetcher: Coroutine factory producing the value
            stale_time: Seconds after which the cached value is refreshed
        """
        self._collect_garbage()
        entry = self._entries.get(key)

        if entry is not None:
            entry.last_used = self._clock()
            if self._clock() - entry.fetched_at >= stale_time:
                self._refresh_in_background(key, fetcher)
            return entry.value

        task = self._in_flight.get(key)
        if task is None:
            task = self._start(key, fetcher)
        return await asyncio.shield(task)

    def invalidate(self, prefix: QueryKey = ()) -> int:
        """
        Drop every entry whose key starts with ``prefix``.

        Returns:
            Number of dropped entries
        """
        doomed = [key for key in self._entries if key[:len(prefix)] == prefix]
        for key in doomed:
            del self._entries[key]
        # a fetch started before the mutation must not repopulate the cache
        for key in [key for key in self._in_flight if key[:len(prefix)] == prefix]:
            del self._in_flight[key]
        if doomed:
            logger.debug(f"Invalidated {len(doomed)} cache entries for prefix {prefix!r}")
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()
        self._in_flight.clear()

    def _start(self, key: QueryKey, fetcher: Fetcher) -> asyncio.Task:
        async def run() -> Any:
            try:
                value = await fetcher()
                if self._in_flight.get(key) is task:
                    self.set(key, value)
                return value
            finally:
                if self._in_flight.get(key) is task:
                    del self._in_flight[key]

        task = asyncio.get_running_loop().create_task(run())
        self._in_flight[key] = task
        return task

    def _refresh_in_background(self, key: QueryKey, fetcher: Fetcher) -> None:
        if key in self._in_flight:
            return
        task = self._start(key, fetcher)
        task.add_done_callback(self._log_refresh_failure)

    @staticmethod
    def _log_refresh_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(f"Background cache refresh failed: {exc}")

    def _collect_garbage(self) -> None:
        now = self._clock()
        expired = [
            key for key, entry in self._entries.items()
            if now - entry.last_used >= self.cache_time
        ]
        for key in expired:
            del self._entries[key]
