"""
Base service class.
Services hold business rules, coordinate repositories and own the query cache.
"""

from abc import ABC
from typing import Any, Awaitable, Callable, Tuple

from pydantic import ValidationError

from educard.core.cache import QueryCache
from educard.core.exceptions import ValidationFailedError
from educard.utils.error_utils import format_validation_errors


class BaseService(ABC):
    """Base service class for all services."""

    def __init__(self, cache: QueryCache):
        self.cache = cache

    async def cached(
        self,
        key: Tuple,
        fetcher: Callable[[], Awaitable[Any]],
        stale_time: float,
    ) -> Any:
        return await self.cache.fetch(key, fetcher, stale_time)

    def invalidate(self, *prefixes: Tuple) -> None:
        for prefix in prefixes:
            self.cache.invalidate(prefix)

    @staticmethod
    def validation_failed(exc: ValidationError) -> ValidationFailedError:
        """Turn a pydantic error raised inside a service into a 422."""
        return ValidationFailedError(format_validation_errors(exc.errors()))
