"""
Calendar exception service.
"""

from educard.core.cache import QueryCache
from educard.core.query_keys import SHORT_STALE_TIME, QueryKeys
from educard.repositories.calendar_exception_repository import CalendarExceptionRepository
from educard.schemas.calendar_exception import (
    CalendarException,
    CalendarExceptionCreate,
    CalendarExceptionFilters,
    CalendarExceptionUpdate,
)
from educard.schemas.envelope import Page
from educard.services.base_service import BaseService


class CalendarExceptionService(BaseService):
    def __init__(self, exception_repo: CalendarExceptionRepository, cache: QueryCache):
        super().__init__(cache)
        self.exception_repo = exception_repo

    async def list_exceptions(self, filters: CalendarExceptionFilters) -> Page[CalendarException]:
        query = filters.to_query()
        return await self.cached(
            QueryKeys.calendar_exceptions(query),
            lambda: self.exception_repo.list(query),
            SHORT_STALE_TIME,
        )

    async def get_exception(self, public_id: str) -> CalendarException:
        return await self.exception_repo.get(public_id)

    async def create_exception(self, exception_data: CalendarExceptionCreate) -> CalendarException:
        exception = await self.exception_repo.create(exception_data.model_dump(mode="json"))
        self.invalidate(QueryKeys.CALENDAR_EXCEPTIONS)
        return exception

    async def update_exception(
        self,
        public_id: str,
        exception_data: CalendarExceptionUpdate,
    ) -> CalendarException:
        exception = await self.exception_repo.update(
            public_id, exception_data.model_dump(mode="json", exclude_unset=True)
        )
        self.invalidate(QueryKeys.CALENDAR_EXCEPTIONS)
        return exception

    async def delete_exception(self, public_id: str) -> None:
        await self.exception_repo.delete(public_id)
        self.invalidate(QueryKeys.CALENDAR_EXCEPTIONS)
