"""
Calendar exception controller.
"""

from educard.controllers.base_controller import BaseController
from educard.schemas.calendar_exception import (
    CalendarException,
    CalendarExceptionCreate,
    CalendarExceptionFilters,
    CalendarExceptionUpdate,
)
from educard.schemas.envelope import Page
from educard.services.calendar_exception_service import CalendarExceptionService


class CalendarExceptionController(BaseController):
    def __init__(self, exception_service: CalendarExceptionService):
        self.exception_service = exception_service

    async def list_exceptions(self, filters: CalendarExceptionFilters) -> Page[CalendarException]:
        return await self.exception_service.list_exceptions(filters)

    async def get_exception(self, public_id: str) -> CalendarException:
        return await self.exception_service.get_exception(public_id)

    async def create_exception(self, exception_data: CalendarExceptionCreate) -> CalendarException:
        return await self.exception_service.create_exception(exception_data)

    async def update_exception(self, public_id: str, exception_data: CalendarExceptionUpdate) -> CalendarException:
        return await self.exception_service.update_exception(public_id, exception_data)

    async def delete_exception(self, public_id: str) -> None:
        await self.exception_service.delete_exception(public_id)
