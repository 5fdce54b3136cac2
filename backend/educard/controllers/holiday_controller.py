"""
Holiday controller.
"""

import io
from typing import List

from educard.controllers.base_controller import BaseController
from educard.schemas.holiday import (
    BulkUploadResult,
    FetchHolidaysParams,
    HolidayCalendarResponse,
    HolidayCreate,
    HolidayListResponse,
    HolidaySummaryResponse,
    HolidayTypeOption,
    HolidayUpdate,
    HolidayView,
)
from educard.services.holiday_excel_service import HolidayExcelService
from educard.services.holiday_service import HolidayService


class HolidayController(BaseController):
    """Controller for holiday operations."""

    def __init__(self, holiday_service: HolidayService, holiday_excel_service: HolidayExcelService):
        self.holiday_service = holiday_service
        self.holiday_excel_service = holiday_excel_service

    async def list_holidays(self, params: FetchHolidaysParams) -> HolidayListResponse:
        return await self.holiday_service.list_holidays(params)

    async def get_holiday(self, public_id: str) -> HolidayView:
        return await self.holiday_service.get_holiday(public_id)

    async def create_holiday(self, holiday_data: HolidayCreate) -> HolidayView:
        return await self.holiday_service.create_holiday(holiday_data)

    async def create_holidays(self, holidays_data: List[HolidayCreate]) -> List[HolidayView]:
        return await self.holiday_service.create_holidays(holidays_data)

    async def update_holiday(self, public_id: str, holiday_data: HolidayUpdate) -> HolidayView:
        return await self.holiday_service.update_holiday(public_id, holiday_data)

    async def delete_holiday(self, public_id: str) -> None:
        await self.holiday_service.delete_holiday(public_id)

    async def get_month_calendar(self, year: int, month: int) -> HolidayCalendarResponse:
        return await self.holiday_service.get_month_calendar(year, month)

    async def get_summary(self, limit: int) -> HolidaySummaryResponse:
        return await self.holiday_service.get_summary(limit)

    def get_creatable_types(self) -> List[HolidayTypeOption]:
        return self.holiday_service.get_creatable_types()

    def build_template(self) -> io.BytesIO:
        return self.holiday_excel_service.build_template()

    async def bulk_upload(self, content: bytes) -> BulkUploadResult:
        return await self.holiday_excel_service.bulk_upload(content)
