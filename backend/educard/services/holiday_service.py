"""
Holiday service with business logic.

Stored holidays come from the organization API; weekend holidays are generated
from the working day policy and merged in for every calendar view.
"""

import logging
from datetime import date, timedelta
from typing import Callable, List, Optional

from pydantic import ValidationError

from educard.core.cache import QueryCache
from educard.core.config import settings
from educard.core.exceptions import NotFoundError, ReadOnlyHolidayError
from educard.core.query_keys import LONG_STALE_TIME, QueryKeys
from educard.repositories.holiday_repository import HolidayRepository
from educard.schemas.envelope import Page
from educard.schemas.holiday import (
    FetchHolidaysParams,
    Holiday,
    HolidayCalendarResponse,
    HolidayCreate,
    HolidayListResponse,
    HolidaySummaryResponse,
    HolidayType,
    HolidayTypeOption,
    HolidayUpdate,
    HolidayView,
    MAX_HOLIDAY_DURATION_DAYS,
)
from educard.schemas.working_day_policy import WorkingDayPolicy
from educard.services.base_service import BaseService
from educard.services.working_day_policy_service import WorkingDayPolicyService
from educard.utils.holiday_utils import (
    build_calendar_days,
    filter_weekend_types,
    format_holiday_type,
    generate_weekend_holidays,
    get_ongoing_holidays,
    get_upcoming_holidays,
    is_weekend_holiday_id,
    merge_holidays,
    month_bounds,
    parse_weekend_holiday_id,
    to_holiday_view,
)

logger = logging.getLogger(__name__)


class HolidayService(BaseService):
    """Service for holiday operations."""

    def __init__(
        self,
        holiday_repo: HolidayRepository,
        policy_service: WorkingDayPolicyService,
        cache: QueryCache,
        today: Callable[[], date] = date.today,
    ):
        super().__init__(cache)
        self.holiday_repo = holiday_repo
        self.policy_service = policy_service
        self._today = today

    async def _fetch_page(self, params: FetchHolidaysParams) -> Page[Holiday]:
        query = params.to_query()
        return await self.cached(
            QueryKeys.holidays(query),
            lambda: self.holiday_repo.list(query),
            LONG_STALE_TIME,
        )

    async def _fetch_range(self, from_date: date, to_date: date) -> List[Holiday]:
        page = await self._fetch_page(FetchHolidaysParams(
            from_date=from_date,
            to_date=to_date,
            ordering="start_date",
            page_size=settings.CALENDAR_PAGE_SIZE,
        ))
        return page.items

    async def list_holidays(self, params: FetchHolidaysParams) -> HolidayListResponse:
        """List stored holidays only, as the table view shows them."""
        page = await self._fetch_page(params)
        today = self._today()
        return HolidayListResponse(
            items=[to_holiday_view(h, today) for h in page.items],
            pagination=page.pagination,
        )

    async def get_holiday(self, public_id: str) -> HolidayView:
        """Get a stored holiday, or rebuild a generated weekend holiday from its id."""
        generated = parse_weekend_holiday_id(public_id)
        if generated is not None:
            return to_holiday_view(generated, self._today())
        if is_weekend_holiday_id(public_id):
            raise NotFoundError(f"Holiday {public_id} not found")

        holiday = await self.cached(
            QueryKeys.holiday(public_id),
            lambda: self.holiday_repo.get(public_id),
            LONG_STALE_TIME,
        )
        return to_holiday_view(holiday, self._today())

    async def create_holiday(self, holiday_data: HolidayCreate) -> HolidayView:
        holiday = await self.holiday_repo.create(holiday_data.model_dump(mode="json"))
        self.invalidate(QueryKeys.HOLIDAYS)
        logger.info(f"Created holiday {holiday.public_id} ({holiday.start_date} - {holiday.end_date})")
        return to_holiday_view(holiday, self._today())

    async def create_holidays(self, holidays_data: List[HolidayCreate]) -> List[HolidayView]:
        """Create several holidays with a single upstream request."""
        holidays = await self.holiday_repo.bulk_create(
            [h.model_dump(mode="json") for h in holidays_data]
        )
        self.invalidate(QueryKeys.HOLIDAYS)
        logger.info(f"Created {len(holidays)} holidays in bulk")
        today = self._today()
        return [to_holiday_view(h, today) for h in holidays]

    async def update_holiday(self, public_id: str, holiday_data: HolidayUpdate) -> HolidayView:
        if is_weekend_holiday_id(public_id):
            raise ReadOnlyHolidayError(public_id)

        changes = holiday_data.model_dump(mode="json", exclude_unset=True)
        if (holiday_data.start_date is None) != (holiday_data.end_date is None):
            # one end moved: check the resulting range against the stored one
            current = await self.holiday_repo.get(public_id)
            try:
                HolidayUpdate(
                    start_date=holiday_data.start_date or current.start_date,
                    end_date=holiday_data.end_date or current.end_date,
                )
            except ValidationError as e:
                raise self.validation_failed(e) from e

        holiday = await self.holiday_repo.update(public_id, changes)
        self.invalidate(QueryKeys.HOLIDAYS)
        return to_holiday_view(holiday, self._today())

    async def delete_holiday(self, public_id: str) -> None:
        if is_weekend_holiday_id(public_id):
            raise ReadOnlyHolidayError(public_id)
        await self.holiday_repo.delete(public_id)
        self.invalidate(QueryKeys.HOLIDAYS)
        logger.info(f"Deleted holiday {public_id}")

    async def get_merged_holidays(
        self,
        from_date: date,
        to_date: date,
        policy: Optional[WorkingDayPolicy] = None,
    ) -> List[Holiday]:
        """Stored holidays in range merged with the weekend holidays ``policy`` implies."""
        stored = await self._fetch_range(from_date, to_date)
        if policy is None:
            return merge_holidays(stored, [])
        generated = generate_weekend_holidays(
            from_date,
            to_date,
            policy.sunday_off,
            policy.saturday_off_pattern,
        )
        return merge_holidays(stored, generated)

    async def get_month_calendar(self, year: int, month: int) -> HolidayCalendarResponse:
        """Everything the month view needs: merged holidays and the day grid."""
        from_date, to_date = month_bounds(year, month)
        policy = await self.policy_service.get_policy_for(from_date)
        if policy is None:
            logger.info(f"No working day policy for {year}-{month:02d}; weekends not generated")

        holidays = await self.get_merged_holidays(from_date, to_date, policy)
        today = self._today()
        return HolidayCalendarResponse(
            year=year,
            month=month,
            from_date=from_date,
            to_date=to_date,
            policy=policy,
            holidays=[to_holiday_view(h, today) for h in holidays],
            days=build_calendar_days(year, month, holidays, today),
        )

    async def get_summary(self, limit: int = 5) -> HolidaySummaryResponse:
        """Ongoing holidays and the next ``limit`` upcoming ones."""
        today = self._today()
        # an ongoing holiday started at most MAX_HOLIDAY_DURATION_DAYS ago
        page = await self._fetch_page(FetchHolidaysParams(
            from_date=today - timedelta(days=MAX_HOLIDAY_DURATION_DAYS),
            ordering="start_date",
            page_size=settings.CALENDAR_PAGE_SIZE,
        ))
        upcoming_page = await self._fetch_page(FetchHolidaysParams(
            from_date=today,
            ordering="start_date",
            page_size=max(limit, settings.DEFAULT_PAGE_SIZE),
        ))
        ongoing = get_ongoing_holidays(page.items, today)
        upcoming = get_upcoming_holidays(upcoming_page.items, today, limit)
        return HolidaySummaryResponse(
            ongoing=[to_holiday_view(h, today) for h in ongoing],
            upcoming=[to_holiday_view(h, today) for h in upcoming],
        )

    @staticmethod
    def get_creatable_types() -> List[HolidayTypeOption]:
        """Holiday types a user may pick; weekend types are policy generated."""
        return [
            HolidayTypeOption(value=t, label=format_holiday_type(t))
            for t in filter_weekend_types(HolidayType)
        ]
