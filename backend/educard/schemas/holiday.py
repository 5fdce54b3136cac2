"""
Holiday Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import date, datetime
import enum

from educard.schemas.envelope import ApiPagination
from educard.schemas.working_day_policy import WorkingDayPolicy

MAX_HOLIDAY_DURATION_DAYS = 60
MAX_DESCRIPTION_LENGTH = 255


class HolidayType(str, enum.Enum):
    """Holiday types supported by the organization API."""
    SUNDAY = "SUNDAY"
    SATURDAY = "SATURDAY"
    SECOND_SATURDAY = "SECOND_SATURDAY"
    NATIONAL_HOLIDAY = "NATIONAL_HOLIDAY"
    FESTIVAL = "FESTIVAL"
    ORGANIZATION_HOLIDAY = "ORGANIZATION_HOLIDAY"
    OTHER = "OTHER"


WEEKEND_HOLIDAY_TYPES = frozenset({HolidayType.SUNDAY, HolidayType.SATURDAY})


class HolidayStatus(str, enum.Enum):
    PAST = "past"
    ONGOING = "ongoing"
    UPCOMING = "upcoming"


class Holiday(BaseModel):
    """Holiday entity, either from the organization API or generated from policy."""
    public_id: str
    start_date: date
    end_date: date
    holiday_type: HolidayType
    description: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by_public_id: Optional[str] = None
    created_by_name: Optional[str] = None
    updated_by_public_id: Optional[str] = None
    updated_by_name: Optional[str] = None


def _clean_description(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError('Description is required')
    if len(value) > MAX_DESCRIPTION_LENGTH:
        raise ValueError(f'Description must be less than {MAX_DESCRIPTION_LENGTH} characters')
    return value


def _check_not_weekend(value: Optional[HolidayType]) -> Optional[HolidayType]:
    if value in WEEKEND_HOLIDAY_TYPES:
        raise ValueError('Weekend holidays are generated from the working day policy and cannot be created')
    return value


def _check_range(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise ValueError('End date must be on or after start date')
    if (end_date - start_date).days + 1 > MAX_HOLIDAY_DURATION_DAYS:
        raise ValueError(f'Holiday duration cannot exceed {MAX_HOLIDAY_DURATION_DAYS} days')


class HolidayCreate(BaseModel):
    """Schema for creating a holiday. ``end_date`` defaults to ``start_date``."""
    start_date: date
    end_date: Optional[date] = None
    holiday_type: HolidayType = HolidayType.NATIONAL_HOLIDAY
    description: str

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _clean_description(v)

    @field_validator('holiday_type')
    @classmethod
    def validate_holiday_type(cls, v: HolidayType) -> HolidayType:
        return _check_not_weekend(v)

    @model_validator(mode='after')
    def validate_dates(self) -> 'HolidayCreate':
        if self.end_date is None:
            self.end_date = self.start_date
        _check_range(self.start_date, self.end_date)
        return self


class HolidayUpdate(BaseModel):
    """Schema for updating a holiday (all fields optional)."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    holiday_type: Optional[HolidayType] = None
    description: Optional[str] = None

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        return _clean_description(v)

    @field_validator('holiday_type')
    @classmethod
    def validate_holiday_type(cls, v: Optional[HolidayType]) -> Optional[HolidayType]:
        return _check_not_weekend(v)

    @model_validator(mode='after')
    def validate_dates(self) -> 'HolidayUpdate':
        if self.start_date is not None and self.end_date is not None:
            _check_range(self.start_date, self.end_date)
        return self


class FetchHolidaysParams(BaseModel):
    """Query parameters accepted by the holiday list endpoint."""
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    holiday_type: Optional[HolidayType] = None
    ordering: Optional[str] = None
    page: Optional[int] = Field(None, ge=1)
    page_size: Optional[int] = Field(None, ge=1)

    def to_query(self) -> dict:
        """Render as upstream query parameters, skipping unset values."""
        query = {}
        for key, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, date):
                value = value.isoformat()
            elif isinstance(value, enum.Enum):
                value = value.value
            query[key] = value
        return query


class HolidayColors(BaseModel):
    bg: str
    text: str
    badge: str
    border: str


class HolidayView(Holiday):
    """Holiday enriched with the derived fields the dashboard renders."""
    label: str
    colors: HolidayColors
    duration: int
    date_range: str
    is_weekend: bool
    is_editable: bool
    status: HolidayStatus


class CalendarDay(BaseModel):
    date: date
    is_current_month: bool
    is_today: bool
    holidays: List[Holiday] = []


class HolidayCalendarResponse(BaseModel):
    """One visible month: API holidays merged with generated weekend holidays."""
    year: int
    month: int
    from_date: date
    to_date: date
    policy: Optional[WorkingDayPolicy] = None
    holidays: List[HolidayView]
    days: List[CalendarDay]


class HolidayListResponse(BaseModel):
    items: List[HolidayView]
    pagination: Optional[ApiPagination] = None


class HolidaySummaryResponse(BaseModel):
    ongoing: List[HolidayView]
    upcoming: List[HolidayView]


class HolidayTypeOption(BaseModel):
    value: HolidayType
    label: str


class BulkUploadError(BaseModel):
    row: int
    field: Optional[str] = None
    message: str


class BulkUploadResult(BaseModel):
    success: bool
    created_count: int = 0
    failed_count: int = 0
    total_rows: int = 0
    errors: List[BulkUploadError] = []
