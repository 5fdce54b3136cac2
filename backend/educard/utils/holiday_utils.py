"""
Holiday calendar helpers.

Weekend holidays are never stored by the organization API. They are derived
from the working day policy for whatever range is on screen and merged with
the stored holidays before display.
"""

import calendar
import math
import re
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Union

from educard.schemas.holiday import (
    CalendarDay,
    Holiday,
    HolidayColors,
    HolidayStatus,
    HolidayType,
    HolidayView,
    MAX_DESCRIPTION_LENGTH,
    MAX_HOLIDAY_DURATION_DAYS,
    WEEKEND_HOLIDAY_TYPES,
)
from educard.schemas.working_day_policy import SaturdayOffPattern

DateLike = Union[date, str]

SUNDAY = 6
SATURDAY = 5

DISPLAY_DATE_FORMAT = "%b %d, %Y"

HOLIDAY_TYPE_COLORS: Dict[HolidayType, HolidayColors] = {
    HolidayType.SUNDAY: HolidayColors(
        bg="bg-purple-50",
        text="text-purple-700",
        badge="bg-purple-100 text-purple-700 border-purple-200",
        border="border-purple-200",
    ),
    HolidayType.SATURDAY: HolidayColors(
        bg="bg-blue-50",
        text="text-blue-700",
        badge="bg-blue-100 text-blue-700 border-blue-200",
        border="border-blue-200",
    ),
    HolidayType.SECOND_SATURDAY: HolidayColors(
        bg="bg-indigo-50",
        text="text-indigo-700",
        badge="bg-indigo-100 text-indigo-700 border-indigo-200",
        border="border-indigo-200",
    ),
    HolidayType.NATIONAL_HOLIDAY: HolidayColors(
        bg="bg-red-50",
        text="text-red-700",
        badge="bg-red-100 text-red-700 border-red-200",
        border="border-red-200",
    ),
    HolidayType.FESTIVAL: HolidayColors(
        bg="bg-orange-50",
        text="text-orange-700",
        badge="bg-orange-100 text-orange-700 border-orange-200",
        border="border-orange-200",
    ),
    HolidayType.ORGANIZATION_HOLIDAY: HolidayColors(
        bg="bg-green-50",
        text="text-green-700",
        badge="bg-green-100 text-green-700 border-green-200",
        border="border-green-200",
    ),
    HolidayType.OTHER: HolidayColors(
        bg="bg-gray-50",
        text="text-gray-700",
        badge="bg-gray-100 text-gray-700 border-gray-200",
        border="border-gray-200",
    ),
}

HOLIDAY_TYPE_LABELS: Dict[HolidayType, str] = {
    HolidayType.SUNDAY: "Sunday",
    HolidayType.SATURDAY: "Saturday",
    HolidayType.SECOND_SATURDAY: "2nd Saturday",
    HolidayType.NATIONAL_HOLIDAY: "National Holiday",
    HolidayType.FESTIVAL: "Festival",
    HolidayType.ORGANIZATION_HOLIDAY: "Organization Holiday",
    HolidayType.OTHER: "Other",
}

SATURDAY_OFF_ORDINALS: Dict[SaturdayOffPattern, Optional[Sequence[int]]] = {
    SaturdayOffPattern.NONE: (),
    SaturdayOffPattern.SECOND_ONLY: (2,),
    SaturdayOffPattern.SECOND_AND_FOURTH: (2, 4),
    SaturdayOffPattern.ALL: None,  # every Saturday
}


def to_date(value: DateLike) -> date:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def get_holiday_type_color(holiday_type: HolidayType) -> HolidayColors:
    return HOLIDAY_TYPE_COLORS[HolidayType(holiday_type)]


def format_holiday_type(holiday_type: HolidayType) -> str:
    return HOLIDAY_TYPE_LABELS[HolidayType(holiday_type)]


def calculate_duration(start_date: DateLike, end_date: DateLike) -> int:
    """Length of a holiday in days, counting both ends."""
    return (to_date(end_date) - to_date(start_date)).days + 1


def is_weekend_holiday(holiday: Holiday) -> bool:
    """Whether the holiday was generated from the working day policy."""
    return holiday.holiday_type in WEEKEND_HOLIDAY_TYPES


def filter_non_weekend_holidays(holidays: Iterable[Holiday]) -> List[Holiday]:
    return [h for h in holidays if not is_weekend_holiday(h)]


def filter_weekend_types(types: Iterable[HolidayType]) -> List[HolidayType]:
    """Drop the generated types, leaving the ones a user may create."""
    return [t for t in types if HolidayType(t) not in WEEKEND_HOLIDAY_TYPES]


def sort_holidays_by_date(holidays: Iterable[Holiday]) -> List[Holiday]:
    return sorted(holidays, key=lambda h: h.start_date)


def merge_holidays(
    api_holidays: Iterable[Holiday],
    generated_holidays: Iterable[Holiday],
) -> List[Holiday]:
    """
    Combine stored holidays with generated weekend holidays.

    Stored holidays come first on equal start dates.
    """
    return sort_holidays_by_date([*api_holidays, *generated_holidays])


def is_holiday_past(holiday: Holiday, today: date) -> bool:
    return holiday.end_date < today


def is_holiday_ongoing(holiday: Holiday, today: date) -> bool:
    return holiday.start_date <= today <= holiday.end_date


def is_holiday_upcoming(holiday: Holiday, today: date) -> bool:
    return holiday.start_date > today


def get_holiday_status(holiday: Holiday, today: date) -> HolidayStatus:
    if is_holiday_past(holiday, today):
        return HolidayStatus.PAST
    if is_holiday_upcoming(holiday, today):
        return HolidayStatus.UPCOMING
    return HolidayStatus.ONGOING


def get_ongoing_holidays(holidays: Iterable[Holiday], today: date) -> List[Holiday]:
    """Stored holidays covering ``today``, weekend holidays excluded."""
    ongoing = [
        h for h in holidays
        if not is_weekend_holiday(h) and is_holiday_ongoing(h, today)
    ]
    return sort_holidays_by_date(ongoing)


def get_upcoming_holidays(
    holidays: Iterable[Holiday],
    from_date: date,
    limit: int = 5,
) -> List[Holiday]:
    """Stored holidays starting on or after ``from_date``, weekend holidays excluded."""
    upcoming = [
        h for h in holidays
        if not is_weekend_holiday(h) and h.start_date >= from_date
    ]
    return sort_holidays_by_date(upcoming)[:limit]


def is_nth_weekday_of_month(day: date, weekday: int, nths: Sequence[int]) -> bool:
    """
    Check whether ``day`` is the n-th ``weekday`` of its month.

    Args:
        day: Date to check
        weekday: Day of week, Monday=0 ... Sunday=6
        nths: Accepted occurrences, e.g. ``(2, 4)``
    """
    if day.weekday() != weekday:
        return False
    return math.ceil(day.day / 7) in nths


def _is_saturday_off(day: date, pattern: SaturdayOffPattern) -> bool:
    ordinals = SATURDAY_OFF_ORDINALS[SaturdayOffPattern(pattern)]
    if ordinals is None:
        return True
    return is_nth_weekday_of_month(day, SATURDAY, ordinals)


def _weekend_holiday(day: date, holiday_type: HolidayType) -> Holiday:
    label = HOLIDAY_TYPE_LABELS[holiday_type]
    return Holiday(
        public_id=f"{label.lower()}-{day.isoformat()}",
        start_date=day,
        end_date=day,
        holiday_type=holiday_type,
        description=label,
    )


def generate_weekend_holidays(
    start_date: DateLike,
    end_date: DateLike,
    sunday_off: bool,
    saturday_off_pattern: SaturdayOffPattern,
) -> List[Holiday]:
    """
    Generate the weekend holidays a working day policy implies for a range.

    Args:
        start_date: First day of the range (inclusive)
        end_date: Last day of the range (inclusive)
        sunday_off: Whether every Sunday is a holiday
        saturday_off_pattern: Which Saturdays of each month are holidays

    Returns:
        One single-day holiday per weekend day off, in date order
    """
    start = to_date(start_date)
    end = to_date(end_date)
    holidays: List[Holiday] = []

    day = start
    while day <= end:
        weekday = day.weekday()
        if weekday == SUNDAY and sunday_off:
            holidays.append(_weekend_holiday(day, HolidayType.SUNDAY))
        elif weekday == SATURDAY and _is_saturday_off(day, saturday_off_pattern):
            holidays.append(_weekend_holiday(day, HolidayType.SATURDAY))
        day += timedelta(days=1)

    return holidays


def do_dates_overlap(
    start1: DateLike,
    end1: DateLike,
    start2: DateLike,
    end2: DateLike,
) -> bool:
    return to_date(start1) <= to_date(end2) and to_date(start2) <= to_date(end1)


def format_date_range(start_date: DateLike, end_date: DateLike) -> str:
    start = to_date(start_date)
    end = to_date(end_date)
    if start == end:
        return start.strftime(DISPLAY_DATE_FORMAT)
    return f"{start.strftime(DISPLAY_DATE_FORMAT)} - {end.strftime(DISPLAY_DATE_FORMAT)}"


def validate_holiday_form(
    start_date: Optional[str],
    end_date: Optional[str],
    description: Optional[str],
) -> dict:
    """
    Validate raw holiday form input.

    Returns:
        ``{"is_valid": bool, "errors": [{"field": ..., "message": ...}]}``
    """
    errors = []

    if not start_date:
        errors.append({"field": "start_date", "message": "Start date is required"})

    stripped = (description or "").strip()
    if not stripped:
        errors.append({"field": "description", "message": "Description is required"})
    elif len(stripped) > MAX_DESCRIPTION_LENGTH:
        errors.append({
            "field": "description",
            "message": f"Description must be less than {MAX_DESCRIPTION_LENGTH} characters",
        })

    if start_date and end_date:
        start = to_date(start_date)
        end = to_date(end_date)
        if end < start:
            errors.append({"field": "end_date", "message": "End date must be on or after start date"})
        if calculate_duration(start, end) > MAX_HOLIDAY_DURATION_DAYS:
            errors.append({
                "field": "end_date",
                "message": f"Holiday duration cannot exceed {MAX_HOLIDAY_DURATION_DAYS} days",
            })

    return {"is_valid": not errors, "errors": errors}


def month_bounds(year: int, month: int) -> tuple:
    """First and last day of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def build_calendar_days(
    year: int,
    month: int,
    holidays: Sequence[Holiday],
    today: date,
) -> List[CalendarDay]:
    """
    Lay out a month as whole Sunday-first weeks.

    Days before and after the month pad the first and last week; each cell
    lists the holidays covering that day.
    """
    first, last = month_bounds(year, month)
    leading = (first.weekday() + 1) % 7  # days since the preceding Sunday
    total_cells = math.ceil((leading + last.day) / 7) * 7

    days = []
    grid_start = first - timedelta(days=leading)
    for offset in range(total_cells):
        day = grid_start + timedelta(days=offset)
        days.append(CalendarDay(
            date=day,
            is_current_month=day.month == month and day.year == year,
            is_today=day == today,
            holidays=[h for h in holidays if h.start_date <= day <= h.end_date],
        ))
    return days


WEEKEND_HOLIDAY_ID = re.compile(r"^(sunday|saturday)-(\d{4}-\d{2}-\d{2})$")


def is_weekend_holiday_id(public_id: str) -> bool:
    """Whether ``public_id`` names a generated weekend holiday."""
    return WEEKEND_HOLIDAY_ID.match(public_id) is not None


def parse_weekend_holiday_id(public_id: str) -> Optional[Holiday]:
    """Rebuild the generated holiday a weekend id refers to, or None."""
    match = WEEKEND_HOLIDAY_ID.match(public_id)
    if match is None:
        return None
    try:
        day = date.fromisoformat(match.group(2))
    except ValueError:
        return None
    holiday_type = HolidayType.SUNDAY if match.group(1) == "sunday" else HolidayType.SATURDAY
    expected = SUNDAY if holiday_type == HolidayType.SUNDAY else SATURDAY
    if day.weekday() != expected:
        return None
    return _weekend_holiday(day, holiday_type)


def to_holiday_view(holiday: Holiday, today: date) -> HolidayView:
    """Attach the display fields a dashboard renders for one holiday."""
    weekend = is_weekend_holiday(holiday)
    return HolidayView(
        **holiday.model_dump(),
        label=format_holiday_type(holiday.holiday_type),
        colors=get_holiday_type_color(holiday.holiday_type),
        duration=calculate_duration(holiday.start_date, holiday.end_date),
        date_range=format_date_range(holiday.start_date, holiday.end_date),
        is_weekend=weekend,
        is_editable=not weekend,
        status=get_holiday_status(holiday, today),
    )
