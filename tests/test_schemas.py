"""
Request schema validation tests.
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from educard.schemas.calendar_exception import CalendarExceptionCreate, CalendarExceptionFilters, OverrideType
from educard.schemas.holiday import FetchHolidaysParams, HolidayCreate, HolidayType, HolidayUpdate
from educard.schemas.leave import LeaveAllocationCreate, LeaveAllocationUpdate
from educard.schemas.preference import OrganizationPreference, group_preferences
from educard.schemas.student import FetchStudentsParams, StudentCreate, StudentListItem, StudentUpdate
from educard.schemas.working_day_policy import (
    SaturdayOffPattern,
    WorkingDayPolicy,
    WorkingDayPolicyCreate,
    select_policy_for,
)


def error_messages(exc_info) -> list:
    return [e["msg"].replace("Value error, ", "") for e in exc_info.value.errors()]


class TestHolidayCreate:
    def test_defaults(self):
        holiday = HolidayCreate(start_date="2025-01-26", description="  Republic Day  ")
        assert holiday.end_date == date(2025, 1, 26)
        assert holiday.holiday_type == HolidayType.NATIONAL_HOLIDAY
        assert holiday.description == "Republic Day"

    @pytest.mark.parametrize("holiday_type", [HolidayType.SUNDAY, HolidayType.SATURDAY])
    def test_weekend_types_rejected(self, holiday_type):
        with pytest.raises(ValidationError) as exc_info:
            HolidayCreate(start_date="2025-01-05", holiday_type=holiday_type, description="Weekend")
        assert "cannot be created" in error_messages(exc_info)[0]

    def test_blank_description(self):
        with pytest.raises(ValidationError) as exc_info:
            HolidayCreate(start_date="2025-01-26", description="   ")
        assert error_messages(exc_info) == ["Description is required"]

    def test_description_length(self):
        HolidayCreate(start_date="2025-01-26", description="x" * 255)
        with pytest.raises(ValidationError) as exc_info:
            HolidayCreate(start_date="2025-01-26", description="x" * 256)
        assert error_messages(exc_info) == ["Description must be less than 255 characters"]

    def test_end_before_start(self):
        with pytest.raises(ValidationError) as exc_info:
            HolidayCreate(start_date="2025-01-10", end_date="2025-01-09", description="Break")
        assert error_messages(exc_info) == ["End date must be on or after start date"]

    def test_duration_limit(self):
        HolidayCreate(start_date="2025-01-01", end_date="2025-03-01", description="Sixty days")
        with pytest.raises(ValidationError) as exc_info:
            HolidayCreate(start_date="2025-01-01", end_date="2025-03-02", description="Too long")
        assert error_messages(exc_info) == ["Holiday duration cannot exceed 60 days"]


def test_holiday_update_checks_range_only_when_both_dates_given():
    assert HolidayUpdate(end_date="2025-01-01").end_date == date(2025, 1, 1)
    with pytest.raises(ValidationError):
        HolidayUpdate(start_date="2025-01-02", end_date="2025-01-01")


def test_fetch_holidays_params_to_query():
    params = FetchHolidaysParams(
        from_date=date(2025, 1, 1),
        to_date=date(2025, 1, 31),
        holiday_type=HolidayType.FESTIVAL,
        page_size=50,
    )
    assert params.to_query() == {
        "from_date": "2025-01-01",
        "to_date": "2025-01-31",
        "holiday_type": "FESTIVAL",
        "page_size": 50,
    }


class TestWorkingDayPolicy:
    def test_effective_to_before_from(self):
        with pytest.raises(ValidationError) as exc_info:
            WorkingDayPolicyCreate(effective_from="2025-06-01", effective_to="2025-05-31")
        assert error_messages(exc_info) == ["Effective to date must be after effective from date"]

    def test_select_policy_prefers_covering_window(self):
        current = WorkingDayPolicy(
            public_id="p2", effective_from="2025-04-01", saturday_off_pattern=SaturdayOffPattern.ALL
        )
        previous = WorkingDayPolicy(
            public_id="p1", effective_from="2024-04-01", effective_to="2025-03-31"
        )

        assert select_policy_for([current, previous], date(2025, 1, 1)) is previous
        assert select_policy_for([current, previous], date(2025, 5, 1)) is current
        assert select_policy_for([current, previous], date(2020, 1, 1)) is current
        assert select_policy_for([], date(2025, 1, 1)) is None


class TestLeaveAllocation:
    def base(self, **overrides):
        data = {"leave_type": 1, "total_days": "12", "max_carry_forward_days": "5", "roles": [2]}
        data.update(overrides)
        return data

    def test_valid(self):
        allocation = LeaveAllocationCreate(**self.base())
        assert allocation.total_days == Decimal("12")

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"total_days": "0"}, "Total days must be between 0.5 and 365"),
            ({"total_days": "366"}, "Total days must be between 0.5 and 365"),
            ({"max_carry_forward_days": "-1"}, "Maximum carry forward days must be between 0 and 365"),
            ({"max_carry_forward_days": "13"}, "Carry forward days cannot exceed total allocated days"),
            ({"roles": []}, "Either enable 'Applies to All Roles' or select at least one role"),
            (
                {"effective_from": "2025-04-01", "effective_to": "2025-04-01"},
                "End date must be after start date",
            ),
        ],
    )
    def test_rules(self, overrides, message):
        with pytest.raises(ValidationError) as exc_info:
            LeaveAllocationCreate(**self.base(**overrides))
        assert error_messages(exc_info) == [message]

    def test_all_roles_needs_no_role_list(self):
        LeaveAllocationCreate(**self.base(roles=[], applies_to_all_roles=True))

    def test_partial_update(self):
        assert LeaveAllocationUpdate(name="Casual").model_dump(exclude_unset=True) == {"name": "Casual"}


class TestStudent:
    def test_normalization(self):
        student = StudentCreate(
            first_name=" Asha ",
            last_name="D'Souza",
            roll_number="a-12",
            email=" Asha@Example.COM ",
            phone="(987) 654-3210",
        )
        assert student.first_name == "Asha"
        assert student.roll_number == "A-12"
        assert student.email == "asha@example.com"
        assert student.phone == "9876543210"

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"first_name": "A"}, "First name must be at least 2 characters"),
            ({"first_name": "Asha1"}, "First name can only contain letters, spaces, hyphens, and apostrophes"),
            ({"last_name": " "}, "Last name is required"),
            ({"roll_number": "R" * 21}, "Roll number must not exceed 20 characters"),
            ({"roll_number": "12/A"}, "Roll number can only contain letters, numbers, hyphens, and underscores"),
            ({"phone": "12345"}, "Phone number must be exactly 10 digits"),
            ({"email": "not-an-email"}, "Invalid email format"),
        ],
    )
    def test_rules(self, overrides, message):
        data = {"first_name": "Asha", "last_name": "Rao", "roll_number": "12"}
        data.update(overrides)
        with pytest.raises(ValidationError) as exc_info:
            StudentCreate(**data)
        assert error_messages(exc_info) == [message]

    def test_update_allows_partial(self):
        assert StudentUpdate(phone="").model_dump(exclude_unset=True) == {"phone": ""}

    def test_list_item_flattens_nested_payload(self):
        item = StudentListItem.from_api({
            "public_id": "s1",
            "user_info": {"full_name": "Asha Rao", "email": "asha@example.com", "gender": "FEMALE"},
            "class_info": {"public_id": "c1", "name": "5-A", "class_master_name": "Grade 5"},
            "roll_number": "12",
            "is_deleted": True,
        })
        assert item.full_name == "Asha Rao"
        assert item.class_id == "c1"
        assert item.class_name == "5-A"
        assert item.gender == "FEMALE"
        assert item.phone == ""
        assert not item.is_active

    def test_fetch_params_render_booleans(self):
        assert FetchStudentsParams(is_deleted=True, page=2).to_query() == {"is_deleted": "true", "page": 2}


class TestCalendarException:
    def test_classes_required_when_not_for_all(self):
        with pytest.raises(ValidationError) as exc_info:
            CalendarExceptionCreate(
                date="2025-01-11",
                override_type=OverrideType.FORCE_WORKING,
                reason="Exam day",
                is_applicable_to_all_classes=False,
            )
        assert "Select at least one class" in error_messages(exc_info)[0]

    def test_reason_required(self):
        with pytest.raises(ValidationError):
            CalendarExceptionCreate(date="2025-01-11", override_type=OverrideType.FORCE_HOLIDAY, reason=" ")

    def test_all_classes_clears_class_list(self):
        exception = CalendarExceptionCreate(
            date="2025-01-11",
            override_type=OverrideType.FORCE_HOLIDAY,
            reason="Local festival",
            classes=["c1"],
        )
        assert exception.classes == []

    def test_filters_join_classes(self):
        filters = CalendarExceptionFilters(classes=["c1", "c2"], from_date=date(2025, 1, 1))
        assert filters.to_query() == {"classes": "c1,c2", "from_date": "2025-01-01"}


def test_group_preferences_keeps_category_order():
    preferences = [
        OrganizationPreference(public_id="1", key="a", category="Attendance"),
        OrganizationPreference(public_id="2", key="b", category="Academic"),
        OrganizationPreference(public_id="3", key="c", category="Attendance"),
    ]
    groups = group_preferences(preferences)
    assert [(g.category, g.count) for g in groups] == [("Attendance", 2), ("Academic", 1)]
