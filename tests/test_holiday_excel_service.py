"""
Holiday workbook template and bulk upload tests.
"""

import io
from datetime import date

import pytest
from openpyxl import Workbook, load_workbook

from educard.core.cache import QueryCache
from educard.core.exceptions import AppException
from educard.repositories.holiday_repository import HOLIDAYS_ENDPOINT, HolidayRepository
from educard.repositories.working_day_policy_repository import WorkingDayPolicyRepository
from educard.schemas.holiday import HolidayType
from educard.services.holiday_excel_service import COLUMNS, HolidayExcelService
from educard.services.holiday_service import HolidayService
from educard.services.working_day_policy_service import WorkingDayPolicyService

from fakes import TODAY, FakeHttpClient, envelope


def workbook_bytes(rows, header=COLUMNS) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Holidays"
    ws.append(list(header))
    for row in rows:
        ws.append(list(row))
    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


@pytest.fixture
def fake() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def excel_service(fake: FakeHttpClient) -> HolidayExcelService:
    cache = QueryCache()
    policy_service = WorkingDayPolicyService(WorkingDayPolicyRepository(fake), cache)
    holiday_service = HolidayService(HolidayRepository(fake), policy_service, cache, today=lambda: TODAY)
    return HolidayExcelService(holiday_service)


def test_template_has_header_and_type_dropdown(excel_service):
    content = excel_service.build_template().getvalue()

    ws = load_workbook(io.BytesIO(content))["Holidays"]
    assert [cell.value for cell in ws[1]] == COLUMNS
    formulas = [dv.formula1 for dv in ws.data_validations.dataValidation if dv.type == "list"]
    assert len(formulas) == 1
    assert "FESTIVAL" in formulas[0]
    assert "SUNDAY" not in formulas[0].replace("SECOND_SATURDAY", "")


def test_template_example_row_parses(excel_service):
    holidays, errors, total_rows = excel_service.parse_rows(excel_service.build_template().getvalue())

    assert errors == []
    assert total_rows == 1
    assert holidays[0].holiday_type == HolidayType.NATIONAL_HOLIDAY
    assert holidays[0].end_date == holidays[0].start_date


def test_parse_rows_reports_errors_per_row(excel_service):
    content = workbook_bytes([
        (date(2025, 1, 14), date(2025, 1, 16), "Festival", "Pongal"),
        (None, None, None, None),
        ("2025-01-10", "2025-01-09", "FESTIVAL", "Backwards"),
        ("2025-01-12", None, "Sunday", "Weekend"),
        ("2025-08-15", None, "national holiday", "Independence Day"),
    ])

    holidays, errors, total_rows = excel_service.parse_rows(content)

    assert total_rows == 4
    assert [h.description for h in holidays] == ["Pongal", "Independence Day"]
    assert holidays[1].holiday_type == HolidayType.NATIONAL_HOLIDAY
    assert [(e.row, e.field) for e in errors] == [(4, None), (5, "holiday_type")]
    assert errors[0].message == "End date must be on or after start date"


def test_parse_rows_rejects_non_workbook(excel_service):
    with pytest.raises(AppException) as exc_info:
        excel_service.parse_rows(b"start_date,end_date\n2025-01-01,2025-01-01\n")
    assert exc_info.value.status_code == 400


def test_parse_rows_requires_template_columns(excel_service):
    with pytest.raises(AppException) as exc_info:
        excel_service.parse_rows(workbook_bytes([], header=["start_date", "description"]))
    assert exc_info.value.status_code == 400
    assert "end_date, holiday_type" in exc_info.value.message


async def test_bulk_upload_creates_valid_rows(fake, excel_service):
    fake.on("POST", HOLIDAYS_ENDPOINT, lambda json, **_: envelope([
        {**item, "public_id": f"h-{index}"} for index, item in enumerate(json)
    ]))
    content = workbook_bytes([
        ("2025-01-14", "2025-01-16", "FESTIVAL", "Pongal"),
        ("2025-01-20", None, "OTHER", " "),
    ])

    result = await excel_service.bulk_upload(content)

    assert not result.success
    assert result.created_count == 1
    assert result.failed_count == 1
    assert result.total_rows == 2
    assert result.errors[0].row == 3
    sent = fake.calls_to("POST", HOLIDAYS_ENDPOINT)[0]["json"]
    assert [item["description"] for item in sent] == ["Pongal"]


async def test_bulk_upload_of_empty_sheet(fake, excel_service):
    result = await excel_service.bulk_upload(workbook_bytes([]))

    assert not result.success
    assert result.errors[0].message == "The file contains no holiday rows"
    assert fake.calls == []
