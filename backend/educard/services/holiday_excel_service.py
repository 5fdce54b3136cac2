"""
Excel template and bulk upload for holidays.
"""

import io
import logging
import zipfile
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.datavalidation import DataValidation
from pydantic import ValidationError

from educard.core.config import settings
from educard.core.exceptions import AppException
from educard.schemas.holiday import BulkUploadError, BulkUploadResult, HolidayCreate, HolidayType
from educard.services.holiday_service import HolidayService
from educard.utils.error_utils import format_validation_errors
from educard.utils.holiday_utils import HOLIDAY_TYPE_LABELS, filter_weekend_types

logger = logging.getLogger(__name__)

SHEET_TITLE = "Holidays"
COLUMNS = ["start_date", "end_date", "holiday_type", "description"]
COLUMN_WIDTHS = {"start_date": 14, "end_date": 14, "holiday_type": 24, "description": 50}
TEMPLATE_ROWS = 200


class HolidayExcelService:
    """Service for the holiday bulk upload workbook."""

    def __init__(self, holiday_service: HolidayService):
        self.holiday_service = holiday_service

    def build_template(self) -> io.BytesIO:
        """Create an empty upload workbook with a holiday type drop-down."""
        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE

        header_fill = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
        for col_idx, name in enumerate(COLUMNS, start=1):
            cell = ws.cell(row=1, column=col_idx, value=name)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")
            ws.column_dimensions[get_column_letter(col_idx)].width = COLUMN_WIDTHS[name]

        # example row
        ws.append([date(date.today().year, 1, 26), None, HolidayType.NATIONAL_HOLIDAY.value, "Republic Day"])
        for col_idx in (1, 2):
            ws.cell(row=2, column=col_idx).number_format = "yyyy-mm-dd"

        last_row = TEMPLATE_ROWS + 1
        type_values = [t.value for t in filter_weekend_types(HolidayType)]
        type_dv = DataValidation(type="list", formula1=f'"{",".join(type_values)}"', allow_blank=True)
        type_dv.add(f"C2:C{last_row}")
        ws.add_data_validation(type_dv)

        date_dv = DataValidation(type="date", operator="between", formula1="1900-01-01", formula2="2100-12-31", allow_blank=True)
        date_dv.add(f"A2:A{last_row}")
        date_dv.add(f"B2:B{last_row}")
        ws.add_data_validation(date_dv)

        ws.freeze_panes = "A2"

        output = io.BytesIO()
        wb.save(output)
        output.seek(0)
        return output

    def parse_rows(self, content: bytes) -> Tuple[List[HolidayCreate], List[BulkUploadError], int]:
        """
        Read and validate the data rows of an uploaded workbook.

        Returns:
            Valid holidays, per-row errors and the number of non-empty rows
        """
        if len(content) > settings.MAX_UPLOAD_SIZE:
            raise AppException(
                f"File is too large (maximum {settings.MAX_UPLOAD_SIZE // (1024 * 1024)} MB)",
                status_code=413,
            )
        try:
            wb = load_workbook(io.BytesIO(content), data_only=True, read_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError) as e:
            raise AppException("Invalid Excel file. Please upload the holiday template (.xlsx).", status_code=400) from e

        ws = wb[SHEET_TITLE] if SHEET_TITLE in wb.sheetnames else wb.active
        rows = ws.iter_rows(values_only=True)
        header = [str(v).strip().lower() if v is not None else "" for v in next(rows, ())]
        missing = [name for name in COLUMNS if name not in header]
        if missing:
            wb.close()
            raise AppException(
                f"Invalid template: missing column(s) {', '.join(missing)}",
                status_code=400,
            )
        positions = {name: header.index(name) for name in COLUMNS}

        holidays: List[HolidayCreate] = []
        errors: List[BulkUploadError] = []
        total_rows = 0
        for row_number, values in enumerate(rows, start=2):
            record = {name: _cell(values, positions[name]) for name in COLUMNS}
            if all(v is None for v in record.values()):
                continue
            total_rows += 1
            record["holiday_type"] = _holiday_type(record["holiday_type"])
            try:
                holidays.append(HolidayCreate(**{k: v for k, v in record.items() if v is not None}))
            except ValidationError as e:
                errors.extend(_row_errors(row_number, e))
        wb.close()
        return holidays, errors, total_rows

    async def bulk_upload(self, content: bytes) -> BulkUploadResult:
        """Validate every row, then create the valid ones in one request."""
        holidays, errors, total_rows = self.parse_rows(content)
        failed_rows = len({error.row for error in errors})

        if total_rows == 0:
            return BulkUploadResult(
                success=False,
                total_rows=0,
                errors=[BulkUploadError(row=0, message="The file contains no holiday rows")],
            )

        created = []
        if holidays:
            created = await self.holiday_service.create_holidays(holidays)

        logger.info(
            f"Holiday bulk upload: {len(created)} created, {failed_rows} failed of {total_rows} rows",
        )
        return BulkUploadResult(
            success=failed_rows == 0,
            created_count=len(created),
            failed_count=failed_rows,
            total_rows=total_rows,
            errors=errors,
        )


def _cell(values: tuple, index: int) -> Any:
    if index >= len(values):
        return None
    value = values[index]
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


_TYPES_BY_LABEL: Dict[str, HolidayType] = {
    label.lower(): holiday_type for holiday_type, label in HOLIDAY_TYPE_LABELS.items()
}


def _holiday_type(value: Any) -> Optional[str]:
    """Accept either the enum value or its display label."""
    if value is None:
        return None
    text = str(value).strip()
    match = _TYPES_BY_LABEL.get(text.lower())
    if match is not None:
        return match.value
    return text.upper().replace(" ", "_")


def _row_errors(row_number: int, exc: ValidationError) -> List[BulkUploadError]:
    return [
        BulkUploadError(row=row_number, **error)
        for error in format_validation_errors(exc.errors())
    ]
