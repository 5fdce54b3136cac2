"""
Holiday calendar API endpoints.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, File, HTTPException, Query, Request, UploadFile, status
from fastapi.responses import StreamingResponse

from educard.core.config import settings
from educard.core.rate_limit import limiter
from educard.deps.di_container import get_container
from educard.schemas.holiday import (
    BulkUploadResult,
    FetchHolidaysParams,
    HolidayCalendarResponse,
    HolidayCreate,
    HolidayListResponse,
    HolidaySummaryResponse,
    HolidayType,
    HolidayTypeOption,
    HolidayUpdate,
    HolidayView,
)

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("", response_model=HolidayListResponse)
async def list_holidays(
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    holiday_type: Optional[HolidayType] = Query(None),
    ordering: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> HolidayListResponse:
    """List stored holidays with optional filters."""
    controller = get_container().holiday_controller()
    return await controller.list_holidays(FetchHolidaysParams(
        from_date=from_date,
        to_date=to_date,
        holiday_type=holiday_type,
        ordering=ordering,
        page=page,
        page_size=page_size,
    ))


@router.get("/calendar", response_model=HolidayCalendarResponse)
async def get_month_calendar(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    month: Optional[int] = Query(None, ge=1, le=12),
) -> HolidayCalendarResponse:
    """Month view: stored holidays merged with policy weekends, plus the day grid."""
    container = get_container()
    today = container.today()()
    controller = container.holiday_controller()
    return await controller.get_month_calendar(year or today.year, month or today.month)


@router.get("/summary", response_model=HolidaySummaryResponse)
async def get_summary(limit: int = Query(5, ge=1, le=50)) -> HolidaySummaryResponse:
    """Ongoing and upcoming holidays."""
    controller = get_container().holiday_controller()
    return await controller.get_summary(limit)


@router.get("/types", response_model=List[HolidayTypeOption])
async def list_holiday_types() -> List[HolidayTypeOption]:
    """Holiday types that can be created by hand."""
    controller = get_container().holiday_controller()
    return controller.get_creatable_types()


@router.get("/template")
async def download_template() -> StreamingResponse:
    """Download the bulk upload workbook."""
    controller = get_container().holiday_controller()
    return StreamingResponse(
        controller.build_template(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=holiday_template.xlsx"},
    )


@router.post("/bulk-upload", response_model=BulkUploadResult)
@limiter.limit("10/minute")
async def bulk_upload(
    request: Request,
    file: UploadFile = File(...),
) -> BulkUploadResult:
    """Create holidays from an uploaded workbook."""
    if not file.filename or not file.filename.lower().endswith(".xlsx"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Only .xlsx files are supported.",
        )
    if file.size is not None and file.size > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File is too large (maximum {settings.MAX_UPLOAD_SIZE // (1024 * 1024)} MB)",
        )
    content = await file.read()
    controller = get_container().holiday_controller()
    return await controller.bulk_upload(content)


@router.post("/bulk", response_model=List[HolidayView], status_code=status.HTTP_201_CREATED)
async def create_holidays(holidays_data: List[HolidayCreate]) -> List[HolidayView]:
    """Create several holidays in one request."""
    if not holidays_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one holiday is required",
        )
    controller = get_container().holiday_controller()
    return await controller.create_holidays(holidays_data)


@router.post("", response_model=HolidayView, status_code=status.HTTP_201_CREATED)
async def create_holiday(holiday_data: HolidayCreate) -> HolidayView:
    controller = get_container().holiday_controller()
    return await controller.create_holiday(holiday_data)


@router.get("/{holiday_id}", response_model=HolidayView)
async def get_holiday(holiday_id: str) -> HolidayView:
    controller = get_container().holiday_controller()
    return await controller.get_holiday(holiday_id)


@router.put("/{holiday_id}", response_model=HolidayView)
async def update_holiday(holiday_id: str, holiday_data: HolidayUpdate) -> HolidayView:
    """Update a stored holiday. Generated weekend holidays are read-only."""
    controller = get_container().holiday_controller()
    return await controller.update_holiday(holiday_id, holiday_data)


@router.delete("/{holiday_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_holiday(holiday_id: str):
    """Delete a stored holiday. Generated weekend holidays are read-only."""
    controller = get_container().holiday_controller()
    await controller.delete_holiday(holiday_id)
