"""
Calendar exception API endpoints.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Query, status

from educard.core.config import settings
from educard.deps.di_container import get_container
from educard.schemas.calendar_exception import (
    CalendarException,
    CalendarExceptionCreate,
    CalendarExceptionFilters,
    CalendarExceptionUpdate,
    OverrideType,
)
from educard.schemas.envelope import Page

router = APIRouter()


@router.get("", response_model=Page[CalendarException])
async def list_exceptions(
    override_type: Optional[OverrideType] = Query(None),
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    classes: Optional[List[str]] = Query(None),
    ordering: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> Page[CalendarException]:
    controller = get_container().calendar_exception_controller()
    return await controller.list_exceptions(CalendarExceptionFilters(
        override_type=override_type,
        from_date=from_date,
        to_date=to_date,
        classes=classes,
        ordering=ordering,
        page=page,
        page_size=page_size,
    ))


@router.post("", response_model=CalendarException, status_code=status.HTTP_201_CREATED)
async def create_exception(exception_data: CalendarExceptionCreate) -> CalendarException:
    controller = get_container().calendar_exception_controller()
    return await controller.create_exception(exception_data)


@router.get("/{exception_id}", response_model=CalendarException)
async def get_exception(exception_id: str) -> CalendarException:
    controller = get_container().calendar_exception_controller()
    return await controller.get_exception(exception_id)


@router.put("/{exception_id}", response_model=CalendarException)
async def update_exception(exception_id: str, exception_data: CalendarExceptionUpdate) -> CalendarException:
    controller = get_container().calendar_exception_controller()
    return await controller.update_exception(exception_id, exception_data)


@router.delete("/{exception_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exception(exception_id: str):
    controller = get_container().calendar_exception_controller()
    await controller.delete_exception(exception_id)
