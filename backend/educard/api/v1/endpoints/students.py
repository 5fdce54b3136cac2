"""
Student API endpoints.
Listing is organization wide; create, update and delete are scoped to a class.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from educard.core.config import settings
from educard.deps.di_container import get_container
from educard.schemas.envelope import Page
from educard.schemas.student import (
    FetchStudentsParams,
    Student,
    StudentCreate,
    StudentListItem,
    StudentUpdate,
)

router = APIRouter()


@router.get("", response_model=Page[StudentListItem])
async def list_students(
    search: Optional[str] = Query(None),
    class_id: Optional[str] = Query(None),
    is_deleted: Optional[bool] = Query(None),
    ordering: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> Page[StudentListItem]:
    controller = get_container().student_controller()
    return await controller.list_students(FetchStudentsParams(
        search=search,
        class_id=class_id,
        is_deleted=is_deleted,
        ordering=ordering,
        page=page,
        page_size=page_size,
    ))


@router.get("/{student_id}", response_model=Student)
async def get_student(student_id: str, is_deleted: bool = Query(False)) -> Student:
    controller = get_container().student_controller()
    return await controller.get_student(student_id, is_deleted)


@router.post("/classes/{class_id}/students", response_model=Student, status_code=status.HTTP_201_CREATED)
async def create_student(class_id: str, student_data: StudentCreate) -> Student:
    controller = get_container().student_controller()
    return await controller.create_student(class_id, student_data)


@router.put("/classes/{class_id}/students/{student_id}", response_model=Student)
async def update_student(class_id: str, student_id: str, student_data: StudentUpdate) -> Student:
    controller = get_container().student_controller()
    return await controller.update_student(class_id, student_id, student_data)


@router.delete("/classes/{class_id}/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(class_id: str, student_id: str):
    """Deactivate a student (soft delete upstream)."""
    controller = get_container().student_controller()
    await controller.delete_student(class_id, student_id)


@router.post("/classes/{class_id}/students/{student_id}/activate", response_model=Student)
async def reactivate_student(class_id: str, student_id: str) -> Student:
    controller = get_container().student_controller()
    return await controller.reactivate_student(class_id, student_id)
