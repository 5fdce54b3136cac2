"""
Student controller.
"""

from educard.controllers.base_controller import BaseController
from educard.schemas.envelope import Page
from educard.schemas.student import (
    FetchStudentsParams,
    Student,
    StudentCreate,
    StudentListItem,
    StudentUpdate,
)
from educard.services.student_service import StudentService


class StudentController(BaseController):
    """Controller for student operations."""

    def __init__(self, student_service: StudentService):
        self.student_service = student_service

    async def list_students(self, params: FetchStudentsParams) -> Page[StudentListItem]:
        return await self.student_service.list_students(params)

    async def get_student(self, public_id: str, is_deleted: bool = False) -> Student:
        return await self.student_service.get_student(public_id, is_deleted)

    async def create_student(self, class_id: str, student_data: StudentCreate) -> Student:
        return await self.student_service.create_student(class_id, student_data)

    async def update_student(self, class_id: str, public_id: str, student_data: StudentUpdate) -> Student:
        return await self.student_service.update_student(class_id, public_id, student_data)

    async def delete_student(self, class_id: str, public_id: str) -> None:
        await self.student_service.delete_student(class_id, public_id)

    async def reactivate_student(self, class_id: str, public_id: str) -> Student:
        return await self.student_service.reactivate_student(class_id, public_id)
