"""
Student service.
"""

import logging

from educard.core.cache import QueryCache
from educard.core.query_keys import SHORT_STALE_TIME, QueryKeys
from educard.repositories.student_repository import StudentRepository
from educard.schemas.envelope import Page
from educard.schemas.student import (
    FetchStudentsParams,
    Student,
    StudentCreate,
    StudentListItem,
    StudentUpdate,
)
from educard.services.base_service import BaseService

logger = logging.getLogger(__name__)


class StudentService(BaseService):
    """Service for student operations."""

    def __init__(self, student_repo: StudentRepository, cache: QueryCache):
        super().__init__(cache)
        self.student_repo = student_repo

    async def list_students(self, params: FetchStudentsParams) -> Page[StudentListItem]:
        query = params.to_query()
        return await self.cached(
            QueryKeys.students(query),
            lambda: self.student_repo.list_flat(query),
            SHORT_STALE_TIME,
        )

    async def get_student(self, public_id: str, is_deleted: bool = False) -> Student:
        return await self.cached(
            QueryKeys.student(public_id, is_deleted),
            lambda: self.student_repo.get_student(public_id, is_deleted),
            SHORT_STALE_TIME,
        )

    async def create_student(self, class_id: str, student_data: StudentCreate) -> Student:
        student = await self.student_repo.create_in_class(
            class_id, student_data.model_dump(mode="json", exclude_none=True)
        )
        self.invalidate(QueryKeys.STUDENTS)
        logger.info(f"Created student {student.public_id} in class {class_id}")
        return student

    async def update_student(self, class_id: str, public_id: str, student_data: StudentUpdate) -> Student:
        student = await self.student_repo.update_in_class(
            class_id, public_id, student_data.model_dump(mode="json", exclude_unset=True)
        )
        self.invalidate(QueryKeys.STUDENTS)
        return student

    async def delete_student(self, class_id: str, public_id: str) -> None:
        await self.student_repo.delete_in_class(class_id, public_id)
        self.invalidate(QueryKeys.STUDENTS)
        logger.info(f"Deactivated student {public_id} in class {class_id}")

    async def reactivate_student(self, class_id: str, public_id: str) -> Student:
        student = await self.student_repo.reactivate(class_id, public_id)
        self.invalidate(QueryKeys.STUDENTS)
        return student
