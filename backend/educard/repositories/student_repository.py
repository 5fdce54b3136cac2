"""
Student repository.
Listing is organization wide; writes go through the owning class.
"""

from typing import Any, Dict, Optional

from educard.core.integrations.http.http_client import HttpClient
from educard.repositories.base_repository import BaseRepository
from educard.schemas.envelope import ApiPagination, Page
from educard.schemas.student import Student, StudentListItem
from educard.utils.response_handler import handle_detail_response, handle_list_response

STUDENTS_ENDPOINT = "/students/"


def class_students_endpoint(class_id: str) -> str:
    return f"/students/classes/{class_id}/students/"


class StudentRepository(BaseRepository[Student]):
    """Repository for student operations."""

    def __init__(self, http_client: HttpClient):
        super().__init__(Student, http_client, STUDENTS_ENDPOINT)

    async def list_flat(self, params: Optional[Dict[str, Any]] = None) -> Page[StudentListItem]:
        body = await self.http_client.get(self.endpoint, params=params or None)
        items = handle_list_response(body, "list Student")
        pagination = body.get("pagination")
        return Page(
            items=[StudentListItem.from_api(item) for item in items],
            pagination=ApiPagination.model_validate(pagination) if pagination else None,
        )

    async def get_student(self, public_id: str, is_deleted: bool = False) -> Student:
        params = {"is_deleted": "true"} if is_deleted else None
        return await self.get(public_id, params=params)

    async def create_in_class(self, class_id: str, payload: Dict[str, Any]) -> Student:
        body = await self.http_client.post(class_students_endpoint(class_id), json=payload)
        return self._parse(handle_detail_response(body, "create Student"))

    async def update_in_class(self, class_id: str, public_id: str, payload: Dict[str, Any]) -> Student:
        body = await self.http_client.patch(
            f"{class_students_endpoint(class_id)}{public_id}/", json=payload
        )
        return self._parse(handle_detail_response(body, "update Student"))

    async def delete_in_class(self, class_id: str, public_id: str) -> None:
        await self.http_client.delete(f"{class_students_endpoint(class_id)}{public_id}/")

    async def reactivate(self, class_id: str, public_id: str) -> Student:
        body = await self.http_client.post(f"{class_students_endpoint(class_id)}{public_id}/activate/")
        return self._parse(handle_detail_response(body, "reactivate Student"))
