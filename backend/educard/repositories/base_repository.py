"""
Base repository class with common CRUD operations.
Repositories wrap one organization API resource and unwrap its response envelope.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from educard.core.integrations.http.http_client import HttpClient
from educard.schemas.envelope import ApiPagination, Page
from educard.utils.response_handler import handle_detail_response, handle_list_response

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations."""

    def __init__(self, model: Type[ModelType], http_client: HttpClient, endpoint: str):
        """
        Initialize repository.

        Args:
            model: Pydantic model the resource is parsed into
            http_client: Client for the organization API
            endpoint: Collection path, e.g. ``/attendance/admin/holiday-calendar/``
        """
        self.model = model
        self.http_client = http_client
        self.endpoint = endpoint.rstrip("/") + "/"

    @property
    def context(self) -> str:
        return self.model.__name__

    def _detail_url(self, public_id: str) -> str:
        return f"{self.endpoint}{public_id}/"

    def _parse(self, data: Dict[str, Any]) -> ModelType:
        return self.model.model_validate(data)

    async def list(self, params: Optional[Dict[str, Any]] = None) -> Page[ModelType]:
        """
        List records.

        Args:
            params: Query parameters passed through to the API

        Returns:
            Parsed items and the pagination block, if any
        """
        body = await self.http_client.get(self.endpoint, params=params or None)
        items = handle_list_response(body, f"list {self.context}")
        pagination = body.get("pagination")
        return Page(
            items=[self._parse(item) for item in items],
            pagination=ApiPagination.model_validate(pagination) if pagination else None,
        )

    async def list_all(self, params: Optional[Dict[str, Any]] = None) -> List[ModelType]:
        return (await self.list(params)).items

    async def get(self, public_id: str, params: Optional[Dict[str, Any]] = None) -> ModelType:
        body = await self.http_client.get(self._detail_url(public_id), params=params or None)
        return self._parse(handle_detail_response(body, f"get {self.context}"))

    async def create(self, payload: Dict[str, Any]) -> ModelType:
        body = await self.http_client.post(self.endpoint, json=payload)
        return self._parse(handle_detail_response(body, f"create {self.context}"))

    async def update(self, public_id: str, payload: Dict[str, Any]) -> ModelType:
        """Partially update a record (PATCH)."""
        body = await self.http_client.patch(self._detail_url(public_id), json=payload)
        return self._parse(handle_detail_response(body, f"update {self.context}"))

    async def delete(self, public_id: str) -> None:
        await self.http_client.delete(self._detail_url(public_id))
