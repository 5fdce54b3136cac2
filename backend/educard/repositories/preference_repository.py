"""
Organization preference repository.
"""

from typing import Any, List, Optional

from educard.core.integrations.http.http_client import HttpClient
from educard.repositories.base_repository import BaseRepository
from educard.schemas.preference import (
    GroupedPreference,
    OrganizationPreference,
    PreferenceBulkItem,
    group_preferences,
)
from educard.utils.response_handler import handle_detail_response, handle_list_response

PREFERENCES_ENDPOINT = "/organization-preferences/"


class PreferenceRepository(BaseRepository[OrganizationPreference]):
    """Repository for organization preferences."""

    def __init__(self, http_client: HttpClient):
        super().__init__(OrganizationPreference, http_client, PREFERENCES_ENDPOINT)

    async def list_by_category(self, category: Optional[str] = None) -> List[OrganizationPreference]:
        params = {"category": category} if category else None
        return await self.list_all(params)

    async def list_grouped(self) -> List[GroupedPreference]:
        body = await self.http_client.get(self.endpoint, params={"grouped": "true"})
        data = handle_list_response(body, "list grouped OrganizationPreference")
        if data and "preferences" not in data[0]:
            # flat list: group locally
            return group_preferences([self._parse(item) for item in data])
        return [GroupedPreference.model_validate(item) for item in data]

    async def update_value(self, public_id: str, value: Any) -> OrganizationPreference:
        return await self.update(public_id, {"value": value})

    async def bulk_update(self, items: List[PreferenceBulkItem]) -> List[OrganizationPreference]:
        body = await self.http_client.post(
            f"{self.endpoint}bulk-update/",
            json={"preferences": [item.model_dump() for item in items]},
        )
        data = handle_detail_response(body, "bulk update OrganizationPreference")
        if isinstance(data, dict):
            data = [data]
        return [self._parse(item) for item in data]
