"""
Holiday repository for the organization holiday calendar.
"""

from typing import Any, Dict, List

from educard.core.integrations.http.http_client import HttpClient
from educard.repositories.base_repository import BaseRepository
from educard.schemas.holiday import Holiday
from educard.utils.response_handler import handle_detail_response

HOLIDAYS_ENDPOINT = "/attendance/admin/holiday-calendar/"


class HolidayRepository(BaseRepository[Holiday]):
    """Repository for holiday operations."""

    def __init__(self, http_client: HttpClient):
        super().__init__(Holiday, http_client, HOLIDAYS_ENDPOINT)

    async def bulk_create(self, payloads: List[Dict[str, Any]]) -> List[Holiday]:
        """Create several holidays in one request; the API accepts a JSON array."""
        body = await self.http_client.post(self.endpoint, json=payloads)
        data = handle_detail_response(body, "bulk create Holiday")
        if isinstance(data, dict):
            data = [data]
        return [self._parse(item) for item in data]
