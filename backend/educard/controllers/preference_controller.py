"""
Organization preference controller.
"""

from typing import List, Optional

from educard.controllers.base_controller import BaseController
from educard.schemas.preference import (
    GroupedPreference,
    OrganizationPreference,
    PreferenceBulkUpdate,
    PreferenceUpdate,
)
from educard.services.preference_service import PreferenceService


class PreferenceController(BaseController):
    def __init__(self, preference_service: PreferenceService):
        self.preference_service = preference_service

    async def list_preferences(self, category: Optional[str] = None) -> List[OrganizationPreference]:
        return await self.preference_service.list_preferences(category)

    async def list_grouped_preferences(self) -> List[GroupedPreference]:
        return await self.preference_service.list_grouped_preferences()

    async def get_preference(self, public_id: str) -> OrganizationPreference:
        return await self.preference_service.get_preference(public_id)

    async def update_preference(self, public_id: str, update: PreferenceUpdate) -> OrganizationPreference:
        return await self.preference_service.update_preference(public_id, update)

    async def bulk_update_preferences(self, update: PreferenceBulkUpdate) -> List[OrganizationPreference]:
        return await self.preference_service.bulk_update_preferences(update)
