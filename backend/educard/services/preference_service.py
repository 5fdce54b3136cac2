"""
Organization preference service.
"""

import logging
from typing import List, Optional

from educard.core.cache import QueryCache
from educard.core.query_keys import SHORT_STALE_TIME, QueryKeys
from educard.repositories.preference_repository import PreferenceRepository
from educard.schemas.preference import (
    GroupedPreference,
    OrganizationPreference,
    PreferenceBulkUpdate,
    PreferenceUpdate,
)
from educard.services.base_service import BaseService

logger = logging.getLogger(__name__)


class PreferenceService(BaseService):
    """Service for organization preference operations."""

    def __init__(self, preference_repo: PreferenceRepository, cache: QueryCache):
        super().__init__(cache)
        self.preference_repo = preference_repo

    async def list_preferences(self, category: Optional[str] = None) -> List[OrganizationPreference]:
        return await self.cached(
            QueryKeys.preferences({"category": category}),
            lambda: self.preference_repo.list_by_category(category),
            SHORT_STALE_TIME,
        )

    async def list_grouped_preferences(self) -> List[GroupedPreference]:
        return await self.cached(
            QueryKeys.preferences({"grouped": True}),
            self.preference_repo.list_grouped,
            SHORT_STALE_TIME,
        )

    async def get_preference(self, public_id: str) -> OrganizationPreference:
        return await self.preference_repo.get(public_id)

    async def update_preference(self, public_id: str, update: PreferenceUpdate) -> OrganizationPreference:
        preference = await self.preference_repo.update_value(public_id, update.value)
        self.invalidate(QueryKeys.PREFERENCES)
        return preference

    async def bulk_update_preferences(self, update: PreferenceBulkUpdate) -> List[OrganizationPreference]:
        preferences = await self.preference_repo.bulk_update(update.preferences)
        self.invalidate(QueryKeys.PREFERENCES)
        logger.info(f"Updated {len(update.preferences)} organization preferences")
        return preferences
