"""
Organization preference API endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from educard.deps.di_container import get_container
from educard.schemas.preference import (
    GroupedPreference,
    OrganizationPreference,
    PreferenceBulkUpdate,
    PreferenceUpdate,
)

router = APIRouter()


@router.get("", response_model=List[OrganizationPreference])
async def list_preferences(category: Optional[str] = Query(None)) -> List[OrganizationPreference]:
    controller = get_container().preference_controller()
    return await controller.list_preferences(category)


@router.get("/grouped", response_model=List[GroupedPreference])
async def list_grouped_preferences() -> List[GroupedPreference]:
    controller = get_container().preference_controller()
    return await controller.list_grouped_preferences()


@router.post("/bulk-update", response_model=List[OrganizationPreference])
async def bulk_update_preferences(update: PreferenceBulkUpdate) -> List[OrganizationPreference]:
    """Update several preferences, addressed by key."""
    controller = get_container().preference_controller()
    return await controller.bulk_update_preferences(update)


@router.get("/{preference_id}", response_model=OrganizationPreference)
async def get_preference(preference_id: str) -> OrganizationPreference:
    controller = get_container().preference_controller()
    return await controller.get_preference(preference_id)


@router.patch("/{preference_id}", response_model=OrganizationPreference)
async def update_preference(preference_id: str, update: PreferenceUpdate) -> OrganizationPreference:
    controller = get_container().preference_controller()
    return await controller.update_preference(preference_id, update)
