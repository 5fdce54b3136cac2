"""
Working day policy API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, status

from educard.deps.di_container import get_container
from educard.schemas.working_day_policy import (
    WorkingDayPolicy,
    WorkingDayPolicyCreate,
    WorkingDayPolicyListResponse,
    WorkingDayPolicyUpdate,
)

router = APIRouter()


@router.get("", response_model=WorkingDayPolicyListResponse)
async def list_policies() -> WorkingDayPolicyListResponse:
    """List policies, most recent first."""
    controller = get_container().working_day_policy_controller()
    return await controller.list_policies()


@router.get("/current", response_model=Optional[WorkingDayPolicy])
async def get_current_policy() -> Optional[WorkingDayPolicy]:
    """The most recent policy, or null when none exists."""
    controller = get_container().working_day_policy_controller()
    return await controller.get_current_policy()


@router.put("/current", response_model=WorkingDayPolicy)
async def save_current_policy(policy_data: WorkingDayPolicyCreate) -> WorkingDayPolicy:
    """Update the current policy, creating it when there is none."""
    controller = get_container().working_day_policy_controller()
    return await controller.save_current_policy(policy_data)


@router.post("", response_model=WorkingDayPolicy, status_code=status.HTTP_201_CREATED)
async def create_policy(policy_data: WorkingDayPolicyCreate) -> WorkingDayPolicy:
    controller = get_container().working_day_policy_controller()
    return await controller.create_policy(policy_data)


@router.put("/{policy_id}", response_model=WorkingDayPolicy)
async def update_policy(policy_id: str, policy_data: WorkingDayPolicyUpdate) -> WorkingDayPolicy:
    controller = get_container().working_day_policy_controller()
    return await controller.update_policy(policy_id, policy_data)


@router.delete("/{policy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_policy(policy_id: str):
    controller = get_container().working_day_policy_controller()
    await controller.delete_policy(policy_id)
