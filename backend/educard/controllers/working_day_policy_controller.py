"""
Working day policy controller.
"""

from typing import Optional

from educard.controllers.base_controller import BaseController
from educard.schemas.working_day_policy import (
    WorkingDayPolicy,
    WorkingDayPolicyCreate,
    WorkingDayPolicyListResponse,
    WorkingDayPolicyUpdate,
)
from educard.services.working_day_policy_service import WorkingDayPolicyService


class WorkingDayPolicyController(BaseController):
    """Controller for working day policy operations."""

    def __init__(self, policy_service: WorkingDayPolicyService):
        self.policy_service = policy_service

    async def list_policies(self) -> WorkingDayPolicyListResponse:
        return await self.policy_service.list_policies_response()

    async def get_current_policy(self) -> Optional[WorkingDayPolicy]:
        return await self.policy_service.get_current_policy()

    async def create_policy(self, policy_data: WorkingDayPolicyCreate) -> WorkingDayPolicy:
        return await self.policy_service.create_policy(policy_data)

    async def save_current_policy(self, policy_data: WorkingDayPolicyCreate) -> WorkingDayPolicy:
        return await self.policy_service.save_current_policy(policy_data)

    async def update_policy(self, public_id: str, policy_data: WorkingDayPolicyUpdate) -> WorkingDayPolicy:
        return await self.policy_service.update_policy(public_id, policy_data)

    async def delete_policy(self, public_id: str) -> None:
        await self.policy_service.delete_policy(public_id)
