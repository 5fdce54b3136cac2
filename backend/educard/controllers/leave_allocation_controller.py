"""
Leave allocation controller.
"""

from typing import List

from educard.controllers.base_controller import BaseController
from educard.schemas.envelope import Page
from educard.schemas.leave import (
    FetchLeaveAllocationsParams,
    LeaveAllocation,
    LeaveAllocationCreate,
    LeaveAllocationUpdate,
    LeaveType,
    OrganizationRole,
)
from educard.services.leave_allocation_service import LeaveAllocationService


class LeaveAllocationController(BaseController):
    def __init__(self, allocation_service: LeaveAllocationService):
        self.allocation_service = allocation_service

    async def list_allocations(self, params: FetchLeaveAllocationsParams) -> Page[LeaveAllocation]:
        return await self.allocation_service.list_allocations(params)

    async def get_allocation(self, public_id: str) -> LeaveAllocation:
        return await self.allocation_service.get_allocation(public_id)

    async def create_allocation(self, allocation_data: LeaveAllocationCreate) -> LeaveAllocation:
        return await self.allocation_service.create_allocation(allocation_data)

    async def update_allocation(self, public_id: str, allocation_data: LeaveAllocationUpdate) -> LeaveAllocation:
        return await self.allocation_service.update_allocation(public_id, allocation_data)

    async def delete_allocation(self, public_id: str) -> None:
        await self.allocation_service.delete_allocation(public_id)

    async def list_leave_types(self) -> List[LeaveType]:
        return await self.allocation_service.list_leave_types()

    async def list_organization_roles(self) -> List[OrganizationRole]:
        return await self.allocation_service.list_organization_roles()
