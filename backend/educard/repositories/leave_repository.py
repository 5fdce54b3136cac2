"""
Leave allocation repository plus the lookup lists the allocation form needs.
"""

from typing import List

from educard.core.integrations.http.http_client import HttpClient
from educard.repositories.base_repository import BaseRepository
from educard.schemas.leave import LeaveAllocation, LeaveType, OrganizationRole
from educard.utils.response_handler import handle_list_response

LEAVE_ALLOCATIONS_ENDPOINT = "/leave/leave-allocations/"
LEAVE_TYPES_ENDPOINT = "/core/leave-types/"
ORGANIZATION_ROLES_ENDPOINT = "/core/organization-role-types/"


class LeaveAllocationRepository(BaseRepository[LeaveAllocation]):
    """Repository for leave allocation operations."""

    def __init__(self, http_client: HttpClient):
        super().__init__(LeaveAllocation, http_client, LEAVE_ALLOCATIONS_ENDPOINT)

    async def list_leave_types(self) -> List[LeaveType]:
        body = await self.http_client.get(LEAVE_TYPES_ENDPOINT)
        return [LeaveType.model_validate(item) for item in handle_list_response(body, "getLeaveTypes")]

    async def list_organization_roles(self) -> List[OrganizationRole]:
        body = await self.http_client.get(ORGANIZATION_ROLES_ENDPOINT)
        return [
            OrganizationRole.model_validate(item)
            for item in handle_list_response(body, "getOrganizationRoles")
        ]
