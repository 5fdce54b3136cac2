"""
Leave allocation service.
"""

import logging
from typing import List

from educard.core.cache import QueryCache
from educard.core.query_keys import LONG_STALE_TIME, SHORT_STALE_TIME, QueryKeys
from educard.repositories.leave_repository import LeaveAllocationRepository
from educard.schemas.envelope import Page
from educard.schemas.leave import (
    FetchLeaveAllocationsParams,
    LeaveAllocation,
    LeaveAllocationCreate,
    LeaveAllocationUpdate,
    LeaveType,
    OrganizationRole,
)
from educard.services.base_service import BaseService

logger = logging.getLogger(__name__)


class LeaveAllocationService(BaseService):
    """Service for leave allocation operations."""

    def __init__(self, allocation_repo: LeaveAllocationRepository, cache: QueryCache):
        super().__init__(cache)
        self.allocation_repo = allocation_repo

    async def list_allocations(self, params: FetchLeaveAllocationsParams) -> Page[LeaveAllocation]:
        query = params.to_query()
        return await self.cached(
            QueryKeys.leave_allocations(query),
            lambda: self.allocation_repo.list(query),
            SHORT_STALE_TIME,
        )

    async def get_allocation(self, public_id: str) -> LeaveAllocation:
        return await self.allocation_repo.get(public_id)

    async def create_allocation(self, allocation_data: LeaveAllocationCreate) -> LeaveAllocation:
        allocation = await self.allocation_repo.create(allocation_data.model_dump(mode="json"))
        self.invalidate(QueryKeys.LEAVE_ALLOCATIONS)
        logger.info(f"Created leave allocation {allocation.public_id}")
        return allocation

    async def update_allocation(
        self,
        public_id: str,
        allocation_data: LeaveAllocationUpdate,
    ) -> LeaveAllocation:
        allocation = await self.allocation_repo.update(
            public_id, allocation_data.model_dump(mode="json", exclude_unset=True)
        )
        self.invalidate(QueryKeys.LEAVE_ALLOCATIONS)
        return allocation

    async def delete_allocation(self, public_id: str) -> None:
        await self.allocation_repo.delete(public_id)
        self.invalidate(QueryKeys.LEAVE_ALLOCATIONS)

    async def list_leave_types(self) -> List[LeaveType]:
        return await self.cached(
            QueryKeys.LEAVE_TYPES,
            self.allocation_repo.list_leave_types,
            LONG_STALE_TIME,
        )

    async def list_organization_roles(self) -> List[OrganizationRole]:
        return await self.cached(
            QueryKeys.ORGANIZATION_ROLES,
            self.allocation_repo.list_organization_roles,
            LONG_STALE_TIME,
        )
