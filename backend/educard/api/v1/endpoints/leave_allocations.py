"""
Leave allocation API endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from educard.core.config import settings
from educard.deps.di_container import get_container
from educard.schemas.envelope import Page
from educard.schemas.leave import (
    FetchLeaveAllocationsParams,
    LeaveAllocation,
    LeaveAllocationCreate,
    LeaveAllocationUpdate,
    LeaveType,
    OrganizationRole,
)

router = APIRouter()


@router.get("", response_model=Page[LeaveAllocation])
async def list_allocations(
    search: Optional[str] = Query(None),
    leave_type: Optional[int] = Query(None),
    ordering: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> Page[LeaveAllocation]:
    controller = get_container().leave_allocation_controller()
    return await controller.list_allocations(FetchLeaveAllocationsParams(
        search=search,
        leave_type=leave_type,
        ordering=ordering,
        page=page,
        page_size=page_size,
    ))


@router.get("/leave-types", response_model=List[LeaveType])
async def list_leave_types() -> List[LeaveType]:
    controller = get_container().leave_allocation_controller()
    return await controller.list_leave_types()


@router.get("/roles", response_model=List[OrganizationRole])
async def list_organization_roles() -> List[OrganizationRole]:
    controller = get_container().leave_allocation_controller()
    return await controller.list_organization_roles()


@router.post("", response_model=LeaveAllocation, status_code=status.HTTP_201_CREATED)
async def create_allocation(allocation_data: LeaveAllocationCreate) -> LeaveAllocation:
    controller = get_container().leave_allocation_controller()
    return await controller.create_allocation(allocation_data)


@router.get("/{allocation_id}", response_model=LeaveAllocation)
async def get_allocation(allocation_id: str) -> LeaveAllocation:
    controller = get_container().leave_allocation_controller()
    return await controller.get_allocation(allocation_id)


@router.put("/{allocation_id}", response_model=LeaveAllocation)
async def update_allocation(allocation_id: str, allocation_data: LeaveAllocationUpdate) -> LeaveAllocation:
    controller = get_container().leave_allocation_controller()
    return await controller.update_allocation(allocation_id, allocation_data)


@router.delete("/{allocation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_allocation(allocation_id: str):
    controller = get_container().leave_allocation_controller()
    await controller.delete_allocation(allocation_id)
