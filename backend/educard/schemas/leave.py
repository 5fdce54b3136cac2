"""
Leave allocation Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

MIN_LEAVE_DAYS = Decimal("0.5")
MAX_LEAVE_DAYS = Decimal("365")


class LeaveType(BaseModel):
    id: int
    name: str
    code: str
    description: Optional[str] = None
    display_order: int = 0


class OrganizationRole(BaseModel):
    id: int
    name: str
    code: str
    description: Optional[str] = None
    display_order: int = 0


class LeaveAllocation(BaseModel):
    """Leave allocation policy as returned by the organization API."""
    public_id: str
    leave_type_id: Optional[int] = None
    leave_type_name: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    total_days: Decimal
    max_carry_forward_days: Decimal = Decimal("0")
    applies_to_all_roles: bool = False
    roles: str = ""
    role_ids: List[int] = []
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by_public_id: Optional[str] = None
    created_by_name: Optional[str] = None
    updated_by_public_id: Optional[str] = None
    updated_by_name: Optional[str] = None


def _check_allocation(
    total_days: Optional[Decimal],
    max_carry_forward_days: Optional[Decimal],
    applies_to_all_roles: Optional[bool],
    roles: Optional[List[int]],
    effective_from: Optional[date],
    effective_to: Optional[date],
) -> None:
    if total_days is not None and not (MIN_LEAVE_DAYS <= total_days <= MAX_LEAVE_DAYS):
        raise ValueError('Total days must be between 0.5 and 365')
    if max_carry_forward_days is not None:
        if not (0 <= max_carry_forward_days <= MAX_LEAVE_DAYS):
            raise ValueError('Maximum carry forward days must be between 0 and 365')
        if total_days is not None and max_carry_forward_days > total_days:
            raise ValueError('Carry forward days cannot exceed total allocated days')
    if applies_to_all_roles is False and roles is not None and not roles:
        raise ValueError("Either enable 'Applies to All Roles' or select at least one role")
    if effective_from and effective_to and effective_to <= effective_from:
        raise ValueError('End date must be after start date')


class LeaveAllocationCreate(BaseModel):
    leave_type: int = Field(..., ge=1)
    name: str = Field("", max_length=100)
    description: str = Field("", max_length=500)
    total_days: Decimal
    max_carry_forward_days: Decimal = Decimal("0")
    applies_to_all_roles: bool = False
    roles: List[int] = []
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None

    @model_validator(mode='after')
    def validate_allocation(self) -> 'LeaveAllocationCreate':
        _check_allocation(
            self.total_days,
            self.max_carry_forward_days,
            self.applies_to_all_roles,
            self.roles,
            self.effective_from,
            self.effective_to,
        )
        return self


class LeaveAllocationUpdate(BaseModel):
    """Schema for updating a leave allocation; the leave type is fixed after creation."""
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    total_days: Optional[Decimal] = None
    max_carry_forward_days: Optional[Decimal] = None
    applies_to_all_roles: Optional[bool] = None
    roles: Optional[List[int]] = None
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None

    @model_validator(mode='after')
    def validate_allocation(self) -> 'LeaveAllocationUpdate':
        _check_allocation(
            self.total_days,
            self.max_carry_forward_days,
            self.applies_to_all_roles,
            self.roles,
            self.effective_from,
            self.effective_to,
        )
        return self


class FetchLeaveAllocationsParams(BaseModel):
    search: Optional[str] = None
    leave_type: Optional[int] = None
    ordering: Optional[str] = None
    page: Optional[int] = Field(None, ge=1)
    page_size: Optional[int] = Field(None, ge=1)

    def to_query(self) -> dict:
        return self.model_dump(exclude_none=True)
