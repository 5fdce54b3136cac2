"""
Working day policy Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, datetime
import enum


class SaturdayOffPattern(str, enum.Enum):
    """Which Saturdays of a month are days off."""
    NONE = "NONE"
    SECOND_ONLY = "SECOND_ONLY"
    SECOND_AND_FOURTH = "SECOND_AND_FOURTH"
    ALL = "ALL"


class WorkingDayPolicyBase(BaseModel):
    """Base working day policy schema with common fields."""
    sunday_off: bool = True
    saturday_off_pattern: SaturdayOffPattern = SaturdayOffPattern.NONE
    effective_from: date
    effective_to: Optional[date] = None


class WorkingDayPolicyCreate(WorkingDayPolicyBase):
    """Schema for creating a working day policy."""

    @model_validator(mode='after')
    def validate_dates(self) -> 'WorkingDayPolicyCreate':
        """Validate that effective_to is not before effective_from."""
        if self.effective_to is not None and self.effective_to < self.effective_from:
            raise ValueError('Effective to date must be after effective from date')
        return self


class WorkingDayPolicyUpdate(BaseModel):
    """Schema for updating a working day policy (all fields optional)."""
    sunday_off: Optional[bool] = None
    saturday_off_pattern: Optional[SaturdayOffPattern] = None
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None

    @model_validator(mode='after')
    def validate_dates(self) -> 'WorkingDayPolicyUpdate':
        if self.effective_from is not None and self.effective_to is not None:
            if self.effective_to < self.effective_from:
                raise ValueError('Effective to date must be after effective from date')
        return self


class WorkingDayPolicy(WorkingDayPolicyBase):
    """Working day policy as returned by the organization API."""
    public_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by_public_id: Optional[str] = None
    created_by_name: Optional[str] = None
    updated_by_public_id: Optional[str] = None
    updated_by_name: Optional[str] = None

    def is_effective_on(self, day: date) -> bool:
        """Whether ``day`` falls inside the policy's effective window."""
        if day < self.effective_from:
            return False
        return self.effective_to is None or day <= self.effective_to


class WorkingDayPolicyListResponse(BaseModel):
    items: List[WorkingDayPolicy]
    total: int = Field(0, ge=0)


def select_policy_for(policies: List[WorkingDayPolicy], day: date) -> Optional[WorkingDayPolicy]:
    """
    Pick the policy governing ``day``.

    ``policies`` is in upstream order (most recent ``effective_from`` first).
    Falls back to the most recent policy when none covers ``day``.
    """
    for policy in policies:
        if policy.is_effective_on(day):
            return policy
    return policies[0] if policies else None
