"""
Calendar exception schemas.
A calendar exception forces a single date to be a working day or a holiday.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
import datetime as dt
import enum


class OverrideType(str, enum.Enum):
    FORCE_WORKING = "FORCE_WORKING"
    FORCE_HOLIDAY = "FORCE_HOLIDAY"


def _clean_reason(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError('Reason is required')
    return value


class CalendarException(BaseModel):
    public_id: str
    date: dt.date
    override_type: OverrideType
    reason: str = ""
    is_applicable_to_all_classes: bool = True
    classes: List[str] = []
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
    created_by_public_id: Optional[str] = None
    created_by_name: Optional[str] = None
    updated_by_public_id: Optional[str] = None
    updated_by_name: Optional[str] = None


class CalendarExceptionCreate(BaseModel):
    date: dt.date
    override_type: OverrideType
    reason: str
    is_applicable_to_all_classes: bool = True
    classes: List[str] = []

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, v: str) -> str:
        return _clean_reason(v)

    @model_validator(mode='after')
    def validate_classes(self) -> 'CalendarExceptionCreate':
        if not self.is_applicable_to_all_classes and not self.classes:
            raise ValueError('Select at least one class when the exception does not apply to all classes')
        if self.is_applicable_to_all_classes:
            self.classes = []
        return self


class CalendarExceptionUpdate(BaseModel):
    date: Optional[dt.date] = None
    override_type: Optional[OverrideType] = None
    reason: Optional[str] = None
    is_applicable_to_all_classes: Optional[bool] = None
    classes: Optional[List[str]] = None

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, v: Optional[str]) -> Optional[str]:
        return _clean_reason(v)

    @model_validator(mode='after')
    def validate_classes(self) -> 'CalendarExceptionUpdate':
        if self.is_applicable_to_all_classes is False and not self.classes:
            raise ValueError('Select at least one class when the exception does not apply to all classes')
        return self


class CalendarExceptionFilters(BaseModel):
    override_type: Optional[OverrideType] = None
    from_date: Optional[dt.date] = None
    to_date: Optional[dt.date] = None
    classes: Optional[List[str]] = None
    ordering: Optional[str] = None
    page: Optional[int] = Field(None, ge=1)
    page_size: Optional[int] = Field(None, ge=1)

    def to_query(self) -> dict:
        """Render as upstream query parameters; classes are sent comma-separated."""
        query = {}
        for key, value in self.model_dump(exclude_none=True).items():
            if key == "classes":
                if not value:
                    continue
                value = ",".join(value)
            elif isinstance(value, dt.date):
                value = value.isoformat()
            elif isinstance(value, enum.Enum):
                value = value.value
            query[key] = value
        return query
