"""
Organization preference schemas.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union
import enum


class PreferenceFieldType(str, enum.Enum):
    STRING = "string"
    NUMBER = "number"
    CHOICE = "choice"
    MULTI_CHOICE = "multi-choice"
    RADIO = "radio"


PreferenceValue = Union[str, List[str]]


class OrganizationPreference(BaseModel):
    """Organization preference as returned by the organization API."""
    public_id: str
    key: str
    display_name: str = ""
    category: str = ""
    field_type: PreferenceFieldType = PreferenceFieldType.STRING
    default_value: Optional[str] = None
    applicable_values: Optional[List[str]] = None
    description: str = ""
    value: Optional[PreferenceValue] = None


class GroupedPreference(BaseModel):
    category: str
    preferences: List[OrganizationPreference]
    count: int = Field(0, ge=0)


class PreferenceUpdate(BaseModel):
    value: PreferenceValue


class PreferenceBulkItem(BaseModel):
    key: str
    value: PreferenceValue

    @field_validator('key')
    @classmethod
    def validate_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Preference key is required')
        return v


class PreferenceBulkUpdate(BaseModel):
    preferences: List[PreferenceBulkItem] = Field(..., min_length=1)


def group_preferences(preferences: List[OrganizationPreference]) -> List[GroupedPreference]:
    """Group preferences by category, keeping first-seen category order."""
    groups = {}
    for preference in preferences:
        groups.setdefault(preference.category, []).append(preference)
    return [
        GroupedPreference(category=category, preferences=items, count=len(items))
        for category, items in groups.items()
    ]
