"""
Student Pydantic schemas for request/response validation.
"""

import re
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, Optional
from datetime import date, datetime

NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")
CODE_PATTERN = re.compile(r"^[a-zA-Z0-9\-_]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _clean_name(value: Optional[str], label: str, min_length: int) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if len(value) < min_length:
        if min_length == 1:
            raise ValueError(f'{label} is required')
        raise ValueError(f'{label} must be at least {min_length} characters')
    if len(value) > 100:
        raise ValueError(f'{label} must not exceed 100 characters')
    if not NAME_PATTERN.match(value):
        raise ValueError(f'{label} can only contain letters, spaces, hyphens, and apostrophes')
    return value


def _clean_code(value: Optional[str], label: str, max_length: int, required: bool) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        if required:
            raise ValueError(f'{label} is required')
        return value
    if len(value) > max_length:
        raise ValueError(f'{label} must not exceed {max_length} characters')
    if not CODE_PATTERN.match(value):
        raise ValueError(f'{label} can only contain letters, numbers, hyphens, and underscores')
    return value.upper()


def _clean_phone(value: Optional[str], label: str = 'Phone number') -> Optional[str]:
    if value is None:
        return None
    digits = re.sub(r"\D", "", value)
    if digits and len(digits) != 10:
        raise ValueError(f'{label} must be exactly 10 digits')
    return digits


def _clean_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip().lower()
    if not value:
        return value
    if len(value) > 255:
        raise ValueError('Email must not exceed 255 characters')
    if not EMAIL_PATTERN.match(value):
        raise ValueError('Invalid email format')
    return value


class StudentBase(BaseModel):
    first_name: str
    last_name: str
    roll_number: str
    email: str = ""
    phone: str = ""
    admission_number: str = ""
    admission_date: Optional[date] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    guardian_name: str = Field("", max_length=255)
    guardian_phone: str = ""
    guardian_email: str = ""

    @field_validator('first_name')
    @classmethod
    def validate_first_name(cls, v: str) -> str:
        return _clean_name(v, 'First name', 2)

    @field_validator('last_name')
    @classmethod
    def validate_last_name(cls, v: str) -> str:
        return _clean_name(v, 'Last name', 1)

    @field_validator('roll_number')
    @classmethod
    def validate_roll_number(cls, v: str) -> str:
        return _clean_code(v, 'Roll number', 20, required=True)

    @field_validator('admission_number')
    @classmethod
    def validate_admission_number(cls, v: str) -> str:
        return _clean_code(v, 'Admission number', 50, required=False)

    @field_validator('email', 'guardian_email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _clean_email(v)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: str) -> str:
        return _clean_phone(v)

    @field_validator('guardian_phone')
    @classmethod
    def validate_guardian_phone(cls, v: str) -> str:
        return _clean_phone(v, 'Guardian phone')


class StudentCreate(StudentBase):
    """Schema for creating a student inside a class."""
    pass


class StudentUpdate(BaseModel):
    """Schema for updating a student (all fields optional)."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    roll_number: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    admission_number: Optional[str] = None
    admission_date: Optional[date] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    guardian_name: Optional[str] = Field(None, max_length=255)
    guardian_phone: Optional[str] = None
    guardian_email: Optional[str] = None

    @field_validator('first_name')
    @classmethod
    def validate_first_name(cls, v: Optional[str]) -> Optional[str]:
        return _clean_name(v, 'First name', 2)

    @field_validator('last_name')
    @classmethod
    def validate_last_name(cls, v: Optional[str]) -> Optional[str]:
        return _clean_name(v, 'Last name', 1)

    @field_validator('roll_number')
    @classmethod
    def validate_roll_number(cls, v: Optional[str]) -> Optional[str]:
        return _clean_code(v, 'Roll number', 20, required=True)

    @field_validator('admission_number')
    @classmethod
    def validate_admission_number(cls, v: Optional[str]) -> Optional[str]:
        return _clean_code(v, 'Admission number', 50, required=False)

    @field_validator('email', 'guardian_email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return _clean_email(v)

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return _clean_phone(v)

    @field_validator('guardian_phone')
    @classmethod
    def validate_guardian_phone(cls, v: Optional[str]) -> Optional[str]:
        return _clean_phone(v, 'Guardian phone')


class StudentListItem(BaseModel):
    """Flattened student row for list views."""
    public_id: str
    full_name: str = ""
    roll_number: str = ""
    admission_number: str = ""
    admission_date: Optional[date] = None
    email: str = ""
    phone: str = ""
    class_name: str = ""
    class_id: str = ""
    class_master_name: str = ""
    gender: str = ""
    is_active: bool = True

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'StudentListItem':
        """Flatten the nested ``user_info``/``class_info`` payload of the list endpoint."""
        user_info = data.get("user_info") or {}
        class_info = data.get("class_info") or {}
        return cls(
            public_id=data["public_id"],
            full_name=user_info.get("full_name") or "",
            roll_number=data.get("roll_number") or "",
            admission_number=data.get("admission_number") or "",
            admission_date=data.get("admission_date") or None,
            email=user_info.get("email") or "",
            phone=user_info.get("phone") or "",
            class_name=class_info.get("name") or "",
            class_id=class_info.get("public_id") or "",
            class_master_name=class_info.get("class_master_name") or "",
            gender=user_info.get("gender") or data.get("gender") or "",
            is_active=not data.get("is_deleted", False),
        )


class Student(BaseModel):
    """Student detail; extra upstream fields are kept."""
    public_id: str
    roll_number: Optional[str] = None
    admission_number: Optional[str] = None
    is_deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        extra = "allow"


class FetchStudentsParams(BaseModel):
    search: Optional[str] = None
    class_id: Optional[str] = None
    is_deleted: Optional[bool] = None
    ordering: Optional[str] = None
    page: Optional[int] = Field(None, ge=1)
    page_size: Optional[int] = Field(None, ge=1)

    def to_query(self) -> dict:
        query = self.model_dump(exclude_none=True)
        if "is_deleted" in query:
            query["is_deleted"] = "true" if query["is_deleted"] else "false"
        return query
