"""
Response envelope schemas shared by every upstream resource.

The organization API wraps all payloads as
``{ success, message, data, code, pagination? }``.
"""

from pydantic import BaseModel
from typing import Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class ApiPagination(BaseModel):
    current_page: int = 1
    total_pages: int = 1
    count: int = 0
    page_size: int = 0
    has_next: bool = False
    has_previous: bool = False
    next_page: Optional[int] = None
    previous_page: Optional[int] = None


class ApiListResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = ""
    data: List[T]
    pagination: Optional[ApiPagination] = None
    code: int = 200


class ApiDetailResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = ""
    data: T
    code: int = 200


class ApiErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[Dict[str, List[str]]] = None
    code: int


class FieldError(BaseModel):
    field: str
    message: str


class Page(BaseModel, Generic[T]):
    """A page of items with the upstream pagination block, when the API sent one."""
    items: List[T]
    pagination: Optional[ApiPagination] = None
