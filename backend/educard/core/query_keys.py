"""
Query keys and stale times for cached upstream reads.
"""

from typing import Any, Dict, Optional, Tuple

from educard.core.config import settings

SHORT_STALE_TIME = settings.CACHE_SHORT_STALE_TIME
LONG_STALE_TIME = settings.CACHE_LONG_STALE_TIME


def _params_key(params: Optional[Dict[str, Any]]) -> Tuple:
    if not params:
        return ()
    return tuple(sorted((k, str(v)) for k, v in params.items() if v is not None))


class QueryKeys:
    HOLIDAYS = ("holidays",)
    WORKING_DAY_POLICY = ("working-day-policy",)
    PREFERENCES = ("organization-preferences",)
    STUDENTS = ("students",)
    LEAVE_ALLOCATIONS = ("leave", "allocations")
    LEAVE_TYPES = ("leave", "types")
    ORGANIZATION_ROLES = ("leave", "roles")
    CALENDAR_EXCEPTIONS = ("calendar-exceptions",)

    @staticmethod
    def holidays(params: Optional[Dict[str, Any]] = None) -> Tuple:
        return QueryKeys.HOLIDAYS + ("list",) + _params_key(params)

    @staticmethod
    def holiday(public_id: str) -> Tuple:
        return QueryKeys.HOLIDAYS + ("detail", public_id)

    @staticmethod
    def preferences(params: Optional[Dict[str, Any]] = None) -> Tuple:
        return QueryKeys.PREFERENCES + ("list",) + _params_key(params)

    @staticmethod
    def students(params: Optional[Dict[str, Any]] = None) -> Tuple:
        return QueryKeys.STUDENTS + ("list",) + _params_key(params)

    @staticmethod
    def student(public_id: str, is_deleted: bool = False) -> Tuple:
        return QueryKeys.STUDENTS + ("detail", public_id, is_deleted)

    @staticmethod
    def leave_allocations(params: Optional[Dict[str, Any]] = None) -> Tuple:
        return QueryKeys.LEAVE_ALLOCATIONS + ("list",) + _params_key(params)

    @staticmethod
    def calendar_exceptions(params: Optional[Dict[str, Any]] = None) -> Tuple:
        return QueryKeys.CALENDAR_EXCEPTIONS + ("list",) + _params_key(params)
