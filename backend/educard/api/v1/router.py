"""
API v1 router that aggregates all endpoint routers.
"""

from fastapi import APIRouter

from educard.api.v1.endpoints import (
    health,
    holidays,
    working_day_policies,
    preferences,
    students,
    leave_allocations,
    calendar_exceptions,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(holidays.router, prefix="/holidays", tags=["holidays"])
api_router.include_router(
    working_day_policies.router,
    prefix="/working-day-policies",
    tags=["working-day-policies"],
)
api_router.include_router(preferences.router, prefix="/preferences", tags=["preferences"])
api_router.include_router(students.router, prefix="/students", tags=["students"])
api_router.include_router(
    leave_allocations.router,
    prefix="/leave-allocations",
    tags=["leave-allocations"],
)
api_router.include_router(
    calendar_exceptions.router,
    prefix="/calendar-exceptions",
    tags=["calendar-exceptions"],
)
