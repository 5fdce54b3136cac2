"""
Dependency injection container using dependency-injector.
Wires the upstream HTTP client, the query cache, repositories, services and controllers.
"""

from datetime import date
from typing import Optional

from dependency_injector import containers, providers

from educard.controllers.calendar_exception_controller import CalendarExceptionController
from educard.controllers.health_controller import HealthController
from educard.controllers.holiday_controller import HolidayController
from educard.controllers.leave_allocation_controller import LeaveAllocationController
from educard.controllers.preference_controller import PreferenceController
from educard.controllers.student_controller import StudentController
from educard.controllers.working_day_policy_controller import WorkingDayPolicyController
from educard.core.cache import QueryCache
from educard.core.config import settings
from educard.core.integrations.http.http_client import HttpClient
from educard.repositories.calendar_exception_repository import CalendarExceptionRepository
from educard.repositories.holiday_repository import HolidayRepository
from educard.repositories.leave_repository import LeaveAllocationRepository
from educard.repositories.preference_repository import PreferenceRepository
from educard.repositories.student_repository import StudentRepository
from educard.repositories.working_day_policy_repository import WorkingDayPolicyRepository
from educard.services.calendar_exception_service import CalendarExceptionService
from educard.services.health_service import HealthService
from educard.services.holiday_excel_service import HolidayExcelService
from educard.services.holiday_service import HolidayService
from educard.services.leave_allocation_service import LeaveAllocationService
from educard.services.preference_service import PreferenceService
from educard.services.student_service import StudentService
from educard.services.working_day_policy_service import WorkingDayPolicyService


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Configuration
    config = providers.Configuration()

    # Infrastructure
    http_client = providers.Singleton(
        HttpClient,
        base_url=config.upstream_api_base_url,
        token=config.upstream_api_token,
        timeout=config.upstream_timeout,
        max_retries=config.upstream_max_retries,
        retry_delay=config.upstream_retry_delay,
    )

    query_cache = providers.Singleton(
        QueryCache,
        cache_time=config.cache_time,
    )

    today = providers.Object(date.today)

    # Repositories
    holiday_repository = providers.Factory(HolidayRepository, http_client=http_client)
    working_day_policy_repository = providers.Factory(WorkingDayPolicyRepository, http_client=http_client)
    preference_repository = providers.Factory(PreferenceRepository, http_client=http_client)
    student_repository = providers.Factory(StudentRepository, http_client=http_client)
    leave_allocation_repository = providers.Factory(LeaveAllocationRepository, http_client=http_client)
    calendar_exception_repository = providers.Factory(CalendarExceptionRepository, http_client=http_client)

    # Services
    health_service = providers.Singleton(
        HealthService,
        http_client=http_client,
        cache=query_cache,
    )

    working_day_policy_service = providers.Singleton(
        WorkingDayPolicyService,
        policy_repo=working_day_policy_repository,
        cache=query_cache,
    )

    holiday_service = providers.Singleton(
        HolidayService,
        holiday_repo=holiday_repository,
        policy_service=working_day_policy_service,
        cache=query_cache,
        today=today,
    )

    holiday_excel_service = providers.Singleton(
        HolidayExcelService,
        holiday_service=holiday_service,
    )

    preference_service = providers.Singleton(
        PreferenceService,
        preference_repo=preference_repository,
        cache=query_cache,
    )

    student_service = providers.Singleton(
        StudentService,
        student_repo=student_repository,
        cache=query_cache,
    )

    leave_allocation_service = providers.Singleton(
        LeaveAllocationService,
        allocation_repo=leave_allocation_repository,
        cache=query_cache,
    )

    calendar_exception_service = providers.Singleton(
        CalendarExceptionService,
        exception_repo=calendar_exception_repository,
        cache=query_cache,
    )

    # Controllers
    health_controller = providers.Factory(HealthController, health_service=health_service)
    holiday_controller = providers.Factory(
        HolidayController,
        holiday_service=holiday_service,
        holiday_excel_service=holiday_excel_service,
    )
    working_day_policy_controller = providers.Factory(
        WorkingDayPolicyController,
        policy_service=working_day_policy_service,
    )
    preference_controller = providers.Factory(PreferenceController, preference_service=preference_service)
    student_controller = providers.Factory(StudentController, student_service=student_service)
    leave_allocation_controller = providers.Factory(
        LeaveAllocationController,
        allocation_service=leave_allocation_service,
    )
    calendar_exception_controller = providers.Factory(
        CalendarExceptionController,
        exception_service=calendar_exception_service,
    )


def build_container() -> Container:
    """Create a container configured from application settings."""
    container = Container()
    container.config.from_dict({
        "upstream_api_base_url": settings.UPSTREAM_API_BASE_URL,
        "upstream_api_token": settings.UPSTREAM_API_TOKEN,
        "upstream_timeout": settings.UPSTREAM_TIMEOUT,
        "upstream_max_retries": settings.UPSTREAM_MAX_RETRIES,
        "upstream_retry_delay": settings.UPSTREAM_RETRY_DELAY,
        "cache_time": settings.CACHE_TIME,
    })
    return container


# Global container instance
_container: Optional[Container] = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = build_container()
    return _container


def set_container(container: Optional[Container]) -> None:
    """Replace the global container (app startup and tests)."""
    global _container
    _container = container
