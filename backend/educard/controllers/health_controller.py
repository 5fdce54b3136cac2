"""
Health controller.
"""

from educard.controllers.base_controller import BaseController
from educard.schemas.health import HealthResponse
from educard.services.health_service import HealthService


class HealthController(BaseController):
    """Controller for health check operations."""

    def __init__(self, health_service: HealthService):
        self.health_service = health_service

    async def get_health(self) -> HealthResponse:
        return await self.health_service.get_health()
