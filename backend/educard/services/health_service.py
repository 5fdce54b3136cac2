"""
Health service.
Reports gateway uptime and whether the organization API answers.
"""

import time

from educard.core.cache import QueryCache
from educard.core.exceptions import UpstreamAPIError
from educard.core.integrations.http.http_client import HttpClient
from educard.schemas.health import HealthResponse
from educard.services.base_service import BaseService
from educard.utils.error_utils import is_client_error

UPSTREAM_PROBE_ENDPOINT = "/attendance/admin/working-day-policy/"


class HealthService(BaseService):
    """Service for health check operations."""

    def __init__(self, http_client: HttpClient, cache: QueryCache):
        super().__init__(cache)
        self.http_client = http_client
        self.start_time = time.time()

    async def get_health(self) -> HealthResponse:
        """
        Get gateway health status.

        Returns:
            HealthResponse with status, uptime, and checks
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration format

        checks = {}
        try:
            await self.http_client.get(UPSTREAM_PROBE_ENDPOINT, params={"page_size": 1})
            checks["upstream"] = "ok"
        except UpstreamAPIError as e:
            # any answer, even a 4xx, means the API is reachable
            checks["upstream"] = "ok" if is_client_error(e.upstream_status) else f"error: {e.message}"
        checks["cache"] = f"ok ({len(self.cache)} entries)"

        status = "ok" if all(check.startswith("ok") for check in checks.values()) else "degraded"

        return HealthResponse(
            status=status,
            uptime=uptime_str,
            checks=checks,
        )
