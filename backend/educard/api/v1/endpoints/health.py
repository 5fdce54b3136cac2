"""
Health check endpoint.
Returns gateway status, uptime and upstream reachability.
"""

from fastapi import APIRouter, Request

from educard.core.rate_limit import limiter
from educard.deps.di_container import get_container
from educard.schemas.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
@limiter.exempt
async def get_health(request: Request) -> HealthResponse:
    """
    Health check endpoint.
    Returns system status, uptime, and health checks.
    """
    controller = get_container().health_controller()
    return await controller.get_health()
