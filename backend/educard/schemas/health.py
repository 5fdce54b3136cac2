"""
Health check response schemas.
"""

from pydantic import BaseModel
from typing import Dict


class HealthResponse(BaseModel):
    """Gateway status, uptime and the result of each dependency check."""
    status: str
    uptime: str
    checks: Dict[str, str] = {}
