"""
Working day policy repository.
"""

from educard.core.integrations.http.http_client import HttpClient
from educard.repositories.base_repository import BaseRepository
from educard.schemas.working_day_policy import WorkingDayPolicy

WORKING_DAY_POLICY_ENDPOINT = "/attendance/admin/working-day-policy/"


class WorkingDayPolicyRepository(BaseRepository[WorkingDayPolicy]):
    """Policies come back ordered by ``-effective_from``."""

    def __init__(self, http_client: HttpClient):
        super().__init__(WorkingDayPolicy, http_client, WORKING_DAY_POLICY_ENDPOINT)
