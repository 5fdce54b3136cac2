"""
Working day policy service with business logic.
"""

import logging
from datetime import date
from typing import List, Optional

from educard.core.cache import QueryCache
from educard.core.query_keys import LONG_STALE_TIME, QueryKeys
from educard.repositories.working_day_policy_repository import WorkingDayPolicyRepository
from educard.schemas.working_day_policy import (
    WorkingDayPolicy,
    WorkingDayPolicyCreate,
    WorkingDayPolicyListResponse,
    WorkingDayPolicyUpdate,
    select_policy_for,
)
from educard.services.base_service import BaseService

logger = logging.getLogger(__name__)


class WorkingDayPolicyService(BaseService):
    """Service for working day policy operations."""

    def __init__(self, policy_repo: WorkingDayPolicyRepository, cache: QueryCache):
        super().__init__(cache)
        self.policy_repo = policy_repo

    async def list_policies(self) -> List[WorkingDayPolicy]:
        """All policies, most recent ``effective_from`` first."""
        return await self.cached(
            QueryKeys.WORKING_DAY_POLICY,
            self.policy_repo.list_all,
            LONG_STALE_TIME,
        )

    async def list_policies_response(self) -> WorkingDayPolicyListResponse:
        policies = await self.list_policies()
        return WorkingDayPolicyListResponse(items=policies, total=len(policies))

    async def get_current_policy(self) -> Optional[WorkingDayPolicy]:
        policies = await self.list_policies()
        return policies[0] if policies else None

    async def get_policy_for(self, day: date) -> Optional[WorkingDayPolicy]:
        """Policy governing ``day``; see ``select_policy_for``."""
        return select_policy_for(await self.list_policies(), day)

    async def create_policy(self, policy_data: WorkingDayPolicyCreate) -> WorkingDayPolicy:
        policy = await self.policy_repo.create(policy_data.model_dump(mode="json"))
        self.invalidate(QueryKeys.WORKING_DAY_POLICY)
        logger.info(f"Created working day policy {policy.public_id}")
        return policy

    async def update_policy(
        self,
        public_id: str,
        policy_data: WorkingDayPolicyUpdate,
    ) -> WorkingDayPolicy:
        policy = await self.policy_repo.update(
            public_id, policy_data.model_dump(mode="json", exclude_unset=True)
        )
        self.invalidate(QueryKeys.WORKING_DAY_POLICY)
        return policy

    async def delete_policy(self, public_id: str) -> None:
        await self.policy_repo.delete(public_id)
        self.invalidate(QueryKeys.WORKING_DAY_POLICY)

    async def save_current_policy(self, policy_data: WorkingDayPolicyCreate) -> WorkingDayPolicy:
        """Update the current policy in place, or create the first one."""
        current = await self.get_current_policy()
        if current is None:
            return await self.create_policy(policy_data)
        return await self.update_policy(
            current.public_id,
            WorkingDayPolicyUpdate(**policy_data.model_dump()),
        )
