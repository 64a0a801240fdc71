# ==============================================================================
# ADMIN SERVICE - Operator Views
# ==============================================================================

from __future__ import annotations

from typing import Any, List

from shoppy.core.constants import DatabaseConstants, QueryLimits
from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter
from shoppy.schemas.admin import AdminUserResponse, ApiUsageResponse
from shoppy.services.base_service import BaseService
from shoppy.services.usage_service import UsageService


class AdminService(BaseService[AdminUserResponse]):
    """Read-only overviews of users and vendor API usage."""

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, DatabaseConstants.USERS_COLLECTION)
        self._usage = UsageService(adapter)

    def _to_response(self, entity: Any) -> AdminUserResponse:
        return AdminUserResponse.model_validate(entity.to_dict())

    async def list_users(self) -> List[AdminUserResponse]:
        """All users, newest first, with their chat session counts."""
        users = await self._adapter.get_all(
            self._collection_name,
            limit=QueryLimits.UNBOUNDED,
            sort_by="created_at",
            sort_order="desc",
        )

        result: List[AdminUserResponse] = []
        for user in users:
            session_count = await self._adapter.count(
                DatabaseConstants.CHAT_SESSIONS_COLLECTION,
                {"user_id": user.id},
            )
            result.append(
                AdminUserResponse.model_validate(
                    {**user.to_dict(), "session_count": session_count}
                )
            )
        return result

    async def list_api_usage(self, limit: int = QueryLimits.API_USAGE) -> List[ApiUsageResponse]:
        """Most recent vendor calls first."""
        return await self._usage.list_recent(limit)
