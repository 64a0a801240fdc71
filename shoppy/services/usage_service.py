# ==============================================================================
# USAGE SERVICE - Vendor API Call Log
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, List, Optional

from shoppy.core.constants import DatabaseConstants, QueryLimits
from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter
from shoppy.schemas.admin import ApiUsageResponse
from shoppy.services.base_service import BaseService

logger = logging.getLogger(__name__)


class UsageService(BaseService[ApiUsageResponse]):
    """Records every Sensay call made on a user's behalf."""

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, DatabaseConstants.API_USAGE_COLLECTION)

    def _to_response(self, entity: Any) -> ApiUsageResponse:
        return ApiUsageResponse.model_validate(entity.to_dict())

    async def record(
        self,
        user_id: str,
        endpoint: str,
        request_data: Any = None,
        response_data: Any = None,
        success: bool = True,
        error_message: Optional[str] = None,
    ) -> None:
        """
        Append a usage entry.

        A failure to write the log is logged and never fails the caller.
        """
        try:
            await self._adapter.create(
                self._collection_name,
                {
                    "user_id": user_id,
                    "endpoint": endpoint,
                    "request_data": request_data,
                    "response_data": response_data,
                    "success": success,
                    "error_message": error_message,
                },
            )
        except Exception as e:
            logger.warning(f"Could not record API usage for {endpoint}: {e}")

    async def list_recent(self, limit: int = QueryLimits.API_USAGE) -> List[ApiUsageResponse]:
        """Newest entries first."""
        entries = await self._adapter.get_all(
            self._collection_name,
            limit=limit,
            sort_by="timestamp",
            sort_order="desc",
        )
        return [self._to_response(entry) for entry in entries]
