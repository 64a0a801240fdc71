# ==============================================================================
# ADMIN ENDPOINTS - Operator Routes
# ==============================================================================

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query

from shoppy.api.dependencies import AdminServiceDep, AdminUser
from shoppy.core.constants import QueryLimits
from shoppy.schemas.admin import AdminUserResponse, ApiUsageResponse
from shoppy.schemas.base import APIResponse

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get(
    "/users",
    response_model=APIResponse[List[AdminUserResponse]],
    summary="List users",
    description="Every user, newest first, with chat session counts.",
)
async def list_users(
    admin: AdminUser,
    service: AdminServiceDep,
) -> APIResponse[List[AdminUserResponse]]:
    users = await service.list_users()
    return APIResponse.ok(data=users)


@router.get(
    "/api-usage",
    response_model=APIResponse[List[ApiUsageResponse]],
    summary="API usage log",
    description="Most recent vendor API calls.",
)
async def list_api_usage(
    admin: AdminUser,
    service: AdminServiceDep,
    limit: int = Query(QueryLimits.API_USAGE, ge=1, le=1000),
) -> APIResponse[List[ApiUsageResponse]]:
    usage = await service.list_api_usage(limit)
    return APIResponse.ok(data=usage)
