# ==============================================================================
# ADMIN SCHEMAS
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from shoppy.schemas.base import BaseSchema


class AdminUserResponse(BaseSchema):
    """User row for the admin overview."""

    id: str
    email: str
    username: str
    sensay_user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    session_count: int = 0


class ApiUsageResponse(BaseSchema):
    """One vendor-call log entry."""

    id: str
    user_id: str
    endpoint: str
    request_data: Optional[Any] = None
    response_data: Optional[Any] = None
    success: bool
    error_message: Optional[str] = None
    timestamp: datetime
