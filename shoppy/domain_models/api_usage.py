# ==============================================================================
# API USAGE MODEL - Vendor Call Log
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shoppy.domain_models.base import SQLBase
from shoppy.utils.helpers import utc_now

if TYPE_CHECKING:
    from shoppy.domain_models.user import User


class ApiUsage(SQLBase):
    """One outbound Sensay call made on behalf of a user."""

    __tablename__ = "api_usage"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    endpoint: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    request_data: Mapped[Optional[Any]] = mapped_column(
        JSON,
        nullable=True,
    )
    response_data: Mapped[Optional[Any]] = mapped_column(
        JSON,
        nullable=True,
    )
    success: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    error_message: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        index=True,
        nullable=False,
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="api_usage",
    )

    def __repr__(self) -> str:
        return f"<ApiUsage(id={self.id}, endpoint={self.endpoint}, success={self.success})>"
