# ==============================================================================
# BASE MODEL - SQLAlchemy Foundation
# ==============================================================================
# Base declarative class and common mixins for all SQL models
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from shoppy.utils.helpers import generate_uuid, utc_now


class SQLBase(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Provides a UUID string primary key and dictionary serialization.

    Example:
        >>> class User(SQLBase):
        ...     __tablename__ = "users"
        ...     email: Mapped[str] = mapped_column(String(255))
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_uuid,
    )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert model instance to dictionary.

        Returns:
            Dictionary with all column values keyed by attribute name
        """
        return {
            column.key: getattr(self, column.key)
            for column in self.__mapper__.column_attrs
        }

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        return f"<{class_name}(id={self.id})>"


class TimestampMixin:
    """
    Mixin providing automatic timestamp tracking.

    Values are set in Python so that rows written within the same second
    still sort by creation order (SQLite ``CURRENT_TIMESTAMP`` only has
    second resolution).

    Attributes:
        created_at: Timestamp of record creation
        updated_at: Timestamp of last update
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        server_default=func.now(),
        nullable=False,
    )
