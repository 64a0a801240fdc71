# ==============================================================================
# USER MODEL - Authentication
# ==============================================================================
# Customer accounts and their link to the Sensay user namespace
# ==============================================================================

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shoppy.domain_models.base import SQLBase, TimestampMixin

if TYPE_CHECKING:
    from shoppy.domain_models.chat import ChatSession
    from shoppy.domain_models.cart import Cart
    from shoppy.domain_models.order import Order
    from shoppy.domain_models.api_usage import ApiUsage


class User(SQLBase, TimestampMixin):
    """
    Customer account.

    Attributes:
        email: Unique email address
        username: Unique login name
        password_hash: bcrypt hash of the password
        sensay_user_id: Vendor-side user id, created lazily on first chat

    Relationships:
        chat_sessions: Conversations with the assistant
        carts: Shopping carts (one ACTIVE at a time)
        orders: Orders converted from carts
        api_usage: Vendor API call log entries
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    sensay_user_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    # Relationships
    chat_sessions: Mapped[List["ChatSession"]] = relationship(
        "ChatSession",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    carts: Mapped[List["Cart"]] = relationship(
        "Cart",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    orders: Mapped[List["Order"]] = relationship(
        "Order",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    api_usage: Mapped[List["ApiUsage"]] = relationship(
        "ApiUsage",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        """Admin views are open to accounts whose email contains 'admin'."""
        return "admin" in self.email

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
