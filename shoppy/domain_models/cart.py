# ==============================================================================
# CART MODELS - Local Shopping Carts
# ==============================================================================
# Carts built from storefront products before checkout
# ==============================================================================

from __future__ import annotations

import enum
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Enum as SQLEnum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shoppy.domain_models.base import SQLBase, TimestampMixin

if TYPE_CHECKING:
    from shoppy.domain_models.user import User


class CartStatus(str, enum.Enum):
    """Cart lifecycle states."""
    ACTIVE = "ACTIVE"
    CONVERTED = "CONVERTED"
    ABANDONED = "ABANDONED"


class ProductLineMixin:
    """
    Product snapshot columns shared by cart and order lines.

    Titles, image and price are copied from the storefront when the line
    is created so later catalogue edits do not rewrite history.
    """

    product_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    variant_id: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
    )
    product_title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )
    variant_title: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    product_handle: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    product_image: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2),
        nullable=False,
    )
    currency: Mapped[str] = mapped_column(
        String(3),
        default="USD",
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(
        Integer,
        default=1,
        nullable=False,
    )


class Cart(SQLBase, TimestampMixin):
    """
    Shopping cart owned by a user.

    Attributes:
        user_id: Cart owner
        session_id: Chat session the cart was started from (optional)
        status: ACTIVE until converted to an order
        total_amount: Sum of price * quantity over all items
        total_items: Sum of quantities over all items
    """

    __tablename__ = "carts"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    session_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        index=True,
        nullable=True,
    )
    status: Mapped[CartStatus] = mapped_column(
        SQLEnum(CartStatus),
        default=CartStatus.ACTIVE,
        nullable=False,
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2),
        default=Decimal("0.00"),
        nullable=False,
    )
    total_items: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="carts",
    )
    items: Mapped[List["CartItem"]] = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Cart(id={self.id}, status={self.status})>"


class CartItem(SQLBase, ProductLineMixin, TimestampMixin):
    """One storefront variant in a cart."""

    __tablename__ = "cart_items"

    cart_id: Mapped[str] = mapped_column(
        ForeignKey("carts.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    cart: Mapped["Cart"] = relationship(
        "Cart",
        back_populates="items",
    )

    def __repr__(self) -> str:
        return f"<CartItem(id={self.id}, variant_id={self.variant_id}, quantity={self.quantity})>"
