# ==============================================================================
# ORDER MODELS - Checkout
# ==============================================================================
# Orders converted from carts, their line items and payment records
# ==============================================================================

from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, List, Optional

from sqlalchemy import JSON, DateTime, Enum as SQLEnum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shoppy.domain_models.base import SQLBase, TimestampMixin
from shoppy.domain_models.cart import ProductLineMixin

if TYPE_CHECKING:
    from shoppy.domain_models.user import User


class OrderStatus(str, enum.Enum):
    """Order lifecycle status states."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, enum.Enum):
    """Payment states reported by the payment gateway."""
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class Order(SQLBase, TimestampMixin):
    """
    Customer order created from an ACTIVE cart.

    Attributes:
        user_id: Customer who placed the order
        cart_id: Cart the order was converted from
        order_number: Human-readable identifier (``ORD-<ms>-<XXXXXX>``)
        status: Current order status
        total_amount: Cart total at conversion time
        shipping_address: Free-form address object supplied at checkout
        shopify_order_id: Storefront order id once the order is synced

    Relationships:
        user: Customer
        items: Line items copied from the cart
        payments: Payment attempts against this order
    """

    __tablename__ = "orders"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    cart_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("carts.id", ondelete="SET NULL"),
        nullable=True,
    )
    order_number: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )
    status: Mapped[OrderStatus] = mapped_column(
        SQLEnum(OrderStatus),
        default=OrderStatus.PENDING,
        nullable=False,
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2),
        nullable=False,
    )
    currency: Mapped[str] = mapped_column(
        String(3),
        default="USD",
        nullable=False,
    )

    # Customer details
    customer_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    customer_email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    customer_phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    shipping_address: Mapped[Optional[Any]] = mapped_column(
        JSON,
        nullable=True,
    )
    shopify_order_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="orders",
    )
    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
    )
    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="order",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, order_number={self.order_number}, status={self.status})>"


class OrderItem(SQLBase, ProductLineMixin, TimestampMixin):
    """Order line copied from a cart item."""

    __tablename__ = "order_items"

    order_id: Mapped[str] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    order: Mapped["Order"] = relationship(
        "Order",
        back_populates="items",
    )

    def __repr__(self) -> str:
        return f"<OrderItem(id={self.id}, variant_id={self.variant_id}, quantity={self.quantity})>"


class Payment(SQLBase, TimestampMixin):
    """
    Payment attempt recorded against an order.

    Attributes:
        payment_id: Gateway-side payment identifier (unique)
        amount: Amount charged
        method: Payment method (card, bank_transfer, ewallet, ...)
        gateway: Gateway name
        transaction_id: Gateway transaction reference
        reference: Merchant reference
        status: Current payment status
        paid_at: When the gateway confirmed payment
    """

    __tablename__ = "payments"

    order_id: Mapped[str] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    payment_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2),
        nullable=False,
    )
    currency: Mapped[str] = mapped_column(
        String(3),
        default="USD",
        nullable=False,
    )
    method: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    gateway: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    transaction_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    reference: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus),
        default=PaymentStatus.PENDING,
        nullable=False,
    )
    paid_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    order: Mapped["Order"] = relationship(
        "Order",
        back_populates="payments",
    )

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, payment_id={self.payment_id}, status={self.status})>"
