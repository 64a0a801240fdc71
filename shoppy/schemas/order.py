# ==============================================================================
# ORDER SCHEMAS - Checkout & Payments
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from shoppy.domain_models.order import OrderStatus, PaymentStatus
from shoppy.schemas.base import BaseSchema, TimestampSchema
from shoppy.schemas.cart import ProductLineResponse


class CustomerInfo(BaseSchema):
    """Customer details captured at checkout."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    shipping_address: Optional[Any] = None


class OrderCreate(BaseSchema):
    """Schema for converting the active cart into an order."""

    customer_info: Optional[CustomerInfo] = None


class OrderItemResponse(ProductLineResponse):
    """Schema for order item response."""

    order_id: str


class PaymentResponse(TimestampSchema):
    """Schema for payment response."""

    id: str
    order_id: str
    payment_id: str
    amount: float
    currency: str
    method: str
    gateway: Optional[str] = None
    transaction_id: Optional[str] = None
    reference: Optional[str] = None
    status: PaymentStatus
    paid_at: Optional[datetime] = None


class OrderResponse(TimestampSchema):
    """Schema for order response with items and payments."""

    id: str
    user_id: str
    cart_id: Optional[str] = None
    order_number: str
    status: OrderStatus
    total_amount: float
    currency: str
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    shipping_address: Optional[Any] = None
    shopify_order_id: Optional[str] = None
    items: List[OrderItemResponse] = Field(default_factory=list)
    payments: List[PaymentResponse] = Field(default_factory=list)


class PaymentData(BaseSchema):
    """Gateway payment details."""

    payment_id: str = Field(
        ...,
        min_length=1,
        description="Gateway payment identifier",
    )
    amount: float = Field(
        ...,
        ge=0,
        description="Amount charged",
    )
    method: str = Field(
        ...,
        min_length=1,
        description="Payment method",
    )
    gateway: Optional[str] = None
    transaction_id: Optional[str] = None
    reference: Optional[str] = None
    currency: Optional[str] = Field(
        None,
        min_length=3,
        max_length=3,
        description="ISO currency code (defaults to the order currency)",
    )


class PaymentCreate(BaseSchema):
    """Schema for recording a payment against an order."""

    order_id: Optional[str] = None
    payment_data: Optional[PaymentData] = None


class PaymentStatusUpdate(BaseSchema):
    """Schema for a gateway status callback."""

    status: Optional[str] = Field(
        None,
        description="PENDING, PAID, FAILED, CANCELLED or REFUNDED",
    )
    paid_at: Optional[datetime] = None
