# ==============================================================================
# CART SCHEMAS - Shopping Cart
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from shoppy.domain_models.cart import CartStatus
from shoppy.schemas.base import BaseSchema, TimestampSchema


class ProductLineResponse(TimestampSchema):
    """Fields shared by cart and order lines."""

    id: str
    product_id: str
    variant_id: str
    product_title: str
    variant_title: Optional[str] = None
    product_handle: Optional[str] = None
    product_image: Optional[str] = None
    price: float
    currency: str = "USD"
    quantity: int


class CartItemResponse(ProductLineResponse):
    """Schema for cart item response."""

    cart_id: str


class CartResponse(TimestampSchema):
    """Schema for cart response with items."""

    id: str
    user_id: str
    session_id: Optional[str] = None
    status: CartStatus
    total_amount: float = 0
    total_items: int = 0
    items: List[CartItemResponse] = Field(default_factory=list)


class CartItemAdd(BaseSchema):
    """Schema for adding a storefront product to the cart."""

    product_id: Optional[str] = Field(
        None,
        description="Storefront product id",
    )
    variant_id: Optional[str] = Field(
        None,
        description="Storefront variant id",
    )
    quantity: int = Field(
        1,
        ge=1,
        description="Units to add",
    )
    session_id: Optional[str] = Field(
        None,
        description="Chat session the cart belongs to",
    )


class CartItemUpdate(BaseSchema):
    """Schema for changing a cart item's quantity (<= 0 removes it)."""

    quantity: Optional[int] = Field(
        None,
        description="New quantity",
    )
