# ==============================================================================
# STOREFRONT SCHEMAS - Shopify Pass-through
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from shoppy.schemas.base import BaseSchema


class ProductSearchRequest(BaseSchema):
    """Free-text product search."""

    query: Optional[str] = Field(
        None,
        description="Search text",
    )
    limit: int = Field(
        5,
        ge=1,
        le=50,
        description="Maximum products to return",
    )


class ProductListResponse(BaseSchema):
    """Products plus the chat-ready text rendering."""

    products: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    formatted_response: str


class StorefrontCartAdd(BaseSchema):
    """Add a variant to a storefront cart."""

    cart_id: Optional[str] = None
    variant_id: Optional[str] = None
    quantity: int = Field(
        1,
        ge=1,
        description="Units to add",
    )
