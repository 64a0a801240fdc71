# ==============================================================================
# STOREFRONT ENDPOINTS - Shopify Routes
# ==============================================================================
# Product search, storefront carts and order status
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Query

from shoppy.api.dependencies import CurrentUser, StorefrontServiceDep
from shoppy.core.constants import QueryLimits
from shoppy.schemas.base import APIResponse
from shoppy.schemas.storefront import (
    ProductListResponse,
    ProductSearchRequest,
    StorefrontCartAdd,
)

router = APIRouter(prefix="/shopify", tags=["Storefront"])


@router.post(
    "/search",
    response_model=APIResponse[ProductListResponse],
    summary="Search products",
    description="Free-text catalogue search with a chat-ready rendering.",
)
async def search_products(
    schema: ProductSearchRequest,
    user: CurrentUser,
    service: StorefrontServiceDep,
) -> APIResponse[ProductListResponse]:
    result = await service.search(schema.query, schema.limit)
    return APIResponse.ok(data=result)


@router.get(
    "/product/{handle}",
    response_model=APIResponse[Dict[str, Any]],
    summary="Get product",
)
async def get_product(
    handle: str,
    user: CurrentUser,
    service: StorefrontServiceDep,
) -> APIResponse[Dict[str, Any]]:
    product = await service.get_product(handle)
    return APIResponse.ok(data=product)


@router.post(
    "/cart/create",
    response_model=APIResponse[Dict[str, Any]],
    summary="Create storefront cart",
)
async def create_cart(
    user: CurrentUser,
    service: StorefrontServiceDep,
) -> APIResponse[Dict[str, Any]]:
    cart = await service.create_cart()
    return APIResponse.ok(data=cart)


@router.post(
    "/cart/add",
    response_model=APIResponse[Dict[str, Any]],
    summary="Add to storefront cart",
)
async def add_to_cart(
    schema: StorefrontCartAdd,
    user: CurrentUser,
    service: StorefrontServiceDep,
) -> APIResponse[Dict[str, Any]]:
    cart = await service.add_to_cart(schema.cart_id, schema.variant_id, schema.quantity)
    return APIResponse.ok(data=cart)


@router.get(
    "/cart/{cart_id:path}",
    response_model=APIResponse[Optional[Dict[str, Any]]],
    summary="Get storefront cart",
)
async def get_cart(
    cart_id: str,
    user: CurrentUser,
    service: StorefrontServiceDep,
) -> APIResponse[Optional[Dict[str, Any]]]:
    cart = await service.get_cart(cart_id)
    return APIResponse.ok(data=cart)


@router.get(
    "/order/{order_name}",
    response_model=APIResponse[Dict[str, Any]],
    summary="Order status",
    description="Fulfillment status of a store order by name.",
)
async def get_order_status(
    order_name: str,
    user: CurrentUser,
    service: StorefrontServiceDep,
) -> APIResponse[Dict[str, Any]]:
    order = await service.get_order_status(order_name)
    return APIResponse.ok(data=order)


@router.get(
    "/featured",
    response_model=APIResponse[ProductListResponse],
    summary="Featured products",
    description="Best-selling products.",
)
async def featured_products(
    user: CurrentUser,
    service: StorefrontServiceDep,
    limit: int = Query(QueryLimits.FEATURED_PRODUCTS, ge=1, le=50),
) -> APIResponse[ProductListResponse]:
    result = await service.featured(limit)
    return APIResponse.ok(data=result)
