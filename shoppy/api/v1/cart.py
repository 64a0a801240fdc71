# ==============================================================================
# CART ENDPOINTS - Local Shopping Cart Routes
# ==============================================================================

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from shoppy.api.dependencies import CartServiceDep, CurrentUser
from shoppy.core.constants import SuccessMessages
from shoppy.schemas.base import APIResponse
from shoppy.schemas.cart import CartItemAdd, CartItemUpdate, CartResponse

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get(
    "",
    response_model=APIResponse[CartResponse],
    summary="Get cart",
    description="The user's active cart, created empty on first access.",
)
async def get_cart(
    user: CurrentUser,
    service: CartServiceDep,
    session_id: Optional[str] = Query(None, alias="sessionId"),
) -> APIResponse[CartResponse]:
    cart = await service.get_or_create_cart(user.id, session_id)
    return APIResponse.ok(data=cart)


@router.post(
    "/add",
    response_model=APIResponse[CartResponse],
    summary="Add item",
    description="Add a store product variant; repeated variants merge quantities.",
)
async def add_item(
    schema: CartItemAdd,
    user: CurrentUser,
    service: CartServiceDep,
) -> APIResponse[CartResponse]:
    cart = await service.add_item(user.id, schema)
    return APIResponse.ok(data=cart, message=SuccessMessages.ITEM_ADDED)


@router.put(
    "/item/{item_id}",
    response_model=APIResponse[CartResponse],
    summary="Update item quantity",
    description="Set a line's quantity; zero removes the line.",
)
async def update_item(
    item_id: str,
    schema: CartItemUpdate,
    user: CurrentUser,
    service: CartServiceDep,
) -> APIResponse[CartResponse]:
    cart = await service.update_item_quantity(user.id, item_id, schema.quantity)
    return APIResponse.ok(data=cart, message=SuccessMessages.CART_UPDATED)


@router.delete(
    "/item/{item_id}",
    response_model=APIResponse[CartResponse],
    summary="Remove item",
)
async def remove_item(
    item_id: str,
    user: CurrentUser,
    service: CartServiceDep,
) -> APIResponse[CartResponse]:
    cart = await service.remove_item(user.id, item_id)
    return APIResponse.ok(data=cart, message=SuccessMessages.CART_UPDATED)


@router.delete(
    "/clear",
    response_model=APIResponse[Optional[CartResponse]],
    summary="Clear cart",
    description="Remove every line from the active cart.",
)
async def clear_cart(
    user: CurrentUser,
    service: CartServiceDep,
) -> APIResponse[Optional[CartResponse]]:
    cart = await service.clear_cart(user.id)
    return APIResponse.ok(data=cart, message=SuccessMessages.CART_CLEARED)
