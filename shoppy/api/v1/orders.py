# ==============================================================================
# ORDER ENDPOINTS - Checkout & Order Lookup Routes
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, Query

from shoppy.api.dependencies import CurrentUser, OrderServiceDep
from shoppy.core.constants import QueryLimits, SuccessMessages
from shoppy.schemas.base import APIResponse
from shoppy.schemas.order import OrderCreate, OrderResponse

router = APIRouter(tags=["Orders"])


@router.post(
    "/order/create",
    response_model=APIResponse[OrderResponse],
    summary="Place order",
    description="Convert the active cart into a pending order.",
)
async def create_order(
    user: CurrentUser,
    service: OrderServiceDep,
    schema: Optional[OrderCreate] = Body(None),
) -> APIResponse[OrderResponse]:
    customer_info = schema.customer_info if schema else None
    order = await service.create_from_cart(user.id, customer_info)
    return APIResponse.ok(data=order, message=SuccessMessages.ORDER_PLACED)


@router.get(
    "/orders",
    response_model=APIResponse[List[OrderResponse]],
    summary="List orders",
    description="The user's most recent orders, newest first.",
)
async def list_orders(
    user: CurrentUser,
    service: OrderServiceDep,
    limit: int = Query(QueryLimits.USER_ORDERS, ge=1, le=100),
) -> APIResponse[List[OrderResponse]]:
    orders = await service.list_orders(user.id, limit)
    return APIResponse.ok(data=orders)


@router.get(
    "/order/{order_id}",
    response_model=APIResponse[OrderResponse],
    summary="Get order",
)
async def get_order(
    order_id: str,
    user: CurrentUser,
    service: OrderServiceDep,
) -> APIResponse[OrderResponse]:
    order = await service.get_order(user.id, order_id)
    return APIResponse.ok(data=order)
