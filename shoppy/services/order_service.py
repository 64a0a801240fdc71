# ==============================================================================
# ORDER SERVICE - Checkout
# ==============================================================================
# Converts the ACTIVE cart into an order and serves order lookups
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, List, Optional

from shoppy.core.constants import DatabaseConstants, ErrorMessages, QueryLimits
from shoppy.core.exceptions import BadRequestError, BusinessRuleError, NotFoundError
from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter
from shoppy.domain_models.cart import CartStatus
from shoppy.domain_models.order import OrderStatus
from shoppy.schemas.order import CustomerInfo, OrderResponse
from shoppy.services.base_service import BaseService
from shoppy.utils.helpers import generate_order_number

logger = logging.getLogger(__name__)

PRODUCT_LINE_FIELDS = (
    "product_id",
    "variant_id",
    "product_title",
    "variant_title",
    "product_handle",
    "product_image",
    "price",
    "currency",
    "quantity",
)


class OrderService(BaseService[OrderResponse]):
    """Order service; every read is scoped to the requesting user."""

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, DatabaseConstants.ORDERS_COLLECTION)

    def _to_response(self, entity: Any) -> OrderResponse:
        return OrderResponse.model_validate(entity.to_dict())

    async def _order_response(self, order: Any) -> OrderResponse:
        items = await self._adapter.get_all(
            DatabaseConstants.ORDER_ITEMS_COLLECTION,
            limit=QueryLimits.UNBOUNDED,
            filters={"order_id": order.id},
            sort_by="created_at",
        )
        payments = await self._adapter.get_all(
            DatabaseConstants.PAYMENTS_COLLECTION,
            limit=QueryLimits.UNBOUNDED,
            filters={"order_id": order.id},
            sort_by="created_at",
        )
        return OrderResponse.model_validate(
            {
                **order.to_dict(),
                "items": [item.to_dict() for item in items],
                "payments": [payment.to_dict() for payment in payments],
            }
        )

    # ==========================================================================
    # CHECKOUT
    # ==========================================================================

    async def create_from_cart(
        self,
        user_id: str,
        customer_info: Optional[CustomerInfo] = None,
    ) -> OrderResponse:
        """
        Convert the user's ACTIVE cart into a PENDING order.

        Raises:
            BusinessRuleError: If there is no ACTIVE cart or it has no items
        """
        cart = await self._adapter.find_one(
            DatabaseConstants.CARTS_COLLECTION,
            {"user_id": user_id, "status": CartStatus.ACTIVE},
            sort_by="created_at",
            sort_order="desc",
        )
        items: List[Any] = []
        if cart:
            items = await self._adapter.get_all(
                DatabaseConstants.CART_ITEMS_COLLECTION,
                limit=QueryLimits.UNBOUNDED,
                filters={"cart_id": cart.id},
                sort_by="created_at",
            )
        if not cart or not items:
            raise BusinessRuleError(ErrorMessages.CART_EMPTY, rule="cart_not_empty")

        info = customer_info or CustomerInfo()
        order = await self._adapter.create(
            self._collection_name,
            {
                "user_id": user_id,
                "cart_id": cart.id,
                "order_number": generate_order_number(),
                "total_amount": cart.total_amount,
                "currency": items[0].currency,
                "customer_name": info.name,
                "customer_email": info.email,
                "customer_phone": info.phone,
                "shipping_address": info.shipping_address,
            },
        )

        for item in items:
            await self._adapter.create(
                DatabaseConstants.ORDER_ITEMS_COLLECTION,
                {
                    "order_id": order.id,
                    **{field: getattr(item, field) for field in PRODUCT_LINE_FIELDS},
                },
            )

        await self._adapter.update(
            DatabaseConstants.CARTS_COLLECTION,
            cart.id,
            {"status": CartStatus.CONVERTED},
        )
        logger.info(f"Order {order.order_number} created from cart {cart.id}")

        return await self._order_response(order)

    # ==========================================================================
    # LOOKUPS
    # ==========================================================================

    async def list_orders(
        self,
        user_id: str,
        limit: int = QueryLimits.USER_ORDERS,
    ) -> List[OrderResponse]:
        """Newest orders first."""
        orders = await self._adapter.get_all(
            self._collection_name,
            limit=limit,
            filters={"user_id": user_id},
            sort_by="created_at",
            sort_order="desc",
        )
        return [await self._order_response(order) for order in orders]

    async def get_owned_order(self, user_id: str, order_id: str) -> Any:
        """
        Raw order record owned by the user.

        Raises:
            NotFoundError: If missing or owned by someone else
        """
        order = await self._adapter.get_by_id(self._collection_name, order_id)
        if not order or order.user_id != user_id:
            raise NotFoundError(
                message=ErrorMessages.ORDER_NOT_FOUND,
                resource_type="order",
                resource_id=order_id,
            )
        return order

    async def get_order(self, user_id: str, order_id: str) -> OrderResponse:
        """Order with items and payments."""
        order = await self.get_owned_order(user_id, order_id)
        return await self._order_response(order)

    async def update_status(
        self,
        order_id: str,
        status: str,
        shopify_order_id: Optional[str] = None,
    ) -> OrderResponse:
        """
        Move an order to a new status.

        Raises:
            BadRequestError: If ``status`` is not an order status
            NotFoundError: If the order does not exist
        """
        try:
            new_status = OrderStatus(status.upper())
        except ValueError:
            raise BadRequestError(
                ErrorMessages.INVALID_ORDER_STATUS,
                details={"allowed": [s.value for s in OrderStatus]},
            )

        data: dict = {"status": new_status}
        if shopify_order_id:
            data["shopify_order_id"] = shopify_order_id

        order = await self._adapter.update(self._collection_name, order_id, data)
        if not order:
            raise NotFoundError(
                message=ErrorMessages.ORDER_NOT_FOUND,
                resource_type="order",
                resource_id=order_id,
            )
        return await self._order_response(order)
