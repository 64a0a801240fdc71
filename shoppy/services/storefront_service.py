# ==============================================================================
# STOREFRONT SERVICE - Shopify Pass-through
# ==============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from shoppy.core.constants import ErrorMessages, QueryLimits
from shoppy.core.exceptions import BadRequestError, NotFoundError
from shoppy.schemas.storefront import ProductListResponse
from shoppy.services.catalog import format_products_for_chat

if TYPE_CHECKING:
    from shoppy.clients.shopify_client import ShopifyClient

logger = logging.getLogger(__name__)


class StorefrontService:
    """Validates input and shapes Shopify results for the ``/shopify`` routes."""

    def __init__(self, shopify: "ShopifyClient") -> None:
        self._shopify = shopify

    @staticmethod
    def _product_list(products: List[Dict[str, Any]]) -> ProductListResponse:
        return ProductListResponse(
            products=products,
            count=len(products),
            formatted_response=format_products_for_chat(products),
        )

    async def search(
        self,
        query: Optional[str],
        limit: int = QueryLimits.SEARCH_RESULTS,
    ) -> ProductListResponse:
        """
        Free-text product search.

        Raises:
            BadRequestError: If the query is blank
        """
        if not query or not query.strip():
            raise BadRequestError(ErrorMessages.SEARCH_QUERY_REQUIRED)

        products = await self._shopify.search_products(query.strip(), limit)
        return self._product_list(products)

    async def featured(self, limit: int = QueryLimits.FEATURED_PRODUCTS) -> ProductListResponse:
        products = await self._shopify.get_featured_products(limit)
        return self._product_list(products)

    async def get_product(self, handle: str) -> Dict[str, Any]:
        product = await self._shopify.get_product_by_handle(handle)
        if not product:
            raise NotFoundError(
                message=ErrorMessages.PRODUCT_NOT_FOUND,
                resource_type="product",
                resource_id=handle,
            )
        return product

    async def create_cart(self) -> Dict[str, Any]:
        cart = await self._shopify.create_cart()
        logger.info(f"Created storefront cart {cart.get('id')}")
        return cart

    async def add_to_cart(
        self,
        cart_id: Optional[str],
        variant_id: Optional[str],
        quantity: int = 1,
    ) -> Dict[str, Any]:
        """
        Add a variant to a storefront cart.

        Raises:
            BadRequestError: If cart or variant id is missing
        """
        if not cart_id or not variant_id:
            raise BadRequestError(ErrorMessages.STOREFRONT_CART_FIELDS_REQUIRED)
        return await self._shopify.add_to_cart(cart_id, variant_id, quantity)

    async def get_cart(self, cart_id: str) -> Optional[Dict[str, Any]]:
        return await self._shopify.get_cart(cart_id)

    async def get_order_status(self, order_name: str) -> Dict[str, Any]:
        """
        Order fulfillment status from the Admin API.

        Raises:
            NotFoundError: If no order has that name
        """
        order = await self._shopify.get_order_status(order_name)
        if not order:
            raise NotFoundError(
                message=ErrorMessages.ORDER_NOT_FOUND,
                resource_type="order",
                resource_id=order_name,
            )
        return order
