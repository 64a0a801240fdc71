# ==============================================================================
# SHOPIFY CLIENT - Storefront & Admin GraphQL APIs
# ==============================================================================
# Product search, storefront carts and order status lookups
# ==============================================================================

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from shoppy.core.settings import settings
from shoppy.core.constants import QueryLimits
from shoppy.core.exceptions import ShopifyAPIError
from shoppy.clients.base_client import HTTPClientPool
from shoppy.clients import shopify_queries as queries
from shoppy.services.catalog import build_search_query

logger = logging.getLogger(__name__)

STOREFRONT_API = "Storefront API"
ADMIN_API = "Admin API"

STATUS_MESSAGES: Dict[int, str] = {
    400: "Bad Request - Check your query syntax",
    401: "Unauthorized - Check your access token",
    402: "Payment Required - Shop is frozen",
    403: "Forbidden - Shop is marked as fraudulent",
    404: "Not Found - Resource doesn't exist",
    423: "Locked - Shop isn't available",
    429: "Rate Limited - Too many requests",
}


def _status_message(api_name: str, status: int) -> str:
    if status in STATUS_MESSAGES:
        return f"{api_name}: {STATUS_MESSAGES[status]}"
    if status >= 500:
        return f"{api_name}: Server Error ({status}) - Try again later"
    return f"{api_name}: HTTP Error {status}"


def _edge_nodes(connection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not connection:
        return []
    return [edge["node"] for edge in connection.get("edges", [])]


class ShopifyClient:
    """
    Async GraphQL client for the Shopify Storefront and Admin APIs.

    Products come back as plain dicts in the Storefront node shape
    (``priceRange.minVariantPrice``, ``images.edges[].node.url``, ...).

    Raises:
        ShopifyAPIError: On HTTP errors, transport failures, GraphQL
            ``errors`` and cart ``userErrors``
    """

    def __init__(
        self,
        storefront_url: Optional[str] = None,
        admin_url: Optional[str] = None,
        storefront_token: Optional[str] = None,
        admin_token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._storefront_url = storefront_url or settings.shopify_storefront_url
        self._admin_url = admin_url or settings.shopify_admin_url
        timeout = timeout if timeout is not None else settings.SHOPIFY_TIMEOUT

        self._storefront = HTTPClientPool(
            headers={
                "Content-Type": "application/json",
                "X-Shopify-Storefront-Access-Token": (
                    storefront_token if storefront_token is not None
                    else settings.SHOPIFY_STOREFRONT_TOKEN
                ),
            },
            timeout=timeout,
            transport=transport,
        )
        self._admin = HTTPClientPool(
            headers={
                "Content-Type": "application/json",
                "X-Shopify-Access-Token": (
                    admin_token if admin_token is not None
                    else settings.SHOPIFY_ADMIN_TOKEN
                ),
            },
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._storefront.close()
        await self._admin.close()

    # ==========================================================================
    # TRANSPORT
    # ==========================================================================

    async def _execute(
        self,
        pool: HTTPClientPool,
        url: str,
        api_name: str,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """POST a GraphQL document and return its ``data`` object."""
        body: Dict[str, Any] = {"query": query}
        if variables is not None:
            body["variables"] = variables

        client = await pool.get_client()
        try:
            response = await client.post(url, json=body)
        except httpx.TimeoutException as e:
            raise ShopifyAPIError(
                f"{api_name}: Network Error - Unable to connect to Shopify",
                reason="timeout",
            ) from e
        except httpx.TransportError as e:
            raise ShopifyAPIError(
                f"{api_name}: Network Error - Unable to connect to Shopify",
                reason="connection",
            ) from e

        if response.status_code >= 400:
            raise ShopifyAPIError(
                _status_message(api_name, response.status_code),
                upstream_status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ShopifyAPIError(f"{api_name}: Invalid response") from e
        if payload.get("errors"):
            logger.error(f"Shopify GraphQL errors: {payload['errors']}")
            raise ShopifyAPIError(f"GraphQL Error: {json.dumps(payload['errors'])}")

        return payload.get("data") or {}

    async def _storefront_query(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self._execute(
            self._storefront, self._storefront_url, STOREFRONT_API, query, variables
        )

    async def _admin_query(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self._execute(
            self._admin, self._admin_url, ADMIN_API, query, variables
        )

    # ==========================================================================
    # PRODUCTS
    # ==========================================================================

    async def search_products(
        self,
        search_text: str,
        limit: int = QueryLimits.SEARCH_RESULTS,
    ) -> List[Dict[str, Any]]:
        """Search products matching free text."""
        search_query = build_search_query(search_text)
        logger.info(f"Shopify search query: {search_query!r} (from: {search_text!r})")

        data = await self._storefront_query(
            queries.SEARCH_PRODUCTS,
            {"searchText": search_query, "limit": limit},
        )
        products = _edge_nodes(data.get("products"))
        logger.info(f"Shopify found {len(products)} products")
        return products

    async def get_product_by_handle(self, handle: str) -> Optional[Dict[str, Any]]:
        """Product by URL handle, or None."""
        data = await self._storefront_query(queries.PRODUCT_BY_HANDLE, {"handle": handle})
        return data.get("product")

    async def get_product_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        """Product by GraphQL id, or None."""
        data = await self._storefront_query(queries.PRODUCT_BY_ID, {"id": product_id})
        return data.get("product")

    async def get_featured_products(
        self,
        limit: int = QueryLimits.FEATURED_PRODUCTS,
    ) -> List[Dict[str, Any]]:
        """Best-selling products."""
        data = await self._storefront_query(queries.FEATURED_PRODUCTS, {"limit": limit})
        return _edge_nodes(data.get("products"))

    # ==========================================================================
    # STOREFRONT CARTS
    # ==========================================================================

    @staticmethod
    def _cart_result(data: Dict[str, Any], field: str, error_prefix: str) -> Dict[str, Any]:
        result = data.get(field) or {}
        user_errors = result.get("userErrors") or []
        if user_errors:
            raise ShopifyAPIError(f"{error_prefix}: {user_errors[0].get('message')}")
        return result.get("cart") or {}

    async def create_cart(self) -> Dict[str, Any]:
        """Create an empty storefront cart."""
        data = await self._storefront_query(queries.CART_CREATE)
        return self._cart_result(data, "cartCreate", "Cart creation error")

    async def add_to_cart(
        self,
        cart_id: str,
        variant_id: str,
        quantity: int = 1,
    ) -> Dict[str, Any]:
        """Add a variant line to a storefront cart."""
        data = await self._storefront_query(
            queries.CART_LINES_ADD,
            {
                "cartId": cart_id,
                "lines": [{"merchandiseId": variant_id, "quantity": quantity}],
            },
        )
        return self._cart_result(data, "cartLinesAdd", "Add to cart error")

    async def get_cart(self, cart_id: str) -> Optional[Dict[str, Any]]:
        """Storefront cart with its lines."""
        data = await self._storefront_query(queries.GET_CART, {"cartId": cart_id})
        return data.get("cart")

    # ==========================================================================
    # ORDERS (ADMIN API)
    # ==========================================================================

    async def get_order_status(self, order_name: str) -> Optional[Dict[str, Any]]:
        """Fulfillment status of an order by name (e.g. ``#1001``), or None."""
        data = await self._admin_query(
            queries.ORDER_STATUS,
            {"orderName": f"name:{order_name}"},
        )
        orders = _edge_nodes(data.get("orders"))
        return orders[0] if orders else None
