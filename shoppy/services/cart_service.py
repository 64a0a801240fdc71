# ==============================================================================
# CART SERVICE - Local Shopping Carts
# ==============================================================================
# Carts hold storefront variants; totals follow every item change
# ==============================================================================

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from shoppy.core.constants import DatabaseConstants, ErrorMessages, QueryLimits
from shoppy.core.exceptions import BadRequestError, NotFoundError
from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter
from shoppy.domain_models.cart import CartStatus
from shoppy.schemas.cart import CartItemAdd, CartResponse
from shoppy.services.base_service import BaseService
from shoppy.services.catalog import product_image

if TYPE_CHECKING:
    from shoppy.clients.shopify_client import ShopifyClient

logger = logging.getLogger(__name__)


class CartService(BaseService[CartResponse]):
    """
    Cart service backed by storefront product data.

    A user works with one ACTIVE cart at a time; checkout marks it
    CONVERTED and the next request starts a fresh one.
    """

    def __init__(self, adapter: BaseDatabaseAdapter, shopify: "ShopifyClient") -> None:
        super().__init__(adapter, DatabaseConstants.CARTS_COLLECTION)
        self._shopify = shopify

    def _to_response(self, entity: Any) -> CartResponse:
        return CartResponse.model_validate(entity.to_dict())

    async def _cart_response(self, cart: Any) -> CartResponse:
        items = await self._adapter.get_all(
            DatabaseConstants.CART_ITEMS_COLLECTION,
            limit=QueryLimits.UNBOUNDED,
            filters={"cart_id": cart.id},
            sort_by="created_at",
        )
        return CartResponse.model_validate(
            {**cart.to_dict(), "items": [item.to_dict() for item in items]}
        )

    # ==========================================================================
    # CART LOOKUP
    # ==========================================================================

    async def find_active_cart(
        self,
        user_id: str,
        session_id: Optional[str] = None,
    ) -> Optional[Any]:
        """
        The user's ACTIVE cart.

        With ``session_id`` a cart for that chat session is preferred,
        falling back to any ACTIVE cart.
        """
        filters: Dict[str, Any] = {"user_id": user_id, "status": CartStatus.ACTIVE}

        if session_id:
            cart = await self._adapter.find_one(
                self._collection_name,
                {**filters, "session_id": session_id},
                sort_by="created_at",
                sort_order="desc",
            )
            if cart:
                return cart

        return await self._adapter.find_one(
            self._collection_name,
            filters,
            sort_by="created_at",
            sort_order="desc",
        )

    async def _get_or_create(self, user_id: str, session_id: Optional[str] = None) -> Any:
        cart = await self.find_active_cart(user_id, session_id)
        if cart:
            return cart

        cart = await self._adapter.create(
            self._collection_name,
            {"user_id": user_id, "session_id": session_id},
        )
        logger.info(f"Created cart {cart.id} for user {user_id}")
        return cart

    async def get_or_create_cart(
        self,
        user_id: str,
        session_id: Optional[str] = None,
    ) -> CartResponse:
        """Return the ACTIVE cart, creating an empty one if needed."""
        cart = await self._get_or_create(user_id, session_id)
        return await self._cart_response(cart)

    # ==========================================================================
    # ITEM MUTATIONS
    # ==========================================================================

    async def add_item(self, user_id: str, schema: CartItemAdd) -> CartResponse:
        """
        Add a storefront variant, merging with an existing line.

        Raises:
            BadRequestError: If product or variant id is missing
            NotFoundError: If the product or variant does not exist
        """
        if not schema.product_id or not schema.variant_id:
            raise BadRequestError(ErrorMessages.CART_FIELDS_REQUIRED)

        product = await self._shopify.get_product_by_id(schema.product_id)
        if not product:
            raise NotFoundError(
                message=ErrorMessages.PRODUCT_NOT_FOUND,
                resource_type="product",
                resource_id=schema.product_id,
            )

        variant = next(
            (
                edge["node"]
                for edge in (product.get("variants") or {}).get("edges", [])
                if edge["node"]["id"] == schema.variant_id
            ),
            None,
        )
        if not variant:
            raise NotFoundError(
                message=ErrorMessages.VARIANT_NOT_FOUND,
                resource_type="variant",
                resource_id=schema.variant_id,
            )

        cart = await self._get_or_create(user_id, schema.session_id)

        existing = await self._adapter.find_one(
            DatabaseConstants.CART_ITEMS_COLLECTION,
            {"cart_id": cart.id, "variant_id": schema.variant_id},
        )
        if existing:
            await self._adapter.update(
                DatabaseConstants.CART_ITEMS_COLLECTION,
                existing.id,
                {"quantity": existing.quantity + schema.quantity},
            )
        else:
            await self._adapter.create(
                DatabaseConstants.CART_ITEMS_COLLECTION,
                {
                    "cart_id": cart.id,
                    "product_id": schema.product_id,
                    "variant_id": schema.variant_id,
                    "product_title": product.get("title", ""),
                    "variant_title": variant.get("title"),
                    "product_handle": product.get("handle"),
                    "product_image": product_image(product) or None,
                    "price": Decimal(str(variant["price"]["amount"])),
                    "currency": variant["price"].get("currencyCode", "USD"),
                    "quantity": schema.quantity,
                },
            )

        return await self._recalculate(cart.id)

    async def update_item_quantity(
        self,
        user_id: str,
        item_id: str,
        quantity: Optional[int],
    ) -> CartResponse:
        """
        Set a line's quantity; zero or less removes the line.

        Raises:
            BadRequestError: If quantity is missing
            NotFoundError: If the item is not in one of the user's carts
        """
        if quantity is None:
            raise BadRequestError(ErrorMessages.QUANTITY_REQUIRED)

        if quantity <= 0:
            return await self.remove_item(user_id, item_id)

        item = await self._owned_item(user_id, item_id)
        await self._adapter.update(
            DatabaseConstants.CART_ITEMS_COLLECTION,
            item.id,
            {"quantity": quantity},
        )
        return await self._recalculate(item.cart_id)

    async def remove_item(self, user_id: str, item_id: str) -> CartResponse:
        """Delete a line from one of the user's carts."""
        item = await self._owned_item(user_id, item_id)
        await self._adapter.delete(DatabaseConstants.CART_ITEMS_COLLECTION, item.id)
        return await self._recalculate(item.cart_id)

    async def clear_cart(self, user_id: str) -> Optional[CartResponse]:
        """Empty the ACTIVE cart; None when the user has none."""
        cart = await self.find_active_cart(user_id)
        if not cart:
            return None

        await self._adapter.bulk_delete(
            DatabaseConstants.CART_ITEMS_COLLECTION,
            {"cart_id": cart.id},
        )
        return await self._recalculate(cart.id)

    # ==========================================================================
    # INTERNAL HELPERS
    # ==========================================================================

    async def _owned_item(self, user_id: str, item_id: str) -> Any:
        item = await self._adapter.get_by_id(DatabaseConstants.CART_ITEMS_COLLECTION, item_id)
        cart = (
            await self._adapter.get_by_id(self._collection_name, item.cart_id)
            if item else None
        )
        if not item or not cart or cart.user_id != user_id:
            raise NotFoundError(
                message=ErrorMessages.CART_ITEM_NOT_FOUND,
                resource_type="cart_item",
                resource_id=item_id,
            )
        return item

    async def _recalculate(self, cart_id: str) -> CartResponse:
        """Recompute totals from the cart's lines and return the cart."""
        items: List[Any] = await self._adapter.get_all(
            DatabaseConstants.CART_ITEMS_COLLECTION,
            limit=QueryLimits.UNBOUNDED,
            filters={"cart_id": cart_id},
        )
        total_amount = sum(
            (Decimal(item.price) * item.quantity for item in items),
            Decimal("0"),
        )
        total_items = sum(item.quantity for item in items)

        cart = await self._adapter.update(
            self._collection_name,
            cart_id,
            {"total_amount": total_amount, "total_items": total_items},
        )
        return await self._cart_response(cart)
