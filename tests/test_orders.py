# ==============================================================================
# ORDER ENDPOINT TESTS
# ==============================================================================
# Tests for checkout, order listing and ownership checks
# ==============================================================================

import re

import pytest

from tests.conftest import bearer, register_user

CUSTOMER = {
    "name": "Sari Dewi",
    "email": "sari@shoppy.io",
    "phone": "+62 812 0000 0000",
    "shippingAddress": {"city": "Jakarta", "postalCode": "10110"},
}


async def fill_cart(client) -> dict:
    await client.post(
        "/api/cart/add",
        json={
            "productId": "gid://shopify/Product/1",
            "variantId": "gid://shopify/ProductVariant/11",
            "quantity": 2,
        },
    )
    response = await client.post(
        "/api/cart/add",
        json={
            "productId": "gid://shopify/Product/1",
            "variantId": "gid://shopify/ProductVariant/12",
        },
    )
    return response.json()["data"]


async def place_order(client) -> dict:
    await fill_cart(client)
    response = await client.post("/api/order/create", json={"customerInfo": CUSTOMER})
    assert response.status_code == 200, response.text
    return response.json()["data"]


class TestCreateOrder:

    @pytest.mark.asyncio
    async def test_order_from_cart(self, auth_client):
        client, user = auth_client
        cart = await fill_cart(client)

        response = await client.post("/api/order/create", json={"customerInfo": CUSTOMER})

        assert response.status_code == 200
        order = response.json()["data"]
        assert re.fullmatch(r"ORD-\d{13}-[0-9A-F]{6}", order["orderNumber"])
        assert order["status"] == "PENDING"
        assert order["userId"] == user["id"]
        assert order["cartId"] == cart["id"]
        assert order["totalAmount"] == 77.5
        assert order["currency"] == "USD"
        assert order["customerName"] == "Sari Dewi"
        assert order["shippingAddress"] == {"city": "Jakarta", "postalCode": "10110"}
        assert sorted(i["quantity"] for i in order["items"]) == [1, 2]
        assert all(i["orderId"] == order["id"] for i in order["items"])
        assert order["payments"] == []

    @pytest.mark.asyncio
    async def test_order_without_body(self, auth_client):
        client, _ = auth_client
        await fill_cart(client)

        response = await client.post("/api/order/create")

        assert response.status_code == 200, response.text
        order = response.json()["data"]
        assert order["status"] == "PENDING"
        assert order["customerName"] is None
        assert len(order["items"]) == 2

    @pytest.mark.asyncio
    async def test_cart_converted_after_checkout(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)

        cart = (await client.get("/api/cart")).json()["data"]

        assert cart["id"] != order["cartId"]
        assert cart["items"] == []

    @pytest.mark.asyncio
    async def test_empty_cart(self, auth_client):
        client, _ = auth_client
        await client.get("/api/cart")

        response = await client.post("/api/order/create", json={})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Cart is empty"

    @pytest.mark.asyncio
    async def test_no_cart(self, auth_client):
        client, _ = auth_client

        response = await client.post("/api/order/create", json={})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BUSINESS_RULE_ERROR"


class TestReadOrders:

    @pytest.mark.asyncio
    async def test_list_newest_first(self, auth_client):
        client, _ = auth_client
        first = await place_order(client)
        second = await place_order(client)

        response = await client.get("/api/orders")

        assert response.status_code == 200
        orders = response.json()["data"]
        assert [o["id"] for o in orders] == [second["id"], first["id"]]
        assert len(orders[0]["items"]) == 2

    @pytest.mark.asyncio
    async def test_list_limit(self, auth_client):
        client, _ = auth_client
        await place_order(client)
        await place_order(client)

        response = await client.get("/api/orders", params={"limit": 1})

        assert len(response.json()["data"]) == 1

    @pytest.mark.asyncio
    async def test_get_order(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)

        response = await client.get(f"/api/order/{order['id']}")

        assert response.status_code == 200
        assert response.json()["data"]["orderNumber"] == order["orderNumber"]

    @pytest.mark.asyncio
    async def test_other_users_order_is_not_found(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)

        stranger = await register_user(client, prefix="stranger")
        response = await client.get(f"/api/order/{order['id']}", headers=bearer(stranger["token"]))

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Order not found"


class TestOrderStatus:
    """Service-level status transitions (no HTTP route exposes them)."""

    @pytest.mark.asyncio
    async def test_update_status(self, auth_client):
        from shoppy.database.factory import DatabaseFactory
        from shoppy.services.order_service import OrderService

        client, _ = auth_client
        order = await place_order(client)
        service = OrderService(DatabaseFactory.get_adapter())

        updated = await service.update_status(order["id"], "confirmed", shopify_order_id="gid://shopify/Order/9")

        assert updated.status == "CONFIRMED"
        assert updated.shopify_order_id == "gid://shopify/Order/9"

    @pytest.mark.asyncio
    async def test_invalid_status(self, auth_client):
        from shoppy.core.exceptions import BadRequestError
        from shoppy.database.factory import DatabaseFactory
        from shoppy.services.order_service import OrderService

        client, _ = auth_client
        order = await place_order(client)
        service = OrderService(DatabaseFactory.get_adapter())

        with pytest.raises(BadRequestError):
            await service.update_status(order["id"], "LOST")
