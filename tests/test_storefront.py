# ==============================================================================
# STOREFRONT ENDPOINT TESTS
# ==============================================================================
# Tests for the /shopify pass-through routes
# ==============================================================================

import pytest

from shoppy.core.exceptions import ShopifyAPIError


class TestProducts:

    @pytest.mark.asyncio
    async def test_search(self, auth_client, fake_shopify):
        client, _ = auth_client

        response = await client.post("/api/shopify/search", json={"query": "  tee ", "limit": 1})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["count"] == 1
        assert data["products"][0]["title"] == "Oversized Tee"
        assert data["formattedResponse"].startswith("Saya menemukan 1 produk yang cocok:")
        assert fake_shopify.search_calls == ["tee"]

    @pytest.mark.asyncio
    async def test_search_requires_query(self, auth_client):
        client, _ = auth_client

        response = await client.post("/api/shopify/search", json={"query": " "})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Search query is required"

    @pytest.mark.asyncio
    async def test_search_limit_bounds(self, auth_client):
        client, _ = auth_client

        response = await client.post("/api/shopify/search", json={"query": "tee", "limit": 0})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_search_requires_token(self, client):
        response = await client.post("/api/shopify/search", json={"query": "tee"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_storefront_error_is_500(self, auth_client, fake_shopify):
        client, _ = auth_client
        fake_shopify.search_error = ShopifyAPIError("Storefront API: Unauthorized - Check your access token")

        response = await client.post("/api/shopify/search", json={"query": "tee"})

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "SHOPIFY_API_ERROR"

    @pytest.mark.asyncio
    async def test_product_by_handle(self, auth_client):
        client, _ = auth_client

        response = await client.get("/api/shopify/product/canvas-sneakers")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == "gid://shopify/Product/2"

    @pytest.mark.asyncio
    async def test_unknown_product(self, auth_client):
        client, _ = auth_client

        response = await client.get("/api/shopify/product/missing")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Product not found"

    @pytest.mark.asyncio
    async def test_featured(self, auth_client):
        client, _ = auth_client

        response = await client.get("/api/shopify/featured", params={"limit": 1})

        assert response.status_code == 200
        assert response.json()["data"]["count"] == 1


class TestStorefrontCarts:

    @pytest.mark.asyncio
    async def test_create_add_and_get(self, auth_client):
        client, _ = auth_client

        cart = (await client.post("/api/shopify/cart/create")).json()["data"]
        assert cart["id"].startswith("gid://shopify/Cart/")

        added = await client.post(
            "/api/shopify/cart/add",
            json={"cartId": cart["id"], "variantId": "gid://shopify/ProductVariant/11", "quantity": 2},
        )
        assert added.status_code == 200
        assert added.json()["data"]["lines"]["edges"][0]["node"]["quantity"] == 2

        fetched = await client.get(f"/api/shopify/cart/{cart['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["data"]["id"] == cart["id"]

    @pytest.mark.asyncio
    async def test_add_requires_ids(self, auth_client):
        client, _ = auth_client

        response = await client.post("/api/shopify/cart/add", json={"cartId": "c1"})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Cart ID and variant ID are required"


class TestOrderStatus:

    @pytest.mark.asyncio
    async def test_known_order(self, auth_client):
        client, _ = auth_client

        response = await client.get("/api/shopify/order/%231001")

        assert response.status_code == 200
        assert response.json()["data"]["displayFulfillmentStatus"] == "FULFILLED"

    @pytest.mark.asyncio
    async def test_unknown_order(self, auth_client):
        client, _ = auth_client

        response = await client.get("/api/shopify/order/%239999")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Order not found"
