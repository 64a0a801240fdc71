# ==============================================================================
# SHOPIFY CLIENT TESTS
# ==============================================================================
# GraphQL request shape and error mapping over MockTransport
# ==============================================================================

import json

import httpx
import pytest

from shoppy.clients.shopify_client import ShopifyClient
from shoppy.core.exceptions import ShopifyAPIError
from tests.conftest import TEE

STOREFRONT_URL = "https://shop.test/api/2024-07/graphql.json"
ADMIN_URL = "https://shop.test/admin/api/2024-07/graphql.json"


def make_client(handler) -> ShopifyClient:
    return ShopifyClient(
        storefront_url=STOREFRONT_URL,
        admin_url=ADMIN_URL,
        storefront_token="sf-token",
        admin_token="admin-token",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


def graphql(data) -> httpx.Response:
    return httpx.Response(200, json={"data": data})


class TestProducts:

    @pytest.mark.asyncio
    async def test_search_products(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["token"] = request.headers.get("X-Shopify-Storefront-Access-Token")
            seen["body"] = json.loads(request.content)
            return graphql({"products": {"edges": [{"node": TEE}]}})

        client = make_client(handler)
        products = await client.search_products("sepatu", limit=3)
        await client.close()

        assert products == [TEE]
        assert seen["url"] == STOREFRONT_URL
        assert seen["token"] == "sf-token"
        assert seen["body"]["variables"] == {
            "searchText": (
                "(title:*shoes* OR title:*sepatu* OR title:*sneakers*) "
                "OR (tag:shoes OR tag:sepatu OR tag:sneakers)"
            ),
            "limit": 3,
        }

    @pytest.mark.asyncio
    async def test_product_by_handle_missing(self):
        client = make_client(lambda request: graphql({"product": None}))

        assert await client.get_product_by_handle("nope") is None

    @pytest.mark.asyncio
    async def test_featured_products(self):
        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            assert "BEST_SELLING" in body["query"]
            assert body["variables"] == {"limit": 10}
            return graphql({"products": {"edges": [{"node": TEE}]}})

        client = make_client(handler)
        assert await client.get_featured_products() == [TEE]


class TestErrors:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, expected",
        [
            (401, "Storefront API: Unauthorized - Check your access token"),
            (429, "Storefront API: Rate Limited - Too many requests"),
            (503, "Storefront API: Server Error (503) - Try again later"),
            (418, "Storefront API: HTTP Error 418"),
        ],
    )
    async def test_http_status_messages(self, status, expected):
        client = make_client(lambda request: httpx.Response(status, text="nope"))

        with pytest.raises(ShopifyAPIError) as exc_info:
            await client.search_products("tee")

        assert exc_info.value.message == expected
        assert exc_info.value.upstream_status == status

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = make_client(handler)
        with pytest.raises(ShopifyAPIError) as exc_info:
            await client.search_products("tee")

        assert exc_info.value.message == "Storefront API: Network Error - Unable to connect to Shopify"

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        client = make_client(
            lambda request: httpx.Response(
                200,
                text="<html>Down for maintenance</html>",
                headers={"Content-Type": "text/html"},
            )
        )

        with pytest.raises(ShopifyAPIError) as exc_info:
            await client.search_products("show me shirts")

        assert exc_info.value.message == "Storefront API: Invalid response"

    @pytest.mark.asyncio
    async def test_graphql_errors(self):
        client = make_client(
            lambda request: httpx.Response(200, json={"errors": [{"message": "Field missing"}]})
        )

        with pytest.raises(ShopifyAPIError) as exc_info:
            await client.get_product_by_id("gid://shopify/Product/1")

        assert exc_info.value.message.startswith("GraphQL Error: ")
        assert "Field missing" in exc_info.value.message


class TestCarts:

    @pytest.mark.asyncio
    async def test_create_cart(self):
        client = make_client(
            lambda request: graphql({"cartCreate": {"cart": {"id": "c1"}, "userErrors": []}})
        )

        assert await client.create_cart() == {"id": "c1"}

    @pytest.mark.asyncio
    async def test_add_to_cart_lines(self):
        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            assert body["variables"] == {
                "cartId": "c1",
                "lines": [{"merchandiseId": "v1", "quantity": 2}],
            }
            return graphql({"cartLinesAdd": {"cart": {"id": "c1"}, "userErrors": []}})

        client = make_client(handler)
        assert await client.add_to_cart("c1", "v1", 2) == {"id": "c1"}

    @pytest.mark.asyncio
    async def test_user_errors(self):
        client = make_client(
            lambda request: graphql(
                {"cartLinesAdd": {"cart": None, "userErrors": [{"field": ["lines"], "message": "Sold out"}]}}
            )
        )

        with pytest.raises(ShopifyAPIError) as exc_info:
            await client.add_to_cart("c1", "v1")

        assert exc_info.value.message == "Add to cart error: Sold out"


class TestOrders:

    @pytest.mark.asyncio
    async def test_order_status_uses_admin_api(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["token"] = request.headers.get("X-Shopify-Access-Token")
            seen["variables"] = json.loads(request.content)["variables"]
            return graphql({"orders": {"edges": [{"node": {"name": "#1001"}}]}})

        client = make_client(handler)
        order = await client.get_order_status("#1001")

        assert order == {"name": "#1001"}
        assert seen["url"] == ADMIN_URL
        assert seen["token"] == "admin-token"
        assert seen["variables"] == {"orderName": "name:#1001"}

    @pytest.mark.asyncio
    async def test_order_status_not_found(self):
        client = make_client(lambda request: graphql({"orders": {"edges": []}}))

        assert await client.get_order_status("#9999") is None
