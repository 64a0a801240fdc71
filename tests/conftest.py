# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Shared fixtures: throwaway SQLite database, fake vendor clients and
# authenticated HTTP clients
# ==============================================================================

from __future__ import annotations

import copy
import os
from typing import Any, AsyncGenerator, Dict, List, Optional
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment before importing app
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_URL"] = "sqlite:///./test_shoppy.db"
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32chars!"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SHOPIFY_STORE_NAME"] = "teststore"

TEST_DB_PATH = "./test_shoppy.db"


# ==============================================================================
# SAMPLE STOREFRONT DATA
# ==============================================================================

def make_product(
    number: int,
    title: str,
    prices: List[str],
    currency: str = "USD",
    inventory: int = 10,
) -> Dict[str, Any]:
    """Storefront product node with one variant per price."""
    return {
        "id": f"gid://shopify/Product/{number}",
        "title": title,
        "handle": title.lower().replace(" ", "-"),
        "description": f"{title} from the test catalogue",
        "totalInventory": inventory,
        "priceRange": {
            "minVariantPrice": {"amount": prices[0], "currencyCode": currency},
        },
        "images": {
            "edges": [{"node": {"url": f"https://cdn.test/{number}.png", "altText": title}}],
        },
        "variants": {
            "edges": [
                {
                    "node": {
                        "id": f"gid://shopify/ProductVariant/{number}{index}",
                        "title": size,
                        "price": {"amount": price, "currencyCode": currency},
                        "availableForSale": True,
                    }
                }
                for index, (size, price) in enumerate(zip(["M", "L", "XL"], prices), start=1)
            ],
        },
    }


TEE = make_product(1, "Oversized Tee", ["25.00", "27.50"])
SNEAKERS = make_product(2, "Canvas Sneakers", ["450000"], currency="IDR", inventory=0)


# ==============================================================================
# FAKE VENDOR CLIENTS
# ==============================================================================

class FakeSensayClient:
    """In-memory replica API; records every call."""

    def __init__(self) -> None:
        self.created_users: List[str] = []
        self.chat_calls: List[Dict[str, str]] = []
        self.reply = "Hello! How can I help you shop today?"
        self.chat_error: Optional[Exception] = None
        self.create_user_error: Optional[Exception] = None
        self.history_items: List[Dict[str, Any]] = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
        ]

    async def create_user(self, user_id: str) -> Dict[str, Any]:
        if self.create_user_error:
            raise self.create_user_error
        self.created_users.append(user_id)
        return {"id": f"sensay-{user_id}"}

    async def chat_completion(self, replica_uuid: str, user_id: str, content: str) -> Dict[str, Any]:
        self.chat_calls.append({"replica": replica_uuid, "user": user_id, "content": content})
        if self.chat_error:
            raise self.chat_error
        return {"success": True, "content": self.reply}

    async def get_chat_history(self, replica_uuid: str, user_id: str) -> Dict[str, Any]:
        return {"success": True, "type": "chat_history", "items": self.history_items}

    async def close(self) -> None:
        pass


class FakeShopifyClient:
    """In-memory storefront with a two-product catalogue."""

    def __init__(self) -> None:
        self.products: Dict[str, Dict[str, Any]] = {
            product["id"]: copy.deepcopy(product) for product in (TEE, SNEAKERS)
        }
        self.search_results: Optional[List[Dict[str, Any]]] = None
        self.search_error: Optional[Exception] = None
        self.search_calls: List[str] = []
        self.carts: Dict[str, Dict[str, Any]] = {}
        self.orders: Dict[str, Dict[str, Any]] = {
            "#1001": {"id": "gid://shopify/Order/1001", "name": "#1001",
                      "displayFulfillmentStatus": "FULFILLED"},
        }

    async def search_products(self, search_text: str, limit: int = 5) -> List[Dict[str, Any]]:
        self.search_calls.append(search_text)
        if self.search_error:
            raise self.search_error
        if self.search_results is not None:
            return self.search_results[:limit]
        return list(self.products.values())[:limit]

    async def get_product_by_handle(self, handle: str) -> Optional[Dict[str, Any]]:
        return next((p for p in self.products.values() if p["handle"] == handle), None)

    async def get_product_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        return self.products.get(product_id)

    async def get_featured_products(self, limit: int = 10) -> List[Dict[str, Any]]:
        return list(self.products.values())[:limit]

    async def create_cart(self) -> Dict[str, Any]:
        cart_id = f"gid://shopify/Cart/{uuid4().hex[:8]}"
        self.carts[cart_id] = {"id": cart_id, "checkoutUrl": "https://checkout.test", "lines": {"edges": []}}
        return self.carts[cart_id]

    async def add_to_cart(self, cart_id: str, variant_id: str, quantity: int = 1) -> Dict[str, Any]:
        cart = self.carts[cart_id]
        cart["lines"]["edges"].append(
            {"node": {"quantity": quantity, "merchandise": {"id": variant_id}}}
        )
        return cart

    async def get_cart(self, cart_id: str) -> Optional[Dict[str, Any]]:
        return self.carts.get(cart_id)

    async def get_order_status(self, order_name: str) -> Optional[Dict[str, Any]]:
        return self.orders.get(order_name)

    async def close(self) -> None:
        pass


# ==============================================================================
# HTTP CLIENT FIXTURES
# ==============================================================================

def _remove_test_db() -> None:
    if os.path.exists(TEST_DB_PATH):
        try:
            os.remove(TEST_DB_PATH)
        except (PermissionError, OSError):
            pass


@pytest.fixture
def fake_sensay() -> FakeSensayClient:
    return FakeSensayClient()


@pytest.fixture
def fake_shopify() -> FakeShopifyClient:
    return FakeShopifyClient()


@pytest_asyncio.fixture
async def client(
    fake_sensay: FakeSensayClient,
    fake_shopify: FakeShopifyClient,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    from shoppy.database.factory import DatabaseFactory
    DatabaseFactory.reset()
    _remove_test_db()

    # Import app after environment is set
    from shoppy.main import app
    from shoppy.api.dependencies import get_sensay_client, get_shopify_client

    await DatabaseFactory.initialize()

    app.dependency_overrides[get_sensay_client] = lambda: fake_sensay
    app.dependency_overrides[get_shopify_client] = lambda: fake_shopify

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        timeout=30.0,
    ) as async_client:
        yield async_client

    app.dependency_overrides.clear()
    await DatabaseFactory.shutdown()
    DatabaseFactory.reset()
    _remove_test_db()


async def register_user(
    client: AsyncClient,
    prefix: str = "shopper",
) -> Dict[str, Any]:
    """Register a fresh user and return ``{"user", "token", "password"}``."""
    suffix = uuid4().hex[:8]
    payload = {
        "email": f"{prefix}_{suffix}@shoppy.io",
        "username": f"{prefix}_{suffix}",
        "password": "secret123",
    }
    response = await client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, f"Failed to register: {response.text}"
    data = response.json()["data"]
    return {"user": data["user"], "token": data["token"], "password": payload["password"]}


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def auth_client(client: AsyncClient) -> AsyncGenerator[tuple[AsyncClient, Dict[str, Any]], None]:
    """
    Client carrying a Bearer token for a freshly registered user.

    Returns:
        Tuple of (client, user)
    """
    registered = await register_user(client)
    client.headers["Authorization"] = f"Bearer {registered['token']}"

    yield client, registered["user"]

    if "Authorization" in client.headers:
        del client.headers["Authorization"]


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient) -> AsyncGenerator[tuple[AsyncClient, Dict[str, Any]], None]:
    """Client authenticated as an operator (email contains ``admin``)."""
    registered = await register_user(client, prefix="admin")
    client.headers["Authorization"] = f"Bearer {registered['token']}"

    yield client, registered["user"]

    if "Authorization" in client.headers:
        del client.headers["Authorization"]
