# ==============================================================================
# SENSAY CLIENT TESTS
# ==============================================================================
# Request shape, error mapping and the chat retry loop over MockTransport
# ==============================================================================

import asyncio
import json

import httpx
import pytest

from shoppy.clients.sensay_client import SensayClient
from shoppy.core.exceptions import SensayAPIError

BASE_URL = "https://sensay.test/v1"
REPLICA = "replica-uuid"


def make_client(handler, max_retries: int = 3) -> SensayClient:
    return SensayClient(
        base_url=BASE_URL,
        api_key="org-secret",
        api_version="2025-03-25",
        timeout=5.0,
        max_retries=max_retries,
        retry_base_delay=0,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def sleeps(monkeypatch):
    """Record backoff delays without waiting."""
    delays = []
    real_sleep = asyncio.sleep

    async def fake_sleep(delay):
        delays.append(delay)
        await real_sleep(0)

    monkeypatch.setattr("shoppy.clients.sensay_client.asyncio.sleep", fake_sleep)
    return delays


class TestRequests:

    @pytest.mark.asyncio
    async def test_create_user(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "id": "customer_1"})

        client = make_client(handler)
        result = await client.create_user("customer_1")
        await client.close()

        assert result["id"] == "customer_1"
        assert seen["url"] == f"{BASE_URL}/users"
        assert seen["body"] == {"id": "customer_1"}
        assert seen["headers"]["X-ORGANIZATION-SECRET"] == "org-secret"
        assert seen["headers"]["X-API-Version"] == "2025-03-25"
        assert "X-USER-ID" not in seen["headers"]

    @pytest.mark.asyncio
    async def test_chat_completion(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["user"] = request.headers.get("X-USER-ID")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "content": "Hi!"})

        client = make_client(handler)
        result = await client.chat_completion(REPLICA, "customer_1", "Hello")

        assert result["content"] == "Hi!"
        assert seen["url"] == f"{BASE_URL}/replicas/{REPLICA}/chat/completions"
        assert seen["user"] == "customer_1"
        assert seen["body"] == {"content": "Hello"}

    @pytest.mark.asyncio
    async def test_chat_history(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == f"/v1/replicas/{REPLICA}/chat/history"
            return httpx.Response(200, json={"success": True, "type": "chat_history", "items": [1, 2]})

        client = make_client(handler)
        result = await client.get_chat_history(REPLICA, "customer_1")

        assert result["items"] == [1, 2]

    @pytest.mark.asyncio
    async def test_conversations_query(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == f"/v1/replicas/{REPLICA}/conversations"
            assert request.url.params["pageSize"] == "24"
            assert request.url.params["sortBy"] == "lastReplicaReplyAt"
            assert request.url.params["sortOrder"] == "desc"
            return httpx.Response(200, json={"items": []})

        client = make_client(handler)
        assert await client.get_conversations(REPLICA, "customer_1") == {"items": []}

    @pytest.mark.asyncio
    async def test_error_response(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"success": False, "error": "User already exists"})

        client = make_client(handler)
        with pytest.raises(SensayAPIError) as exc_info:
            await client.create_user("customer_1")

        assert exc_info.value.upstream_status == 400
        assert exc_info.value.message == "Error creating user: User already exists"


class TestChatRetries:

    @pytest.mark.asyncio
    async def test_retries_timeouts_then_succeeds(self, sleeps):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            if len(attempts) < 3:
                raise httpx.ReadTimeout("slow", request=request)
            return httpx.Response(200, json={"content": "finally"})

        client = make_client(handler)
        result = await client.chat_completion(REPLICA, "customer_1", "Hello")

        assert result["content"] == "finally"
        assert len(attempts) == 3
        assert len(sleeps) == 2

    @pytest.mark.asyncio
    async def test_backoff_doubles(self, sleeps):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = SensayClient(
            base_url=BASE_URL,
            max_retries=3,
            retry_base_delay=1.0,
            transport=httpx.MockTransport(handler),
        )
        with pytest.raises(SensayAPIError):
            await client.chat_completion(REPLICA, "customer_1", "Hello")

        assert sleeps == [1.0, 2.0, 4.0]

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, sleeps):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            raise httpx.ConnectError("refused", request=request)

        client = make_client(handler, max_retries=2)
        with pytest.raises(SensayAPIError) as exc_info:
            await client.chat_completion(REPLICA, "customer_1", "Hello")

        assert len(attempts) == 3
        assert exc_info.value.reason == "connection"

    @pytest.mark.asyncio
    async def test_server_disconnect_is_retried(self, sleeps):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            raise httpx.RemoteProtocolError("Server disconnected", request=request)

        client = make_client(handler, max_retries=2)
        with pytest.raises(SensayAPIError) as exc_info:
            await client.chat_completion(REPLICA, "customer_1", "Hello")

        assert len(attempts) == 3
        assert len(sleeps) == 2
        assert exc_info.value.reason == "connection"

    @pytest.mark.asyncio
    async def test_timeout_reason(self, sleeps):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        client = make_client(handler, max_retries=0)
        with pytest.raises(SensayAPIError) as exc_info:
            await client.chat_completion(REPLICA, "customer_1", "Hello")

        assert exc_info.value.reason == "timeout"
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_error_status_not_retried(self, sleeps):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            return httpx.Response(401, json={"error": "Unauthorized"})

        client = make_client(handler)
        with pytest.raises(SensayAPIError) as exc_info:
            await client.chat_completion(REPLICA, "customer_1", "Hello")

        assert len(attempts) == 1
        assert exc_info.value.upstream_status == 401
        assert exc_info.value.message == "Error in chat: Unauthorized"
        assert sleeps == []
