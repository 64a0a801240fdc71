# ==============================================================================
# PAYMENT ENDPOINT TESTS
# ==============================================================================

import pytest

from tests.conftest import bearer, register_user
from tests.test_orders import place_order


def _payment(order_id: str, payment_id: str = "pay_001", **extra) -> dict:
    return {
        "orderId": order_id,
        "paymentData": {
            "paymentId": payment_id,
            "amount": 77.5,
            "method": "bank_transfer",
            "gateway": "midtrans",
            **extra,
        },
    }


class TestCreatePayment:

    @pytest.mark.asyncio
    async def test_create(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)

        response = await client.post("/api/payment/create", json=_payment(order["id"]))

        assert response.status_code == 201
        payment = response.json()["data"]
        assert payment["paymentId"] == "pay_001"
        assert payment["status"] == "PENDING"
        assert payment["amount"] == 77.5
        assert payment["currency"] == "USD"
        assert payment["paidAt"] is None

        order = (await client.get(f"/api/order/{order['id']}")).json()["data"]
        assert [p["paymentId"] for p in order["payments"]] == ["pay_001"]

    @pytest.mark.asyncio
    async def test_explicit_currency(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)

        response = await client.post(
            "/api/payment/create",
            json=_payment(order["id"], currency="idr"),
        )

        assert response.json()["data"]["currency"] == "IDR"

    @pytest.mark.asyncio
    async def test_missing_fields(self, auth_client):
        client, _ = auth_client

        response = await client.post("/api/payment/create", json={"orderId": "x"})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Order ID and payment data are required"

    @pytest.mark.asyncio
    async def test_duplicate_payment_id(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)

        await client.post("/api/payment/create", json=_payment(order["id"]))
        response = await client.post("/api/payment/create", json=_payment(order["id"]))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ALREADY_EXISTS"

    @pytest.mark.asyncio
    async def test_other_users_order(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)

        stranger = await register_user(client, prefix="stranger")
        response = await client.post(
            "/api/payment/create",
            json=_payment(order["id"]),
            headers=bearer(stranger["token"]),
        )

        assert response.status_code == 404


class TestPaymentStatus:

    @pytest.mark.asyncio
    async def test_paid_sets_paid_at(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)
        await client.post("/api/payment/create", json=_payment(order["id"]))

        response = await client.put("/api/payment/pay_001/status", json={"status": "PAID"})

        assert response.status_code == 200
        payment = response.json()["data"]
        assert payment["status"] == "PAID"
        assert payment["paidAt"] is not None

    @pytest.mark.asyncio
    async def test_explicit_paid_at(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)
        await client.post("/api/payment/create", json=_payment(order["id"]))

        response = await client.put(
            "/api/payment/pay_001/status",
            json={"status": "paid", "paidAt": "2026-01-02T03:04:05"},
        )

        assert response.json()["data"]["paidAt"].startswith("2026-01-02T03:04:05")

    @pytest.mark.asyncio
    async def test_failed_leaves_paid_at_empty(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)
        await client.post("/api/payment/create", json=_payment(order["id"]))

        response = await client.put("/api/payment/pay_001/status", json={"status": "FAILED"})

        assert response.json()["data"]["paidAt"] is None

    @pytest.mark.asyncio
    async def test_status_required(self, auth_client):
        client, _ = auth_client

        response = await client.put("/api/payment/pay_001/status", json={})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Status is required"

    @pytest.mark.asyncio
    async def test_invalid_status(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)
        await client.post("/api/payment/create", json=_payment(order["id"]))

        response = await client.put("/api/payment/pay_001/status", json={"status": "LOST"})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid payment status"

    @pytest.mark.asyncio
    async def test_unknown_payment(self, auth_client):
        client, _ = auth_client

        response = await client.put("/api/payment/nope/status", json={"status": "PAID"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_other_users_payment(self, auth_client):
        client, _ = auth_client
        order = await place_order(client)
        await client.post("/api/payment/create", json=_payment(order["id"]))

        stranger = await register_user(client, prefix="stranger")
        response = await client.put(
            "/api/payment/pay_001/status",
            json={"status": "PAID"},
            headers=bearer(stranger["token"]),
        )

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Payment not found"
