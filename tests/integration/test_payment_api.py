"""Integration tests for checkout endpoints via TestClient."""

import pytest
from storefront.order.repository import OrderRepository
from storefront.payment.gateway import FakeGateway, set_gateway

from factories import order_details


@pytest.fixture()
def gateway():
    fake = FakeGateway(key_id="rzp_test_api", key_secret="api-secret")
    set_gateway(fake)
    return fake


def _capture_body(gateway, gateway_order_id="order_api001", payment_id="pay_api001", **overrides):
    body = {
        "gatewayOrderId": gateway_order_id,
        "paymentId": payment_id,
        "signature": gateway.sign(gateway_order_id, payment_id),
        "orderDetails": order_details(),
    }
    body.update(overrides)
    return body


class TestCreateIntentAPI:
    def test_creates_gateway_order(self, client, gateway):
        response = client.post("/payment/create-intent", json={"total": 2499.5})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["publicKeyId"] == "rzp_test_api"
        assert data["gatewayOrder"]["amount"] == 249950
        assert data["gatewayOrder"]["currency"] == "INR"

    @pytest.mark.parametrize("body", [{}, {"total": 0}, {"total": -10}])
    def test_missing_or_invalid_total(self, client, gateway, body):
        response = client.post("/payment/create-intent", json=body)
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_total_below_one_minor_unit(self, client, gateway):
        response = client.post("/payment/create-intent", json={"total": 0.001})
        assert response.status_code == 400
        assert response.json()["error"] == "Total amount must be at least one minor currency unit."
        assert gateway.calls == []

    def test_non_numeric_total(self, client, gateway):
        assert client.post("/payment/create-intent", json={"total": "lots"}).status_code == 400

    def test_gateway_failure(self, client, gateway):
        gateway.configure(should_succeed=False)
        response = client.post("/payment/create-intent", json={"total": 100})
        assert response.status_code == 502
        assert response.json()["success"] is False


class TestCaptureAPI:
    def test_verified_capture(self, client, gateway):
        response = client.post("/payment/capture", json=_capture_body(gateway))
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "orderId": "order_api001",
            "message": "Payment successful and order created",
        }

    def test_invalid_signature(self, client, gateway):
        response = client.post("/payment/capture", json=_capture_body(gateway, signature="f" * 64))
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid signature"}

    def test_invalid_signature_creates_no_order(self, client, gateway, admin):
        client.post("/payment/capture", json=_capture_body(gateway, signature="f" * 64))
        assert client.get("/admin/orders", headers=admin).json()["orders"] == []

    def test_missing_fields(self, client, gateway):
        body = _capture_body(gateway)
        del body["paymentId"]
        response = client.post("/payment/capture", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required data."

    def test_duplicate_capture(self, client, gateway):
        client.post("/payment/capture", json=_capture_body(gateway))
        response = client.post("/payment/capture", json=_capture_body(gateway))
        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_malformed_customer(self, client, gateway):
        details = order_details(email="not-an-email")
        response = client.post("/payment/capture", json=_capture_body(gateway, orderDetails=details))
        assert response.status_code == 400


class TestUnconfiguredGatewayAPI:
    @pytest.fixture(autouse=True)
    def _production_without_gateway(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        for name in ("PAYMENT_GATEWAY", "PAYMENT_KEY_ID", "PAYMENT_KEY_SECRET"):
            monkeypatch.delenv(name, raising=False)

    def test_capture_refused(self, client, admin):
        forged = FakeGateway(key_secret="storefront-test-secret")
        body = _capture_body(forged, gateway_order_id="order_forged", payment_id="pay_forged")

        response = client.post("/payment/capture", json=body)

        assert response.status_code == 502
        assert response.json()["success"] is False
        assert client.get("/admin/orders", headers=admin).json()["orders"] == []

    def test_create_intent_refused(self, client):
        response = client.post("/payment/create-intent", json={"total": 100})
        assert response.status_code == 502


class TestConcurrentCaptureAPI:
    def test_store_rejection_answers_conflict(self, client, gateway, monkeypatch):
        assert client.post("/payment/capture", json=_capture_body(gateway)).status_code == 200
        monkeypatch.setattr(OrderRepository, "exists", lambda self, order_id: False)

        response = client.post("/payment/capture", json=_capture_body(gateway))

        assert response.status_code == 409
        assert response.json()["error"] == "Order order_api001 has already been recorded."
