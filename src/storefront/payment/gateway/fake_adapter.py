"""Configurable fake payment gateway for development and testing.

Simulates the gateway without any external calls. Intent creation can be
set to fail at runtime, every call is recorded, and confirmations are
verified with the real HMAC scheme so that ``sign()`` produces signatures a
client would receive from the real gateway.
"""

from uuid import uuid4

from storefront.exceptions import GatewayError
from storefront.payment.gateway.port import PaymentGateway, PaymentIntent
from storefront.payment.signature import compute_signature, verify_callback


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, key_id: str = "rzp_test_fake", key_secret: str = "fake-key-secret") -> None:
        self.key_id = key_id
        self.key_secret = key_secret
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def sign(self, gateway_order_id: str, payment_id: str) -> str:
        return compute_signature(gateway_order_id, payment_id, self.key_secret)

    def create_intent(self, amount: int, currency: str, receipt: str) -> PaymentIntent:
        self.calls.append({"method": "create_intent", "amount": amount, "currency": currency, "receipt": receipt})

        if not self.should_succeed:
            raise GatewayError(self.failure_reason)

        gateway_order_id = f"order_fake{uuid4().hex[:14]}"
        return PaymentIntent(
            gateway_order_id=gateway_order_id,
            amount=amount,
            currency=currency,
            receipt=receipt,
            raw={
                "id": gateway_order_id,
                "entity": "order",
                "amount": amount,
                "currency": currency,
                "receipt": receipt,
                "status": "created",
            },
        )

    def verify_payment_signature(self, gateway_order_id: str, payment_id: str, signature: str) -> bool:
        self.calls.append(
            {"method": "verify_payment_signature", "gateway_order_id": gateway_order_id, "payment_id": payment_id}
        )
        return verify_callback(gateway_order_id, payment_id, signature, self.key_secret)
