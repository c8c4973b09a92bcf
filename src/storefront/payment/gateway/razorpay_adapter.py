"""Razorpay payment gateway adapter.

Talks to the Orders API over HTTPS with basic auth (key id and key secret).
Payment confirmations are verified locally with the key secret; no network
call is involved.
"""

import requests
import structlog

from storefront.exceptions import GatewayError
from storefront.payment.gateway.port import PaymentGateway, PaymentIntent
from storefront.payment.signature import verify_callback

logger = structlog.get_logger(__name__)

RAZORPAY_API_URL = "https://api.razorpay.com/v1"
REQUEST_TIMEOUT_SECONDS = 10


class RazorpayGateway(PaymentGateway):
    """Production Razorpay adapter."""

    def __init__(self, key_id: str, key_secret: str, session: requests.Session | None = None) -> None:
        self.key_id = key_id
        self.key_secret = key_secret
        self.session = session or requests.Session()

    def create_intent(self, amount: int, currency: str, receipt: str) -> PaymentIntent:
        try:
            response = self.session.post(
                f"{RAZORPAY_API_URL}/orders",
                json={"amount": amount, "currency": currency, "receipt": receipt},
                auth=(self.key_id, self.key_secret),
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as exc:
            logger.error("gateway_request_failed", error=str(exc))
            raise GatewayError("Payment gateway is unreachable.") from exc

        if response.status_code >= 400:
            logger.error("gateway_order_rejected", status_code=response.status_code, body=response.text)
            raise GatewayError("Payment gateway rejected the order.")

        payload = response.json()
        if not payload.get("id"):
            raise GatewayError("Payment gateway returned no order.")

        return PaymentIntent(
            gateway_order_id=payload["id"],
            amount=payload.get("amount", amount),
            currency=payload.get("currency", currency),
            receipt=payload.get("receipt", receipt),
            raw=payload,
        )

    def verify_payment_signature(self, gateway_order_id: str, payment_id: str, signature: str) -> bool:
        return verify_callback(gateway_order_id, payment_id, signature, self.key_secret)
