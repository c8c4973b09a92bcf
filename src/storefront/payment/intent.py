"""Create a payment intent at the gateway for a checkout total."""

import time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import structlog

from storefront.exceptions import GatewayError
from storefront.payment.gateway import get_gateway
from storefront.payment.gateway.port import PaymentIntent
from storefront.utils.settings import get_payment_settings

logger = structlog.get_logger(__name__)


def to_minor_units(amount) -> int:
    """Convert a major-unit amount to minor units, rounding half-up (10.005 → 1001)."""
    try:
        value = Decimal(str(amount))
    except InvalidOperation as exc:
        raise GatewayError("Total amount must be a number.") from exc
    if not value.is_finite():
        raise GatewayError("Total amount must be a number.")
    return int((value * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _receipt() -> str:
    return f"receipt_order_{int(time.time() * 1000)}"


def create_payment_intent(amount, currency: str | None = None) -> PaymentIntent:
    if amount is None or isinstance(amount, bool):
        raise GatewayError("Total amount is required.")

    minor_units = to_minor_units(amount)
    if minor_units <= 0:
        raise GatewayError("Total amount must be positive.")

    currency = currency or get_payment_settings().currency
    intent = get_gateway().create_intent(minor_units, currency, _receipt())
    logger.info(
        "payment_intent_created",
        gateway_order_id=intent.gateway_order_id,
        amount=intent.amount,
        currency=intent.currency,
    )
    return intent
