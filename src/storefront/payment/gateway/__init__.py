"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing
- RazorpayGateway for production

The default is built from the ``PAYMENT_*`` environment settings. The fake
gateway is only built in the sandbox environments, and the real one refuses
to start without credentials.
"""

from storefront.exceptions import GatewayError
from storefront.payment.gateway.fake_adapter import FakeGateway
from storefront.payment.gateway.port import PaymentGateway
from storefront.payment.gateway.razorpay_adapter import RazorpayGateway
from storefront.utils.settings import get_environment, get_payment_settings, is_sandbox

_current_gateway: PaymentGateway | None = None


def build_gateway() -> PaymentGateway:
    settings = get_payment_settings()
    if settings.provider == "razorpay":
        if not (settings.key_id and settings.key_secret):
            raise GatewayError("Payment gateway credentials are not configured.")
        return RazorpayGateway(key_id=settings.key_id, key_secret=settings.key_secret)

    if not is_sandbox():
        raise GatewayError(f"No payment gateway is configured for the {get_environment()} environment.")
    credentials = {"key_id": settings.key_id, "key_secret": settings.key_secret}
    return FakeGateway(**{name: value for name, value in credentials.items() if value})


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building the configured one on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = build_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
