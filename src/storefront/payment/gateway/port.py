"""Payment gateway port (abstract interface).

Defines the contract every payment gateway adapter implements, so the
FakeGateway (dev/test) and the RazorpayGateway (production) can be swapped
without touching the checkout pipelines.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PaymentIntent:
    """An order created at the gateway, ready for the client to pay."""

    gateway_order_id: str
    amount: int  # minor currency units
    currency: str
    receipt: str
    raw: dict = field(default_factory=dict)


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    key_id: str

    @abstractmethod
    def create_intent(self, amount: int, currency: str, receipt: str) -> PaymentIntent:
        """Create a gateway order for ``amount`` minor units."""
        ...

    @abstractmethod
    def verify_payment_signature(self, gateway_order_id: str, payment_id: str, signature: str) -> bool:
        """Check that a payment confirmation was signed by the gateway."""
        ...
