"""Order aggregate (CQRS): a paid purchase recorded after payment verification.

An order only comes into existence once its payment signature has been
verified, so it is created directly in the confirmed payment state and keyed
by the gateway's order id. After creation the only permitted changes are the
shipping status and the tracking details.

Shipping statuses:
    Pending → Shipped → Delivered, or Cancelled. Administrators may set any
    status directly; no transition order is enforced.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, ShippingStatusUpdated, TrackingAssigned

EMAIL_PATTERN = re.compile(r".+@.+\..+")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ShippingStatus(Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value) -> "ShippingStatus":
        try:
            return cls(value)
        except ValueError:
            raise ValidationError({"status": ["Invalid status value."]}) from None


class PaymentStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class Customer:
    """Contact and delivery details captured at checkout.

    Recorded once and never changed, regardless of what the customer enters
    on later orders.
    """

    firstname = String(required=True, max_length=100)
    lastname = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=30)
    address1 = String(required=True, max_length=255)
    address2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip = String(required=True, max_length=20)

    @invariant.post
    def email_must_look_valid(self):
        if self.email is not None and not EMAIL_PATTERN.fullmatch(self.email):
            raise ValidationError({"email": ["Please enter a valid email address"]})

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}"


@storefront.value_object(part_of="Order")
class GatewayReference:
    """The payment gateway's identifiers proving the order was paid."""

    order_id = String(required=True, max_length=100)
    payment_id = String(required=True, max_length=100)
    signature = String(required=True, max_length=255)


@storefront.value_object(part_of="Order")
class Tracking:
    carrier = String(required=True, max_length=100)
    number = String(required=True, max_length=100)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased line: a catalog product id, its name and price at checkout."""

    product_id = Integer(required=True)
    name = String(required=True, max_length=150)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_id = String(identifier=True, max_length=100)
    placed_at = DateTime()
    customer = ValueObject(Customer, required=True)
    total = Float(required=True, min_value=0.0)
    items = HasMany(OrderItem)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    gateway = ValueObject(GatewayReference)
    shipping_status = String(choices=ShippingStatus, default=ShippingStatus.PENDING.value)
    tracking = ValueObject(Tracking)

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def must_have_at_least_one_item(self):
        if not self.items:
            raise ValidationError({"items": ["Order must have at least one item."]})

    @invariant.post
    def confirmed_order_carries_gateway_reference(self):
        if self.payment_status == PaymentStatus.CONFIRMED.value and self.gateway is None:
            raise ValidationError({"gateway": ["A confirmed order must carry its payment reference"]})

    # -------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------
    def contains_product(self, product_id: int) -> bool:
        return any(item.product_id == product_id for item in self.items)

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on order id, customer names and email."""
        term = term.lower()
        fields = (self.order_id, self.customer.firstname, self.customer.lastname, self.customer.email)
        return any(term in (value or "").lower() for value in fields)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, gateway_order_id, payment_id, signature, customer, items, total, placed_at=None):
        """Record a paid order.

        ``customer`` is a mapping of checkout details and ``items`` a list of
        mappings with ``id``/``product_id``, ``name``, ``quantity`` and ``price``.
        """
        now = placed_at or datetime.now(UTC)

        order = cls(
            order_id=gateway_order_id,
            placed_at=now,
            customer=Customer(**_customer_fields(customer)),
            total=total,
            items=[
                OrderItem(
                    product_id=item.get("product_id", item.get("id")),
                    name=item.get("name"),
                    quantity=item.get("quantity"),
                    price=item.get("price"),
                )
                for item in items or []
            ],
            payment_status=PaymentStatus.CONFIRMED.value,
            gateway=GatewayReference(order_id=gateway_order_id, payment_id=payment_id, signature=signature),
            shipping_status=ShippingStatus.PENDING.value,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.order_id,
                customer_email=order.customer.email,
                total=order.total,
                item_count=len(order.items),
                payment_id=payment_id,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Shipping
    # -------------------------------------------------------------------
    def update_shipping_status(self, status):
        new_status = ShippingStatus.parse(status)
        previous = self.shipping_status
        now = datetime.now(UTC)

        self.shipping_status = new_status.value
        self.raise_(
            ShippingStatusUpdated(
                order_id=self.order_id,
                previous_status=previous,
                new_status=new_status.value,
                updated_at=now,
            )
        )

    def assign_tracking(self, carrier, number):
        now = datetime.now(UTC)

        with atomic_change(self):
            self.tracking = Tracking(carrier=carrier, number=number)

        self.raise_(
            TrackingAssigned(
                order_id=self.order_id,
                carrier=carrier,
                tracking_number=number,
                assigned_at=now,
            )
        )


_CUSTOMER_FIELDS = ("firstname", "lastname", "email", "phone", "address1", "address2", "city", "state", "zip")


def _customer_fields(customer) -> dict:
    return {
        name: value.strip() if isinstance(value, str) else value
        for name, value in (customer or {}).items()
        if name in _CUSTOMER_FIELDS
    }
