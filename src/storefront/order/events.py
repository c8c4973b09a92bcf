"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A paid order was recorded after its payment was verified."""

    __version__ = 1

    order_id = String(required=True)
    customer_email = String(required=True)
    total = Float(required=True)
    item_count = Integer(required=True)
    payment_id = String(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class ShippingStatusUpdated:
    """An administrator moved an order to a new shipping status."""

    __version__ = 1

    order_id = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    updated_at = DateTime(required=True)


@storefront.event(part_of="Order")
class TrackingAssigned:
    """A carrier tracking number was attached to an order."""

    __version__ = 1

    order_id = String(required=True)
    carrier = String(required=True)
    tracking_number = String(required=True)
    assigned_at = DateTime(required=True)
