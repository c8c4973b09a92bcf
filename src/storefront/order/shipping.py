"""Admin commands that move an order through fulfilment."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.exceptions import NotFoundError
from storefront.order.order import Order, ShippingStatus

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateShippingStatus:
    order_id = String(required=True, max_length=100)
    status = String(max_length=20)


@storefront.command(part_of="Order")
class AssignTracking:
    order_id = String(required=True, max_length=100)
    carrier = String(required=True, max_length=100)
    number = String(required=True, max_length=100)


def _load(order_id) -> Order:
    order = current_domain.repository_for(Order).find(order_id)
    if order is None:
        raise NotFoundError("Order not found.")
    return order


@storefront.command_handler(part_of=Order)
class ShippingHandler:
    @handle(UpdateShippingStatus)
    def update_shipping_status(self, command):
        # An unknown status is rejected before the order is looked up
        ShippingStatus.parse(command.status)

        order = _load(command.order_id)
        order.update_shipping_status(command.status)
        current_domain.repository_for(Order).add(order)
        logger.info("shipping_status_updated", order_id=order.order_id, status=order.shipping_status)
        return order

    @handle(AssignTracking)
    def assign_tracking(self, command):
        order = _load(command.order_id)
        order.assign_tracking(command.carrier.strip(), command.number.strip())
        current_domain.repository_for(Order).add(order)
        logger.info("tracking_assigned", order_id=order.order_id, carrier=command.carrier)
        return order
