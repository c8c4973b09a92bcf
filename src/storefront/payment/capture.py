"""CapturePayment: turn a verified payment confirmation into an Order.

Runs in a fixed order: all fields present, signature verified, order id not
yet used, then the order is built and stored. An order is never persisted
without a verified signature.
"""

import json

import structlog
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from sqlalchemy.exc import IntegrityError

from storefront.domain import storefront
from storefront.exceptions import ConflictError, SignatureInvalidError
from storefront.order.order import Order
from storefront.payment.gateway import get_gateway

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CapturePayment:
    gateway_order_id = String(max_length=100)
    payment_id = String(max_length=100)
    signature = String(max_length=255)
    order_details = Text()  # JSON: {user: {...}, items: [...], total}


def _require_fields(command) -> dict:
    if not (command.gateway_order_id and command.payment_id and command.signature and command.order_details):
        raise ValidationError({"payment": ["Missing required data."]})
    try:
        details = json.loads(command.order_details)
    except ValueError:
        raise ValidationError({"order_details": ["Order details must be a JSON object"]}) from None
    if not isinstance(details, dict) or not details:
        raise ValidationError({"payment": ["Missing required data."]})
    if not isinstance(details.get("user"), dict):
        raise ValidationError({"user": ["Customer details are required"]})
    items = details.get("items")
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise ValidationError({"items": ["Order must have at least one item."]})
    return details


def _already_recorded(order_id: str) -> ConflictError:
    return ConflictError(f"Order {order_id} has already been recorded.")


@storefront.command_handler(part_of=Order)
class CapturePaymentHandler:
    @handle(CapturePayment)
    def capture_payment(self, command):
        details = _require_fields(command)

        if not get_gateway().verify_payment_signature(command.gateway_order_id, command.payment_id, command.signature):
            logger.warning(
                "payment_signature_rejected",
                gateway_order_id=command.gateway_order_id,
                payment_id=command.payment_id,
            )
            raise SignatureInvalidError("Invalid signature")

        repo = current_domain.repository_for(Order)
        if repo.exists(command.gateway_order_id):
            raise _already_recorded(command.gateway_order_id)

        order = Order.place(
            gateway_order_id=command.gateway_order_id,
            payment_id=command.payment_id,
            signature=command.signature,
            customer=details.get("user"),
            items=details.get("items"),
            total=details.get("total"),
        )
        try:
            repo.add(order)
        except ValidationError as exc:
            # The store rejected the identifier after a concurrent capture won the race
            if "order_id" not in exc.messages:
                raise
            raise _already_recorded(order.order_id) from exc
        except IntegrityError as exc:
            raise _already_recorded(order.order_id) from exc

        logger.info("order_placed", order_id=order.order_id, total=order.total, items=len(order.items))
        return order.order_id
