"""BDD tests for capturing verified payments as orders."""

import json

from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.exceptions import ConflictError, SignatureInvalidError
from storefront.order.order import Order, PaymentStatus
from storefront.payment.capture import CapturePayment
from storefront.payment.gateway import FakeGateway, get_gateway, set_gateway

from factories import order_details

scenarios("features/payment_capture.feature")


def _capture(gateway_order_id, payment_id, signature):
    command = CapturePayment(
        gateway_order_id=gateway_order_id,
        payment_id=payment_id,
        signature=signature,
        order_details=json.dumps(order_details()),
    )
    return current_domain.process(command, asynchronous=False)


def _tamper(signature):
    return ("0" if signature[0] != "0" else "1") + signature[1:]


@given(parsers.cfparse('the payment gateway signs with secret "{secret}"'))
def gateway_secret(secret):
    set_gateway(FakeGateway(key_secret=secret))


@given(parsers.cfparse('a payment "{payment_id}" for gateway order "{gateway_order_id}" was captured'))
def captured_before(payment_id, gateway_order_id):
    _capture(gateway_order_id, payment_id, get_gateway().sign(gateway_order_id, payment_id))


@when(parsers.cfparse('a payment "{payment_id}" for gateway order "{gateway_order_id}" is captured with a {kind} signature'))
def capture(outcome, payment_id, gateway_order_id, kind):
    signature = get_gateway().sign(gateway_order_id, payment_id)
    if kind == "tampered":
        signature = _tamper(signature)
    try:
        outcome["result"] = _capture(gateway_order_id, payment_id, signature)
    except (SignatureInvalidError, ConflictError) as exc:
        outcome["exc"] = exc


@then(parsers.cfparse('order "{order_id}" is recorded as confirmed'))
def order_confirmed(outcome, order_id):
    assert outcome["result"] == order_id
    assert current_domain.repository_for(Order).get(order_id).payment_status == PaymentStatus.CONFIRMED.value


@then(parsers.cfparse('the capture is rejected with "{message}"'))
def rejected_with(outcome, message):
    assert isinstance(outcome["exc"], SignatureInvalidError)
    assert outcome["exc"].message == message


@then("the capture is rejected as a duplicate")
def rejected_duplicate(outcome):
    assert isinstance(outcome["exc"], ConflictError)


@then(parsers.cfparse("{count:d} order exists"))
@then(parsers.cfparse("{count:d} orders exist"))
def order_count(count):
    assert len(current_domain.repository_for(Order).everything()) == count
