"""HMAC signatures on payment confirmations.

The gateway signs ``"<gateway_order_id>|<payment_id>"`` with HMAC-SHA256
using the merchant's key secret and sends the lowercase hex digest along
with the confirmation.
"""

import hashlib
import hmac


def signing_payload(gateway_order_id: str, payment_id: str) -> str:
    return f"{gateway_order_id}|{payment_id}"


def compute_signature(gateway_order_id: str, payment_id: str, shared_secret: str) -> str:
    return hmac.new(
        shared_secret.encode("utf-8"),
        signing_payload(gateway_order_id, payment_id).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_callback(gateway_order_id: str, payment_id: str, signature: str, shared_secret: str) -> bool:
    """True only when ``signature`` is exactly the expected digest."""
    if not signature or not shared_secret:
        return False
    expected = compute_signature(gateway_order_id or "", payment_id or "", shared_secret)
    return hmac.compare_digest(expected, signature)
