"""Verified-purchase check for incoming reviews.

A reviewer counts as a verified purchaser of a product when their display
name appears inside the full name on any order containing that product.
The match is case-insensitive and loose by nature: "Priya" matches an order
placed by "Priya Sharma".
"""

from collections.abc import Iterable


def is_verified_purchase(username: str, orders: Iterable) -> bool:
    needle = (username or "").lower().strip()
    if not needle:
        return False
    for order in orders:
        full_name = f"{order.customer.firstname} {order.customer.lastname}".lower().strip()
        if needle in full_name:
            return True
    return False
