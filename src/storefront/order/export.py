"""CSV export of orders for the admin console."""

import csv
import io
from datetime import UTC, datetime

from storefront.exceptions import NotFoundError
from storefront.order.order import Order
from storefront.order.queries import select_orders

CSV_HEADERS = ["OrderID", "Date", "CustomerName", "Email", "Phone", "Address", "Total", "Items"]


def format_address(customer) -> str:
    line = customer.address1
    if customer.address2:
        line += f", {customer.address2}"
    return f"{line}, {customer.city}, {customer.state} {customer.zip}"


def format_items(order: Order) -> str:
    return "; ".join(f"{item.quantity} x {item.name}" for item in order.items)


def format_total(total: float):
    return int(total) if float(total).is_integer() else total


def format_timestamp(value: datetime | None) -> str:
    """ISO-8601 in UTC with milliseconds and a Z suffix."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def order_row(order: Order) -> list:
    return [
        order.order_id,
        format_timestamp(order.placed_at),
        order.customer.full_name,
        order.customer.email,
        order.customer.phone,
        format_address(order.customer),
        format_total(order.total),
        format_items(order),
    ]


def orders_to_csv(orders) -> str:
    """Render orders as CSV. Cells with a comma, quote or newline are quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADERS)
    for order in orders:
        writer.writerow(order_row(order))
    return buffer.getvalue().rstrip("\n")


def export_orders(search: str | None = None) -> str:
    orders = select_orders(search)
    if not orders:
        raise NotFoundError("No orders to export.")
    return orders_to_csv(orders)
