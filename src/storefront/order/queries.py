"""Order reads for the admin console and the customer's order history."""

from collections import defaultdict
from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from storefront.order.order import Order
from storefront.product.product import Product
from storefront.utils.paging import Page, paginate

PLACEHOLDER_IMAGE = "https://placehold.co/64x64"
RECENT_ORDERS = 5
TOP_PRODUCTS = 5


@dataclass(frozen=True)
class TopProduct:
    product_id: int
    name: str
    total_quantity: int


@dataclass(frozen=True)
class DashboardStats:
    total_revenue: float
    total_orders: int
    recent_orders: list = field(default_factory=list)
    top_selling_products: list = field(default_factory=list)


def select_orders(search: str | None = None) -> list[Order]:
    """Orders matching ``search`` (or all of them), newest first."""
    orders = current_domain.repository_for(Order).everything()
    if search and search.strip():
        term = search.strip()
        orders = [order for order in orders if order.matches(term)]
    return orders


def search_orders(search: str | None = None, page: int | None = None, limit: int | None = None) -> Page:
    return paginate(select_orders(search), page, limit)


def product_images(product_ids) -> dict[int, str]:
    repo = current_domain.repository_for(Product)
    images = {}
    for product_id in set(product_ids):
        product = repo.find(product_id)
        images[product_id] = (product.primary_image if product else None) or PLACEHOLDER_IMAGE
    return images


def orders_for_customer(email: str) -> list[tuple[Order, dict[int, str]]]:
    """The customer's orders, newest first, with the current image of each purchased product."""
    email = (email or "").strip().lower()
    orders = [o for o in current_domain.repository_for(Order).everything() if o.customer.email.lower() == email]
    images = product_images(item.product_id for order in orders for item in order.items)
    return [(order, images) for order in orders]


def dashboard_stats() -> DashboardStats:
    orders = current_domain.repository_for(Order).everything()

    quantities = defaultdict(int)
    for order in orders:
        for item in order.items:
            quantities[(item.product_id, item.name)] += item.quantity

    ranked = sorted(quantities.items(), key=lambda entry: entry[1], reverse=True)
    return DashboardStats(
        total_revenue=round(sum(order.total for order in orders), 2),
        total_orders=len(orders),
        recent_orders=orders[:RECENT_ORDERS],
        top_selling_products=[
            TopProduct(product_id=product_id, name=name, total_quantity=quantity)
            for (product_id, name), quantity in ranked[:TOP_PRODUCTS]
        ],
    )
