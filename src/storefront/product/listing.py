"""Catalog reads: product lookup and the filtered, sorted, paginated listing."""

from enum import Enum

from protean.utils.globals import current_domain

from storefront.exceptions import NotFoundError
from storefront.product.product import Product
from storefront.utils.paging import Page, paginate

ALL_CATEGORIES = "All"


class ProductSort(Enum):
    NEWEST = "newest"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    DEFAULT = "default"

    @classmethod
    def parse(cls, value: str | None) -> "ProductSort":
        """Unknown or missing sort keys fall back to id order."""
        try:
            return cls(value)
        except ValueError:
            return cls.DEFAULT


def get_product(product_id: int) -> Product:
    product = current_domain.repository_for(Product).find(product_id)
    if product is None:
        raise NotFoundError(f"Product with ID {product_id} not found.")
    return product


def matches_search(product: Product, term: str) -> bool:
    """Name substring match, or an exact id match when the term is all digits."""
    term = term.strip()
    if not term:
        return True
    if term.isdigit() and product.product_id == int(term):
        return True
    return term.lower() in (product.name or "").lower()


def filter_products(products, category: str | None = None, search: str | None = None) -> list[Product]:
    if category and category != ALL_CATEGORIES:
        products = [p for p in products if p.in_category(category)]
    if search and search.strip():
        products = [p for p in products if matches_search(p, search)]
    return list(products)


def sort_products(products, sort: ProductSort) -> list[Product]:
    if sort is ProductSort.NEWEST:
        # Stable on id so products added in the same instant keep a fixed order
        by_id = sorted(products, key=lambda p: p.product_id)
        return sorted(by_id, key=lambda p: p.date_added.timestamp() if p.date_added else 0.0, reverse=True)
    if sort is ProductSort.PRICE_ASC:
        return sorted(products, key=lambda p: (p.price, p.product_id))
    if sort is ProductSort.PRICE_DESC:
        return sorted(products, key=lambda p: (-p.price, p.product_id))
    return sorted(products, key=lambda p: p.product_id)


def list_products(
    category: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> Page:
    products = current_domain.repository_for(Product).everything()
    selected = filter_products(products, category=category, search=search)
    return paginate(sort_products(selected, ProductSort.parse(sort)), page, limit)
