"""Homepage reads: curated id lists and the products they resolve to."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.product.product import Product
from storefront.showcase.curated_list import CuratedList, CuratedListKind


def curated_product_ids(kind: CuratedListKind) -> list[int]:
    try:
        return current_domain.repository_for(CuratedList).get(kind.value).ids
    except ObjectNotFoundError:
        return []


def curated_products(kind: CuratedListKind) -> list[Product]:
    """Products in the stored order. Ids that no longer resolve are skipped."""
    repo = current_domain.repository_for(Product)
    products = []
    for product_id in curated_product_ids(kind):
        product = repo.find(product_id)
        if product is not None:
            products.append(product)
    return products
