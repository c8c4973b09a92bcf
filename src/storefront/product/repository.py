"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.utils.paging import iterate_records


@storefront.repository(part_of=Product)
class ProductRepository:
    def find(self, product_id) -> Product | None:
        """Return the product with this id, or None when it does not exist."""
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            return None

    def everything(self) -> list[Product]:
        return list(iterate_records(self._dao))

    def is_empty(self) -> bool:
        return not self._dao.query.limit(1).all().items
