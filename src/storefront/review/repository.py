"""Repository for the Review aggregate."""

from storefront.domain import storefront
from storefront.review.review import Review
from storefront.utils.paging import iterate_records


@storefront.repository(part_of=Review)
class ReviewRepository:
    def for_product(self, product_id: int) -> list[Review]:
        return list(iterate_records(self._dao, product_id=product_id))
