"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.order.order import Order
from storefront.utils.paging import iterate_records


@storefront.repository(part_of=Order)
class OrderRepository:
    def find(self, order_id: str) -> Order | None:
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            return None

    def exists(self, order_id: str) -> bool:
        return self.find(order_id) is not None

    def everything(self) -> list[Order]:
        """All orders, newest first."""
        orders = list(iterate_records(self._dao))
        return sorted(orders, key=lambda o: o.placed_at.timestamp() if o.placed_at else 0.0, reverse=True)

    def containing_product(self, product_id: int) -> list[Order]:
        return [order for order in iterate_records(self._dao) if order.contains_product(product_id)]
