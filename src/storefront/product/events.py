"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalog."""

    __version__ = 1

    product_id = Integer(required=True)
    name = String(required=True)
    price = Float(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive or pricing details of a product changed."""

    __version__ = 1

    product_id = Integer(required=True)
    name = String()
    price = Float()
    updated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductRatingRecalculated:
    """The rating aggregate was recomputed from the product's reviews."""

    __version__ = 1

    product_id = Integer(required=True)
    rating = Float(required=True)
    reviews_count = Integer(required=True)
    recalculated_at = DateTime(required=True)
