"""Domain events for the Review aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Review")
class ReviewPosted:
    """A customer posted a review of a product."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Integer(required=True)
    username = String(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)
    verified_purchase = Boolean(default=False)
    posted_at = DateTime(required=True)
