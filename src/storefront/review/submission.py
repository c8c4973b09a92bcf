"""SubmitReview: post a review and refresh the product's rating aggregate.

Gates run in a fixed order: the product must exist, the review fields must
be present and in range, and only then is the order history consulted for
the verified-purchase flag. The aggregate is recomputed from every review
the product has, never adjusted incrementally, so a lost concurrent update
heals on the next submission.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ValidationError
from protean.fields import Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.order.order import Order
from storefront.product.listing import get_product
from storefront.product.product import Product
from storefront.review.rating import summarize_ratings
from storefront.review.review import MAX_STARS, MAX_USERNAME_LENGTH, MIN_STARS, Review
from storefront.review.verification import is_verified_purchase

logger = structlog.get_logger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required review fields: user, rating, comment"


@storefront.command(part_of="Review")
class SubmitReview:
    product_id = Integer(required=True)
    username = Text()
    rating = Text()  # as submitted; parsed once the product is known to exist
    comment = Text()


@dataclass(frozen=True)
class ReviewReceipt:
    review: Review
    rating: float
    reviews_count: int


def parse_rating(raw) -> int | None:
    """Whole star counts only. ``4`` and ``"4"`` parse; ``"4.5"`` and ``"five"`` do not."""
    if raw is None:
        return None
    text = str(raw).strip()
    return int(text) if text.isdecimal() else None


def _validate(command) -> int:
    username = (command.username or "").strip()
    comment = (command.comment or "").strip()
    rating = parse_rating(command.rating)
    if not username or not comment or rating is None or not MIN_STARS <= rating <= MAX_STARS:
        raise ValidationError({"review": [MISSING_FIELDS_MESSAGE]})
    if len(username) > MAX_USERNAME_LENGTH:
        raise ValidationError({"username": [f"Username must be at most {MAX_USERNAME_LENGTH} characters"]})
    return rating


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        product = get_product(command.product_id)
        rating = _validate(command)

        orders = current_domain.repository_for(Order).containing_product(product.product_id)
        verified = is_verified_purchase(command.username, orders)

        review_repo = current_domain.repository_for(Review)
        review = Review.post(
            product_id=product.product_id,
            username=command.username,
            rating=rating,
            comment=command.comment,
            verified_purchase=verified,
        )
        review_repo.add(review)

        # The new review may not be visible to the query until the unit of work commits
        reviews = {str(r.id): r for r in review_repo.for_product(product.product_id)}
        reviews[str(review.id)] = review
        summary = summarize_ratings(r.stars for r in reviews.values())

        product.record_rating(summary.average, summary.count)
        current_domain.repository_for(Product).add(product)

        logger.info(
            "review_posted",
            product_id=product.product_id,
            review_id=str(review.id),
            verified_purchase=verified,
            rating=summary.average,
            reviews_count=summary.count,
        )
        return ReviewReceipt(review=review, rating=summary.average, reviews_count=summary.count)
