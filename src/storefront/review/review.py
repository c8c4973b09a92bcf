"""Review aggregate: a customer's star rating and comment on a product.

Reviews are written once and never edited. ``verified_purchase`` is decided
at posting time from the order history and stays frozen afterwards, even if
orders are later added or removed.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.review.events import ReviewPosted

MIN_STARS = 1
MAX_STARS = 5
MAX_USERNAME_LENGTH = 100


@storefront.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and not MIN_STARS <= self.score <= MAX_STARS:
            raise ValidationError({"score": ["Rating must be between 1 and 5"]})


@storefront.aggregate
class Review:
    product_id = Integer(required=True)
    username = String(required=True, max_length=MAX_USERNAME_LENGTH)
    comment = Text(required=True)
    rating = ValueObject(Rating, required=True)
    verified_purchase = Boolean(default=False)
    created_at = DateTime()

    @invariant.post
    def username_must_not_be_blank(self):
        if self.username is not None and not self.username.strip():
            raise ValidationError({"username": ["Username cannot be empty"]})

    @invariant.post
    def comment_must_not_be_blank(self):
        if self.comment is not None and not self.comment.strip():
            raise ValidationError({"comment": ["Comment cannot be empty"]})

    @property
    def stars(self) -> int:
        return self.rating.score

    @classmethod
    def post(cls, product_id, username, rating, comment, verified_purchase=False, created_at=None):
        """Post a new review."""
        now = created_at or datetime.now(UTC)

        review = cls(
            product_id=product_id,
            username=username.strip(),
            comment=comment.strip(),
            rating=Rating(score=rating),
            verified_purchase=verified_purchase,
            created_at=now,
        )
        review.raise_(
            ReviewPosted(
                review_id=str(review.id),
                product_id=review.product_id,
                username=review.username,
                rating=rating,
                comment=review.comment,
                verified_purchase=verified_purchase,
                posted_at=now,
            )
        )
        return review
