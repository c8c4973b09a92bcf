"""Product aggregate: the catalog record customers browse and review.

Products are identified by an externally assigned integer id that stays
stable across reseeding; reviews and order items reference that id rather
than any storage identity.

``rating`` and ``reviews_count`` are derived from the product's reviews and
only change through ``record_rating``.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.product.events import (
    ProductAdded,
    ProductDetailsUpdated,
    ProductRatingRecalculated,
)

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 150
DESCRIPTION_MAX_LENGTH = 2000
MAX_RATING = 5.0


def _ordered_unique(values):
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def _encode_categories(categories):
    if categories is None:
        return json.dumps([])
    if isinstance(categories, str):
        categories = [categories]
    return json.dumps(_ordered_unique(str(c).strip() for c in categories if str(c).strip()))


def _encode_images(images):
    return json.dumps([str(url) for url in images or []])


@storefront.aggregate
class Product:
    product_id = Integer(identifier=True, required=True)
    name = String(required=True, max_length=NAME_MAX_LENGTH)
    price = Float(required=True, min_value=0.0)
    original_price = Float(min_value=0.0)
    categories = Text()  # JSON array of category names
    images = Text()  # JSON array of image URLs, display order
    description = Text()
    seller_tag = String(max_length=50)
    delivery_date = String(max_length=50)

    # Derived from reviews
    rating = Float(default=0.0)
    reviews_count = Integer(default=0)

    date_added = DateTime()
    updated_at = DateTime()

    @invariant.post
    def name_length_within_bounds(self):
        if self.name is not None and len(self.name.strip()) < NAME_MIN_LENGTH:
            raise ValidationError({"name": [f"Product name must be at least {NAME_MIN_LENGTH} characters"]})

    @invariant.post
    def description_within_bounds(self):
        if self.description and len(self.description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                {"description": [f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"]}
            )

    @invariant.post
    def rating_within_bounds(self):
        if self.rating is not None and not 0.0 <= self.rating <= MAX_RATING:
            raise ValidationError({"rating": ["Rating must be between 0 and 5"]})
        if self.reviews_count is not None and self.reviews_count < 0:
            raise ValidationError({"reviews_count": ["Review count cannot be negative"]})

    # -------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------
    @property
    def category_list(self) -> list[str]:
        return json.loads(self.categories) if self.categories else []

    @property
    def image_list(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def primary_image(self) -> str | None:
        images = self.image_list
        return images[0] if images else None

    def in_category(self, category: str) -> bool:
        return category in self.category_list

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def add(
        cls,
        product_id,
        name,
        price,
        original_price=None,
        categories=None,
        images=None,
        description=None,
        seller_tag=None,
        delivery_date=None,
    ):
        """Add a product to the catalog with an empty rating aggregate."""
        now = datetime.now(UTC)

        product = cls(
            product_id=product_id,
            name=name.strip() if isinstance(name, str) else name,
            price=price,
            original_price=original_price,
            categories=_encode_categories(categories),
            images=_encode_images(images),
            description=description.strip() if isinstance(description, str) else description,
            seller_tag=seller_tag,
            delivery_date=delivery_date,
            rating=0.0,
            reviews_count=0,
            date_added=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.product_id,
                name=product.name,
                price=product.price,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------
    def update_details(
        self,
        name=None,
        price=None,
        original_price=None,
        categories=None,
        images=None,
        description=None,
        seller_tag=None,
        delivery_date=None,
    ):
        """Apply a partial update. ``None`` leaves a field unchanged."""
        now = datetime.now(UTC)

        with atomic_change(self):
            if name is not None:
                self.name = name.strip()
            if price is not None:
                self.price = price
            if original_price is not None:
                self.original_price = original_price
            if categories is not None:
                self.categories = _encode_categories(categories)
            if images is not None:
                self.images = _encode_images(images)
            if description is not None:
                self.description = description.strip()
            if seller_tag is not None:
                self.seller_tag = seller_tag
            if delivery_date is not None:
                self.delivery_date = delivery_date
            self.updated_at = now

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.product_id,
                name=name,
                price=price,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Rating aggregate
    # -------------------------------------------------------------------
    def record_rating(self, rating, reviews_count):
        """Overwrite the rating aggregate with a freshly computed summary."""
        now = datetime.now(UTC)

        with atomic_change(self):
            self.rating = rating
            self.reviews_count = reviews_count
            self.updated_at = now

        self.raise_(
            ProductRatingRecalculated(
                product_id=self.product_id,
                rating=rating,
                reviews_count=reviews_count,
                recalculated_at=now,
            )
        )
