"""Seed an empty catalog from a products document.

The document is a list of product records with an ``id`` and optional
embedded ``reviews`` (``{user, comment, rating}``). Embedded reviews become
Review records and each product's rating aggregate is derived from them
rather than taken from the document.
"""

from dataclasses import dataclass

import structlog
from protean import UnitOfWork
from protean.utils.globals import current_domain

from storefront.product.product import Product
from storefront.review.rating import summarize_ratings
from storefront.review.review import Review

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SeedResult:
    products: int
    reviews: int
    skipped: bool = False


def _product_from_record(record: dict) -> Product:
    return Product.add(
        product_id=record["id"],
        name=record["name"],
        price=record["price"],
        original_price=record.get("originalPrice"),
        categories=record.get("category"),
        images=record.get("images"),
        description=record.get("description"),
        seller_tag=record.get("sellerTag"),
        delivery_date=record.get("deliveryDate"),
    )


def seed_catalogue(records: list[dict]) -> SeedResult:
    """Seed every record, or nothing at all if any record is rejected."""
    with UnitOfWork():
        product_repo = current_domain.repository_for(Product)
        if not product_repo.is_empty():
            logger.info("seed_skipped", reason="catalog already holds products")
            return SeedResult(products=0, reviews=0, skipped=True)

        review_repo = current_domain.repository_for(Review)
        review_total = 0
        for record in records:
            product = _product_from_record(record)

            ratings = []
            for entry in record.get("reviews") or []:
                review = Review.post(
                    product_id=product.product_id,
                    username=entry["user"],
                    rating=int(entry["rating"]),
                    comment=entry["comment"],
                )
                review_repo.add(review)
                ratings.append(review.stars)

            summary = summarize_ratings(ratings)
            product.record_rating(summary.average, summary.count)
            product_repo.add(product)
            review_total += len(ratings)

    logger.info("catalog_seeded", products=len(records), reviews=review_total)
    return SeedResult(products=len(records), reviews=review_total)
