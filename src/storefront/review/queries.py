"""Review listing for the product page."""

from enum import Enum

from protean.utils.globals import current_domain

from storefront.review.review import MAX_STARS, MIN_STARS, Review


class ReviewSort(Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    HIGHEST = "highest"
    LOWEST = "lowest"

    @classmethod
    def parse(cls, value: str | None) -> "ReviewSort":
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST


def parse_star_filter(stars: str | None) -> set[int]:
    """Parse a comma list like ``"4,5"``. Entries outside 1..5 are ignored."""
    if not stars:
        return set()
    selected = set()
    for part in stars.split(","):
        part = part.strip()
        if part.isdigit() and MIN_STARS <= int(part) <= MAX_STARS:
            selected.add(int(part))
    return selected


def _timestamp(review: Review) -> float:
    return review.created_at.timestamp() if review.created_at else 0.0


def sort_reviews(reviews, sort: ReviewSort) -> list[Review]:
    newest_first = sorted(reviews, key=_timestamp, reverse=True)
    if sort is ReviewSort.OLDEST:
        return sorted(reviews, key=_timestamp)
    if sort is ReviewSort.HIGHEST:
        return sorted(newest_first, key=lambda r: r.stars, reverse=True)
    if sort is ReviewSort.LOWEST:
        return sorted(newest_first, key=lambda r: r.stars)
    return newest_first


def reviews_for_product(product_id: int, sort: str | None = None, stars: str | None = None) -> list[Review]:
    reviews = current_domain.repository_for(Review).for_product(product_id)
    selected = parse_star_filter(stars)
    if selected:
        reviews = [r for r in reviews if r.stars in selected]
    return sort_reviews(reviews, ReviewSort.parse(sort))
