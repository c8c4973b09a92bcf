"""Derive a product's rating aggregate from its reviews."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class RatingSummary:
    average: float
    count: int


def round_half_up(value: float, places: int = 1) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def summarize_ratings(ratings: Iterable[int]) -> RatingSummary:
    """Mean of the star ratings rounded half-up to one decimal, and their count.

    No ratings summarize to ``(0.0, 0)``.
    """
    ratings = list(ratings)
    if not ratings:
        return RatingSummary(average=0.0, count=0)
    return RatingSummary(average=round_half_up(sum(ratings) / len(ratings)), count=len(ratings))
