"""CuratedList aggregate: an ordered list of product ids shown on the homepage.

There are exactly two lists, the carousel and the top picks, each stored
under its own key. Ids are kept in the order the administrator chose and
may refer to products that have since been removed; readers drop those.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from storefront.domain import storefront


class CuratedListKind(Enum):
    CAROUSEL = "carouselProductIds"
    TOP_PICKS = "topPicksProductIds"


def parse_product_ids(value) -> list[int]:
    """Validate an ordered list of product ids. Digit strings are accepted."""
    if not isinstance(value, list):
        raise ValidationError({"product_ids": ["Product ids must be a list"]})

    ids = []
    for item in value:
        if isinstance(item, bool):
            raise ValidationError({"product_ids": [f"Invalid product id: {item!r}"]})
        if isinstance(item, int):
            ids.append(item)
        elif isinstance(item, str) and item.strip().isdigit():
            ids.append(int(item.strip()))
        else:
            raise ValidationError({"product_ids": [f"Invalid product id: {item!r}"]})
    return ids


@storefront.aggregate
class CuratedList:
    key = String(identifier=True, choices=CuratedListKind, max_length=50)
    product_ids = Text()  # JSON array of product ids, display order
    updated_at = DateTime()

    @invariant.post
    def product_ids_are_integers(self):
        if self.product_ids:
            parse_product_ids(json.loads(self.product_ids))

    @property
    def ids(self) -> list[int]:
        return parse_product_ids(json.loads(self.product_ids)) if self.product_ids else []

    @classmethod
    def create(cls, kind: CuratedListKind, product_ids):
        return cls(
            key=kind.value,
            product_ids=json.dumps(parse_product_ids(product_ids)),
            updated_at=datetime.now(UTC),
        )

    def replace(self, product_ids):
        self.product_ids = json.dumps(parse_product_ids(product_ids))
        self.updated_at = datetime.now(UTC)
