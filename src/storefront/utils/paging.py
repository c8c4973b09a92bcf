"""Offset/limit pagination shared by product and order listings."""

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from protean.exceptions import ProteanException
from protean.utils.reflection import id_field

from storefront.exceptions import StoreError

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50
FETCH_BATCH_SIZE = 100


@dataclass(frozen=True)
class Page:
    items: list
    total_pages: int
    current_page: int
    total_items: int


def normalize_paging(page: int | None, limit: int | None) -> tuple[int, int]:
    """Clamp ``page`` to at least 1 and ``limit`` into ``[1, MAX_PAGE_SIZE]``."""
    page = max(1, page or 1)
    if limit is None:
        limit = DEFAULT_PAGE_SIZE
    limit = min(max(1, limit), MAX_PAGE_SIZE)
    return page, limit


def paginate(items: Sequence[Any], page: int | None, limit: int | None) -> Page:
    page, limit = normalize_paging(page, limit)
    total = len(items)
    start = (page - 1) * limit
    return Page(
        items=list(items[start : start + limit]),
        total_pages=math.ceil(total / limit),
        current_page=page,
        total_items=total,
    )


def iterate_records(dao, batch_size: int = FETCH_BATCH_SIZE, **filters) -> Iterator[Any]:
    """Yield every record a DAO holds, optionally filtered, in fixed-size batches.

    Query sets carry a default limit, so a plain ``all()`` silently truncates
    large collections. Batches are ordered by the identifier so that offsets
    stay stable across queries.
    """
    identifier = id_field(dao.entity_cls).field_name
    offset = 0
    while True:
        query = dao.query.filter(**filters) if filters else dao.query
        query = query.order_by(identifier)
        try:
            results = query.offset(offset).limit(batch_size).all()
        except ProteanException:
            raise
        except Exception as exc:
            raise StoreError("Failed to read from the store.") from exc
        yield from results.items
        if len(results.items) < batch_size:
            return
        offset += batch_size
