"""Offset/limit paging over Protean querysets."""

import math
from typing import NamedTuple

DEFAULT_PAGE_SIZE = 10
_BATCH_SIZE = 100


class Page(NamedTuple):
    items: list
    page: int
    pages: int
    total: int


def paginate(queryset, page=None, page_size=None) -> Page:
    """Return one page of `queryset`. Missing or non-positive values fall back to page 1, size 10."""
    page = page if page and page > 0 else 1
    page_size = page_size if page_size and page_size > 0 else DEFAULT_PAGE_SIZE

    results = queryset.offset(page_size * (page - 1)).limit(page_size).all()
    return Page(
        items=list(results.items),
        page=page,
        pages=math.ceil(results.total / page_size),
        total=results.total,
    )


def iterate_all(queryset, batch_size=_BATCH_SIZE):
    """Yield every record in `queryset`, fetching in batches."""
    offset = 0
    while True:
        items = queryset.offset(offset).limit(batch_size).all().items
        yield from items
        if len(items) < batch_size:
            return
        offset += batch_size
