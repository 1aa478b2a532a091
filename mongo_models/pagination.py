"""
Paged queries.

``paged_find`` runs a count and a bounded, sorted, skipped fetch side by
side and derives page and item metadata from them.
"""

import asyncio
import math
from dataclasses import dataclass, field
from typing import Any

from .adapters import fields_adapter, sort_adapter
from .options import FindOptions


@dataclass
class PageInfo:
    current: int
    prev: int = 0
    has_prev: bool = False
    next: int = 0
    has_next: bool = False
    total: int = 0


@dataclass
class ItemInfo:
    limit: int
    begin: int
    end: int
    total: int = 0


@dataclass
class PagedResult:
    """A data slice plus page and item metadata."""

    data: list[Any] = field(default_factory=list)
    pages: PageInfo | None = None
    items: ItemInfo | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render the result in the camel-case shape used by JSON APIs."""
        return {
            "data": self.data,
            "pages": {
                "current": self.pages.current,
                "prev": self.pages.prev,
                "hasPrev": self.pages.has_prev,
                "next": self.pages.next,
                "hasNext": self.pages.has_next,
                "total": self.pages.total,
            },
            "items": {
                "limit": self.items.limit,
                "begin": self.items.begin,
                "end": self.items.end,
                "total": self.items.total,
            },
        }


def compute_paging(total_items: int, limit: int, page: int) -> tuple[PageInfo, ItemInfo]:
    """
    Derive page and item metadata.

    ``has_prev`` is ``prev != 0``, so it is also True when ``page`` is below 1.
    ``begin`` and ``end`` never exceed ``total_items``.

    Args:
        total_items: Number of documents matching the filter
        limit: Page size
        page: 1-based page number

    Returns:
        (PageInfo, ItemInfo)
    """
    pages = PageInfo(current=page)
    pages.total = math.ceil(total_items / limit)
    pages.next = page + 1
    pages.has_next = pages.next <= pages.total
    pages.prev = page - 1
    pages.has_prev = pages.prev != 0

    items = ItemInfo(
        limit=limit,
        begin=(page * limit - limit) + 1,
        end=page * limit,
        total=total_items,
    )
    if items.begin > items.total:
        items.begin = items.total
    if items.end > items.total:
        items.end = items.total

    return pages, items


async def paged_find(
    model_cls: Any,
    filter: dict[str, Any] | None,
    fields: Any,
    sort: Any,
    limit: int,
    page: int,
) -> PagedResult:
    """
    Fetch one page of ``model_cls`` documents with paging metadata.

    Args:
        model_cls: A bound MongoModel subclass
        filter: MongoDB filter
        fields: Projection mapping or shorthand (``"name -secret"``)
        sort: Sort mapping or shorthand (``"-created_at"``)
        limit: Page size, at least 1
        page: 1-based page number

    Returns:
        PagedResult

    Raises:
        ValueError: If limit is below 1
        Any driver error from the count or the fetch, unchanged
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    fields = fields_adapter(fields)
    sort = sort_adapter(sort)
    options = FindOptions(limit=limit, skip=(page - 1) * limit, sort=sort)

    total_items, data = await asyncio.gather(
        model_cls.count(filter),
        model_cls.find(filter, fields, options),
    )

    pages, items = compute_paging(total_items, limit, page)
    return PagedResult(data=data, pages=pages, items=items)
