"""Fixed-size paging of filtered search results."""

import math
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")

PAGE_SIZE = 6


class Page(BaseModel):
    """One page of results plus the numbers a pager needs."""

    model_config = ConfigDict(frozen=True)

    items: list[Any]
    page: int
    page_size: int
    total_pages: int
    total_count: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        msg = f"page_size must be at least 1, got {page_size}"
        raise ValueError(msg)


def total_pages(count: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages for ``count`` results; an empty result still has one page."""
    _check_page_size(page_size)
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, count: int, page_size: int = PAGE_SIZE) -> int:
    """Clamp ``page`` into [1, total_pages(count)]."""
    return max(1, min(page, total_pages(count, page_size)))


def paginate(items: Sequence[T], page: int = 1, page_size: int = PAGE_SIZE) -> Page:
    """Slice ``items`` to the requested page, clamping out-of-range pages."""
    count = len(items)
    current = clamp_page(page, count, page_size)
    start = (current - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=current,
        page_size=page_size,
        total_pages=total_pages(count, page_size),
        total_count=count,
    )
