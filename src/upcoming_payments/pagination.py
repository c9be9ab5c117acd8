"""
Fixed-size page windowing over the mapped display groups.
"""

from collections.abc import Sequence
from math import ceil
from typing import Generic, TypeVar

from upcoming_payments.exceptions import PaginationError
from upcoming_payments.models import PAGE_SIZE

T = TypeVar("T")


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        raise PaginationError(f"Page size must be at least 1, got {page_size}", page_size=page_size)


def total_pages(count: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages; an empty list still has one page."""
    _check_page_size(page_size)
    return max(1, ceil(count / page_size))


def paginate(items: Sequence[T], page: int, page_size: int = PAGE_SIZE) -> list[T]:
    """Return the slice for a 1-based page, clamped to the sequence bounds.

    Out of range pages give an empty or truncated slice rather than an error.
    """
    _check_page_size(page_size)
    start = max(0, (page - 1) * page_size)
    end = max(0, page * page_size)
    return list(items[start:end])


class Paginator(Generic[T]):
    """Tracks the current page over a fixed list and its displayed slice."""

    def __init__(self, items: Sequence[T], page_size: int = PAGE_SIZE, page: int = 1) -> None:
        _check_page_size(page_size)
        self.items = list(items)
        self.page_size = page_size
        self.current_page = min(max(1, page), self.total_pages)
        self.page: list[T] = []
        self._refresh()

    def _refresh(self) -> None:
        self.page = paginate(self.items, self.current_page, self.page_size)

    @property
    def total_pages(self) -> int:
        return total_pages(len(self.items), self.page_size)

    @property
    def has_pagination(self) -> bool:
        return len(self.items) > self.page_size

    @property
    def is_first(self) -> bool:
        return self.current_page <= 1

    @property
    def is_last(self) -> bool:
        return self.current_page >= self.total_pages

    def first(self) -> list[T]:
        if not self.is_first:
            self.current_page = 1
            self._refresh()
        return self.page

    def previous(self) -> list[T]:
        if not self.is_first:
            self.current_page -= 1
            self._refresh()
        return self.page

    def next(self) -> list[T]:
        if not self.is_last:
            self.current_page += 1
            self._refresh()
        return self.page

    def last(self) -> list[T]:
        if not self.is_last:
            self.current_page = self.total_pages
            self._refresh()
        return self.page
