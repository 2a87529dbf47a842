"""Pagination utilities shared by the data source and controller."""

from dataclasses import dataclass
from math import ceil
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def total_pages_for(total: int, page_size: int) -> int:
    """Number of pages needed for ``total`` items; never less than one."""
    return max(1, ceil(total / page_size))


def clamp_page(page: int, total_pages: int) -> int:
    """Coerce ``page`` into ``[1, total_pages]``."""
    return max(1, min(page, total_pages))


@dataclass
class PaginationParams:
    """A page request resolved against a known item count."""

    page: int = 1
    page_size: int = 6
    total: int = 0

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total, self.page_size)

    @property
    def effective_page(self) -> int:
        return clamp_page(self.page, self.total_pages)

    @property
    def offset(self) -> int:
        return (self.effective_page - 1) * self.page_size


def slice_page(items: Sequence[T], params: PaginationParams) -> List[T]:
    """Return the contiguous slice of ``items`` for the clamped page."""
    start = params.offset
    return list(items[start : start + params.page_size])
