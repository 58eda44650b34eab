"""Page window slicing.

``page_window`` is pure: it returns the requested page together with the
total row count (the length before slicing), leaving it to the caller to
store the total wherever its pagination controls read it from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

__all__ = ["PageResult", "page_window", "page_bounds"]

T = TypeVar("T")


@dataclass(frozen=True)
class PageResult(Generic[T]):
    rows: List[T]
    total: int

    def __iter__(self):  # allows ``rows, total = page_window(...)``
        yield self.rows
        yield self.total


def page_bounds(page: int, count: int) -> tuple[int, int]:
    """Half-open index range ``[(page - 1) * count, page * count)``."""
    return (page - 1) * count, page * count


def page_window(data: Sequence[T], page: int, count: int) -> PageResult[T]:
    start, stop = page_bounds(page, count)
    return PageResult(rows=list(data[start:stop]), total=len(data))
