"""Table parameter object and per-table settings.

``TableParams`` holds the state a grid keeps between recomputations: flat
filter criteria, sort directions per field, page number, page size and the
total row count written back by the paging stage. ``TableSettings`` carries
the options the data pipeline reads (which stages run, which matcher to use).

The pipeline depends only on ``TableParamsProtocol``; grids with their own
state object can implement that instead of using ``TableParams``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from .config import settings as config
from .services.filtering import Comparator, FilterFn

__all__ = [
    "DataOptions",
    "FilterOptions",
    "TableSettings",
    "TableParams",
    "TableParamsProtocol",
    "SORT_ASC",
    "SORT_DESC",
]

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass
class DataOptions:
    """Which pipeline stages run for a table."""

    apply_filter: bool = True
    apply_sort: bool = True
    apply_paging: bool = True


@dataclass
class FilterOptions:
    """Matcher selection.

    Attributes:
        filter_fn: Custom matcher used verbatim when set.
        filter_filter_name: Name of a matcher registered in the service
            locator; falls back to the pipeline's default name.
        filter_comparator: Passed through to the matcher.
    """

    filter_fn: Optional[FilterFn] = None
    filter_filter_name: Optional[str] = None
    filter_comparator: Comparator = None


@dataclass
class TableSettings:
    data_options: DataOptions = field(default_factory=DataOptions)
    filter_options: FilterOptions = field(default_factory=FilterOptions)


@runtime_checkable
class TableParamsProtocol(Protocol):
    page: int
    count: int
    total: int

    @property
    def settings(self) -> TableSettings: ...  # pragma: no cover - structural

    def has_filter(self) -> bool: ...  # pragma: no cover - structural

    def filter(self, trim: bool = False) -> Dict[str, Any]: ...  # pragma: no cover - structural

    def order_by(self) -> List[Any]: ...  # pragma: no cover - structural


def _is_filter_value_empty(value: Any) -> bool:
    return value is None or value == ""


def _positive(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be an integer >= 1, got {value!r}")
    return value


class TableParams:
    """Default parameter object."""

    def __init__(
        self,
        page: int = config.DEFAULT_PAGE,
        count: int = config.DEFAULT_COUNT,
        filter_values: Optional[Mapping[str, Any]] = None,
        sorting: Optional[Mapping[str, str]] = None,
        settings: Optional[TableSettings] = None,
    ) -> None:
        self._page = _positive("page", page)
        self._count = _positive("count", count)
        self._filter: Dict[str, Any] = dict(filter_values or {})
        self._sorting: Dict[str, str] = {}
        self.set_sorting(sorting or {}, reset_page=False)
        self._settings = settings or TableSettings()
        self.total = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TableParams":
        return cls(
            page=data.get("page", config.DEFAULT_PAGE),
            count=data.get("count", config.DEFAULT_COUNT),
            filter_values=data.get("filter"),
            sorting=data.get("sorting"),
        )

    # Paging -----------------------------------------------------------
    @property
    def page(self) -> int:
        return self._page

    @page.setter
    def page(self, value: int) -> None:
        self._page = _positive("page", value)

    @property
    def count(self) -> int:
        return self._count

    @count.setter
    def count(self, value: int) -> None:
        self._count = _positive("count", value)

    def set_count(self, value: int) -> None:
        """Change the page size and go back to the first page."""
        self.count = value
        self._page = 1

    # Settings ---------------------------------------------------------
    @property
    def settings(self) -> TableSettings:
        return self._settings

    # Filtering --------------------------------------------------------
    def filter(self, trim: bool = False) -> Dict[str, Any]:
        """Flat filter criteria; ``trim`` drops entries with empty values."""
        if not trim:
            return dict(self._filter)
        return {k: v for k, v in self._filter.items() if not _is_filter_value_empty(v)}

    def set_filter(self, values: Mapping[str, Any]) -> None:
        new_filter = dict(values)
        if new_filter != self._filter:
            self._page = 1
        self._filter = new_filter

    def has_filter(self) -> bool:
        return bool(self.filter(trim=True))

    # Sorting ----------------------------------------------------------
    @property
    def sorting(self) -> Dict[str, str]:
        return dict(self._sorting)

    def set_sorting(self, sorting: Mapping[str, str], *, reset_page: bool = True) -> None:
        for path, direction in sorting.items():
            if direction not in (SORT_ASC, SORT_DESC):
                raise ValueError(f"Sort direction for {path!r} must be 'asc' or 'desc', got {direction!r}")
        new_sorting = dict(sorting)
        if reset_page and new_sorting != self._sorting:
            self._page = 1
        self._sorting = new_sorting

    def is_sorted_by(self, path: str, direction: Optional[str] = None) -> bool:
        if path not in self._sorting:
            return False
        return direction is None or self._sorting[path] == direction

    def order_by(self) -> List[str]:
        """Sort specification, e.g. ``["+name", "-age"]``."""
        return [("+" if d == SORT_ASC else "-") + path for path, d in self._sorting.items()]

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return (
            f"TableParams(page={self._page}, count={self._count}, total={self.total}, "
            f"filter={self._filter!r}, sorting={self._sorting!r})"
        )
