"""Default data pipeline for in-memory tables.

``DefaultGetData`` applies the filter, sort and paging values of a table
parameter object to a list of rows:

    raw rows -> filter -> after_data_filtered -> sort -> after_data_sorted -> page

A call returns the resulting page and records the post-filter row count on
``params.total`` so pagination controls can be recalculated. The input
sequence is never mutated.

Stages can be switched off per table through
``params.settings.data_options``; the matcher is chosen from
``params.settings.filter_options`` (custom ``filter_fn``, or a name looked up
in the service locator).
"""

from __future__ import annotations

import logging
from time import perf_counter
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence, TypeVar

from ..config import settings
from .event_bus import DataEventsObserver, NullDataEvents
from .filtering import FilterFn, build_filter_criteria
from .multi_column_sort import order_by
from .paging import page_window
from .service_locator import ServiceLocator, create_default_locator

if TYPE_CHECKING:  # pragma: no cover
    from ..params import TableParamsProtocol

_logger = logging.getLogger(__name__)

__all__ = ["DefaultGetData", "OrderByFn"]

T = TypeVar("T")
OrderByFn = Callable[..., Any]


def _option(options: Any, name: str) -> bool:
    return bool(getattr(options, name, True))


class DefaultGetData:
    """Filter, sort and page rows according to a table parameter object.

    Parameters
    ----------
    services : ServiceLocator | None
        Registry used to resolve matchers by name. Defaults to a locator
        holding the generic matcher under ``settings.DEFAULT_FILTER_NAME``.
    events : DataEventsObserver | None
        Observer notified after filtering and after sorting, unless a call
        passes its own.
    filter_filter_name : str | None
        Matcher name used when a table does not name one.
    """

    def __init__(
        self,
        services: Optional[ServiceLocator] = None,
        events: Optional[DataEventsObserver] = None,
        filter_filter_name: Optional[str] = None,
    ) -> None:
        self.services = services if services is not None else create_default_locator()
        self.events: DataEventsObserver = events if events is not None else NullDataEvents()
        self.filter_filter_name = filter_filter_name or settings.DEFAULT_FILTER_NAME

    def __call__(
        self,
        data: Optional[Sequence[T]],
        params: "TableParamsProtocol",
        events: Optional[DataEventsObserver] = None,
    ) -> Sequence[T]:
        return self.get_data(data, params, events)

    # Matcher / sorter resolution ----------------------------------------
    def get_filter_fn(self, params: "TableParamsProtocol") -> FilterFn:
        """Return the matcher this pipeline uses for ``params``.

        Raises ``ServiceNotFoundError`` when the configured name is unknown.
        """
        filter_options = params.settings.filter_options
        if callable(filter_options.filter_fn):
            return filter_options.filter_fn
        return self.services.get(filter_options.filter_filter_name or self.filter_filter_name)

    def get_order_by_fn(self, params: "TableParamsProtocol | None" = None) -> OrderByFn:
        """Return the sort function: ``fn(array, sort_predicate, reverse_order=False, compare_fn=None)``."""
        return order_by

    # Stages -------------------------------------------------------------
    def apply_filter(self, data: Sequence[T], params: "TableParamsProtocol") -> Sequence[T]:
        if not params.has_filter():
            return data
        criteria = build_filter_criteria(params.filter(trim=True))
        filter_fn = self.get_filter_fn(params)
        return filter_fn(data, criteria, params.settings.filter_options.filter_comparator)

    def apply_sort(self, data: Sequence[T], params: "TableParamsProtocol") -> Sequence[T]:
        sort_spec = params.order_by()
        if not sort_spec:
            return data
        return self.get_order_by_fn(params)(data, sort_spec)

    def apply_paging(self, data: Sequence[T], params: "TableParamsProtocol") -> List[T]:
        """Return the current page of ``data`` and set ``params.total`` to ``len(data)``."""
        rows, total = page_window(data, params.page, params.count)
        params.total = total
        return rows

    # Pipeline -----------------------------------------------------------
    def get_data(
        self,
        data: Optional[Sequence[T]],
        params: "TableParamsProtocol",
        events: Optional[DataEventsObserver] = None,
    ) -> Sequence[T]:
        if data is None:
            return []

        observer = events if events is not None else self.events
        options = params.settings.data_options
        started = perf_counter()

        filtered = self.apply_filter(data, params) if _option(options, "apply_filter") else data
        observer.after_data_filtered(params, filtered)

        ordered = self.apply_sort(filtered, params) if _option(options, "apply_sort") else filtered
        observer.after_data_sorted(params, ordered)

        if _option(options, "apply_paging"):
            result = self.apply_paging(ordered, params)
        else:
            result = ordered

        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                "get_data: %d rows in, %d after filter, %d out (%.2f ms)",
                len(data),
                len(filtered),
                len(result),
                (perf_counter() - started) * 1000.0,
            )
        return result
