"""tabledata public API.

Curated, intentionally small surface for callers that want a filtered,
sorted and paged view of an in-memory list of rows:

    from tabledata import DefaultGetData, TableParams

    get_data = DefaultGetData()
    params = TableParams(page=2, count=10, sorting={"name": "asc"})
    page = get_data(rows, params)
    params.total  # rows left after filtering

Deeper helpers (comparator, path compiler, event bus) stay importable from
``tabledata.services``.
"""

from __future__ import annotations

from .params import (  # noqa: F401
    DataOptions,
    FilterOptions,
    TableParams,
    TableParamsProtocol,
    TableSettings,
)
from .services import (  # noqa: F401
    UNDEFINED,
    DefaultGetData,
    EventBus,
    EventBusDataEvents,
    NotArrayError,
    PathSyntaxError,
    ServiceLocator,
    ServiceNotFoundError,
    TableEvent,
    build_filter_criteria,
    filter_rows,
    order_by,
    page_window,
)

__all__ = [
    "DataOptions",
    "FilterOptions",
    "TableParams",
    "TableParamsProtocol",
    "TableSettings",
    "UNDEFINED",
    "DefaultGetData",
    "EventBus",
    "EventBusDataEvents",
    "NotArrayError",
    "PathSyntaxError",
    "ServiceLocator",
    "ServiceNotFoundError",
    "TableEvent",
    "build_filter_criteria",
    "filter_rows",
    "order_by",
    "page_window",
]

__version__ = "0.1.0"
