"""Service layer exports.

Responsibilities:
 - Sort stage (`order_by`, `MultiColumnSorter`) and its value comparator
 - Filter helpers and the generic matcher (`filter_rows`)
 - Paging (`page_window`)
 - Pipeline orchestration (`DefaultGetData`)
 - Matcher registry (`ServiceLocator`) and notifications (`EventBus`)
"""

from .predicate_values import UNDEFINED, PredicateValue, ValueKind, default_compare  # noqa: F401
from .sort_predicates import PathSyntaxError, compile_path, compile_predicates  # noqa: F401
from .multi_column_sort import MultiColumnSorter, NotArrayError, is_array_like, order_by  # noqa: F401
from .filtering import build_filter_criteria, filter_rows, set_path  # noqa: F401
from .paging import PageResult, page_window  # noqa: F401
from .service_locator import (  # noqa: F401
    ServiceAlreadyRegisteredError,
    ServiceLocator,
    ServiceNotFoundError,
    create_default_locator,
)
from .event_bus import (  # noqa: F401
    CompositeDataEvents,
    DataEventsObserver,
    EventBus,
    EventBusDataEvents,
    TableEvent,
)
from .telemetry import TelemetryDataEvents, TelemetryService  # noqa: F401
from .logging_service import LoggingService, configure_logging  # noqa: F401
from .default_get_data import DefaultGetData  # noqa: F401

__all__ = [
    "UNDEFINED",
    "PredicateValue",
    "ValueKind",
    "default_compare",
    "PathSyntaxError",
    "compile_path",
    "compile_predicates",
    "MultiColumnSorter",
    "NotArrayError",
    "is_array_like",
    "order_by",
    "build_filter_criteria",
    "filter_rows",
    "set_path",
    "PageResult",
    "page_window",
    "ServiceAlreadyRegisteredError",
    "ServiceLocator",
    "ServiceNotFoundError",
    "create_default_locator",
    "CompositeDataEvents",
    "DataEventsObserver",
    "EventBus",
    "EventBusDataEvents",
    "TableEvent",
    "TelemetryDataEvents",
    "TelemetryService",
    "LoggingService",
    "configure_logging",
    "DefaultGetData",
]
