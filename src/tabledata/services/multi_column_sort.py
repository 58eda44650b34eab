"""Multi-column sorting for table rows.

Provides a stable, multi-key, type-aware sort. The `MultiColumnSorter`
accepts an array-like collection of rows and sorts it according to a sort
specification (see `sort_predicates`). Every row is turned into a
comparison record holding one `PredicateValue` per sort key plus a
tie-breaker on the original position, so rows that tie on every key keep
their relative order regardless of the underlying sort algorithm.

`order_by` is the functional entry point used by the data pipeline.
"""

from __future__ import annotations

import logging
import numbers
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import cmp_to_key
from types import ModuleType
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

from .predicate_values import (
    PredicateValue,
    ValueKind,
    default_compare,
    get_predicate_value,
)
from .sort_predicates import compile_predicates

_logger = logging.getLogger(__name__)

__all__ = [
    "NotArrayError",
    "ComparisonRecord",
    "MultiColumnSorter",
    "is_array_like",
    "order_by",
]

T = TypeVar("T")
CompareFn = Callable[[PredicateValue, PredicateValue], int]


class NotArrayError(TypeError):
    """Raised when the sort input is neither None nor array-like."""

    module = "orderBy"
    code = "notarray"

    def __init__(self, value: Any):
        super().__init__(f"[{self.module}:{self.code}] Expected array but received: {value!r}")
        self.value = value


@dataclass(frozen=True)
class ComparisonRecord:
    value: Any
    predicate_values: Tuple[PredicateValue, ...]
    tie_breaker: PredicateValue


def _is_window(value: Any) -> bool:
    return getattr(value, "window", None) is value


def _length_of(value: Any) -> Any:
    if hasattr(value, "__len__"):
        try:
            return len(value)
        except TypeError:
            return None
    return getattr(value, "length", None)


def is_array_like(value: Any) -> bool:
    """Return True for sequences, strings and indexable objects with a length."""
    if value is None or isinstance(value, ModuleType) or _is_window(value):
        return False
    if isinstance(value, (str, Sequence)):
        return True
    if isinstance(value, Mapping):
        return False

    length = _length_of(value)
    if not isinstance(length, numbers.Integral) or isinstance(length, bool) or length < 0:
        return False
    if callable(getattr(value, "item", None)):
        return True
    if length == 0 or not hasattr(value, "__getitem__"):
        return False
    try:
        value[length - 1]
    except (LookupError, TypeError):
        return False
    return True


def _elements(array: Any) -> List[Any]:
    if isinstance(array, (str, Sequence)):
        return list(array)
    length = int(_length_of(array))
    if hasattr(array, "__getitem__"):
        return [array[i] for i in range(length)]
    return [array.item(i) for i in range(length)]


class MultiColumnSorter(Generic[T]):
    """Stable multi-key sorter.

    Usage:
        sorter = MultiColumnSorter(rows)
        rows_sorted = sorter.sort(["-points", "+team.name"])

    Keys are compared in declaration order; the first key that differs
    decides, multiplied by its own direction and by the global
    ``reverse_order`` flag. Full ties fall back to the original index.
    """

    def __init__(self, rows: Any):
        if not is_array_like(rows):
            raise NotArrayError(rows)
        self._rows: List[T] = _elements(rows)

    def sort(
        self,
        sort_predicate: Any = None,
        reverse_order: bool = False,
        compare_fn: Optional[CompareFn] = None,
    ) -> List[T]:
        predicates = compile_predicates([] if sort_predicate is None else sort_predicate)
        descending = -1 if reverse_order else 1
        compare = compare_fn if callable(compare_fn) else default_compare

        def comparison_record(index: int, value: Any) -> ComparisonRecord:
            return ComparisonRecord(
                value=value,
                predicate_values=tuple(
                    get_predicate_value(predicate.get(value), index) for predicate in predicates
                ),
                tie_breaker=PredicateValue(value=index, kind=ValueKind.NUMBER, index=index),
            )

        def do_comparison(v1: ComparisonRecord, v2: ComparisonRecord) -> int:
            for i, predicate in enumerate(predicates):
                result = compare(v1.predicate_values[i], v2.predicate_values[i])
                if result:
                    return result * predicate.descending * descending
            return (
                compare(v1.tie_breaker, v2.tie_breaker)
                or default_compare(v1.tie_breaker, v2.tie_breaker)
            ) * descending

        records = [comparison_record(i, value) for i, value in enumerate(self._rows)]
        records.sort(key=cmp_to_key(do_comparison))
        _logger.debug("sorted %d rows by %d predicate(s)", len(records), len(predicates))
        return [record.value for record in records]


def order_by(
    array: Any,
    sort_predicate: Any = None,
    reverse_order: bool = False,
    compare_fn: Optional[CompareFn] = None,
) -> Any:
    """Sort ``array`` by ``sort_predicate``; ``None`` is returned unchanged."""
    if array is None:
        return array
    return MultiColumnSorter(array).sort(sort_predicate, reverse_order, compare_fn)
