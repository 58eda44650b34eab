"""Filter stage helpers and the generic default matcher.

Responsibilities:
 - Rebuild nested filter criteria from the flat ``{"a.b": value}`` mapping a
   table keeps (``set_path`` / ``build_filter_criteria``), so matchers that
   expect the record's nested shape work against flat user input.
 - ``filter_rows``: generic matcher registered under the default filter name.

Matching rules of ``filter_rows``:
 - Every non-empty criteria leaf must match (``None`` / ``""`` match anything).
 - Nested dict criteria descend into the record field of the same name.
 - The ``"$"`` key matches against any field of the record, recursively.
 - Without comparator: case-insensitive substring match on the text forms;
   a leading ``!`` negates. ``comparator=True``: strict equality. A callable
   comparator receives ``(actual, expected)`` and decides.
 - List fields match when any element matches.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar, Union

from .predicate_values import UNDEFINED
from .sort_predicates import resolve_step

__all__ = [
    "set_path",
    "build_filter_criteria",
    "filter_rows",
    "FilterFn",
    "Comparator",
]

T = TypeVar("T")
Comparator = Union[None, bool, Callable[[Any, Any], bool]]
FilterFn = Callable[..., List[Any]]

ANY_FIELD = "$"


def set_path(obj: Dict[str, Any], value: Any, path: str) -> Dict[str, Any]:
    """Set ``value`` at the dotted ``path`` of ``obj``, creating parents as needed.

    Intermediate entries that are not dicts are replaced by empty dicts.
    Returns ``obj`` for chaining.
    """
    keys = path.split(".")
    target = obj
    for key in keys[:-1]:
        nested = target.get(key)
        if not isinstance(nested, dict):
            nested = {}
            target[key] = nested
        target = nested
    target[keys[-1]] = value
    return obj


def build_filter_criteria(flat: Mapping[str, Any]) -> Dict[str, Any]:
    """Fold a flat path -> value mapping into a nested criteria dict."""
    parsed: Dict[str, Any] = {}
    for key, value in flat.items():
        set_path(parsed, value, key)
    return parsed


def _is_empty(expected: Any) -> bool:
    return expected is None or expected is UNDEFINED or expected == ""


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _uses_default(comparator: Comparator) -> bool:
    return comparator is None or comparator is False


def _leaf_match(actual: Any, expected: Any, comparator: Comparator) -> bool:
    if _uses_default(comparator) and isinstance(expected, str) and expected.startswith("!"):
        return not _leaf_match(actual, expected[1:], comparator)
    if isinstance(actual, (list, tuple)):
        return any(_leaf_match(item, expected, comparator) for item in actual)
    if callable(comparator):
        return bool(comparator(actual, expected))
    if comparator is True:
        return actual == expected
    if actual is None or actual is UNDEFINED:
        return False
    return _text(expected).lower() in _text(actual).lower()


def _field_values(record: Any) -> Optional[Iterable[Any]]:
    if isinstance(record, Mapping):
        return record.values()
    if isinstance(record, (list, tuple)):
        return record
    if hasattr(record, "__dict__") and not isinstance(record, type):
        return [v for k, v in vars(record).items() if not k.startswith("_")]
    return None


def _match_any(actual: Any, expected: Any, comparator: Comparator) -> bool:
    if _uses_default(comparator) and isinstance(expected, str) and expected.startswith("!"):
        return not _match_any(actual, expected[1:], comparator)
    values = _field_values(actual)
    if values is None:
        return _leaf_match(actual, expected, comparator)
    return any(_match_any(value, expected, comparator) for value in values)


def _match_criteria(record: Any, criteria: Mapping[str, Any], comparator: Comparator) -> bool:
    for key, expected in criteria.items():
        if _is_empty(expected):
            continue
        if key == ANY_FIELD:
            matched = _match_any(record, expected, comparator)
        else:
            actual = resolve_step(record, key)
            if isinstance(expected, Mapping):
                if isinstance(actual, (list, tuple)):
                    matched = any(_match_criteria(item, expected, comparator) for item in actual)
                else:
                    matched = _match_criteria(actual, expected, comparator)
            else:
                matched = _leaf_match(actual, expected, comparator)
        if not matched:
            return False
    return True


def filter_rows(data: Iterable[T], criteria: Any, comparator: Comparator = None) -> List[T]:
    """Return the rows of ``data`` matching ``criteria`` (see module docs)."""
    if _is_empty(criteria):
        return list(data)
    if isinstance(criteria, Mapping):
        return [row for row in data if _match_criteria(row, criteria, comparator)]
    return [row for row in data if _match_any(row, criteria, comparator)]
