"""Comparable predicate values for the sort stage.

Every value produced by a sort accessor is normalised into a
``PredicateValue``: the (possibly unwrapped) value, a ``ValueKind`` tag and
the original position of the record it came from. ``default_compare`` then
defines a total order over those tagged values:

 - Differing kinds: ``UNDEFINED`` sorts last, ``NULL`` second to last, the
   remaining kinds by tag name (boolean < number < object < string).
 - Same kind: strings compare case-insensitively, plain objects compare by
   original position, everything else compares by value.

Python has no ``undefined``; accessors return the module-level ``UNDEFINED``
sentinel when a field is missing so that it can be told apart from ``None``.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any

__all__ = [
    "UNDEFINED",
    "ValueKind",
    "PredicateValue",
    "get_predicate_value",
    "default_compare",
    "is_primitive",
]


class _Undefined:
    """Marker for a value that does not exist (missing key / attribute)."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):  # keep the singleton across copy/pickle
        return (_Undefined, ())


UNDEFINED = _Undefined()


class ValueKind(str, Enum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    OBJECT = "object"
    STRING = "string"
    NULL = "null"
    UNDEFINED = "undefined"

    @property
    def rank(self) -> int:
        return _KIND_RANK[self]


# Explicit total order between kinds; known kinds follow tag-name order.
_KIND_RANK = {
    ValueKind.BOOLEAN: 0,
    ValueKind.NUMBER: 1,
    ValueKind.OBJECT: 2,
    ValueKind.STRING: 3,
    ValueKind.NULL: 4,
    ValueKind.UNDEFINED: 5,
}


@dataclass(frozen=True)
class PredicateValue:
    value: Any
    kind: ValueKind
    index: int


def is_primitive(value: Any) -> bool:
    return isinstance(value, (bool, str)) or isinstance(value, numbers.Real)


def _kind_of(value: Any) -> ValueKind:
    if value is UNDEFINED:
        return ValueKind.UNDEFINED
    if value is None:
        return ValueKind.NULL
    # bool before numbers: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, numbers.Real):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    return ValueKind.OBJECT


def _datetime_seconds(value: datetime) -> float:
    """Seconds since ``datetime.min``; aware values are measured in UTC."""
    seconds = (value.replace(tzinfo=None) - datetime.min).total_seconds()
    offset = value.utcoffset()
    if offset is not None:
        seconds -= offset.total_seconds()
    return seconds


def _value_representation(value: Any) -> Any:
    """Return the value-like representation of ``value`` (may be non primitive)."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return _datetime_seconds(value)
    if isinstance(value, date):
        return _datetime_seconds(datetime.combine(value, time.min))
    if isinstance(value, time):
        return value.hour * 3600 + value.minute * 60 + value.second + value.microsecond / 1e6
    if getattr(type(value), "__float__", None) is not None:
        try:
            return float(value)
        except (TypeError, ValueError, OverflowError):
            return value
    return value


def _has_custom_str(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


def _object_value(value: Any) -> Any:
    unwrapped = _value_representation(value)
    if is_primitive(unwrapped):
        return unwrapped
    if _has_custom_str(value):
        text = str(value)
        if is_primitive(text):
            return text
    return value


def get_predicate_value(value: Any, index: int) -> PredicateValue:
    """Tag ``value`` (taken from the record at ``index``) for comparison."""
    kind = _kind_of(value)
    if kind is ValueKind.OBJECT:
        value = _object_value(value)
        kind = _kind_of(value)
    return PredicateValue(value=value, kind=kind, index=index)


def default_compare(v1: PredicateValue, v2: PredicateValue) -> int:
    kind1, kind2 = v1.kind, v2.kind
    if kind1 is not kind2:
        return -1 if kind1.rank < kind2.rank else 1

    value1, value2 = v1.value, v2.value
    if kind1 is ValueKind.STRING:
        value1 = value1.lower()
        value2 = value2.lower()
    elif kind1 is ValueKind.OBJECT:
        # Plain objects keep their position in the collection
        value1 = v1.index
        value2 = v2.index
    elif kind1 in (ValueKind.NULL, ValueKind.UNDEFINED):
        return 0

    if value1 == value2:
        return 0
    return -1 if value1 < value2 else 1
