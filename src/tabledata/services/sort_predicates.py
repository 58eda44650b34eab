"""Sort predicate compilation.

Turns a sort specification (callable, ``"[+|-]path"`` string, or a list of
those) into an ordered list of ``SortPredicate`` objects. Field paths are
compiled once into ``PathAccessor`` objects.

Path syntax::

    name
    address.city
    tags[0]
    meta["display name"].short

A path consisting only of a quoted string or integer literal (``'"name"'``,
``"0"``) is constant: the literal is evaluated once and used as a direct key
lookup on every record.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, List, Tuple, Union

from .predicate_values import UNDEFINED

__all__ = [
    "PathSyntaxError",
    "PathAccessor",
    "SortPredicate",
    "compile_path",
    "compile_predicates",
    "identity",
    "resolve_step",
]

Accessor = Callable[[Any], Any]
SortEntry = Union[str, Accessor]

_IDENT = re.compile(r"[A-Za-z_$][\w$]*")
_KEY = r"""(?:(-?\d+)|"((?:[^"\\]|\\.)*)"|'((?:[^'\\]|\\.)*)')"""
_BRACKET = re.compile(r"\[\s*" + _KEY + r"\s*\]")
_LITERAL = re.compile(r"^" + _KEY + r"$")
_ESCAPE = re.compile(r"\\(.)")


class PathSyntaxError(ValueError):
    """Raised when a sort path cannot be compiled."""

    def __init__(self, path: str, position: int):
        super().__init__(f"Invalid sort path {path!r} at position {position}")
        self.path = path
        self.position = position


def identity(value: Any) -> Any:
    return value


def _literal_key(match: "re.Match[str]") -> Union[int, str]:
    number, double_quoted, single_quoted = match.group(1, 2, 3)
    if number is not None:
        return int(number)
    text = double_quoted if double_quoted is not None else single_quoted
    return _ESCAPE.sub(r"\1", text)


def resolve_step(current: Any, key: Union[int, str]) -> Any:
    """Resolve one path step; anything unreachable yields ``UNDEFINED``."""
    if current is None or current is UNDEFINED:
        return UNDEFINED
    if isinstance(current, Mapping):
        value = current.get(key, UNDEFINED)
        # JSON object keys are always strings
        if value is UNDEFINED and isinstance(key, int):
            value = current.get(str(key), UNDEFINED)
        return value
    if isinstance(key, int):
        if isinstance(current, Sequence) and 0 <= key < len(current):
            return current[key]
        return UNDEFINED
    return getattr(current, key, UNDEFINED)


class PathAccessor:
    """Compiled field accessor for a dotted/bracketed path."""

    __slots__ = ("source", "steps", "constant", "_literal")

    def __init__(self, source: str, steps: Tuple[Union[int, str], ...], *, literal: Any = UNDEFINED):
        self.source = source
        self.steps = steps
        self.constant = literal is not UNDEFINED
        self._literal = literal

    def __call__(self, record: Any = UNDEFINED) -> Any:
        if self.constant:
            return self._literal
        current = record
        for key in self.steps:
            current = resolve_step(current, key)
            if current is UNDEFINED:
                break
        return current

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"PathAccessor({self.source!r})"


def compile_path(path: str) -> PathAccessor:
    text = path.strip()
    literal = _LITERAL.match(text)
    if literal is not None:
        return PathAccessor(path, (), literal=_literal_key(literal))

    steps: List[Union[int, str]] = []
    pos = 0
    while pos < len(text):
        if text[pos] == "[":
            match = _BRACKET.match(text, pos)
            if match is None:
                raise PathSyntaxError(path, pos)
            steps.append(_literal_key(match))
        else:
            if text[pos] == ".":
                if not steps:
                    raise PathSyntaxError(path, pos)
                pos += 1
            elif steps:
                raise PathSyntaxError(path, pos)
            match = _IDENT.match(text, pos)
            if match is None:
                raise PathSyntaxError(path, pos)
            steps.append(match.group(0))
        pos = match.end()
    if not steps:
        raise PathSyntaxError(path, 0)
    return PathAccessor(path, tuple(steps))


@dataclass(frozen=True)
class SortPredicate:
    get: Accessor
    # 1 ascending, -1 descending
    descending: int = 1


def _key_lookup(key: Union[int, str]) -> Accessor:
    def get(value: Any) -> Any:
        return resolve_step(value, key)

    return get


def _compile_entry(entry: Any) -> SortPredicate:
    descending = 1
    get: Accessor = identity

    if callable(entry):
        get = entry
    elif isinstance(entry, str):
        if entry[:1] in ("+", "-"):
            descending = -1 if entry[0] == "-" else 1
            entry = entry[1:]
        if entry != "":
            get = compile_path(entry)
            if getattr(get, "constant", False):
                get = _key_lookup(get())
    return SortPredicate(get=get, descending=descending)


def compile_predicates(sort_predicate: Any) -> List[SortPredicate]:
    """Compile a sort specification into ordered ``SortPredicate`` objects.

    A single entry is treated as a one-element list and an empty list as
    ``["+"]`` (ascending by the record itself).
    """
    if not isinstance(sort_predicate, (list, tuple)):
        sort_predicate = [sort_predicate]
    if len(sort_predicate) == 0:
        sort_predicate = ["+"]
    return [_compile_entry(entry) for entry in sort_predicate]
