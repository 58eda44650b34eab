"""Named service registry for filter matchers.

Tables refer to their matcher by name (``FilterOptions.filter_filter_name``)
or fall back to the default name from ``config.settings``. A
``ServiceLocator`` instance maps those names to callables. Each
``DefaultGetData`` owns its own locator; there is no process-wide instance.

Usage pattern:
    locator = create_default_locator()
    locator.register("exact", functools.partial(filter_rows, comparator=True))
    matcher = locator.get("exact")

In tests:
    with locator.override_context(filter=fake_matcher):
        ...

Resolution failures raise ``ServiceNotFoundError``: an unknown matcher name
is a configuration error and is never replaced by a default.
"""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Any, Dict, Generator

from ..config import settings
from .filtering import filter_rows

__all__ = [
    "ServiceLocator",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "create_default_locator",
]

_MISSING = object()


class ServiceAlreadyRegisteredError(RuntimeError):
    """Raised when attempting to register an existing key without allow_override."""


class ServiceNotFoundError(KeyError):
    """Raised when a requested matcher name is not registered."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No service registered under {self.key!r}"


class ServiceLocator:
    """Thread-safe name -> matcher registry."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._services: Dict[str, Any] = {}

    def register(self, key: str, value: Any, *, allow_override: bool = False) -> None:
        """Register ``value`` (usually a matcher callable) under ``key``.

        Raises ``ServiceAlreadyRegisteredError`` if the name is taken and
        ``allow_override`` is False.
        """
        with self._lock:
            if key in self._services and not allow_override:
                raise ServiceAlreadyRegisteredError(f"Service '{key}' already registered")
            self._services[key] = value

    def get(self, key: str) -> Any:
        with self._lock:
            if key not in self._services:
                raise ServiceNotFoundError(key)
            return self._services[key]

    @contextmanager
    def override_context(self, **overrides: Any) -> Generator[None, None, None]:
        """Temporarily replace (or add) matchers; previous state is restored on exit."""
        with self._lock:
            previous = {key: self._services.get(key, _MISSING) for key in overrides}
            self._services.update(overrides)
        try:
            yield
        finally:
            with self._lock:
                for key, prior in previous.items():
                    if prior is _MISSING:
                        self._services.pop(key, None)
                    else:
                        self._services[key] = prior


def create_default_locator() -> ServiceLocator:
    """Locator pre-populated with the generic matcher under the default name."""
    locator = ServiceLocator()
    locator.register(settings.DEFAULT_FILTER_NAME, filter_rows)
    return locator
