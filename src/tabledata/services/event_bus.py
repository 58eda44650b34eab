"""Data pipeline notifications.

Two pieces:

 - ``DataEventsObserver``: the per-call observer interface the pipeline
   talks to (``after_data_filtered`` / ``after_data_sorted``). Return values
   are ignored.
 - ``EventBus``: a lightweight synchronous publish/subscribe bus, plus
   ``EventBusDataEvents`` which adapts it to the observer interface so that
   several listeners (grid refresh, telemetry, logging) can follow one
   table. A bus is created by the caller and passed in; nothing here is
   process-wide.

Handler failures on the bus are isolated: one failing handler does not stop
the others, the exception is recorded on ``EventBus.errors`` and logged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol, Sequence, runtime_checkable

_logger = logging.getLogger(__name__)

__all__ = [
    "TableEvent",
    "Event",
    "DataEventPayload",
    "EventBus",
    "EventHandler",
    "Subscription",
    "DataEventsObserver",
    "NullDataEvents",
    "EventBusDataEvents",
    "CompositeDataEvents",
]


class TableEvent(str, Enum):
    AFTER_DATA_FILTERED = "after_data_filtered"
    AFTER_DATA_SORTED = "after_data_sorted"


@dataclass
class Event:
    name: str  # matches TableEvent value or custom string
    payload: Any
    timestamp: float


@dataclass(frozen=True)
class DataEventPayload:
    params: Any
    data: Sequence[Any]


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | TableEvent) -> str:
    return name.value if isinstance(name, TableEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Subscriber lists are guarded by a re-entrant lock; handlers run with the
    lock released (copy-first) so they may subscribe/unsubscribe themselves.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    def subscribe(
        self, name: str | TableEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        key = _key(name)
        sub = Subscription(event=key, handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                for i, existing in enumerate(bucket):
                    if existing is sub:
                        bucket.pop(i)
                        break
                if not bucket:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    def publish(self, name: str | TableEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                _logger.warning("handler for %r failed: %s", key, exc, exc_info=True)
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | TableEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)


@runtime_checkable
class DataEventsObserver(Protocol):
    def after_data_filtered(self, params: Any, data: Sequence[Any]) -> None: ...  # pragma: no cover

    def after_data_sorted(self, params: Any, data: Sequence[Any]) -> None: ...  # pragma: no cover


class NullDataEvents:
    """Observer that ignores both notifications."""

    def after_data_filtered(self, params: Any, data: Sequence[Any]) -> None:
        return None

    def after_data_sorted(self, params: Any, data: Sequence[Any]) -> None:
        return None


class EventBusDataEvents:
    """Publishes pipeline notifications on an ``EventBus``."""

    def __init__(self, bus: EventBus) -> None:
        self.bus = bus

    def after_data_filtered(self, params: Any, data: Sequence[Any]) -> None:
        self.bus.publish(TableEvent.AFTER_DATA_FILTERED, DataEventPayload(params, data))

    def after_data_sorted(self, params: Any, data: Sequence[Any]) -> None:
        self.bus.publish(TableEvent.AFTER_DATA_SORTED, DataEventPayload(params, data))


class CompositeDataEvents:
    """Fans notifications out to several observers, in order."""

    def __init__(self, *observers: DataEventsObserver) -> None:
        self.observers = list(observers)

    def after_data_filtered(self, params: Any, data: Sequence[Any]) -> None:
        for observer in self.observers:
            observer.after_data_filtered(params, data)

    def after_data_sorted(self, params: Any, data: Sequence[Any]) -> None:
        for observer in self.observers:
            observer.after_data_sorted(params, data)
