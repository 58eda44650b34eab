"""Logging helpers for the table data package.

Modules log through ``logging.getLogger(__name__)``; everything lives under
the ``tabledata`` logger. This module provides:

 - ``configure_logging``: install a single console handler on that logger
   (idempotent, used by the CLI).
 - ``LoggingService``: an in-process handler keeping recent records in a
   ring buffer, handy for inspecting what a pipeline run did (stage counts
   and timings are logged at DEBUG level).
"""

from __future__ import annotations

import logging
import sys
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Deque, List, Optional, TextIO

from ..config import settings

__all__ = [
    "APP_LOGGER_NAME",
    "LogEntry",
    "LoggingService",
    "configure_logging",
]

APP_LOGGER_NAME = "tabledata"
DEFAULT_FORMAT = "%(asctime)s [%(levelname).4s] %(name)s: %(message)s"
_HANDLER_MARKER = "_tabledata_console"


def configure_logging(level: str | int | None = None, stream: TextIO | None = None) -> logging.Logger:
    """Attach one console handler to the package logger and set its level."""
    logger = logging.getLogger(APP_LOGGER_NAME)
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)
    return logger


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(self, capacity: int = 500, logger_name: str = APP_LOGGER_NAME) -> None:
        self._capacity = capacity
        self._logger_name = logger_name
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(logging.DEBUG)
        self._previous_level: Optional[int] = None

    # Lifecycle --------------------------------------------------------
    def attach(self) -> None:
        if self._previous_level is not None:
            return
        logger = logging.getLogger(self._logger_name)
        self._previous_level = logger.level
        logger.addHandler(self._handler)
        if logger.getEffectiveLevel() > logging.DEBUG:
            logger.setLevel(logging.DEBUG)

    def detach(self) -> None:
        if self._previous_level is None:
            return
        logger = logging.getLogger(self._logger_name)
        logger.removeHandler(self._handler)
        logger.setLevel(self._previous_level)
        self._previous_level = None

    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
