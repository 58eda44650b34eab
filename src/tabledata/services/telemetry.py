"""Simple telemetry counters for the data pipeline.

``TelemetryService`` is a minimal counters holder intended to sit behind a
debug flag; ``TelemetryDataEvents`` plugs it into the pipeline as a
notification observer and counts pipeline events and rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

__all__ = ["TelemetryService", "TelemetryDataEvents"]


@dataclass
class TelemetryService:
    """A simple telemetry counters service.

    Attributes:
        enabled: If False, operations are no-ops.
        _counters: Internal mapping of counter name to integer value.
    """

    enabled: bool = False
    _counters: Dict[str, int] = field(default_factory=dict)

    def increment(self, name: str, delta: int = 1) -> None:
        """Increment counter `name` by `delta` (no-op if disabled)."""
        if not self.enabled or delta == 0:
            return
        self._counters[name] = self._counters.get(name, 0) + int(delta)

    def get(self, name: str) -> int:
        return int(self._counters.get(name, 0))

    def snapshot(self) -> Dict[str, int]:
        return dict(self._counters)

    def reset(self) -> None:
        self._counters.clear()


class TelemetryDataEvents:
    """Observer counting filter/sort notifications and the rows they carried."""

    FILTERED = "pipeline.filtered"
    FILTERED_ROWS = "pipeline.filtered_rows"
    SORTED = "pipeline.sorted"
    SORTED_ROWS = "pipeline.sorted_rows"

    def __init__(self, telemetry: TelemetryService) -> None:
        self.telemetry = telemetry

    def after_data_filtered(self, params: Any, data: Sequence[Any]) -> None:
        self.telemetry.increment(self.FILTERED)
        self.telemetry.increment(self.FILTERED_ROWS, len(data))

    def after_data_sorted(self, params: Any, data: Sequence[Any]) -> None:
        self.telemetry.increment(self.SORTED)
        self.telemetry.increment(self.SORTED_ROWS, len(data))
