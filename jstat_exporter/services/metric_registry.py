"""In-memory store of the current value of every declared gauge."""

import logging
import threading
from typing import Dict, List, Optional

from ..exceptions import DuplicateMetricError, UnknownMetricError
from ..utils.metrics import MetricValue, ScrapeResult


class MetricRegistry:
    """
    Hold one value slot per declared metric for the lifetime of the process.

    Slots are declared once at startup from the report catalog, start at 0.0
    and are only ever overwritten, never removed. A failed report therefore
    leaves its metrics at their last known values.
    """

    def __init__(self, logger: logging.Logger = None):
        """
        Initialize metric registry.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._documentation: Dict[str, str] = {}
        self._values: Dict[str, MetricValue] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def declare(self, name: str, documentation: str = "") -> None:
        """
        Register a metric slot.

        Declaring the same name again with the same documentation is a no-op.

        Args:
            name: Metric name without namespace (e.g. "oldUsed")
            documentation: Help text published with the metric

        Raises:
            DuplicateMetricError: If *name* is already declared differently
        """
        with self._lock:
            existing = self._documentation.get(name)
            if existing is not None:
                if existing != documentation:
                    raise DuplicateMetricError(
                        f"Metric {name!r} already declared as {existing!r}, "
                        f"cannot redeclare as {documentation!r}"
                    )
                return

            self._documentation[name] = documentation
            self._values[name] = MetricValue(name=name)

        self.logger.debug(f"Declared metric {name}")

    def update(self, name: str, value: float, timestamp: float) -> None:
        """
        Overwrite a metric's current value.

        Args:
            name: Declared metric name
            value: New value
            timestamp: Time the value was sampled (epoch seconds)

        Raises:
            UnknownMetricError: If *name* was never declared
        """
        with self._lock:
            if name not in self._values:
                raise UnknownMetricError(f"Metric {name!r} was never declared")
            self._values[name] = MetricValue(name=name, value=float(value), updated_at=timestamp)

    def get(self, name: str) -> Optional[MetricValue]:
        """Return the current value of *name*, or None if undeclared."""
        with self._lock:
            return self._values.get(name)

    def documentation(self, name: str) -> str:
        """Return the help text declared for *name*."""
        with self._lock:
            if name not in self._documentation:
                raise UnknownMetricError(f"Metric {name!r} was never declared")
            return self._documentation[name]

    def names(self) -> List[str]:
        """Return declared metric names in declaration order."""
        with self._lock:
            return list(self._values)

    def snapshot(self) -> ScrapeResult:
        """
        Copy all current values.

        Returns:
            ScrapeResult: Immutable values in declaration order
        """
        with self._lock:
            return ScrapeResult(metrics=tuple(self._values.values()))

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
