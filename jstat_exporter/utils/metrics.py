"""Metric data structures shared by the sampler, registry and exposition layer."""

from dataclasses import dataclass, field
from typing import Optional, Dict, Tuple
import time
from .status import ReportStatus


@dataclass(frozen=True)
class Sample:
    """Raw jstat output captured for one report mode."""

    report: str
    text: str
    captured_at: float = field(default_factory=time.time)


@dataclass(frozen=True)
class MetricValue:
    """Current value of one declared gauge."""

    name: str
    value: float = 0.0
    updated_at: Optional[float] = None  # None until the first successful update


@dataclass(frozen=True)
class ReportOutcome:
    """Result of sampling and parsing one report mode during a scrape."""

    report: str
    status: ReportStatus
    error: Optional[str] = None


@dataclass(frozen=True)
class ScrapeResult:
    """Immutable view of all metric values as of one scrape."""

    metrics: Tuple[MetricValue, ...] = ()
    outcomes: Tuple[ReportOutcome, ...] = ()
    duration_seconds: Optional[float] = None

    def values(self) -> Dict[str, float]:
        """
        Map metric names to their current values.

        Returns:
            Dict[str, float]: Values in declaration order
        """
        return {metric.name: metric.value for metric in self.metrics}

    def outcome(self, report: str) -> Optional[ReportOutcome]:
        """Return the outcome recorded for *report*, or None if it did not run."""
        for outcome in self.outcomes:
            if outcome.report == report:
                return outcome
        return None

    @property
    def failed_reports(self) -> Tuple[str, ...]:
        """Names of reports whose values were left stale by this scrape."""
        return tuple(o.report for o in self.outcomes if not o.status.is_up)
