"""Base collector abstract class and per-report error containment."""

from abc import ABC, abstractmethod
from typing import Any
import logging
from functools import wraps

from ..exceptions import ExecutionError, MalformedOutputError, SamplerTimeoutError
from ..utils.status import ReportStatus
from ..utils.metrics import ReportOutcome, ScrapeResult


class BaseCollector(ABC):
    """Abstract base class for scrape-driven collectors."""

    def __init__(self, config: Any, logger: logging.Logger):
        """
        Initialize base collector.

        Args:
            config: Collector-specific configuration
            logger: Logger instance
        """
        self.config = config
        self.logger = logger.getChild(self.__class__.__name__)

    @abstractmethod
    def scrape(self) -> ScrapeResult:
        """
        Sample every configured report and return the current metric set.

        Returns:
            ScrapeResult: Current values, including stale ones for failed reports

        Note:
            Implementations must not raise for environmental failures; wrap
            per-report work with @safe_report.
        """
        pass


# Environmental failures that leave a report's metrics stale instead of
# failing the scrape
_CONTAINED_ERRORS = {
    SamplerTimeoutError: ReportStatus.TIMEOUT,
    ExecutionError: ReportStatus.EXECUTION_ERROR,
    MalformedOutputError: ReportStatus.MALFORMED_OUTPUT,
}


def safe_report(func):
    """
    Decorator to contain sampling and parsing failures of one report.

    The wrapped method takes the report as its first argument and returns a
    ReportOutcome. Execution, timeout and malformed-output errors are logged
    and turned into a failed outcome; anything else propagates.

    Args:
        func: Collector method to wrap

    Returns:
        Wrapped function that always yields a ReportOutcome for contained errors
    """
    @wraps(func)
    def wrapper(self, report, *args, **kwargs):
        try:
            return func(self, report, *args, **kwargs)
        except tuple(_CONTAINED_ERRORS) as e:
            status = next(s for cls, s in _CONTAINED_ERRORS.items() if isinstance(e, cls))
            self.logger.warning(
                f"Report {report.name} failed, keeping previous values: {e}",
                extra={"report": report.name, "status": status.value}
            )
            return ReportOutcome(report=report.name, status=status, error=str(e))
    return wrapper
