"""Report outcome status enumeration."""

from enum import Enum


class ReportStatus(Enum):
    """Outcome of one report mode within a scrape."""

    OK = "ok"
    EXECUTION_ERROR = "execution_error"
    TIMEOUT = "timeout"
    MALFORMED_OUTPUT = "malformed_output"

    @property
    def is_up(self) -> bool:
        """
        Whether the report produced fresh values.

        Returns:
            bool: True only for OK
        """
        return self is ReportStatus.OK

    def to_gauge(self) -> float:
        """
        Convert status to the value published by the report_up gauge.

        Returns:
            float: 1.0 when the report succeeded, otherwise 0.0
        """
        return 1.0 if self.is_up else 0.0
