"""Exceptions raised by the jstat exporter core."""

from typing import List, Optional


class JstatExporterError(Exception):
    """Base exception for jstat exporter errors."""


class ExecutionError(JstatExporterError):
    """Raised when the jstat invocation fails (missing tool, non-zero exit, unknown pid)."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.cause = cause


class SamplerTimeoutError(JstatExporterError, TimeoutError):
    """Raised when the jstat invocation exceeds its time bound."""

    def __init__(self, message: str, command: Optional[List[str]] = None, timeout: Optional[float] = None):
        super().__init__(message)
        self.command = command
        self.timeout = timeout


class MalformedOutputError(JstatExporterError):
    """Raised when jstat output does not match the expected report layout."""

    def __init__(self, message: str, report: str, line: Optional[str] = None):
        super().__init__(message)
        self.report = report
        self.line = line


class UnknownMetricError(JstatExporterError, KeyError):
    """Raised when updating a metric that was never declared."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class DuplicateMetricError(JstatExporterError):
    """Raised when a metric is declared twice with different definitions."""
