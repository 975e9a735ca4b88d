"""Pydantic configuration models for the jstat exporter."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Tuple

from ..collectors.reports import REPORT_NAMES
from ..utils.logger import LOG_LEVELS


class WebConfig(BaseModel):
    """HTTP exposition configuration."""
    listen_address: str = ":9010"
    telemetry_path: str = "/metrics"

    @field_validator('listen_address')
    @classmethod
    def validate_listen_address(cls, v: str) -> str:
        """Validate [host]:port format."""
        parse_listen_address(v)
        return v

    @field_validator('telemetry_path')
    @classmethod
    def validate_telemetry_path(cls, v: str) -> str:
        """Metrics must live under an absolute path other than the landing page."""
        if not v.startswith('/'):
            raise ValueError('Telemetry path must start with /')
        if v == '/':
            raise ValueError('Telemetry path cannot be / (reserved for the landing page)')
        return v

    @property
    def host(self) -> str:
        return parse_listen_address(self.listen_address)[0]

    @property
    def port(self) -> int:
        return parse_listen_address(self.listen_address)[1]


class JstatConfig(BaseModel):
    """jstat invocation configuration."""
    path: str = "/usr/bin/jstat"
    timeout_seconds: float = Field(default=10.0, gt=0, le=300)
    sample_attempts: int = Field(default=1, ge=1, le=5)
    retry_delay_seconds: float = Field(default=0.5, ge=0, le=30)
    reports: List[str] = Field(default_factory=lambda: list(REPORT_NAMES))

    @field_validator('reports')
    @classmethod
    def validate_reports(cls, v: List[str]) -> List[str]:
        """Only catalog reports, each at most once."""
        if not v:
            raise ValueError('At least one jstat report must be enabled')
        unknown = [name for name in v if name not in REPORT_NAMES]
        if unknown:
            raise ValueError(
                f"Unknown jstat report(s): {', '.join(unknown)}. "
                f"Known reports: {', '.join(REPORT_NAMES)}"
            )
        if len(set(v)) != len(v):
            raise ValueError('Duplicate jstat reports configured')
        return v


class TargetConfig(BaseModel):
    """Monitored JVM configuration."""
    pid: str = "0"

    @field_validator('pid', mode='before')
    @classmethod
    def validate_pid(cls, v) -> str:
        """Accept ints or digit strings."""
        v = str(v).strip()
        if not v.isdigit():
            raise ValueError('Target pid must be a non-negative integer')
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Standard logging level names only."""
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f'Invalid log level: {v}')
        return v


class ExporterConfig(BaseModel):
    """Root configuration model for the exporter."""
    namespace: str = "jstat"
    web: WebConfig = Field(default_factory=WebConfig)
    jstat: JstatConfig = Field(default_factory=JstatConfig)
    target: TargetConfig = Field(default_factory=TargetConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator('namespace')
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        """Namespace becomes a Prometheus metric name prefix."""
        if not v or not (v[0].isalpha() or v[0] == '_') or not all(c.isalnum() or c == '_' for c in v):
            raise ValueError('Namespace must be a valid Prometheus metric name prefix')
        return v


def parse_listen_address(address: str) -> Tuple[str, int]:
    """
    Split a listen address into host and port.

    Args:
        address: "[host]:port", e.g. ":9010", "127.0.0.1:9010", "[::]:9010"

    Returns:
        Tuple[str, int]: Host ("" for all interfaces) and port

    Raises:
        ValueError: If the port is missing or out of range
    """
    host, sep, port = address.rpartition(':')
    if not sep:
        raise ValueError(f'Listen address must be [host]:port, got {address!r}')
    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]
    if not port.isdigit() or not 0 < int(port) < 65536:
        raise ValueError(f'Invalid port in listen address {address!r}')
    return host, int(port)
