"""Prometheus exporter for JVM memory pool metrics sampled with jstat."""

__version__ = "0.3.0"
