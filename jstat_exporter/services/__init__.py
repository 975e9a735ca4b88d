"""Metric registry, retry policy and HTTP exposition."""
