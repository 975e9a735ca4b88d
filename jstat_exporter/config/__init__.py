"""Exporter configuration models and loading."""
