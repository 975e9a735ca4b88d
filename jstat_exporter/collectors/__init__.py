"""Collectors that sample jstat and parse its output."""
