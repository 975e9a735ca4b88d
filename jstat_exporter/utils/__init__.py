"""Shared data structures and logging helpers."""
