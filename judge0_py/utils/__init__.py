"""Utility functions."""

from .terminal import console, create_table, format_optional, format_status

__all__ = ["console", "create_table", "format_optional", "format_status"]
