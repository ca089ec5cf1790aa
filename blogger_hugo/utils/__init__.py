"""
Shared utility functions.

This package contains utility code used across multiple
pipeline stages.
"""

from .logging import JsonlFormatter, PlainFormatter, log_event, record_fields, setup_logging

__all__ = [
    "setup_logging",
    "log_event",
    "record_fields",
    "JsonlFormatter",
    "PlainFormatter",
]
