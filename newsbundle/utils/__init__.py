"""Utility exports."""

from .dates import format_date, pad, utc_now
from .logging import configure_logging, get_logger

__all__ = [
    "format_date",
    "pad",
    "utc_now",
    "configure_logging",
    "get_logger",
]
