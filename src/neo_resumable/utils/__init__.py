"""Utilities module for neo-resumable.

This module provides utility functions and helpers used throughout
the neo-resumable library.
"""

from .timezone import utc_now, ensure_utc, to_utc_string, seconds_between
from .locks import AsyncReadWriteLock

__all__ = [
    # Timezone Utilities
    "utc_now",
    "ensure_utc",
    "to_utc_string",
    "seconds_between",
    # Concurrency
    "AsyncReadWriteLock",
]
