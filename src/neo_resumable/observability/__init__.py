"""Observability for neo-resumable."""

from .observer import (
    UploadObserver,
    NoopObserver,
    LoggingObserver,
    get_observer,
    set_observer,
    enable_logging_observer,
    notify,
)

__all__ = [
    "UploadObserver",
    "NoopObserver",
    "LoggingObserver",
    "get_observer",
    "set_observer",
    "enable_logging_observer",
    "notify",
]
