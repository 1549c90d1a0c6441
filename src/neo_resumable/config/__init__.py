"""Configuration module for neo-resumable."""

from .settings import UploadSettings, get_settings, MIB
from .logging_config import (
    LoggingConfig,
    LogFormat,
    LogLevel,
    LogVerbosity,
    setup_logging,
    get_logger,
)

__all__ = [
    "UploadSettings",
    "get_settings",
    "MIB",
    "LoggingConfig",
    "LogFormat",
    "LogLevel",
    "LogVerbosity",
    "setup_logging",
    "get_logger",
]
