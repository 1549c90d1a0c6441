"""Logging setup for the resumable upload service.

Everything goes through the standard ``logging`` package configured with
``dictConfig``. Environment variables pick the level and format:

- ``LOG_LEVEL``: explicit level, wins when set
- ``LOG_VERBOSITY``: QUIET | NORMAL | VERBOSE | DEBUG, used otherwise
- ``LOG_FORMAT``: simple | detailed | json
- ``ENABLE_STORAGE_LOGGING``: let blob store chatter through below WARNING

Each record carries the ``request_id`` of the operation it was emitted in.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict

from ..core.context import current_context

PACKAGE_LOGGER = "neo_resumable"
STORAGE_LOGGER = "neo_resumable.uploads.infrastructure.storage"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    QUIET = "QUIET"
    NORMAL = "NORMAL"
    VERBOSE = "VERBOSE"
    DEBUG = "DEBUG"


class LogFormat(str, Enum):
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


_VERBOSITY_LEVELS = {
    LogVerbosity.QUIET: LogLevel.ERROR,
    LogVerbosity.NORMAL: LogLevel.WARNING,
    LogVerbosity.VERBOSE: LogLevel.INFO,
    LogVerbosity.DEBUG: LogLevel.DEBUG,
}

_FORMATS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - [%(request_id)s] %(message)s",
    LogFormat.DETAILED: (
        "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] "
        "[%(filename)s:%(lineno)d] - %(message)s"
    ),
    LogFormat.JSON: (
        '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s",'
        '"request_id":"%(request_id)s","message":"%(message)s"}'
    ),
}


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map a verbosity mode to a level name; unknown modes read as NORMAL."""
    try:
        mode = LogVerbosity(verbosity.upper())
    except ValueError:
        mode = LogVerbosity.NORMAL
    return _VERBOSITY_LEVELS[mode].value


def resolve_log_level(log_level: str, log_verbosity: str) -> str:
    """An explicit level wins over the verbosity mode."""
    if log_level and log_level.upper() in LogLevel.__members__:
        return log_level.upper()
    return get_log_level_from_verbosity(log_verbosity)


class RequestIdFilter(logging.Filter):
    """Stamp records with the request id of the bound operation context."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = current_context().request_id
        return True


class LoggingConfig:
    """Builds and applies the process logging configuration."""

    # Third-party loggers that only report errors
    ERROR_ONLY_MODULES = ["httpx", "httpcore", "asyncio"]

    # Loggers held at WARNING outside debug mode
    QUIET_MODULES = ["uvicorn.access"]

    @staticmethod
    def _logger(level: str) -> Dict[str, Any]:
        return {"level": level, "handlers": ["console"], "propagate": False}

    @classmethod
    def build_config(cls) -> Dict[str, Any]:
        """The ``dictConfig`` mapping for the current environment."""
        level = resolve_log_level(os.getenv("LOG_LEVEL", ""), os.getenv("LOG_VERBOSITY", "NORMAL"))
        debugging = level == LogLevel.DEBUG.value

        try:
            log_format = LogFormat(os.getenv("LOG_FORMAT", LogFormat.SIMPLE.value).lower())
        except ValueError:
            log_format = LogFormat.SIMPLE

        loggers: Dict[str, Dict[str, Any]] = {PACKAGE_LOGGER: cls._logger(level)}
        for module in cls.QUIET_MODULES:
            loggers[module] = cls._logger("DEBUG" if debugging else "WARNING")
        for module in cls.ERROR_ONLY_MODULES:
            loggers[module] = cls._logger("ERROR")

        if os.getenv("ENABLE_STORAGE_LOGGING", "false").lower() != "true" and not debugging:
            loggers[STORAGE_LOGGER] = cls._logger("WARNING")

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "request_id": {"()": RequestIdFilter},
            },
            "formatters": {
                "default": {
                    "format": _FORMATS[log_format],
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "default",
                    "filters": ["request_id"],
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": loggers,
        }

    @classmethod
    def configure(cls) -> None:
        config = cls.build_config()
        logging.config.dictConfig(config)
        logging.getLogger(__name__).debug(f"Logging configured: level={config['root']['level']}")

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        return logging.getLogger(name)


def setup_logging() -> None:
    """Configure logging once at process start."""
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    return LoggingConfig.get_logger(name)
