"""HTTP status code mapping for exceptions.

This module provides both static and configurable HTTP status code mapping,
allowing runtime customization of exception-to-status-code mappings
while maintaining sensible defaults.
"""

from typing import Any, Dict, Mapping, Optional, Type

from .base import NeoResumableError
from .domain import (
    ConfigurationError,
    InvalidRequestError,
    BusinessLogicError,
    ResourceNotFoundError,
    DuplicateResourceError,
    InvalidStateError,
    ExternalServiceError,
    OperationTimeoutError,
)


# Static HTTP Status Code mapping. Lookups walk the exception MRO, so
# concrete upload errors inherit the status of their category.
HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    InvalidRequestError: 400,
    BusinessLogicError: 400,
    DuplicateResourceError: 400,
    InvalidStateError: 400,
    ExternalServiceError: 400,

    # 404 Not Found
    ResourceNotFoundError: 404,

    # 408 Request Timeout
    OperationTimeoutError: 408,

    # 500 Internal Server Error
    ConfigurationError: 500,
    NeoResumableError: 500,
}


class HttpStatusMapper:
    """Configuration-driven HTTP status code mapper for exceptions.

    Overrides are keyed by exception class name and apply to subclasses too,
    e.g. ``{"ExternalServiceError": 502}`` upgrades every storage failure.
    """

    def __init__(self, overrides: Optional[Mapping[str, int]] = None):
        """Initialize with optional status overrides.

        Args:
            overrides: Mapping of exception class name to HTTP status code
        """
        self._overrides = dict(overrides or {})
        self._cache: Dict[Type[Exception], int] = {}

    def get_status_code(self, exception: Exception) -> int:
        """Get HTTP status code for exception with configuration override.

        Args:
            exception: The exception instance

        Returns:
            HTTP status code (cached for performance)
        """
        exception_type = type(exception)

        if exception_type in self._cache:
            return self._cache[exception_type]

        status_code = self._resolve(exception_type)
        self._cache[exception_type] = status_code
        return status_code

    def _resolve(self, exception_type: Type[Exception]) -> int:
        for klass in exception_type.__mro__:
            if klass is Exception:
                break
            if klass.__name__ in self._overrides:
                return int(self._overrides[klass.__name__])
            if klass in HTTP_STATUS_MAP:
                return HTTP_STATUS_MAP[klass]
        return 500

    def get_mapping_stats(self) -> Dict[str, Any]:
        """Get statistics about current mappings."""
        return {
            "cached_mappings": len(self._cache),
            "default_mappings": len(HTTP_STATUS_MAP),
            "overrides": dict(self._overrides),
            "cache_entries": {
                exc_type.__name__: status_code
                for exc_type, status_code in self._cache.items()
            }
        }


# Global mapper instance
_global_mapper: Optional[HttpStatusMapper] = None


def get_mapper() -> HttpStatusMapper:
    """Get or create the global HTTP status mapper."""
    global _global_mapper
    if _global_mapper is None:
        _global_mapper = HttpStatusMapper()
    return _global_mapper


def configure_status_overrides(overrides: Optional[Mapping[str, int]]) -> None:
    """Replace the global mapper with one using the given overrides."""
    global _global_mapper
    _global_mapper = HttpStatusMapper(overrides)


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception using configurable mapping.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    return get_mapper().get_status_code(exception)
