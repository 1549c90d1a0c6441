"""Exceptions module for neo-resumable.

This module provides the base exception hierarchy, organized by domain
concerns and infrastructure concerns.
"""

from .base import (
    NeoResumableError,
    get_http_status_code,
    create_error_response,
)
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

__all__ = [
    # Base
    "NeoResumableError",
    "get_http_status_code",
    "create_error_response",

    # Categories
    "ConfigurationError",
    "InvalidRequestError",
    "BusinessLogicError",
    "ResourceNotFoundError",
    "DuplicateResourceError",
    "InvalidStateError",
    "ExternalServiceError",
    "OperationTimeoutError",
]
