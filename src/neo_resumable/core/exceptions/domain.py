"""Domain exception categories.

Concrete upload errors derive from one of these so the HTTP layer can map
whole families at once.
"""

from .base import NeoResumableError


# Configuration Errors
class ConfigurationError(NeoResumableError):
    """Raised when settings are missing or inconsistent."""
    pass


# Request Errors
class InvalidRequestError(NeoResumableError):
    """Raised when a caller supplies malformed or disallowed input."""
    pass


# Business Logic Errors
class BusinessLogicError(NeoResumableError):
    """Base class for business rule violations."""
    pass


class ResourceNotFoundError(BusinessLogicError):
    """Raised when a referenced resource does not exist."""
    pass


class DuplicateResourceError(BusinessLogicError):
    """Raised when a resource that must be unique already exists."""
    pass


class InvalidStateError(BusinessLogicError):
    """Raised when an operation is not valid in the current state."""
    pass


# Infrastructure Errors
class ExternalServiceError(NeoResumableError):
    """Raised when a backing service (blob store, filesystem) fails."""
    pass


class OperationTimeoutError(NeoResumableError):
    """Raised when an operation exceeds its deadline."""
    pass
