"""Root of the neo-resumable exception tree.

Every error raised by the upload engine is a ``NeoResumableError`` carrying a
stable ``error_code`` and a ``details`` mapping. Upload errors put the
affected ``session_id`` into ``details`` so handlers and hooks can correlate
a failure with its session.
"""

from typing import Any, Dict, Optional


class NeoResumableError(Exception):
    """Base exception for upload engine errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = dict(details or {})

    @property
    def session_id(self) -> Optional[str]:
        """Session the error refers to, when there is one."""
        return self.details.get("session_id")


def get_http_status_code(exception: Exception) -> int:
    """Status code for ``exception`` under the active status mapping."""
    from .http_mapping import get_http_status_code as mapped_status
    return mapped_status(exception)


def create_error_response(exception: NeoResumableError) -> Dict[str, Any]:
    """JSON body returned to HTTP clients for ``exception``."""
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": type(exception).__name__,
        }
    }
