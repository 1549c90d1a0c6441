"""Base exception for resumable upload operations.

Every upload failure carries the session it concerns (when known) plus
free-form context folded into ``details`` for API responses.
"""

from typing import Any, Dict, Optional

from ....core.exceptions import NeoResumableError


class UploadError(NeoResumableError):
    """Base class for all resumable upload errors."""

    def __init__(
        self,
        message: str,
        session_id: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        **context: Any
    ):
        """Initialize upload error.

        Args:
            message: Human-readable error message
            session_id: Upload session the error concerns
            error_code: Specific error code (defaults to the class name)
            details: Additional details about the failure
            **context: Extra detail fields; ``None`` values are skipped
        """
        enhanced_details = dict(details or {})
        if session_id:
            enhanced_details["session_id"] = str(session_id)
        for key, value in context.items():
            if value is not None:
                enhanced_details[key] = value

        super().__init__(message=message, error_code=error_code, details=enhanced_details)
