"""Invalid file type exception.

Raised when the declared MIME type is outside the configured allow-list.
"""

from typing import List, Optional

from ....core.exceptions import InvalidRequestError
from .upload_error import UploadError


class InvalidFileType(UploadError, InvalidRequestError):
    """Raised when a MIME type is not admitted by the allow-list."""

    def __init__(self, mime_type: str, allowed_types: Optional[List[str]] = None, **kwargs):
        super().__init__(
            f"File type '{mime_type}' is not allowed",
            mime_type=mime_type,
            allowed_types=list(allowed_types) if allowed_types else None,
            **kwargs
        )
        self.mime_type = mime_type
        self.allowed_types = list(allowed_types or [])
