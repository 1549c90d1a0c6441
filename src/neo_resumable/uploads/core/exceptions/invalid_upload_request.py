"""Invalid upload request exception.

Raised for malformed initiation parameters: negative sizes, non-positive
chunk sizes, or file names that cannot be used in a blob name.
"""

from typing import Any, Optional

from ....core.exceptions import InvalidRequestError
from .upload_error import UploadError


class InvalidUploadRequest(UploadError, InvalidRequestError):
    """Raised when an upload request is malformed."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None, **kwargs):
        super().__init__(message, field=field, value=value, **kwargs)
        self.field = field
