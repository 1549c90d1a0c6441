"""File too large exception."""

from ....core.exceptions import InvalidRequestError
from .upload_error import UploadError


class FileTooLarge(UploadError, InvalidRequestError):
    """Raised when the declared size exceeds the configured cap."""

    def __init__(self, size: int, max_size: int, **kwargs):
        super().__init__(
            f"File size {size} bytes exceeds maximum allowed size of {max_size} bytes",
            size=size,
            max_size=max_size,
            **kwargs
        )
        self.size = size
        self.max_size = max_size
