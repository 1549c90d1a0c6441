"""Blob store exceptions.

Every failing blob store call surfaces as ``StorageOperationFailed`` so the
engine never leaks backend-specific exception types.
"""

from typing import Optional

from ....core.exceptions import ExternalServiceError, InvalidRequestError
from .upload_error import UploadError


class StorageOperationFailed(UploadError, ExternalServiceError):
    """Raised when a blob store operation fails."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        blob_name: Optional[str] = None,
        storage_type: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            message,
            operation=operation,
            blob_name=blob_name,
            storage_type=storage_type,
            **kwargs
        )
        self.operation = operation
        self.blob_name = blob_name


class BlobNotFound(StorageOperationFailed):
    """Raised when a named blob does not exist."""

    def __init__(self, blob_name: str, operation: Optional[str] = None, **kwargs):
        super().__init__(
            f"Blob '{blob_name}' not found",
            operation=operation,
            blob_name=blob_name,
            **kwargs
        )


class CleanupFailed(UploadError, ExternalServiceError):
    """Raised internally when chunk cleanup fails. Logged, never surfaced."""

    def __init__(self, session_id: str, failed_blobs: list, **kwargs):
        super().__init__(
            f"Failed to clean up {len(failed_blobs)} blob(s) for session '{session_id}'",
            session_id=session_id,
            failed_blobs=list(failed_blobs),
            **kwargs
        )
        self.failed_blobs = list(failed_blobs)


class InvalidSignedUrl(UploadError, InvalidRequestError):
    """Raised when a signed URL token is malformed, tampered or expired."""

    def __init__(self, reason: str, **kwargs):
        super().__init__(f"Invalid signed URL: {reason}", **kwargs)
