"""Completion exceptions."""

from typing import Optional

from ....core.exceptions import InvalidStateError, OperationTimeoutError
from .upload_error import UploadError


class UploadIncomplete(UploadError, InvalidStateError):
    """Raised when completion is requested before every chunk arrived."""

    def __init__(self, session_id: str, uploaded_chunks: int, total_chunks: int, **kwargs):
        super().__init__(
            f"Upload incomplete: {uploaded_chunks} of {total_chunks} chunks uploaded",
            session_id=session_id,
            uploaded_chunks=uploaded_chunks,
            total_chunks=total_chunks,
            **kwargs
        )
        self.uploaded_chunks = uploaded_chunks
        self.total_chunks = total_chunks


class AssemblyFailed(UploadError, InvalidStateError):
    """Raised when assembly fails. The session is marked failed for good."""

    def __init__(self, session_id: str, reason: str, chunk_index: Optional[int] = None, **kwargs):
        super().__init__(
            f"Assembly failed: {reason}",
            session_id=session_id,
            chunk_index=chunk_index,
            **kwargs
        )
        self.reason = reason


class UploadTimedOut(UploadError, OperationTimeoutError):
    """Raised when an operation runs past its context deadline."""

    def __init__(self, operation: str, session_id: Optional[str] = None, **kwargs):
        super().__init__(
            f"Operation '{operation}' exceeded its deadline",
            session_id=session_id,
            operation=operation,
            **kwargs
        )
        self.operation = operation
