"""Chunk admission exceptions.

Raised by the chunk writer when a chunk cannot be accepted. None of these
leave a chunk recorded in the session.
"""

from typing import Optional

from ....core.exceptions import DuplicateResourceError, InvalidRequestError
from .upload_error import UploadError


class InvalidChunkIndex(UploadError, InvalidRequestError):
    """Raised when a chunk index falls outside ``[0, total_chunks)``."""

    def __init__(self, session_id: str, index: int, total_chunks: int, **kwargs):
        super().__init__(
            f"Chunk index {index} out of range [0, {total_chunks})",
            session_id=session_id,
            chunk_index=index,
            total_chunks=total_chunks,
            **kwargs
        )
        self.index = index
        self.total_chunks = total_chunks


class DuplicateChunk(UploadError, DuplicateResourceError):
    """Raised when a chunk index was already accepted."""

    def __init__(self, session_id: str, index: int, **kwargs):
        super().__init__(
            f"Chunk {index} already uploaded",
            session_id=session_id,
            chunk_index=index,
            **kwargs
        )
        self.index = index


class InvalidChunkSize(UploadError, InvalidRequestError):
    """Raised when a chunk carries more or fewer bytes than its slot holds."""

    def __init__(
        self,
        session_id: str,
        index: int,
        expected_size: int,
        actual_size: Optional[int] = None,
        **kwargs
    ):
        if actual_size is None:
            message = f"Chunk {index} exceeds expected size of {expected_size} bytes"
        else:
            message = f"Chunk {index} has {actual_size} bytes, expected {expected_size}"
        super().__init__(
            message,
            session_id=session_id,
            chunk_index=index,
            expected_size=expected_size,
            actual_size=actual_size,
            **kwargs
        )
        self.index = index
        self.expected_size = expected_size
        self.actual_size = actual_size


class ChunkReadFailed(UploadError, InvalidRequestError):
    """Raised when the chunk body cannot be drained."""

    def __init__(self, session_id: str, index: int, reason: str, **kwargs):
        super().__init__(
            f"Failed to read chunk {index}: {reason}",
            session_id=session_id,
            chunk_index=index,
            **kwargs
        )
        self.index = index
