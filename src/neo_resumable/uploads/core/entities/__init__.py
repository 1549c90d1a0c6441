"""Resumable upload entities."""

from .upload_result import UploadResult
from .upload_session import UploadSession, UploadStatus, ChunkMetadata

__all__ = [
    "UploadResult",
    "UploadSession",
    "UploadStatus",
    "ChunkMetadata",
]
