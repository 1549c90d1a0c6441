"""Resumable upload core exceptions.

Each exception represents one error kind of the upload engine and derives
from a category in ``neo_resumable.core.exceptions`` that fixes its HTTP status.
"""

from .upload_error import UploadError
from .invalid_upload_request import InvalidUploadRequest
from .file_too_large import FileTooLarge
from .invalid_file_type import InvalidFileType
from .upload_session_not_found import UploadSessionNotFound
from .chunk_errors import InvalidChunkIndex, DuplicateChunk, InvalidChunkSize, ChunkReadFailed
from .storage_errors import StorageOperationFailed, BlobNotFound, CleanupFailed, InvalidSignedUrl
from .assembly_errors import UploadIncomplete, AssemblyFailed, UploadTimedOut

__all__ = [
    "UploadError",
    "InvalidUploadRequest",
    "FileTooLarge",
    "InvalidFileType",
    "UploadSessionNotFound",
    "InvalidChunkIndex",
    "DuplicateChunk",
    "InvalidChunkSize",
    "ChunkReadFailed",
    "StorageOperationFailed",
    "BlobNotFound",
    "CleanupFailed",
    "InvalidSignedUrl",
    "UploadIncomplete",
    "AssemblyFailed",
    "UploadTimedOut",
]
