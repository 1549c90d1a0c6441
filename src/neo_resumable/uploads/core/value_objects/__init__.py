"""Resumable upload value objects."""

from .upload_session_id import UploadSessionId
from .checksum import Checksum, ChecksumAlgorithm
from .storage_key import chunk_key, chunk_prefix, final_key, CHUNKS_ROOT, UPLOADS_ROOT
from .mime_type import normalize_mime_type, mime_type_matches, is_mime_type_allowed

__all__ = [
    "UploadSessionId",
    "Checksum",
    "ChecksumAlgorithm",
    "chunk_key",
    "chunk_prefix",
    "final_key",
    "CHUNKS_ROOT",
    "UPLOADS_ROOT",
    "normalize_mime_type",
    "mime_type_matches",
    "is_mime_type_allowed",
]
