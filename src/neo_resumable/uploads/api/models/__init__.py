"""Resumable upload API models."""

from .requests import InitiateUploadRequest
from .responses import ChunkResponse, UploadSessionResponse, UploadResultResponse

__all__ = [
    "InitiateUploadRequest",
    "ChunkResponse",
    "UploadSessionResponse",
    "UploadResultResponse",
]
