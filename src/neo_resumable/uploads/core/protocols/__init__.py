"""Resumable upload protocols."""

from .blob_store import AsyncReadable, BlobReader, BlobStore

__all__ = [
    "AsyncReadable",
    "BlobReader",
    "BlobStore",
]
