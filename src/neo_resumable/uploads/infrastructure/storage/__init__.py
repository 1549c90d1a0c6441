"""Blob store adapters."""

from .memory_blob_store import MemoryBlobStore
from .local_blob_store import LocalBlobStore
from .observable_blob_store import ObservableBlobStore
from .url_signer import UrlSigner, join_url
from .factory import create_blob_store, create_url_signer

__all__ = [
    "MemoryBlobStore",
    "LocalBlobStore",
    "ObservableBlobStore",
    "UrlSigner",
    "join_url",
    "create_blob_store",
    "create_url_signer",
]
