"""Blob store protocol.

Abstract object sink the upload engine persists chunks and assembled files
into. Adapters raise ``StorageOperationFailed`` (or ``BlobNotFound``) and
nothing else.
"""

from typing import Any, Dict, List, Protocol, runtime_checkable


@runtime_checkable
class AsyncReadable(Protocol):
    """Byte stream read asynchronously in slices."""

    async def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all remaining when negative).

        Returns ``b""`` at end of stream.
        """
        ...


@runtime_checkable
class BlobReader(AsyncReadable, Protocol):
    """Readable blob that must be closed by the caller."""

    async def close(self) -> None:
        ...


@runtime_checkable
class BlobStore(Protocol):
    """Blob store protocol.

    Names are ``/`` separated paths relative to the store root. Directory
    prefixes exist implicitly while they hold blobs.
    """

    async def store(self, name: str, reader: AsyncReadable) -> str:
        """Write the stream to ``name``, replacing any existing blob.

        Args:
            name: Target blob name
            reader: Source stream, read until exhausted

        Returns:
            Canonical name of the stored blob
        """
        ...

    async def get_reader(self, name: str) -> BlobReader:
        """Open a reader over ``name``. The caller closes it."""
        ...

    async def delete(self, name: str) -> None:
        """Delete a blob, or an empty directory prefix.

        Raises:
            BlobNotFound: nothing exists under ``name``
            StorageOperationFailed: the prefix still holds blobs
        """
        ...

    async def exists(self, name: str) -> bool:
        ...

    async def get_size(self, name: str) -> int:
        """Size of ``name`` in bytes."""
        ...

    async def get_url(self, name: str) -> str:
        """Public URL of ``name``; empty when the store has none."""
        ...

    async def get_signed_url(self, name: str, ttl_seconds: int) -> str:
        """Time-bounded access URL for ``name``."""
        ...

    async def list(self) -> List[str]:
        """Every blob name in the store, sorted."""
        ...

    async def get_bucket_info(self) -> Dict[str, Any]:
        """Backend attributes (type, root, blob count...)."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
