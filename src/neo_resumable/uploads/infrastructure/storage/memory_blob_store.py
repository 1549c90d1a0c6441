"""In-memory blob store.

Keeps blobs in a process-local dict. Directory prefixes come into existence
when a blob is stored beneath them and stay until deleted, mirroring how a
filesystem keeps directories after their files are removed.
"""

from typing import Any, Dict, List, Optional, Set

from ...core.exceptions import BlobNotFound, StorageOperationFailed
from ...core.protocols import AsyncReadable
from ..streams import BytesStream
from .url_signer import UrlSigner, join_url


class MemoryBlobStore:
    """Blob store backed by a dict, for tests and single-process deployments."""

    storage_type = "memory"

    def __init__(self, base_url: str = "", signer: Optional[UrlSigner] = None):
        self._blobs: Dict[str, bytes] = {}
        self._prefixes: Set[str] = set()
        self.base_url = base_url
        self.signer = signer

    @staticmethod
    def _check_name(name: str, operation: str) -> None:
        if not name or name.startswith("/") or "\x00" in name:
            raise StorageOperationFailed(
                f"Invalid blob name: {name!r}",
                operation=operation,
                blob_name=name,
                storage_type="memory",
            )

    def _has_children(self, prefix: str) -> bool:
        marker = prefix.rstrip("/") + "/"
        return any(key.startswith(marker) for key in self._blobs) or any(
            p.startswith(marker) for p in self._prefixes
        )

    async def store(self, name: str, reader: AsyncReadable) -> str:
        self._check_name(name, "store")
        try:
            data = await reader.read()
        except (OSError, ValueError) as e:
            raise StorageOperationFailed(
                f"Failed to read source stream: {e}",
                operation="store",
                blob_name=name,
                storage_type="memory",
            ) from e

        self._blobs[name] = bytes(data)
        parts = name.split("/")[:-1]
        for depth in range(1, len(parts) + 1):
            self._prefixes.add("/".join(parts[:depth]))
        return name

    async def get_reader(self, name: str) -> BytesStream:
        if name not in self._blobs:
            raise BlobNotFound(name, operation="get_reader", storage_type="memory")
        return BytesStream(self._blobs[name])

    async def delete(self, name: str) -> None:
        if name in self._blobs:
            del self._blobs[name]
            return

        prefix = name.rstrip("/")
        if prefix in self._prefixes:
            if self._has_children(prefix):
                raise StorageOperationFailed(
                    f"Directory '{prefix}' is not empty",
                    operation="delete",
                    blob_name=name,
                    storage_type="memory",
                )
            self._prefixes.discard(prefix)
            return

        raise BlobNotFound(name, operation="delete", storage_type="memory")

    async def exists(self, name: str) -> bool:
        return name in self._blobs or name.rstrip("/") in self._prefixes

    async def get_size(self, name: str) -> int:
        if name not in self._blobs:
            raise BlobNotFound(name, operation="get_size", storage_type="memory")
        return len(self._blobs[name])

    async def get_url(self, name: str) -> str:
        return join_url(self.base_url, name)

    async def get_signed_url(self, name: str, ttl_seconds: int) -> str:
        if self.signer is None:
            raise StorageOperationFailed(
                "Signed URLs are not configured for this store",
                operation="get_signed_url",
                blob_name=name,
                storage_type="memory",
            )
        if name not in self._blobs:
            raise BlobNotFound(name, operation="get_signed_url", storage_type="memory")
        return self.signer.sign(name, ttl_seconds)

    async def list(self) -> List[str]:
        return sorted(self._blobs)

    async def get_bucket_info(self) -> Dict[str, Any]:
        return {
            "type": "memory",
            "backend": self.__class__.__name__,
            "files": len(self._blobs),
            "total_bytes": sum(len(data) for data in self._blobs.values()),
            "signed_urls": self.signer is not None,
        }

    async def close(self) -> None:
        """Drop every blob."""
        self._blobs.clear()
        self._prefixes.clear()
