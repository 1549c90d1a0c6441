"""Local filesystem blob store.

Blobs live under a base directory; blob names map to relative paths. Writes
go to a hidden temporary file first and are renamed into place, so readers
never observe a half-written blob.
"""

import asyncio
import errno
import logging
import os
import secrets
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
import aiofiles.os

from ...core.exceptions import BlobNotFound, StorageOperationFailed
from ...core.protocols import AsyncReadable
from ..streams import copy_stream
from .url_signer import UrlSigner, join_url

logger = logging.getLogger(__name__)

TEMP_PREFIX = ".partial-"


class LocalBlobStore:
    """Blob store writing to a directory tree through aiofiles."""

    storage_type = "local"

    def __init__(self, base_path: str, base_url: str = "", signer: Optional[UrlSigner] = None):
        self.base_path = Path(base_path).resolve()
        self.base_url = base_url
        self.signer = signer

    def _error(self, message: str, operation: str, name: str) -> StorageOperationFailed:
        return StorageOperationFailed(message, operation=operation, blob_name=name, storage_type="local")

    def _resolve(self, name: str, operation: str) -> Path:
        """Map a blob name to a path inside the base directory."""
        if not name or "\x00" in name:
            raise self._error(f"Invalid blob name: {name!r}", operation, name)
        if any(ord(ch) < 32 for ch in name):
            raise self._error("Blob name contains control characters", operation, name)
        if name.startswith("/") or "\\" in name:
            raise self._error("Blob name must be a relative '/' separated path", operation, name)

        parts = name.rstrip("/").split("/")
        if any(part in ("", ".", "..") for part in parts):
            raise self._error("Blob name contains path traversal", operation, name)

        path = self.base_path.joinpath(*parts)
        if path.is_symlink():
            raise self._error("Blob name refers to a symbolic link", operation, name)
        if not path.resolve().is_relative_to(self.base_path):
            raise self._error("Blob name escapes the storage root", operation, name)
        return path

    async def store(self, name: str, reader: AsyncReadable) -> str:
        path = self._resolve(name, "store")
        temp_path = path.with_name(f"{TEMP_PREFIX}{secrets.token_hex(8)}")
        try:
            await aiofiles.os.makedirs(path.parent, exist_ok=True)
            async with aiofiles.open(temp_path, "wb") as f:
                await copy_stream(reader, f.write)
            await aiofiles.os.replace(temp_path, path)
        except OSError as e:
            await self._discard(temp_path)
            raise self._error(f"Failed to store blob: {e}", "store", name) from e
        except BaseException:
            await self._discard(temp_path)
            raise
        return name

    async def _discard(self, path: Path) -> None:
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove temporary file {path}: {e}")

    async def get_reader(self, name: str):
        path = self._resolve(name, "get_reader")
        if not await aiofiles.os.path.isfile(path):
            raise BlobNotFound(name, operation="get_reader", storage_type="local")
        try:
            return await aiofiles.open(path, "rb")
        except OSError as e:
            raise self._error(f"Failed to open blob: {e}", "get_reader", name) from e

    async def delete(self, name: str) -> None:
        path = self._resolve(name, "delete")
        try:
            if await aiofiles.os.path.isdir(path):
                await aiofiles.os.rmdir(path)
            else:
                await aiofiles.os.remove(path)
        except FileNotFoundError as e:
            raise BlobNotFound(name, operation="delete", storage_type="local") from e
        except OSError as e:
            if e.errno in (errno.ENOTEMPTY, errno.EEXIST):
                raise self._error(f"Directory '{name}' is not empty", "delete", name) from e
            raise self._error(f"Failed to delete blob: {e}", "delete", name) from e

    async def exists(self, name: str) -> bool:
        path = self._resolve(name, "exists")
        return await aiofiles.os.path.exists(path)

    async def get_size(self, name: str) -> int:
        path = self._resolve(name, "get_size")
        if not await aiofiles.os.path.isfile(path):
            raise BlobNotFound(name, operation="get_size", storage_type="local")
        try:
            return await aiofiles.os.path.getsize(path)
        except OSError as e:
            raise self._error(f"Failed to stat blob: {e}", "get_size", name) from e

    async def get_url(self, name: str) -> str:
        return join_url(self.base_url, name)

    async def get_signed_url(self, name: str, ttl_seconds: int) -> str:
        if self.signer is None:
            raise self._error("Signed URLs are not configured for local storage", "get_signed_url", name)
        if not await aiofiles.os.path.isfile(self._resolve(name, "get_signed_url")):
            raise BlobNotFound(name, operation="get_signed_url", storage_type="local")
        return self.signer.sign(name, ttl_seconds)

    def _walk(self) -> List[str]:
        names = []
        for root, _dirs, files in os.walk(self.base_path):
            for file_name in files:
                if file_name.startswith(TEMP_PREFIX):
                    continue
                relative = Path(root, file_name).relative_to(self.base_path)
                names.append(relative.as_posix())
        return sorted(names)

    async def list(self) -> List[str]:
        if not await aiofiles.os.path.isdir(self.base_path):
            return []
        try:
            return await asyncio.to_thread(self._walk)
        except OSError as e:
            raise self._error(f"Failed to list blobs: {e}", "list", "") from e

    async def get_bucket_info(self) -> Dict[str, Any]:
        names = await self.list()
        return {
            "type": "local",
            "backend": self.__class__.__name__,
            "base_path": str(self.base_path),
            "base_url": self.base_url,
            "files": len(names),
            "signed_urls": self.signer is not None,
        }

    async def close(self) -> None:
        """Nothing to release; files stay on disk."""
        return None
