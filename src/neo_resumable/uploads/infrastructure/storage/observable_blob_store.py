"""Blob store wrapper reporting every call to the observer.

Each operation is timed and reported through ``on_storage_operation`` with
the operation context bound for the current upload operation.
"""

import time
from typing import Any, Dict, List

from ....core.context import current_context
from ....observability import notify
from ...core.protocols import AsyncReadable, BlobStore


class ObservableBlobStore:
    """Decorates a ``BlobStore`` with storage-operation events."""

    def __init__(self, inner: BlobStore, storage_type: str = ""):
        self.inner = inner
        self.storage_type = storage_type or getattr(inner, "storage_type", inner.__class__.__name__)

    async def _observe(self, operation: str, call):
        start = time.perf_counter()
        success = False
        try:
            result = await call
            success = True
            return result
        finally:
            await notify(
                "on_storage_operation",
                current_context(),
                operation,
                self.storage_type,
                time.perf_counter() - start,
                success,
            )

    async def store(self, name: str, reader: AsyncReadable) -> str:
        return await self._observe("store", self.inner.store(name, reader))

    async def get_reader(self, name: str):
        return await self._observe("get_reader", self.inner.get_reader(name))

    async def delete(self, name: str) -> None:
        await self._observe("delete", self.inner.delete(name))

    async def exists(self, name: str) -> bool:
        return await self._observe("exists", self.inner.exists(name))

    async def get_size(self, name: str) -> int:
        return await self._observe("get_size", self.inner.get_size(name))

    async def get_url(self, name: str) -> str:
        return await self._observe("get_url", self.inner.get_url(name))

    async def get_signed_url(self, name: str, ttl_seconds: int) -> str:
        return await self._observe("get_signed_url", self.inner.get_signed_url(name, ttl_seconds))

    async def list(self) -> List[str]:
        return await self._observe("list", self.inner.list())

    async def get_bucket_info(self) -> Dict[str, Any]:
        return await self._observe("get_bucket_info", self.inner.get_bucket_info())

    async def close(self) -> None:
        await self._observe("close", self.inner.close())
