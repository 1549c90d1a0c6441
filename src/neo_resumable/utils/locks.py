"""Async reader/writer lock.

Readers share the lock, writers hold it alone. Waiting writers block new
readers so a steady stream of status polls cannot starve a chunk write.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class AsyncReadWriteLock:
    """Writer-preferring reader/writer lock for asyncio tasks.

    State changes happen without awaiting, so releases are safe to run
    from ``finally`` blocks of cancelled tasks.
    """

    def __init__(self) -> None:
        self._readers = 0
        self._writer = False
        self._pending_writers = 0
        self._changed = asyncio.Event()

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def write_locked(self) -> bool:
        return self._writer

    async def acquire_read(self) -> None:
        while self._writer or self._pending_writers:
            self._changed.clear()
            await self._changed.wait()
        self._readers += 1

    def release_read(self) -> None:
        if self._readers <= 0:
            raise RuntimeError("release_read() called without a matching acquire_read()")
        self._readers -= 1
        self._changed.set()

    async def acquire_write(self) -> None:
        self._pending_writers += 1
        try:
            while self._writer or self._readers:
                self._changed.clear()
                await self._changed.wait()
        except BaseException:
            self._pending_writers -= 1
            # Readers parked behind this writer must re-check
            self._changed.set()
            raise
        self._pending_writers -= 1
        self._writer = True

    def release_write(self) -> None:
        if not self._writer:
            raise RuntimeError("release_write() called without a matching acquire_write()")
        self._writer = False
        self._changed.set()

    @asynccontextmanager
    async def reader(self) -> AsyncIterator[None]:
        """Hold the shared side for the duration of the block."""
        await self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @asynccontextmanager
    async def writer(self) -> AsyncIterator[None]:
        """Hold the exclusive side for the duration of the block."""
        await self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    def __repr__(self) -> str:
        return (
            f"AsyncReadWriteLock(readers={self._readers}, writer={self._writer}, "
            f"pending_writers={self._pending_writers})"
        )
