"""Tests for the async reader/writer lock."""

import asyncio

import pytest

from neo_resumable.utils import AsyncReadWriteLock


class TestAsyncReadWriteLock:

    @pytest.mark.asyncio
    async def test_readers_share(self):
        lock = AsyncReadWriteLock()

        async with lock.reader():
            async with lock.reader():
                assert lock.readers == 2
        assert lock.readers == 0

    @pytest.mark.asyncio
    async def test_writer_excludes_readers(self):
        lock = AsyncReadWriteLock()
        events = []

        async def read():
            async with lock.reader():
                events.append("read")

        async with lock.writer():
            task = asyncio.create_task(read())
            await asyncio.sleep(0.01)
            assert events == []
            assert lock.write_locked
        await task

        assert events == ["read"]

    @pytest.mark.asyncio
    async def test_waiting_writer_blocks_new_readers(self):
        lock = AsyncReadWriteLock()
        events = []

        async def write():
            async with lock.writer():
                events.append("write")

        async def read():
            async with lock.reader():
                events.append("read")

        await lock.acquire_read()
        writer = asyncio.create_task(write())
        await asyncio.sleep(0.01)
        reader = asyncio.create_task(read())
        await asyncio.sleep(0.01)
        assert events == []

        lock.release_read()
        await asyncio.gather(writer, reader)

        assert events == ["write", "read"]

    @pytest.mark.asyncio
    async def test_cancelled_writer_releases_readers(self):
        lock = AsyncReadWriteLock()

        await lock.acquire_read()
        writer = asyncio.create_task(lock.acquire_write())
        await asyncio.sleep(0.01)
        writer.cancel()
        with pytest.raises(asyncio.CancelledError):
            await writer

        await asyncio.wait_for(lock.acquire_read(), timeout=1)
        assert lock.readers == 2

    def test_unbalanced_release(self):
        lock = AsyncReadWriteLock()

        with pytest.raises(RuntimeError):
            lock.release_read()
        with pytest.raises(RuntimeError):
            lock.release_write()
