"""Async byte stream helpers.

Adapters between the sources the engine sees (in-memory bytes, ASGI request
bodies, aiofiles handles) and the ``AsyncReadable`` protocol blob stores
consume.
"""

from typing import AsyncIterator, Callable, Awaitable

from ..core.protocols import AsyncReadable

COPY_BUFFER_SIZE = 64 * 1024


class BytesStream:
    """``AsyncReadable`` over an in-memory buffer."""

    def __init__(self, data: bytes = b""):
        self._data = memoryview(bytes(data))
        self._position = 0
        self.closed = False

    async def read(self, size: int = -1) -> bytes:
        if self.closed:
            raise ValueError("read from closed stream")
        if size is None or size < 0:
            end = len(self._data)
        else:
            end = min(self._position + size, len(self._data))
        chunk = self._data[self._position:end].tobytes()
        self._position = end
        return chunk

    async def close(self) -> None:
        self.closed = True


class IteratorStream:
    """``AsyncReadable`` over an async iterator of byte slices.

    Used for ASGI request bodies (``Request.stream()``).
    """

    def __init__(self, iterator: AsyncIterator[bytes]):
        self._iterator = iterator.__aiter__()
        self._buffer = bytearray()
        self._exhausted = False

    async def _fill(self, size: int) -> None:
        while not self._exhausted and (size < 0 or len(self._buffer) < size):
            try:
                piece = await self._iterator.__anext__()
            except StopAsyncIteration:
                self._exhausted = True
                break
            self._buffer.extend(piece)

    async def read(self, size: int = -1) -> bytes:
        if size is None:
            size = -1
        await self._fill(size)
        if size < 0:
            size = len(self._buffer)
        chunk = bytes(self._buffer[:size])
        del self._buffer[:size]
        return chunk


async def read_limited(reader: AsyncReadable, limit: int) -> bytes:
    """Drain ``reader`` but stop as soon as more than ``limit`` bytes arrived.

    A result longer than ``limit`` means the stream was oversized; the rest of
    the stream is left unread.
    """
    data = bytearray()
    while len(data) <= limit:
        chunk = await reader.read(min(COPY_BUFFER_SIZE, limit + 1 - len(data)))
        if not chunk:
            break
        data.extend(chunk)
    return bytes(data)


async def copy_stream(
    reader: AsyncReadable,
    write: Callable[[bytes], Awaitable[object]],
    buffer_size: int = COPY_BUFFER_SIZE
) -> int:
    """Copy ``reader`` into an async ``write`` callable.

    Returns:
        Number of bytes copied
    """
    copied = 0
    while chunk := await reader.read(buffer_size):
        await write(chunk)
        copied += len(chunk)
    return copied
