"""Upload chunk command.

Persists one chunk of a resumable upload. The session's write lock is held
for the whole operation so duplicate detection and recording are atomic.
"""

import logging
from dataclasses import dataclass

from ...core.entities import ChunkMetadata, UploadSession
from ...core.exceptions import (
    ChunkReadFailed,
    DuplicateChunk,
    InvalidChunkSize,
    UploadError,
    UploadSessionNotFound,
)
from ...core.protocols import AsyncReadable, BlobStore
from ...core.value_objects import Checksum, chunk_key
from ...infrastructure.streams import BytesStream, read_limited
from ..services.session_registry import SessionRegistry
from ..validators import UploadValidator

logger = logging.getLogger(__name__)


@dataclass
class UploadChunkData:
    """Data required to upload a chunk."""

    session_id: str
    index: int  # 0-based
    stream: AsyncReadable


class UploadChunkCommand:
    """Command to accept a single chunk.

    A chunk is recorded only after its blob was stored; any failure leaves
    the session unchanged.
    """

    def __init__(self, registry: SessionRegistry, store: BlobStore, validator: UploadValidator):
        self._registry = registry
        self._store = store
        self._validator = validator

    async def execute(self, data: UploadChunkData) -> ChunkMetadata:
        """Execute chunk upload.

        Raises:
            UploadSessionNotFound: unknown, aborted or evicted session
            InvalidChunkIndex: index outside the session's range
            DuplicateChunk: index already accepted
            InvalidChunkSize: body longer or shorter than the chunk slot
            ChunkReadFailed: body could not be read
            StorageOperationFailed: blob store rejected the write
        """
        session = await self._registry.get(data.session_id)

        async with session.lock.writer():
            if session.closed:
                raise UploadSessionNotFound(data.session_id)

            self._validator.validate_chunk_index(session, data.index)
            if session.has_chunk(data.index):
                raise DuplicateChunk(session.session_id, data.index)

            content = await self._read_chunk(session, data)
            checksum = Checksum.calculate_from_bytes(content, Checksum.CHUNK_ALGORITHM)

            await self._store.store(chunk_key(session.session_id, data.index), BytesStream(content))
            metadata = session.record_chunk(data.index, len(content), checksum)

        logger.debug(
            f"Stored chunk {data.index} of session {session.session_id} "
            f"({len(content)} bytes, {session.uploaded_chunks}/{session.total_chunks})"
        )
        return metadata

    async def _read_chunk(self, session: UploadSession, data: UploadChunkData) -> bytes:
        expected = session.expected_chunk_size(data.index)
        try:
            content = await read_limited(data.stream, expected)
        except UploadError:
            raise
        except Exception as e:
            raise ChunkReadFailed(session.session_id, data.index, str(e) or e.__class__.__name__) from e

        if len(content) > expected:
            raise InvalidChunkSize(session.session_id, data.index, expected)
        if len(content) < expected:
            raise InvalidChunkSize(session.session_id, data.index, expected, len(content))
        return content


def create_upload_chunk_command(
    registry: SessionRegistry,
    store: BlobStore,
    validator: UploadValidator
) -> UploadChunkCommand:
    """Create upload chunk command."""
    return UploadChunkCommand(registry, store, validator)
