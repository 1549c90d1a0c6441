"""Complete upload command.

Assembles the chunks of a session, in ascending index order, into the final
blob ``uploads/<session_id>/<file_name>``. Chunks are staged through a
temporary file that is removed on every exit path.
"""

import asyncio
import logging
from dataclasses import dataclass

import aiofiles.tempfile

from ...core.entities import UploadResult, UploadSession, UploadStatus
from ...core.exceptions import (
    AssemblyFailed,
    UploadIncomplete,
    UploadSessionNotFound,
    UploadTimedOut,
)
from ...core.protocols import BlobStore
from ...core.value_objects import Checksum, chunk_key, final_key
from ...infrastructure.streams import COPY_BUFFER_SIZE, copy_stream
from ..services.cleanup_service import CleanupService
from ..services.session_registry import SessionRegistry

logger = logging.getLogger(__name__)


@dataclass
class CompleteUploadData:
    """Data required to complete an upload."""

    session_id: str


@dataclass
class CompleteUploadResult:
    """Result of upload completion."""

    result: UploadResult
    already_completed: bool = False  # result of an earlier completion, returned again


class CompleteUploadCommand:
    """Command to assemble a fully uploaded session.

    Completing an already completed session returns the stored result; a
    failed session stays failed.
    """

    def __init__(self, registry: SessionRegistry, store: BlobStore, cleanup: CleanupService):
        self._registry = registry
        self._store = store
        self._cleanup = cleanup

    async def execute(self, data: CompleteUploadData) -> CompleteUploadResult:
        """Execute upload completion.

        Raises:
            UploadSessionNotFound: unknown, aborted or evicted session
            UploadIncomplete: some chunks are still missing
            AssemblyFailed: assembly failed now or on an earlier attempt
            UploadTimedOut: a storage call raised ``TimeoutError``
        """
        session = await self._registry.get(data.session_id)

        async with session.lock.writer():
            if session.closed:
                raise UploadSessionNotFound(data.session_id)

            if session.status == UploadStatus.COMPLETED and session.result is not None:
                return CompleteUploadResult(session.result, already_completed=True)

            if session.status == UploadStatus.FAILED:
                raise AssemblyFailed(
                    session.session_id,
                    f"session previously failed: {session.failure_reason}",
                )

            if not session.all_chunks_received:
                raise UploadIncomplete(session.session_id, session.uploaded_chunks, session.total_chunks)

            try:
                result = await self._assemble(session)
            except asyncio.CancelledError:
                session.mark_failed("assembly cancelled")
                raise
            except TimeoutError as e:
                session.mark_failed("assembly timed out")
                raise UploadTimedOut("complete_upload", session_id=session.session_id) from e
            except AssemblyFailed as e:
                session.mark_failed(e.reason)
                raise
            except Exception as e:
                session.mark_failed(str(e))
                raise AssemblyFailed(session.session_id, str(e)) from e

            session.mark_completed(result)

        self._cleanup.schedule_chunk_cleanup(session)
        logger.info(
            f"Completed upload {session.session_id}: {result.path} "
            f"({result.size} bytes, {result.checksum})"
        )
        return CompleteUploadResult(result)

    async def _assemble(self, session: UploadSession) -> UploadResult:
        path = final_key(session.session_id, session.file_name)

        async with aiofiles.tempfile.TemporaryFile("w+b") as staging:
            total = 0
            for chunk in session.sorted_chunks():
                reader = await self._store.get_reader(chunk_key(session.session_id, chunk.index))
                try:
                    copied = await copy_stream(reader, staging.write)
                finally:
                    await reader.close()

                if copied != chunk.size:
                    raise AssemblyFailed(
                        session.session_id,
                        f"chunk {chunk.index} size mismatch: recorded {chunk.size}, read {copied}",
                        chunk_index=chunk.index,
                    )
                total += copied

            if total != session.total_size:
                raise AssemblyFailed(
                    session.session_id,
                    f"assembled size {total} does not match declared size {session.total_size}",
                )

            await staging.seek(0)
            path = await self._store.store(path, staging)

        checksum = await self._digest(path)
        url = await self._store.get_url(path)

        return UploadResult(
            session_id=session.session_id,
            original_name=session.file_name,
            size=session.total_size,
            mime_type=session.mime_type,
            path=path,
            url=url,
            checksum=checksum,
        )

    async def _digest(self, path: str) -> Checksum:
        """SHA-256 of the stored blob, read back from the store."""
        hasher = Checksum.hasher(Checksum.FILE_ALGORITHM)
        reader = await self._store.get_reader(path)
        try:
            while data := await reader.read(COPY_BUFFER_SIZE):
                hasher.update(data)
        finally:
            await reader.close()
        return Checksum.from_hasher(hasher)


def create_complete_upload_command(
    registry: SessionRegistry,
    store: BlobStore,
    cleanup: CleanupService
) -> CompleteUploadCommand:
    """Create complete upload command."""
    return CompleteUploadCommand(registry, store, cleanup)
