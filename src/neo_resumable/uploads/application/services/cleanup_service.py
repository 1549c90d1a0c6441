"""Cleanup service.

Reclaims chunk blobs after completion, abort and eviction, and runs the
periodic sweep that evicts idle sessions. Cleanup never fails the operation
that scheduled it: errors are logged as ``CleanupFailed`` warnings.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Set

from ...core.entities import UploadSession, UploadStatus
from ...core.exceptions import BlobNotFound, CleanupFailed, StorageOperationFailed
from ...core.protocols import BlobStore
from ...core.value_objects import chunk_key, chunk_prefix
from .session_registry import SessionRegistry

logger = logging.getLogger(__name__)


@dataclass
class CleanupServiceConfig:
    """Configuration for cleanup service."""

    session_ttl_seconds: float = 86400  # 24 hours
    eviction_interval_seconds: float = 300  # 5 minutes


class CleanupService:
    """Chunk cleanup and idle session eviction service."""

    def __init__(
        self,
        registry: SessionRegistry,
        store: BlobStore,
        config: Optional[CleanupServiceConfig] = None
    ):
        self._registry = registry
        self._store = store
        self._config = config or CleanupServiceConfig()
        self._tasks: Set[asyncio.Task] = set()
        self._sweeper: Optional[asyncio.Task] = None

    @property
    def config(self) -> CleanupServiceConfig:
        return self._config

    @property
    def is_running(self) -> bool:
        return self._sweeper is not None and not self._sweeper.done()

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def schedule_chunk_cleanup(self, session: UploadSession) -> asyncio.Task:
        """Delete a session's chunk blobs in the background."""
        task = asyncio.create_task(
            self.cleanup_session_chunks(session),
            name=f"cleanup-chunks-{session.session_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def cleanup_session_chunks(self, session: UploadSession) -> List[str]:
        """Delete every chunk blob of ``session`` and then its prefix.

        The session's write lock is taken before the chunk table is read, so a
        chunk write still in flight lands first and is reclaimed too.

        Returns:
            Names that could not be deleted (also logged)
        """
        async with session.lock.writer():
            names = [chunk_key(session.session_id, index) for index in sorted(session.chunks)]

        failed = []
        for name in names:
            if not await self._delete_quietly(name):
                failed.append(name)

        # The prefix only disappears once it is empty
        if not failed:
            if not await self._delete_quietly(chunk_prefix(session.session_id)):
                failed.append(chunk_prefix(session.session_id))

        if failed:
            error = CleanupFailed(session.session_id, failed)
            logger.warning(f"{error.message}: {', '.join(failed)}")
        else:
            logger.debug(f"Cleaned up {len(names)} chunk(s) for session {session.session_id}")
        return failed

    async def _delete_quietly(self, name: str) -> bool:
        try:
            await self._store.delete(name)
        except BlobNotFound:
            return True
        except StorageOperationFailed as e:
            logger.warning(f"Failed to delete blob '{name}': {e.message}")
            return False
        return True

    async def evict_idle_sessions(self, now: Optional[datetime] = None) -> List[str]:
        """Remove sessions idle for longer than the TTL.

        Chunk cleanup is scheduled for every evicted session that did not
        complete; completed sessions already scheduled their own.

        Returns:
            Ids of the evicted sessions
        """
        ttl = self._config.session_ttl_seconds
        evicted = []
        for session in await self._registry.list_sessions():
            if not session.is_idle(ttl, now):
                continue
            if await self._registry.discard(session.session_id) is None:
                continue
            evicted.append(session.session_id)
            if session.status != UploadStatus.COMPLETED:
                self.schedule_chunk_cleanup(session)

        if evicted:
            logger.info(f"Evicted {len(evicted)} idle upload session(s)")
        return evicted

    async def _sweep_loop(self) -> None:
        interval = self._config.eviction_interval_seconds
        while True:
            await asyncio.sleep(interval)
            try:
                await self.evict_idle_sessions()
            except Exception as e:
                logger.error(f"Eviction sweep failed: {e}", exc_info=True)

    def start(self) -> None:
        """Start the periodic eviction sweeper."""
        if self.is_running:
            return
        self._sweeper = asyncio.create_task(self._sweep_loop(), name="upload-session-sweeper")
        logger.info(
            f"Started session sweeper (ttl={self._config.session_ttl_seconds}s, "
            f"interval={self._config.eviction_interval_seconds}s)"
        )

    async def stop(self) -> None:
        """Stop the sweeper and wait for it to exit."""
        sweeper, self._sweeper = self._sweeper, None
        if sweeper is None:
            return
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass
        logger.info("Stopped session sweeper")

    async def wait_for_background_tasks(self) -> None:
        """Wait until every scheduled cleanup finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


def create_cleanup_service(
    registry: SessionRegistry,
    store: BlobStore,
    config: Optional[CleanupServiceConfig] = None
) -> CleanupService:
    """Create cleanup service."""
    return CleanupService(registry, store, config)
