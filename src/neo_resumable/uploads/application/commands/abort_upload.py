"""Abort upload command.

Removes a session from the registry and reclaims its chunk blobs in the
background. Blobs are reclaimed best-effort.
"""

import logging
from dataclasses import dataclass

from ...core.entities import UploadStatus
from ..services.cleanup_service import CleanupService
from ..services.session_registry import SessionRegistry

logger = logging.getLogger(__name__)


@dataclass
class AbortUploadData:
    """Data required to abort an upload."""

    session_id: str


class AbortUploadCommand:
    """Command to abort a resumable upload."""

    def __init__(self, registry: SessionRegistry, cleanup: CleanupService):
        self._registry = registry
        self._cleanup = cleanup

    async def execute(self, data: AbortUploadData) -> None:
        """Execute abort.

        Raises:
            UploadSessionNotFound: unknown session
        """
        session = await self._registry.remove(data.session_id)
        if session.status != UploadStatus.COMPLETED:
            self._cleanup.schedule_chunk_cleanup(session)
        logger.info(f"Aborted upload {data.session_id} ({session.uploaded_chunks} chunk(s) to reclaim)")


def create_abort_upload_command(registry: SessionRegistry, cleanup: CleanupService) -> AbortUploadCommand:
    """Create abort upload command."""
    return AbortUploadCommand(registry, cleanup)
