"""Get upload status query.

Reports a session's progress. When every chunk has arrived the status is
promoted from ``uploading`` to ``assembly_pending``; only a successful
completion ever sets ``completed``.
"""

from dataclasses import dataclass

from ...core.entities import UploadSession, UploadStatus
from ...core.exceptions import UploadSessionNotFound
from ..services.session_registry import SessionRegistry


@dataclass
class GetUploadStatusData:
    """Data required to query upload status."""

    session_id: str


class GetUploadStatusQuery:
    """Query returning a consistent snapshot of a session."""

    def __init__(self, registry: SessionRegistry):
        self._registry = registry

    async def execute(self, data: GetUploadStatusData) -> UploadSession:
        """Execute status query.

        Raises:
            UploadSessionNotFound: unknown, aborted or evicted session
        """
        session = await self._registry.get(data.session_id)

        async with session.lock.reader():
            if session.closed:
                raise UploadSessionNotFound(data.session_id)
            needs_promotion = (
                session.status == UploadStatus.UPLOADING and session.all_chunks_received
            )
            if not needs_promotion:
                return session.snapshot()

        # Promotion needs the write side; state is re-checked after re-acquiring
        async with session.lock.writer():
            if session.closed:
                raise UploadSessionNotFound(data.session_id)
            session.mark_assembly_pending()
            return session.snapshot()


def create_get_upload_status_query(registry: SessionRegistry) -> GetUploadStatusQuery:
    """Create get upload status query."""
    return GetUploadStatusQuery(registry)
