"""Session registry.

Process-wide map from session id to session. A single reader/writer lock
guards the map; each session's contents are guarded by the session's own
lock, so uploads against different sessions never contend here.
"""

import logging
from typing import List, Optional

from ....utils import AsyncReadWriteLock
from ...core.entities import UploadSession
from ...core.exceptions import UploadSessionNotFound

logger = logging.getLogger(__name__)


class SessionRegistry:
    """In-memory registry of active upload sessions."""

    def __init__(self):
        self._sessions: dict[str, UploadSession] = {}
        self._lock = AsyncReadWriteLock()

    async def create(self, session: UploadSession) -> None:
        """Insert a session. Ids are random, so a clash is a programming error."""
        async with self._lock.writer():
            if session.session_id in self._sessions:
                raise ValueError(f"Upload session '{session.session_id}' already registered")
            self._sessions[session.session_id] = session
        logger.debug(f"Registered upload session {session.session_id}")

    async def get(self, session_id: str) -> UploadSession:
        """Look up a session.

        Raises:
            UploadSessionNotFound: id is unknown
        """
        async with self._lock.reader():
            session = self._sessions.get(session_id)
        if session is None:
            raise UploadSessionNotFound(session_id)
        return session

    async def remove(self, session_id: str) -> UploadSession:
        """Remove a session, mark it closed and return it.

        Raises:
            UploadSessionNotFound: id is unknown
        """
        async with self._lock.writer():
            session = self._sessions.pop(session_id, None)
            if session is None:
                raise UploadSessionNotFound(session_id)
            session.close()
        logger.debug(f"Removed upload session {session_id}")
        return session

    async def discard(self, session_id: str) -> Optional[UploadSession]:
        """Remove a session if present."""
        try:
            return await self.remove(session_id)
        except UploadSessionNotFound:
            return None

    async def list_sessions(self) -> List[UploadSession]:
        """Current sessions, in insertion order."""
        async with self._lock.reader():
            return list(self._sessions.values())

    async def count(self) -> int:
        async with self._lock.reader():
            return len(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions
