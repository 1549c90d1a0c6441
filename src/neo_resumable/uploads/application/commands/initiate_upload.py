"""Initiate upload command.

Admits a new resumable upload and registers its session.
"""

import logging
from dataclasses import dataclass

from ...core.entities import UploadSession
from ..services.session_registry import SessionRegistry
from ..validators import UploadValidator

logger = logging.getLogger(__name__)


@dataclass
class InitiateUploadData:
    """Data required to initiate a resumable upload."""

    file_name: str
    total_size: int
    mime_type: str
    chunk_size: int


class InitiateUploadCommand:
    """Command to create a resumable upload session."""

    def __init__(self, registry: SessionRegistry, validator: UploadValidator):
        self._registry = registry
        self._validator = validator

    async def execute(self, data: InitiateUploadData) -> UploadSession:
        """Validate the request and register a new session.

        Returns:
            Snapshot of the new session

        Raises:
            InvalidUploadRequest: malformed parameters
            FileTooLarge: size exceeds the configured cap
            InvalidFileType: MIME type is not allowed
        """
        self._validator.validate_initiation(
            data.file_name, data.total_size, data.mime_type, data.chunk_size
        )

        session = UploadSession(
            file_name=data.file_name,
            total_size=data.total_size,
            chunk_size=data.chunk_size,
            mime_type=data.mime_type or "",
        )
        await self._registry.create(session)

        logger.info(
            f"Initiated upload {session.session_id}: {session.file_name} "
            f"({session.total_size} bytes, {session.total_chunks} chunks)"
        )
        return session.snapshot()


def create_initiate_upload_command(
    registry: SessionRegistry,
    validator: UploadValidator
) -> InitiateUploadCommand:
    """Create initiate upload command."""
    return InitiateUploadCommand(registry, validator)
