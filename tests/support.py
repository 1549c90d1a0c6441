"""Shared helpers for neo-resumable tests."""

from typing import List, Optional

from neo_resumable.uploads.application.services.upload_coordinator import UploadCoordinator
from neo_resumable.uploads.core.entities import UploadSession
from neo_resumable.uploads.infrastructure import BytesStream

BASE_URL = "https://files.example.com"
SIGNING_SECRET = "test-signing-secret"


def split_chunks(data: bytes, chunk_size: int) -> List[bytes]:
    """Slice ``data`` into chunk bodies."""
    return [data[i:i + chunk_size] for i in range(0, len(data), chunk_size)]


async def upload_all(
    coordinator: UploadCoordinator,
    session: UploadSession,
    data: bytes,
    order: Optional[List[int]] = None
) -> None:
    """Upload every chunk of ``data`` to ``session``, optionally out of order."""
    chunks = split_chunks(data, session.chunk_size)
    for index in order if order is not None else range(len(chunks)):
        await coordinator.upload_chunk(session.session_id, index, BytesStream(chunks[index]))
