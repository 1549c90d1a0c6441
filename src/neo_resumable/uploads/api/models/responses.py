"""
Resumable upload response models.

ONLY handles resumable upload API response formatting.
"""

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field

from ...core.entities import ChunkMetadata, UploadResult, UploadSession


class ChunkResponse(BaseModel):
    """Metadata of one accepted chunk."""

    index: int = Field(..., description="Zero-based chunk index")
    size: int = Field(..., description="Chunk size in bytes")
    checksum: str = Field(..., description="Chunk digest as 'md5:<hex>'")
    uploaded_at: datetime = Field(..., description="When the chunk was accepted")

    @classmethod
    def from_domain(cls, chunk: ChunkMetadata) -> "ChunkResponse":
        return cls(
            index=chunk.index,
            size=chunk.size,
            checksum=str(chunk.checksum),
            uploaded_at=chunk.uploaded_at,
        )


class UploadSessionResponse(BaseModel):
    """Response model for an upload session."""

    file_id: str = Field(..., description="Session identifier, sent back as the file_id query parameter")
    file_name: str = Field(..., description="Client-declared file name")
    total_size: int = Field(..., description="Declared total size in bytes")
    chunk_size: int = Field(..., description="Chunk size in bytes")
    total_chunks: int = Field(..., description="Number of chunks the upload consists of")
    mime_type: str = Field(..., description="Declared content type")
    status: str = Field(..., description="uploading, assembly_pending, completed or failed")
    chunks: Dict[int, ChunkResponse] = Field(default_factory=dict, description="Accepted chunks by index")
    missing_chunks: List[int] = Field(default_factory=list, description="Indices not yet uploaded")
    created_at: datetime = Field(..., description="Session creation time")
    updated_at: datetime = Field(..., description="Time of the last change")

    @classmethod
    def from_domain(cls, session: UploadSession) -> "UploadSessionResponse":
        return cls(
            file_id=session.session_id,
            file_name=session.file_name,
            total_size=session.total_size,
            chunk_size=session.chunk_size,
            total_chunks=session.total_chunks,
            mime_type=session.mime_type,
            status=session.status.value,
            chunks={index: ChunkResponse.from_domain(chunk) for index, chunk in sorted(session.chunks.items())},
            missing_chunks=session.missing_chunks(),
            created_at=session.created_at,
            updated_at=session.updated_at,
        )


class UploadResultResponse(BaseModel):
    """Response model for a completed upload."""

    session_id: str = Field(..., description="Session identifier")
    original_name: str = Field(..., description="Client-declared file name")
    size: int = Field(..., description="Size of the assembled file in bytes")
    mime_type: str = Field(..., description="Declared content type")
    path: str = Field(..., description="Blob name of the assembled file")
    url: str = Field(..., description="Public URL of the file; empty when the store has none")
    checksum: str = Field(..., description="Digest of the assembled file as 'sha256:<hex>'")
    completed_at: datetime = Field(..., description="Completion time")

    @classmethod
    def from_domain(cls, result: UploadResult) -> "UploadResultResponse":
        return cls(
            session_id=result.session_id,
            original_name=result.original_name,
            size=result.size,
            mime_type=result.mime_type,
            path=result.path,
            url=result.url,
            checksum=str(result.checksum),
            completed_at=result.completed_at,
        )
