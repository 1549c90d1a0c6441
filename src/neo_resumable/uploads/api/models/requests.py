"""
Resumable upload request models.

ONLY handles resumable upload API request validation.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InitiateUploadRequest(BaseModel):
    """Request model for initiating a resumable upload."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "file_name": "test.jpg",
                "total_size": 3145728,
                "mime_type": "image/jpeg",
                "chunk_size": 1048576,
            }
        }
    )

    file_name: str = Field(
        ...,
        description="Original file name; becomes the last segment of the stored path"
    )

    total_size: int = Field(
        ...,
        description="Total size of the file in bytes"
    )

    mime_type: str = Field(
        default="",
        description="Declared content type of the file"
    )

    chunk_size: Optional[int] = Field(
        default=None,
        description="Chunk size in bytes; omitted or 0 selects the server default"
    )

    def effective_chunk_size(self, default: int) -> int:
        """Chunk size to use, substituting ``default`` when missing or zero."""
        if not self.chunk_size:
            return default
        return self.chunk_size
