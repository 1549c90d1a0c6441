"""Resumable upload commands.

Write operations of the upload engine, one command per file.
"""

from .initiate_upload import InitiateUploadCommand, InitiateUploadData, create_initiate_upload_command
from .upload_chunk import UploadChunkCommand, UploadChunkData, create_upload_chunk_command
from .complete_upload import (
    CompleteUploadCommand,
    CompleteUploadData,
    CompleteUploadResult,
    create_complete_upload_command,
)
from .abort_upload import AbortUploadCommand, AbortUploadData, create_abort_upload_command

__all__ = [
    "InitiateUploadCommand",
    "InitiateUploadData",
    "create_initiate_upload_command",
    "UploadChunkCommand",
    "UploadChunkData",
    "create_upload_chunk_command",
    "CompleteUploadCommand",
    "CompleteUploadData",
    "CompleteUploadResult",
    "create_complete_upload_command",
    "AbortUploadCommand",
    "AbortUploadData",
    "create_abort_upload_command",
]
