"""Upload validator.

Admission rules for new sessions and bounds checks for incoming chunks.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ...core.entities import UploadSession
from ...core.exceptions import InvalidChunkIndex, InvalidUploadRequest
from .file_name_validator import FileNameValidator
from .file_size_validator import FileSizeValidator, FileSizeValidatorConfig
from .file_type_validator import FileTypeValidator, FileTypeValidatorConfig


@dataclass
class UploadValidatorConfig:
    """Configuration for upload validator."""

    max_file_size_bytes: int = 0
    allowed_mime_types: List[str] = field(default_factory=list)


class UploadValidator:
    """Upload validation service."""

    def __init__(self, config: Optional[UploadValidatorConfig] = None):
        self._config = config or UploadValidatorConfig()
        self._name_validator = FileNameValidator()
        self._size_validator = FileSizeValidator(
            FileSizeValidatorConfig(max_file_size_bytes=self._config.max_file_size_bytes)
        )
        self._type_validator = FileTypeValidator(
            FileTypeValidatorConfig(allowed_mime_types=list(self._config.allowed_mime_types))
        )

    def validate_initiation(self, file_name: str, total_size: int, mime_type: str, chunk_size: int) -> None:
        """Validate the parameters of a new upload session.

        Raises:
            InvalidUploadRequest: bad file name, negative size or chunk size <= 0
            FileTooLarge: size exceeds the configured cap
            InvalidFileType: MIME type is not allowed
        """
        self._name_validator.validate(file_name)
        self._size_validator.validate(total_size)
        self._type_validator.validate(mime_type)

        if chunk_size <= 0:
            raise InvalidUploadRequest(
                "Chunk size must be positive", field="chunk_size", value=chunk_size
            )

    def validate_chunk_index(self, session: UploadSession, index: int) -> None:
        """Raise ``InvalidChunkIndex`` unless ``0 <= index < total_chunks``."""
        if index < 0 or index >= session.total_chunks:
            raise InvalidChunkIndex(session.session_id, index, session.total_chunks)


def create_upload_validator(config: Optional[UploadValidatorConfig] = None) -> UploadValidator:
    """Create upload validator."""
    return UploadValidator(config)
