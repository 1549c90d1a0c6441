"""File type validator.

Checks a declared MIME type against the allow-list. Rules are exact types
or ``family/*`` wildcards; an empty allow-list admits every type.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ...core.exceptions import InvalidFileType, InvalidUploadRequest
from ...core.value_objects import is_mime_type_allowed


@dataclass
class FileTypeValidatorConfig:
    """Configuration for file type validator."""

    allowed_mime_types: List[str] = field(default_factory=list)


class FileTypeValidator:
    """File type validation service."""

    def __init__(self, config: Optional[FileTypeValidatorConfig] = None):
        self._config = config or FileTypeValidatorConfig()

    @property
    def allowed_mime_types(self) -> List[str]:
        return list(self._config.allowed_mime_types)

    def is_allowed(self, mime_type: str) -> bool:
        return is_mime_type_allowed(mime_type, self._config.allowed_mime_types)

    def validate(self, mime_type: str) -> None:
        """Validate a declared MIME type.

        Raises:
            InvalidUploadRequest: MIME type is missing
            InvalidFileType: type is outside the allow-list
        """
        if not mime_type or not mime_type.strip():
            if not self._config.allowed_mime_types:
                return
            raise InvalidUploadRequest("MIME type is required", field="mime_type")

        if not self.is_allowed(mime_type):
            raise InvalidFileType(mime_type, self._config.allowed_mime_types)


def create_file_type_validator(config: Optional[FileTypeValidatorConfig] = None) -> FileTypeValidator:
    """Create file type validator."""
    return FileTypeValidator(config)
