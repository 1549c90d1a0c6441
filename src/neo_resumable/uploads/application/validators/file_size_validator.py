"""File size validator.

Checks the declared total size of an upload against the configured cap.
"""

from dataclasses import dataclass
from typing import Optional

from ...core.exceptions import FileTooLarge, InvalidUploadRequest


@dataclass
class FileSizeValidatorConfig:
    """Configuration for file size validator."""

    max_file_size_bytes: int = 0  # 0 disables the cap


class FileSizeValidator:
    """File size validation service."""

    def __init__(self, config: Optional[FileSizeValidatorConfig] = None):
        self._config = config or FileSizeValidatorConfig()

    @property
    def max_file_size_bytes(self) -> int:
        return self._config.max_file_size_bytes

    def validate(self, total_size: int) -> None:
        """Validate a declared upload size.

        Raises:
            InvalidUploadRequest: size is negative
            FileTooLarge: a cap is configured and the size exceeds it
        """
        if total_size < 0:
            raise InvalidUploadRequest(
                "Total size cannot be negative", field="total_size", value=total_size
            )

        max_size = self._config.max_file_size_bytes
        if max_size > 0 and total_size > max_size:
            raise FileTooLarge(size=total_size, max_size=max_size)


def create_file_size_validator(config: Optional[FileSizeValidatorConfig] = None) -> FileSizeValidator:
    """Create file size validator."""
    return FileSizeValidator(config)
