"""File name validator.

The client-declared file name becomes the last segment of the assembled
blob name, so it must be a single safe path segment.
"""

from ...core.exceptions import InvalidUploadRequest

MAX_FILE_NAME_LENGTH = 255


class FileNameValidator:
    """File name validation service."""

    def validate(self, file_name: str) -> None:
        """Validate a declared file name.

        Raises:
            InvalidUploadRequest: name is empty, too long, or unsafe
        """
        if not file_name or not file_name.strip():
            raise InvalidUploadRequest("File name cannot be empty", field="file_name")

        if len(file_name) > MAX_FILE_NAME_LENGTH:
            raise InvalidUploadRequest(
                f"File name exceeds {MAX_FILE_NAME_LENGTH} characters", field="file_name"
            )

        if any(ord(ch) < 32 or ord(ch) == 127 for ch in file_name):
            raise InvalidUploadRequest("File name contains control characters", field="file_name")

        if "/" in file_name or "\\" in file_name:
            raise InvalidUploadRequest(
                "File name cannot contain path separators", field="file_name", value=file_name
            )

        if ".." in file_name or file_name == ".":
            raise InvalidUploadRequest(
                "File name cannot contain '..'", field="file_name", value=file_name
            )


def create_file_name_validator() -> FileNameValidator:
    """Create file name validator."""
    return FileNameValidator()
