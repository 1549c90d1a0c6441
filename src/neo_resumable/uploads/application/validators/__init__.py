"""Resumable upload validators.

Each validator handles exactly one validation concern; ``UploadValidator``
composes them for session admission.
"""

from .file_name_validator import FileNameValidator, create_file_name_validator
from .file_size_validator import FileSizeValidator, FileSizeValidatorConfig, create_file_size_validator
from .file_type_validator import FileTypeValidator, FileTypeValidatorConfig, create_file_type_validator
from .upload_validator import UploadValidator, UploadValidatorConfig, create_upload_validator

__all__ = [
    "FileNameValidator",
    "create_file_name_validator",
    "FileSizeValidator",
    "FileSizeValidatorConfig",
    "create_file_size_validator",
    "FileTypeValidator",
    "FileTypeValidatorConfig",
    "create_file_type_validator",
    "UploadValidator",
    "UploadValidatorConfig",
    "create_upload_validator",
]
