"""Tests for upload admission validators."""

import pytest

from neo_resumable.uploads.application.validators import (
    FileNameValidator,
    FileSizeValidator,
    FileSizeValidatorConfig,
    FileTypeValidator,
    FileTypeValidatorConfig,
    UploadValidator,
    UploadValidatorConfig,
)
from neo_resumable.uploads.core.entities import UploadSession
from neo_resumable.uploads.core.exceptions import (
    FileTooLarge,
    InvalidChunkIndex,
    InvalidFileType,
    InvalidUploadRequest,
)


class TestFileNameValidator:

    @pytest.mark.parametrize("name", ["report.pdf", "photo 1.JPG", "données.csv", "a" * 255])
    def test_valid_names(self, name):
        FileNameValidator().validate(name)

    @pytest.mark.parametrize("name", ["", "   ", "a" * 256, "dir/file", "dir\\file", "..", "a..b", ".", "bad\x00name", "tab\tname"])
    def test_invalid_names(self, name):
        with pytest.raises(InvalidUploadRequest):
            FileNameValidator().validate(name)


class TestFileSizeValidator:

    def test_no_cap(self):
        FileSizeValidator().validate(10 ** 12)

    def test_cap(self):
        validator = FileSizeValidator(FileSizeValidatorConfig(max_file_size_bytes=100))

        validator.validate(100)
        with pytest.raises(FileTooLarge):
            validator.validate(101)

    def test_negative(self):
        with pytest.raises(InvalidUploadRequest):
            FileSizeValidator().validate(-1)


class TestFileTypeValidator:

    def test_empty_allow_list_admits_everything(self):
        validator = FileTypeValidator()

        validator.validate("application/x-anything")
        validator.validate("")

    def test_allow_list(self):
        validator = FileTypeValidator(FileTypeValidatorConfig(allowed_mime_types=["image/*", "text/plain"]))

        validator.validate("image/webp")
        validator.validate("text/plain; charset=utf-8")
        with pytest.raises(InvalidFileType):
            validator.validate("text/html")
        with pytest.raises(InvalidUploadRequest):
            validator.validate("")


class TestUploadValidator:

    def test_validate_initiation(self):
        validator = UploadValidator(UploadValidatorConfig(max_file_size_bytes=1024, allowed_mime_types=["text/*"]))

        validator.validate_initiation("notes.txt", 1024, "text/plain", 256)
        with pytest.raises(InvalidUploadRequest):
            validator.validate_initiation("notes.txt", 1024, "text/plain", 0)
        with pytest.raises(FileTooLarge):
            validator.validate_initiation("notes.txt", 1025, "text/plain", 256)

    def test_validate_chunk_index(self):
        validator = UploadValidator()
        session = UploadSession(file_name="a", total_size=10, chunk_size=4, mime_type="")

        validator.validate_chunk_index(session, 0)
        validator.validate_chunk_index(session, 2)
        for index in (-1, 3):
            with pytest.raises(InvalidChunkIndex):
                validator.validate_chunk_index(session, index)
