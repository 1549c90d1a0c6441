"""Tests for the exception hierarchy and HTTP status mapping."""

import pytest

from neo_resumable.core.exceptions import NeoResumableError, create_error_response, get_http_status_code
from neo_resumable.core.exceptions.http_mapping import HttpStatusMapper, configure_status_overrides
from neo_resumable.uploads.core.exceptions import (
    AssemblyFailed,
    BlobNotFound,
    DuplicateChunk,
    FileTooLarge,
    InvalidChunkIndex,
    InvalidUploadRequest,
    StorageOperationFailed,
    UploadIncomplete,
    UploadSessionNotFound,
    UploadTimedOut,
)

SESSION_ID = "c" * 32


@pytest.mark.parametrize("error,status", [
    (InvalidUploadRequest("bad"), 400),
    (FileTooLarge(20, 10), 400),
    (InvalidChunkIndex(SESSION_ID, 9, 3), 400),
    (DuplicateChunk(SESSION_ID, 0), 400),
    (UploadIncomplete(SESSION_ID, 1, 3), 400),
    (AssemblyFailed(SESSION_ID, "short read"), 400),
    (StorageOperationFailed("disk full", "store", "a", "local"), 400),
    (BlobNotFound("a", "get_reader"), 400),
    (UploadSessionNotFound(SESSION_ID), 404),
    (UploadTimedOut("complete_upload", SESSION_ID), 408),
    (NeoResumableError("unexpected"), 500),
    (RuntimeError("not ours"), 500),
])
def test_default_status_codes(error, status):
    assert get_http_status_code(error) == status


def test_overrides_apply_to_subclasses():
    mapper = HttpStatusMapper({"ExternalServiceError": 502})

    assert mapper.get_status_code(BlobNotFound("a", "get_reader")) == 502
    assert mapper.get_status_code(UploadSessionNotFound(SESSION_ID)) == 404
    assert mapper.get_mapping_stats()["cached_mappings"] == 2


def test_configure_global_overrides():
    configure_status_overrides({"UploadIncomplete": 409})

    assert get_http_status_code(UploadIncomplete(SESSION_ID, 0, 1)) == 409


def test_error_response():
    error = InvalidChunkIndex(SESSION_ID, 9, 3)

    body = create_error_response(error)

    assert body["error"]["code"] == "InvalidChunkIndex"
    assert body["error"]["type"] == "InvalidChunkIndex"
    assert body["error"]["details"] == {"session_id": SESSION_ID, "chunk_index": 9, "total_chunks": 3}
    assert error.session_id == SESSION_ID


def test_session_id_absent():
    assert NeoResumableError("unexpected").session_id is None
