"""Tests for upload entities and value objects."""

from datetime import timedelta

import pytest

from neo_resumable.uploads.core.entities import UploadResult, UploadSession, UploadStatus
from neo_resumable.uploads.core.value_objects import (
    Checksum,
    ChecksumAlgorithm,
    UploadSessionId,
    chunk_key,
    chunk_prefix,
    final_key,
    is_mime_type_allowed,
    mime_type_matches,
    normalize_mime_type,
)

MD5_ABCD = Checksum.calculate_from_bytes(b"abcd", ChecksumAlgorithm.MD5)


def make_session(total_size=10, chunk_size=4) -> UploadSession:
    return UploadSession(file_name="f.bin", total_size=total_size, chunk_size=chunk_size, mime_type="")


class TestUploadSession:
    """Session geometry and state transitions."""

    @pytest.mark.parametrize("total_size,chunk_size,expected", [
        (0, 4, 0),
        (1, 4, 1),
        (4, 4, 1),
        (5, 4, 2),
        (3 * 1024 * 1024, 1024 * 1024, 3),
    ])
    def test_total_chunks(self, total_size, chunk_size, expected):
        assert make_session(total_size, chunk_size).total_chunks == expected

    def test_invalid_geometry(self):
        with pytest.raises(ValueError):
            make_session(total_size=-1)
        with pytest.raises(ValueError):
            make_session(chunk_size=0)

    def test_expected_chunk_size(self):
        session = make_session(10, 4)

        assert [session.expected_chunk_size(i) for i in range(3)] == [4, 4, 2]

    def test_record_chunk(self):
        session = make_session()
        before = session.updated_at

        metadata = session.record_chunk(1, 4, MD5_ABCD)

        assert session.chunks == {1: metadata}
        assert session.missing_chunks() == [0, 2]
        assert session.updated_at >= before
        with pytest.raises(ValueError):
            session.record_chunk(1, 4, MD5_ABCD)
        with pytest.raises(ValueError):
            session.record_chunk(3, 4, MD5_ABCD)

    def test_promotion_requires_all_chunks(self):
        session = make_session(8, 4)
        session.record_chunk(0, 4, MD5_ABCD)

        assert session.mark_assembly_pending() is False
        session.record_chunk(1, 4, MD5_ABCD)
        assert session.mark_assembly_pending() is True
        assert session.status == UploadStatus.ASSEMBLY_PENDING
        assert session.mark_assembly_pending() is False

    def test_completion_and_failure(self):
        session = make_session(4, 4)
        session.record_chunk(0, 4, MD5_ABCD)
        result = UploadResult(
            session_id=session.session_id,
            original_name="f.bin",
            size=4,
            mime_type="",
            path=final_key(session.session_id, "f.bin"),
            url="",
            checksum=Checksum.calculate_from_bytes(b"abcd"),
        )

        session.mark_completed(result)
        assert session.status == UploadStatus.COMPLETED
        assert session.completed_at == result.completed_at
        assert session.is_terminal

        failed = make_session(4, 4)
        failed.record_chunk(0, 4, MD5_ABCD)
        failed.mark_failed("disk full")
        with pytest.raises(ValueError):
            failed.mark_completed(result)
        assert failed.failure_reason == "disk full"

    def test_completion_requires_all_chunks(self):
        session = make_session()
        with pytest.raises(ValueError):
            session.mark_completed(None)

    def test_idle(self):
        session = make_session()

        assert not session.is_idle(60)
        assert session.is_idle(60, now=session.updated_at + timedelta(seconds=61))

    def test_snapshot_is_detached(self):
        session = make_session()
        snapshot = session.snapshot()

        session.record_chunk(0, 4, MD5_ABCD)

        assert snapshot.chunks == {}
        assert snapshot.session_id == session.session_id

    def test_result_to_dict(self):
        result = UploadResult(
            session_id="a" * 32,
            original_name="f.bin",
            size=4,
            mime_type="application/octet-stream",
            path="uploads/" + "a" * 32 + "/f.bin",
            url="",
            checksum=Checksum.calculate_from_bytes(b"abcd"),
        )

        data = result.to_dict()

        assert data["checksum"].startswith("sha256:")
        assert data["completed_at"].endswith("Z")


class TestValueObjects:
    """Identifiers, checksums, blob names and MIME matching."""

    def test_session_id(self):
        generated = UploadSessionId.generate()

        assert UploadSessionId.is_valid(str(generated))
        assert not UploadSessionId.is_valid("ABC")
        with pytest.raises(ValueError):
            UploadSessionId("../../etc")

    def test_checksum(self):
        checksum = Checksum.calculate_from_bytes(b"hello", ChecksumAlgorithm.MD5)

        assert checksum.algorithm == "md5"
        assert checksum.hexdigest == "5d41402abc4b2a76b9719d911017c592"
        assert checksum.matches(b"hello")
        assert not checksum.matches(b"world")
        assert Checksum("MD5:" + checksum.hexdigest.upper()) == checksum

    @pytest.mark.parametrize("value", ["nocolon", "crc32:abcd", "md5:abc", "sha256:" + "z" * 64])
    def test_invalid_checksum(self, value):
        with pytest.raises(ValueError):
            Checksum(value)

    def test_blob_names(self):
        session_id = "b" * 32

        assert chunk_prefix(session_id) == f"chunks/{session_id}"
        assert chunk_key(session_id, 12) == f"chunks/{session_id}/chunk_12"
        assert final_key(session_id, "report.pdf") == f"uploads/{session_id}/report.pdf"

    def test_mime_matching(self):
        assert normalize_mime_type("Text/HTML; charset=utf-8") == "text/html"
        assert mime_type_matches("image/png", "image/*")
        assert not mime_type_matches("imagex/png", "image/*")
        assert mime_type_matches("anything/at-all", "*/*")
        assert is_mime_type_allowed("video/mp4", [])
        assert not is_mime_type_allowed("video/mp4", ["image/*", "application/pdf"])
