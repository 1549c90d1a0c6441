"""Blob names used by the upload engine.

Layout inside the blob store:

- ``chunks/<session_id>/chunk_<index>``: staging blob of one chunk
- ``uploads/<session_id>/<file_name>``: assembled object
"""

CHUNKS_ROOT = "chunks"
UPLOADS_ROOT = "uploads"


def chunk_prefix(session_id: str) -> str:
    """Directory prefix holding every chunk of a session."""
    return f"{CHUNKS_ROOT}/{session_id}"


def chunk_key(session_id: str, index: int) -> str:
    """Blob name of chunk ``index``; the index is decimal without padding."""
    return f"{chunk_prefix(session_id)}/chunk_{index}"


def final_key(session_id: str, file_name: str) -> str:
    """Blob name of the assembled object."""
    return f"{UPLOADS_ROOT}/{session_id}/{file_name}"
