"""Upload session not found exception."""

from ....core.exceptions import ResourceNotFoundError
from .upload_error import UploadError


class UploadSessionNotFound(UploadError, ResourceNotFoundError):
    """Raised when a session id is unknown, aborted or evicted."""

    def __init__(self, session_id: str, **kwargs):
        super().__init__(f"Upload session '{session_id}' not found", session_id=session_id, **kwargs)
