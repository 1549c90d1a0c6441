"""Upload result entity.

Produced once by a successful assembly and kept on the session so a
repeated completion returns the same result.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from ....utils import utc_now, to_utc_string
from ..value_objects import Checksum


@dataclass(frozen=True)
class UploadResult:
    """Outcome of a completed resumable upload."""

    session_id: str
    original_name: str
    size: int
    mime_type: str
    path: str
    url: str
    checksum: Checksum
    completed_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        return {
            "session_id": self.session_id,
            "original_name": self.original_name,
            "size": self.size,
            "mime_type": self.mime_type,
            "path": self.path,
            "url": self.url,
            "checksum": str(self.checksum),
            "completed_at": to_utc_string(self.completed_at),
        }
