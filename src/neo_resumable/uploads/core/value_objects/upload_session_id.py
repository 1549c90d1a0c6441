"""Upload session identifier value object.

A session id is a 128-bit random token rendered as 32 lowercase hex
characters. It appears verbatim in blob names, so its format is validated
strictly.
"""

import re
import secrets
from dataclasses import dataclass

_SESSION_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


@dataclass(frozen=True)
class UploadSessionId:
    """Upload session identifier value object.

    Immutable and hashable for use as dictionary keys and in sets.
    """

    value: str

    def __post_init__(self):
        """Validate upload session ID format."""
        if not isinstance(self.value, str):
            raise ValueError(f"UploadSessionId must be a string, got {type(self.value).__name__}")
        if not _SESSION_ID_PATTERN.match(self.value):
            raise ValueError(f"Invalid upload session ID format: {self.value!r}")

    @classmethod
    def generate(cls) -> 'UploadSessionId':
        """Generate a new random session ID from 16 bytes of OS entropy."""
        return cls(secrets.token_hex(16))

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check whether ``value`` is a well-formed session ID."""
        return isinstance(value, str) and bool(_SESSION_ID_PATTERN.match(value))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"UploadSessionId('{self.value}')"
