"""Content checksum value object.

Chunks are digested with MD5 (accidental corruption only) and the assembled
object with SHA-256. Values are stored as ``"algorithm:hexdigest"``.
"""

import hashlib
import hmac
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ChecksumAlgorithm(Enum):
    """Supported checksum algorithms."""
    MD5 = "md5"
    SHA256 = "sha256"


_DIGEST_LENGTHS = {
    ChecksumAlgorithm.MD5.value: 32,
    ChecksumAlgorithm.SHA256.value: 64,
}


@dataclass(frozen=True)
class Checksum:
    """Checksum value object.

    Features:
    - Format validation with algorithm prefix
    - Incremental calculation through ``Checksum.hasher()``
    """

    value: str  # Format: "algorithm:hexdigest" (e.g., "sha256:abc123...")

    CHUNK_ALGORITHM = ChecksumAlgorithm.MD5
    FILE_ALGORITHM = ChecksumAlgorithm.SHA256

    def __post_init__(self):
        """Validate checksum format and algorithm."""
        if not isinstance(self.value, str) or ':' not in self.value:
            raise ValueError(f"Invalid checksum format: {self.value!r}. Expected 'algorithm:hexdigest'")

        normalized = self.value.strip().lower()
        algorithm, hexdigest = normalized.split(':', 1)

        if algorithm not in _DIGEST_LENGTHS:
            raise ValueError(f"Unsupported checksum algorithm: {algorithm}")

        if len(hexdigest) != _DIGEST_LENGTHS[algorithm]:
            raise ValueError(
                f"Invalid digest length for {algorithm}: got {len(hexdigest)}, "
                f"expected {_DIGEST_LENGTHS[algorithm]}"
            )
        try:
            int(hexdigest, 16)
        except ValueError as e:
            raise ValueError(f"Invalid hexadecimal digest: {hexdigest}") from e

        object.__setattr__(self, 'value', normalized)

    @staticmethod
    def hasher(algorithm: ChecksumAlgorithm):
        """Return a fresh hashlib object for incremental updates."""
        return hashlib.new(algorithm.value)

    @classmethod
    def from_hasher(cls, hasher) -> 'Checksum':
        """Build a checksum from a finished hashlib object."""
        return cls(f"{hasher.name}:{hasher.hexdigest()}")

    @classmethod
    def calculate_from_bytes(cls, content: bytes, algorithm: Optional[ChecksumAlgorithm] = None) -> 'Checksum':
        """Calculate checksum from byte content."""
        hasher = cls.hasher(algorithm or cls.FILE_ALGORITHM)
        hasher.update(content)
        return cls.from_hasher(hasher)

    @property
    def algorithm(self) -> str:
        return self.value.split(':', 1)[0]

    @property
    def hexdigest(self) -> str:
        return self.value.split(':', 1)[1]

    def matches(self, content: bytes) -> bool:
        """Verify that ``content`` hashes to this checksum."""
        other = self.calculate_from_bytes(content, ChecksumAlgorithm(self.algorithm))
        return hmac.compare_digest(self.hexdigest, other.hexdigest)

    def __str__(self) -> str:
        return self.value
