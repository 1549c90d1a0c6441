"""Upload session entity.

Per-upload state of a resumable upload: declared geometry, the table of
accepted chunks, lifecycle status and timestamps. Every session carries its
own reader/writer lock so operations on one session never block another.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from ....utils import AsyncReadWriteLock, utc_now, seconds_between
from ..value_objects import Checksum, UploadSessionId
from .upload_result import UploadResult


class UploadStatus(Enum):
    """Upload session status."""
    UPLOADING = "uploading"
    ASSEMBLY_PENDING = "assembly_pending"  # every chunk arrived, not yet assembled
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class ChunkMetadata:
    """Information about an accepted chunk."""
    index: int
    size: int
    checksum: Checksum
    uploaded_at: datetime = field(default_factory=utc_now)


@dataclass
class UploadSession:
    """Upload session entity.

    Invariants maintained by the mutators below:
    - every recorded index lies in ``[0, total_chunks)`` and appears once
    - ``completed`` is only set together with a result
    - ``failed`` is sticky
    - ``updated_at`` moves forward on every mutation

    Callers mutate a session only while holding ``lock`` for writing.
    """

    file_name: str
    total_size: int
    chunk_size: int
    mime_type: str
    id: UploadSessionId = field(default_factory=UploadSessionId.generate)

    total_chunks: int = field(init=False, default=0)
    status: UploadStatus = UploadStatus.UPLOADING
    chunks: Dict[int, ChunkMetadata] = field(default_factory=dict)

    created_at: datetime = field(default_factory=utc_now)
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    failure_reason: Optional[str] = None
    result: Optional[UploadResult] = None

    # Set by abort/eviction; a closed session accepts no further writes
    closed: bool = False

    lock: AsyncReadWriteLock = field(default_factory=AsyncReadWriteLock, repr=False, compare=False)

    def __post_init__(self):
        """Validate entity state after initialization."""
        if self.total_size < 0:
            raise ValueError("Total size cannot be negative")

        if self.chunk_size <= 0:
            raise ValueError("Chunk size must be positive")

        self.total_chunks = self._calculate_total_chunks()
        if self.updated_at is None:
            self.updated_at = self.created_at

    def _calculate_total_chunks(self) -> int:
        """ceil(total_size / chunk_size); zero-size uploads have no chunks."""
        return (self.total_size + self.chunk_size - 1) // self.chunk_size

    @property
    def session_id(self) -> str:
        return str(self.id)

    @property
    def uploaded_chunks(self) -> int:
        return len(self.chunks)

    @property
    def uploaded_size(self) -> int:
        return sum(chunk.size for chunk in self.chunks.values())

    @property
    def all_chunks_received(self) -> bool:
        return len(self.chunks) == self.total_chunks

    @property
    def is_terminal(self) -> bool:
        return self.status in {UploadStatus.COMPLETED, UploadStatus.FAILED}

    def expected_chunk_size(self, index: int) -> int:
        """Exact byte count chunk ``index`` must carry; only the last may be short."""
        return min(self.chunk_size, self.total_size - index * self.chunk_size)

    def has_chunk(self, index: int) -> bool:
        return index in self.chunks

    def missing_chunks(self) -> List[int]:
        """Indices still to be uploaded, ascending."""
        return [i for i in range(self.total_chunks) if i not in self.chunks]

    def sorted_chunks(self) -> List[ChunkMetadata]:
        """Accepted chunks in ascending index order."""
        return [self.chunks[i] for i in sorted(self.chunks)]

    def touch(self) -> None:
        """Refresh ``updated_at``."""
        now = utc_now()
        if now > self.updated_at:
            self.updated_at = now

    def record_chunk(self, index: int, size: int, checksum: Checksum) -> ChunkMetadata:
        """Record an accepted chunk."""
        if not 0 <= index < self.total_chunks:
            raise ValueError(f"Chunk index {index} out of range [0, {self.total_chunks})")
        if index in self.chunks:
            raise ValueError(f"Chunk {index} already recorded")
        if self.status != UploadStatus.UPLOADING:
            raise ValueError(f"Cannot add chunk: session status is {self.status.value}")

        metadata = ChunkMetadata(index=index, size=size, checksum=checksum)
        self.chunks[index] = metadata
        self.touch()
        return metadata

    def mark_assembly_pending(self) -> bool:
        """Promote ``uploading`` to ``assembly_pending`` once every chunk arrived.

        Returns:
            True if the status changed
        """
        if self.status == UploadStatus.UPLOADING and self.all_chunks_received:
            self.status = UploadStatus.ASSEMBLY_PENDING
            self.touch()
            return True
        return False

    def mark_completed(self, result: UploadResult) -> None:
        """Mark upload as completed."""
        if self.status == UploadStatus.FAILED:
            raise ValueError("Cannot complete upload: session has failed")
        if not self.all_chunks_received:
            raise ValueError(f"Cannot complete upload: missing chunks {self.missing_chunks()}")

        self.status = UploadStatus.COMPLETED
        self.result = result
        self.completed_at = result.completed_at
        self.touch()

    def mark_failed(self, reason: str) -> None:
        """Mark upload as failed. Irreversible."""
        self.status = UploadStatus.FAILED
        self.failure_reason = reason
        self.touch()

    def close(self) -> None:
        """Flag the session as torn down by abort or eviction."""
        self.closed = True

    def idle_seconds(self, now: Optional[datetime] = None) -> float:
        """Seconds since the last mutation."""
        return seconds_between(self.updated_at, now)

    def is_idle(self, ttl_seconds: float, now: Optional[datetime] = None) -> bool:
        """Check whether the session has been idle longer than ``ttl_seconds``."""
        return self.idle_seconds(now) > ttl_seconds

    def snapshot(self) -> "UploadSession":
        """Copy detached from later chunk writes; the lock is shared."""
        clone = copy.copy(self)
        clone.chunks = dict(self.chunks)
        return clone

    def __repr__(self) -> str:
        """Developer representation."""
        return (
            f"UploadSession(id='{self.id}', file_name='{self.file_name}', "
            f"status='{self.status.value}', chunks={len(self.chunks)}/{self.total_chunks})"
        )
