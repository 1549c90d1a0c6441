"""Resumable upload infrastructure: blob stores and stream adapters."""

from .streams import BytesStream, IteratorStream, read_limited, copy_stream

__all__ = [
    "BytesStream",
    "IteratorStream",
    "read_limited",
    "copy_stream",
]
