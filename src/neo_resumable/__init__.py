"""neo-resumable: resumable chunked uploads for asyncio services.

Quick start::

    from neo_resumable import UploadCoordinator, MemoryBlobStore, BytesStream

    coordinator = UploadCoordinator(MemoryBlobStore())
    session = await coordinator.initiate_upload("a.bin", 10, "application/octet-stream", chunk_size=4)
    ...
"""

from .__version__ import __version__
from .core.context import OperationContext
from .observability import (
    UploadObserver,
    LoggingObserver,
    NoopObserver,
    get_observer,
    set_observer,
    enable_logging_observer,
)
from .uploads.application.services.upload_coordinator import (
    UploadCoordinator,
    UploadCoordinatorConfig,
    create_upload_coordinator,
)
from .uploads.core.entities import UploadSession, UploadStatus, UploadResult, ChunkMetadata
from .uploads.infrastructure import BytesStream
from .uploads.infrastructure.storage import LocalBlobStore, MemoryBlobStore, UrlSigner

__all__ = [
    "__version__",
    "OperationContext",
    "UploadObserver",
    "LoggingObserver",
    "NoopObserver",
    "get_observer",
    "set_observer",
    "enable_logging_observer",
    "UploadCoordinator",
    "UploadCoordinatorConfig",
    "create_upload_coordinator",
    "UploadSession",
    "UploadStatus",
    "UploadResult",
    "ChunkMetadata",
    "BytesStream",
    "LocalBlobStore",
    "MemoryBlobStore",
    "UrlSigner",
]
