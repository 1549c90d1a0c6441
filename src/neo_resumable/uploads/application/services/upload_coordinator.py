"""Upload coordinator service.

Facade over the resumable upload engine. Every public operation binds an
``OperationContext``, enforces its deadline and reports lifecycle events to
the observer; completion additionally runs the success or error hooks.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, List, Optional, TypeVar

from ....config import MIB, UploadSettings
from ....core.context import OperationContext, bind_context, deadline_scope
from ....observability import notify
from ...core.entities import ChunkMetadata, UploadResult, UploadSession, UploadStatus
from ...core.exceptions import InvalidUploadRequest, UploadSessionNotFound, UploadTimedOut
from ...core.protocols import AsyncReadable, BlobStore
from ...infrastructure.storage import MemoryBlobStore, ObservableBlobStore
from ..commands import (
    AbortUploadCommand,
    AbortUploadData,
    CompleteUploadCommand,
    CompleteUploadData,
    InitiateUploadCommand,
    InitiateUploadData,
    UploadChunkCommand,
    UploadChunkData,
)
from ..queries import GetUploadStatusData, GetUploadStatusQuery
from ..validators import UploadValidator, UploadValidatorConfig
from .cleanup_service import CleanupService, CleanupServiceConfig
from .hook_registry import ErrorHook, HookRegistry, SuccessHook
from .session_registry import SessionRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class UploadCoordinatorConfig:
    """Configuration for upload coordinator service."""

    max_file_size: int = 0  # 0 disables the cap
    allowed_mime_types: List[str] = field(default_factory=list)
    default_chunk_size: int = MIB
    session_ttl_seconds: float = 86400  # 24 hours
    eviction_interval_seconds: float = 300  # 5 minutes
    eviction_enabled: bool = True
    hook_timeout_seconds: float = 30.0
    signed_url_ttl_seconds: int = 3600

    @classmethod
    def from_settings(cls, settings: UploadSettings) -> "UploadCoordinatorConfig":
        """Build the engine configuration from application settings."""
        return cls(
            max_file_size=settings.max_file_size,
            allowed_mime_types=list(settings.allowed_mime_types),
            default_chunk_size=settings.default_chunk_size,
            session_ttl_seconds=settings.session_ttl_seconds,
            eviction_interval_seconds=settings.eviction_interval_seconds,
            eviction_enabled=settings.eviction_enabled,
            hook_timeout_seconds=settings.hook_timeout_seconds,
            signed_url_ttl_seconds=settings.signed_url_ttl_seconds,
        )


class UploadCoordinator:
    """Resumable upload coordination service."""

    def __init__(
        self,
        store: Optional[BlobStore] = None,
        config: Optional[UploadCoordinatorConfig] = None,
        registry: Optional[SessionRegistry] = None
    ):
        self._config = config or UploadCoordinatorConfig()
        inner = store if store is not None else MemoryBlobStore()
        self._store = inner if isinstance(inner, ObservableBlobStore) else ObservableBlobStore(inner)
        self._registry = registry or SessionRegistry()

        self._validator = UploadValidator(
            UploadValidatorConfig(
                max_file_size_bytes=self._config.max_file_size,
                allowed_mime_types=list(self._config.allowed_mime_types),
            )
        )
        self._hooks = HookRegistry(timeout_seconds=self._config.hook_timeout_seconds)
        self._cleanup = CleanupService(
            self._registry,
            self._store,
            CleanupServiceConfig(
                session_ttl_seconds=self._config.session_ttl_seconds,
                eviction_interval_seconds=self._config.eviction_interval_seconds,
            ),
        )

        self._initiate = InitiateUploadCommand(self._registry, self._validator)
        self._upload_chunk = UploadChunkCommand(self._registry, self._store, self._validator)
        self._complete = CompleteUploadCommand(self._registry, self._store, self._cleanup)
        self._abort = AbortUploadCommand(self._registry, self._cleanup)
        self._status = GetUploadStatusQuery(self._registry)

    @property
    def config(self) -> UploadCoordinatorConfig:
        return self._config

    @property
    def store(self) -> BlobStore:
        return self._store

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def cleanup(self) -> CleanupService:
        return self._cleanup

    async def _within_deadline(
        self,
        operation: str,
        ctx: OperationContext,
        call: Awaitable[T],
        session_id: Optional[str] = None
    ) -> T:
        # An already expired deadline fails before any work starts
        if ctx.expired:
            if asyncio.iscoroutine(call):
                call.close()
            logger.warning(f"{operation} rejected, deadline already passed [request_id={ctx.request_id}]")
            raise UploadTimedOut(operation, session_id=session_id)
        try:
            async with deadline_scope(ctx):
                return await call
        except TimeoutError as e:
            logger.warning(f"{operation} timed out [request_id={ctx.request_id}]")
            raise UploadTimedOut(operation, session_id=session_id) from e

    # Operations

    async def initiate_upload(
        self,
        file_name: str,
        total_size: int,
        mime_type: str,
        chunk_size: Optional[int] = None,
        ctx: Optional[OperationContext] = None
    ) -> UploadSession:
        """Create a new upload session.

        Args:
            file_name: Client-declared file name
            total_size: Declared total bytes
            mime_type: Declared content type
            chunk_size: Chunk size in bytes (configured default when ``None``)
            ctx: Operation context

        Returns:
            Snapshot of the new session
        """
        if chunk_size is None:
            chunk_size = self._config.default_chunk_size

        with bind_context(ctx) as bound:
            session = await self._within_deadline(
                "initiate_upload",
                bound,
                self._initiate.execute(InitiateUploadData(file_name, total_size, mime_type, chunk_size)),
            )
            await notify("on_upload_start", bound, session.file_name, session.total_size)
            return session

    async def upload_chunk(
        self,
        session_id: str,
        index: int,
        stream: AsyncReadable,
        ctx: Optional[OperationContext] = None
    ) -> ChunkMetadata:
        """Store chunk ``index`` of a session from ``stream``."""
        with bind_context(ctx) as bound:
            return await self._within_deadline(
                "upload_chunk",
                bound,
                self._upload_chunk.execute(UploadChunkData(session_id, index, stream)),
                session_id,
            )

    async def get_upload_status(
        self,
        session_id: str,
        ctx: Optional[OperationContext] = None
    ) -> UploadSession:
        """Snapshot of a session, promoted to ``assembly_pending`` when ready."""
        with bind_context(ctx) as bound:
            return await self._within_deadline(
                "get_upload_status",
                bound,
                self._status.execute(GetUploadStatusData(session_id)),
                session_id,
            )

    async def complete_upload(
        self,
        session_id: str,
        ctx: Optional[OperationContext] = None
    ) -> UploadResult:
        """Assemble a session into its final blob.

        Success hooks and the upload end event fire once, on the call that
        performed the assembly. Failures fire the upload error event, the
        upload end event and the error hooks before being re-raised.
        """
        with bind_context(ctx) as bound:
            started = time.perf_counter()
            try:
                outcome = await self._within_deadline(
                    "complete_upload",
                    bound,
                    self._complete.execute(CompleteUploadData(session_id)),
                    session_id,
                )
            except Exception as e:
                await self._report_failure(bound, session_id, e, time.perf_counter() - started)
                raise

            result = outcome.result
            if not outcome.already_completed:
                await notify(
                    "on_upload_end",
                    bound,
                    result.original_name,
                    result.size,
                    time.perf_counter() - started,
                    True,
                )
                await self._hooks.run_success_hooks(bound, result)
            return result

    async def _report_failure(
        self,
        ctx: OperationContext,
        session_id: str,
        error: Exception,
        duration_seconds: float
    ) -> None:
        session = None
        try:
            session = await self._registry.get(session_id)
        except UploadSessionNotFound:
            pass

        file_name = session.file_name if session else session_id
        file_size = session.total_size if session else 0
        message = getattr(error, "message", None) or str(error)

        await notify("on_upload_error", ctx, file_name, message)
        await notify("on_upload_end", ctx, file_name, file_size, duration_seconds, False)
        await self._hooks.run_error_hooks(ctx, session.snapshot() if session else None, error)

    async def abort_upload(self, session_id: str, ctx: Optional[OperationContext] = None) -> None:
        """Remove a session and reclaim its chunks in the background."""
        with bind_context(ctx) as bound:
            await self._within_deadline(
                "abort_upload",
                bound,
                self._abort.execute(AbortUploadData(session_id)),
                session_id,
            )

    async def get_download_url(
        self,
        session_id: str,
        ttl_seconds: Optional[int] = None,
        ctx: Optional[OperationContext] = None
    ) -> str:
        """Signed, time-bounded URL of a completed upload's final blob.

        Raises:
            UploadSessionNotFound: unknown session
            InvalidUploadRequest: session has not completed
            StorageOperationFailed: the store cannot sign URLs
        """
        with bind_context(ctx) as bound:
            session = await self._within_deadline(
                "get_download_url", bound, self._status.execute(GetUploadStatusData(session_id)), session_id
            )
            if session.status != UploadStatus.COMPLETED or session.result is None:
                raise InvalidUploadRequest(
                    "Upload has not completed", session_id=session_id, status=session.status.value
                )
            ttl = ttl_seconds or self._config.signed_url_ttl_seconds
            return await self._within_deadline(
                "get_download_url", bound, self._store.get_signed_url(session.result.path, ttl), session_id
            )

    # Hooks

    def on_success(self, hook: SuccessHook, name: Optional[str] = None) -> None:
        """Register a success hook ``(context, result)``."""
        self._hooks.register_success_hook(hook, name)

    def on_error(self, hook: ErrorHook, name: Optional[str] = None) -> None:
        """Register an error hook ``(context, session, error)``."""
        self._hooks.register_error_hook(hook, name)

    # Lifecycle

    async def evict_idle_sessions(self, now: Optional[datetime] = None) -> List[str]:
        """Evict sessions idle for longer than the TTL; see ``CleanupService``."""
        return await self._cleanup.evict_idle_sessions(now)

    async def wait_for_background_tasks(self) -> None:
        """Wait for scheduled chunk cleanup to finish."""
        await self._cleanup.wait_for_background_tasks()

    def start(self) -> None:
        """Start the eviction sweeper when enabled."""
        if self._config.eviction_enabled:
            self._cleanup.start()

    async def shutdown(self) -> None:
        """Stop the sweeper, drain cleanup and close the blob store."""
        await self._cleanup.stop()
        await self._cleanup.wait_for_background_tasks()
        await self._store.close()
        logger.info("Upload coordinator shut down")


def create_upload_coordinator(
    store: Optional[BlobStore] = None,
    config: Optional[UploadCoordinatorConfig] = None
) -> UploadCoordinator:
    """Create upload coordinator service."""
    return UploadCoordinator(store, config)
