"""Upload lifecycle observer.

The engine reports lifecycle events to one process-wide observer. A fresh
process uses ``NoopObserver`` so nothing needs configuring before the first
upload; ``enable_logging_observer()`` routes every event to stdlib logging.
"""

import logging
from typing import Optional, Protocol, runtime_checkable

from ..core.context import OperationContext

logger = logging.getLogger(__name__)


@runtime_checkable
class UploadObserver(Protocol):
    """Passive sink for upload and storage events."""

    async def on_upload_start(self, ctx: OperationContext, file_name: str, file_size: int) -> None:
        """Called when a session is initiated."""
        ...

    async def on_upload_end(
        self,
        ctx: OperationContext,
        file_name: str,
        file_size: int,
        duration_seconds: float,
        success: bool
    ) -> None:
        """Called when completion finishes, successfully or not."""
        ...

    async def on_upload_error(self, ctx: OperationContext, file_name: str, message: str) -> None:
        """Called when completion fails."""
        ...

    async def on_storage_operation(
        self,
        ctx: OperationContext,
        operation: str,
        storage_type: str,
        duration_seconds: float,
        success: bool
    ) -> None:
        """Called after every blob store call."""
        ...


class NoopObserver:
    """Observer that discards every event."""

    async def on_upload_start(self, ctx, file_name, file_size) -> None:
        pass

    async def on_upload_end(self, ctx, file_name, file_size, duration_seconds, success) -> None:
        pass

    async def on_upload_error(self, ctx, file_name, message) -> None:
        pass

    async def on_storage_operation(self, ctx, operation, storage_type, duration_seconds, success) -> None:
        pass


class LoggingObserver:
    """Observer writing events to a logger.

    Upload events log at INFO, storage operations at DEBUG and failures at
    WARNING.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self._logger = log or logging.getLogger("neo_resumable.events")

    async def on_upload_start(self, ctx: OperationContext, file_name: str, file_size: int) -> None:
        self._logger.info(
            f"Upload started: {file_name} ({file_size} bytes) [request_id={ctx.request_id}]"
        )

    async def on_upload_end(
        self,
        ctx: OperationContext,
        file_name: str,
        file_size: int,
        duration_seconds: float,
        success: bool
    ) -> None:
        level = logging.INFO if success else logging.WARNING
        outcome = "completed" if success else "failed"
        self._logger.log(
            level,
            f"Upload {outcome}: {file_name} ({file_size} bytes) in {duration_seconds:.3f}s "
            f"[request_id={ctx.request_id}]"
        )

    async def on_upload_error(self, ctx: OperationContext, file_name: str, message: str) -> None:
        self._logger.warning(f"Upload error: {file_name}: {message} [request_id={ctx.request_id}]")

    async def on_storage_operation(
        self,
        ctx: OperationContext,
        operation: str,
        storage_type: str,
        duration_seconds: float,
        success: bool
    ) -> None:
        level = logging.DEBUG if success else logging.WARNING
        self._logger.log(
            level,
            f"Storage {operation} on {storage_type}: success={success} "
            f"duration={duration_seconds * 1000:.2f}ms [request_id={ctx.request_id}]"
        )


_observer: UploadObserver = NoopObserver()


def get_observer() -> UploadObserver:
    """Get the process-wide observer."""
    return _observer


def set_observer(observer: Optional[UploadObserver]) -> None:
    """Replace the process-wide observer. ``None`` restores the no-op sink."""
    global _observer
    _observer = observer if observer is not None else NoopObserver()


def enable_logging_observer(log: Optional[logging.Logger] = None) -> LoggingObserver:
    """Install and return a ``LoggingObserver``."""
    observer = LoggingObserver(log)
    set_observer(observer)
    return observer


async def notify(event: str, *args) -> None:
    """Deliver ``event`` to the current observer.

    An observer that raises is logged and otherwise ignored; observation
    never changes the outcome of an upload.
    """
    handler = getattr(get_observer(), event, None)
    if handler is None:
        return
    try:
        await handler(*args)
    except Exception as e:
        logger.error(f"Observer {event} failed: {e}", exc_info=True)
