"""Resumable upload services.

``UploadCoordinator`` lives in ``upload_coordinator`` and is imported from
there; the commands depend on the services exported here.
"""

from .session_registry import SessionRegistry
from .hook_registry import HookRegistry, SuccessHook, ErrorHook
from .cleanup_service import CleanupService, CleanupServiceConfig, create_cleanup_service

__all__ = [
    "SessionRegistry",
    "HookRegistry",
    "SuccessHook",
    "ErrorHook",
    "CleanupService",
    "CleanupServiceConfig",
    "create_cleanup_service",
]
