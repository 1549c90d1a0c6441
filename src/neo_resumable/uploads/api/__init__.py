"""Resumable upload HTTP API."""

from .routers import create_resumable_router
from .error_handlers import register_exception_handlers, ExceptionHandlerRegistry
from .dependencies import get_upload_coordinator, get_operation_context

__all__ = [
    "create_resumable_router",
    "register_exception_handlers",
    "ExceptionHandlerRegistry",
    "get_upload_coordinator",
    "get_operation_context",
]
