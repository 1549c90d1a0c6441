"""Resumable upload routers."""

from .resumable_router import create_resumable_router

__all__ = ["create_resumable_router"]
