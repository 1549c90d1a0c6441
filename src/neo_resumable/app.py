"""Resumable upload service application.

FastAPI application exposing the resumable upload endpoint, with a lifespan
that runs the idle session sweeper.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .__version__ import __version__
from .config import UploadSettings, get_settings
from .core.exceptions.http_mapping import configure_status_overrides
from .uploads.api import create_resumable_router, register_exception_handlers
from .uploads.application.services.upload_coordinator import UploadCoordinator, UploadCoordinatorConfig
from .uploads.infrastructure.storage import create_blob_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    coordinator: UploadCoordinator = app.state.coordinator
    coordinator.start()
    logger.info(f"{app.title} started")

    yield

    await coordinator.shutdown()
    logger.info(f"{app.title} stopped")


def create_app(
    settings: Optional[UploadSettings] = None,
    coordinator: Optional[UploadCoordinator] = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings (environment when omitted)
        coordinator: Upload coordinator (built from settings when omitted)
    """
    settings = settings or get_settings()
    configure_status_overrides(settings.http_status_overrides)

    if coordinator is None:
        coordinator = UploadCoordinator(
            store=create_blob_store(settings),
            config=UploadCoordinatorConfig.from_settings(settings),
        )

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="Resumable chunked uploads",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.coordinator = coordinator

    register_exception_handlers(app, is_production=settings.is_production)
    app.include_router(create_resumable_router(settings.api_prefix))

    return app
