"""Resumable upload service entry point."""

import uvicorn

from .config import get_logger, get_settings, setup_logging

# Configure logging based on environment
setup_logging()

from .app import create_app  # noqa: E402

logger = get_logger(__name__)

# Create the FastAPI application
app = create_app()


def main() -> None:
    """Run the application."""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")

    uvicorn.run(
        "neo_resumable.main:app",
        host=settings.host,
        port=settings.port,
        access_log=True,
    )


if __name__ == "__main__":
    main()
