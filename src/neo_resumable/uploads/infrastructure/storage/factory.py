"""Blob store construction from settings."""

import logging

from ....config import UploadSettings
from ....core.exceptions import ConfigurationError
from ...core.protocols import BlobStore
from .local_blob_store import LocalBlobStore
from .memory_blob_store import MemoryBlobStore
from .url_signer import UrlSigner

logger = logging.getLogger(__name__)


def create_url_signer(settings: UploadSettings):
    """Build a ``UrlSigner`` when a signing secret is configured."""
    if settings.url_signing_secret is None:
        return None
    return UrlSigner(settings.url_signing_secret.get_secret_value(), settings.storage_base_url)


def create_blob_store(settings: UploadSettings) -> BlobStore:
    """Create the configured blob store backend."""
    signer = create_url_signer(settings)

    if settings.storage_backend == "local":
        if not settings.storage_path.strip():
            raise ConfigurationError(
                "storage_path is required for the local blob store",
                details={"storage_backend": settings.storage_backend},
            )
        logger.info(f"Using local blob store at {settings.storage_path}")
        return LocalBlobStore(settings.storage_path, base_url=settings.storage_base_url, signer=signer)

    logger.info("Using in-memory blob store")
    return MemoryBlobStore(base_url=settings.storage_base_url, signer=signer)
