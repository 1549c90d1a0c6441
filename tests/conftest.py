"""Pytest configuration and fixtures for neo-resumable tests."""

import pytest
import pytest_asyncio

from neo_resumable.config import MIB
from neo_resumable.core.exceptions.http_mapping import configure_status_overrides
from neo_resumable.observability import set_observer
from neo_resumable.uploads.application.services.upload_coordinator import (
    UploadCoordinator,
    UploadCoordinatorConfig,
)
from neo_resumable.uploads.infrastructure.storage import MemoryBlobStore, UrlSigner

from .support import BASE_URL, SIGNING_SECRET


@pytest.fixture(autouse=True)
def reset_process_state():
    """Restore the process-wide observer and status mapping after each test."""
    yield
    set_observer(None)
    configure_status_overrides(None)


@pytest.fixture
def url_signer():
    """Signer shared by the stores under test."""
    return UrlSigner(SIGNING_SECRET, BASE_URL)


@pytest.fixture
def memory_store(url_signer):
    """In-memory blob store with a public base URL and URL signing."""
    return MemoryBlobStore(base_url=BASE_URL, signer=url_signer)


@pytest.fixture
def coordinator_config():
    """Small chunks and a 10 MiB cap keep test payloads tiny."""
    return UploadCoordinatorConfig(
        max_file_size=10 * MIB,
        default_chunk_size=4,
        hook_timeout_seconds=0.5,
        eviction_enabled=False,
    )


@pytest_asyncio.fixture
async def coordinator(memory_store, coordinator_config):
    """Upload coordinator over the in-memory store."""
    coordinator = UploadCoordinator(memory_store, coordinator_config)
    yield coordinator
    await coordinator.shutdown()
