"""Tests for the upload lifecycle observer."""

import logging
from unittest.mock import AsyncMock

import pytest

from neo_resumable.core.context import OperationContext
from neo_resumable.observability import (
    LoggingObserver,
    NoopObserver,
    UploadObserver,
    enable_logging_observer,
    get_observer,
    notify,
    set_observer,
)


class TestObserverRegistry:

    def test_default_is_noop(self):
        assert isinstance(get_observer(), NoopObserver)
        assert isinstance(get_observer(), UploadObserver)

    def test_set_and_reset(self):
        observer = LoggingObserver()
        set_observer(observer)
        assert get_observer() is observer

        set_observer(None)
        assert isinstance(get_observer(), NoopObserver)

    def test_enable_logging_observer(self):
        observer = enable_logging_observer()

        assert isinstance(observer, LoggingObserver)
        assert get_observer() is observer


class TestNotify:

    @pytest.mark.asyncio
    async def test_delivers_event(self):
        observer = AsyncMock()
        set_observer(observer)
        ctx = OperationContext()

        await notify("on_upload_start", ctx, "a.txt", 3)

        observer.on_upload_start.assert_awaited_once_with(ctx, "a.txt", 3)

    @pytest.mark.asyncio
    async def test_observer_errors_are_logged(self, caplog):
        observer = AsyncMock()
        observer.on_upload_error.side_effect = RuntimeError("sink unavailable")
        set_observer(observer)

        with caplog.at_level(logging.ERROR, logger="neo_resumable.observability.observer"):
            await notify("on_upload_error", OperationContext(), "a.txt", "boom")

        assert "sink unavailable" in caplog.text

    @pytest.mark.asyncio
    async def test_unknown_event_is_ignored(self):
        set_observer(NoopObserver())

        await notify("on_something_else", OperationContext())


class TestLoggingObserver:

    @pytest.mark.asyncio
    async def test_log_levels(self, caplog):
        observer = LoggingObserver(logging.getLogger("test.events"))
        ctx = OperationContext(request_id="r1")

        with caplog.at_level(logging.DEBUG, logger="test.events"):
            await observer.on_upload_start(ctx, "a.txt", 10)
            await observer.on_upload_end(ctx, "a.txt", 10, 0.25, True)
            await observer.on_upload_end(ctx, "a.txt", 10, 0.25, False)
            await observer.on_upload_error(ctx, "a.txt", "disk full")
            await observer.on_storage_operation(ctx, "store", "memory", 0.001, True)

        levels = [record.levelno for record in caplog.records]
        assert levels == [logging.INFO, logging.INFO, logging.WARNING, logging.WARNING, logging.DEBUG]
        assert all("request_id=r1" in record.getMessage() for record in caplog.records)
