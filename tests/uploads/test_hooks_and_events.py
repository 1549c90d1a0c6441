"""Tests for completion hooks and lifecycle events."""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from neo_resumable.core.context import OperationContext
from neo_resumable.observability import set_observer
from neo_resumable.uploads.application.services.hook_registry import HookRegistry
from neo_resumable.uploads.core.entities import UploadSession
from neo_resumable.uploads.core.exceptions import UploadIncomplete
from neo_resumable.uploads.core.value_objects import chunk_key

from ..support import upload_all

PAYLOAD = b"0123456789"


class TestCompletionHooks:
    """Success and error hooks around completion."""

    @pytest.mark.asyncio
    async def test_success_hook_runs_once_per_assembly(self, coordinator):
        hook = AsyncMock()
        coordinator.on_success(hook, name="notify")
        ctx = OperationContext(request_id="req-1")

        session = await coordinator.initiate_upload("digits.txt", len(PAYLOAD), "text/plain")
        await upload_all(coordinator, session, PAYLOAD)
        result = await coordinator.complete_upload(session.session_id, ctx=ctx)
        await coordinator.complete_upload(session.session_id, ctx=ctx)

        hook.assert_awaited_once_with(ctx, result)
        assert coordinator.hooks.success_hooks == ["notify"]

    @pytest.mark.asyncio
    async def test_error_hook_receives_session_and_error(self, coordinator):
        hook = AsyncMock()
        coordinator.on_error(hook)

        session = await coordinator.initiate_upload("digits.txt", len(PAYLOAD), "text/plain")
        with pytest.raises(UploadIncomplete):
            await coordinator.complete_upload(session.session_id)

        hook.assert_awaited_once()
        _ctx, hook_session, error = hook.await_args.args
        assert isinstance(hook_session, UploadSession)
        assert hook_session.session_id == session.session_id
        assert isinstance(error, UploadIncomplete)

    @pytest.mark.asyncio
    async def test_error_hook_for_unknown_session(self, coordinator):
        hook = AsyncMock()
        coordinator.on_error(hook)

        with pytest.raises(Exception):
            await coordinator.complete_upload("1" * 32)

        assert hook.await_args.args[1] is None

    @pytest.mark.asyncio
    async def test_failing_hook_does_not_fail_completion(self, coordinator, caplog):
        broken = AsyncMock(side_effect=RuntimeError("webhook down"))
        healthy = AsyncMock()
        coordinator.on_success(broken, name="broken")
        coordinator.on_success(healthy, name="healthy")

        session = await coordinator.initiate_upload("digits.txt", len(PAYLOAD), "text/plain")
        await upload_all(coordinator, session, PAYLOAD)
        with caplog.at_level(logging.ERROR):
            result = await coordinator.complete_upload(session.session_id)

        assert result.size == len(PAYLOAD)
        healthy.assert_awaited_once()
        assert "Hook 'broken' failed" in caplog.text
        stats = coordinator.hooks.get_hook_stats()
        assert stats["broken"]["failures"] == 1
        assert stats["healthy"]["successes"] == 1


class TestHookRegistry:
    """Hook execution rules."""

    @pytest.mark.asyncio
    async def test_slow_hook_times_out(self, caplog):
        registry = HookRegistry(timeout_seconds=0.05)
        calls = []

        async def slow(ctx, result):
            await asyncio.sleep(5)

        async def fast(ctx, result):
            calls.append(result)

        registry.register_success_hook(slow)
        registry.register_success_hook(fast)

        with caplog.at_level(logging.ERROR):
            failures = await registry.run_success_hooks(OperationContext(), "result")

        assert failures == 1
        assert calls == ["result"]
        assert "timed out" in caplog.text

    @pytest.mark.asyncio
    async def test_hooks_run_in_registration_order(self):
        registry = HookRegistry()
        order = []

        for name in ("first", "second", "third"):
            async def hook(ctx, session, error, name=name):
                order.append(name)
            registry.register_error_hook(hook, name=name)

        await registry.run_error_hooks(OperationContext(), None, ValueError("boom"))

        assert order == ["first", "second", "third"]
        assert registry.error_hooks == ["first", "second", "third"]

    def test_clear(self):
        registry = HookRegistry()
        registry.register_success_hook(AsyncMock(), name="a")
        registry.register_error_hook(AsyncMock(), name="b")

        registry.clear()

        assert registry.success_hooks == []
        assert registry.error_hooks == []


class TestLifecycleEvents:
    """Observer events emitted by the coordinator."""

    @pytest.mark.asyncio
    async def test_successful_upload_events(self, coordinator):
        observer = AsyncMock()
        set_observer(observer)
        ctx = OperationContext(request_id="req-42")

        session = await coordinator.initiate_upload("digits.txt", len(PAYLOAD), "text/plain", ctx=ctx)
        await upload_all(coordinator, session, PAYLOAD)
        await coordinator.complete_upload(session.session_id, ctx=ctx)

        observer.on_upload_start.assert_awaited_once_with(ctx, "digits.txt", len(PAYLOAD))
        end_args = observer.on_upload_end.await_args.args
        assert end_args[0] is ctx
        assert end_args[1:3] == ("digits.txt", len(PAYLOAD))
        assert end_args[4] is True
        observer.on_upload_error.assert_not_awaited()

        operations = [call.args[1] for call in observer.on_storage_operation.await_args_list]
        assert operations.count("store") == 4  # three chunks plus the final object
        assert "get_reader" in operations
        assert all(call.args[2] == "memory" for call in observer.on_storage_operation.await_args_list)

    @pytest.mark.asyncio
    async def test_storage_events_carry_bound_context(self, coordinator):
        observer = AsyncMock()
        set_observer(observer)
        ctx = OperationContext(request_id="chunk-req")

        session = await coordinator.initiate_upload("digits.txt", len(PAYLOAD), "text/plain")
        from neo_resumable.uploads.infrastructure import BytesStream
        await coordinator.upload_chunk(session.session_id, 0, BytesStream(PAYLOAD[:4]), ctx=ctx)

        store_call = observer.on_storage_operation.await_args
        assert store_call.args[0] is ctx
        assert store_call.args[1] == "store"
        assert store_call.args[4] is True

    @pytest.mark.asyncio
    async def test_failed_completion_events(self, coordinator, memory_store):
        observer = AsyncMock()
        set_observer(observer)

        session = await coordinator.initiate_upload("digits.txt", len(PAYLOAD), "text/plain")
        await upload_all(coordinator, session, PAYLOAD)
        await memory_store.delete(chunk_key(session.session_id, 1))

        with pytest.raises(Exception):
            await coordinator.complete_upload(session.session_id)

        observer.on_upload_error.assert_awaited_once()
        assert observer.on_upload_end.await_args.args[4] is False

        failed_reads = [
            call for call in observer.on_storage_operation.await_args_list
            if call.args[1] == "get_reader" and call.args[4] is False
        ]
        assert len(failed_reads) == 1

    @pytest.mark.asyncio
    async def test_broken_observer_never_fails_uploads(self, coordinator, caplog):
        observer = AsyncMock()
        observer.on_upload_start.side_effect = RuntimeError("metrics backend down")
        set_observer(observer)

        with caplog.at_level(logging.ERROR):
            session = await coordinator.initiate_upload("digits.txt", len(PAYLOAD), "text/plain")

        assert session.session_id in coordinator.registry
        assert "on_upload_start failed" in caplog.text
