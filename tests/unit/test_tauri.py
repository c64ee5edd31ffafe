"""Unit tests for the native-transport adapter."""
import asyncio

import pytest

from arklowdun_ipc.clock import FixedClock
from arklowdun_ipc.log_buffer import TAURI_ADAPTER_HOOK, global_hook
from arklowdun_ipc.models import UnknownCommandError, ValidationError
from arklowdun_ipc.tauri import TauriAdapter


class RecordingInvoker:
    """Synchronous transport that replays a canned reply."""

    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def __call__(self, command, payload):
        self.calls.append((command, payload))
        return self.reply


class TestTauriAdapter:
    @pytest.mark.asyncio
    async def test_sync_invoker(self):
        invoker = RecordingInvoker("hh-1")
        adapter = TauriAdapter(invoker, clock=FixedClock())
        assert await adapter.invoke("household_get_active") == "hh-1"
        assert invoker.calls == [("household_get_active", {})]
        entry = adapter.dump_logs()[0]
        assert entry.adapter == "tauri"
        assert entry.success is True

    @pytest.mark.asyncio
    async def test_async_invoker(self):
        async def invoker(command, payload):
            return [{"id": "hh-1", "name": "Home"}]

        adapter = TauriAdapter(invoker)
        result = await adapter.invoke("household_list", {"includeDeleted": False})
        assert result == [{"id": "hh-1", "name": "Home"}]

    @pytest.mark.asyncio
    async def test_request_validated_before_transport(self):
        invoker = RecordingInvoker(None)
        adapter = TauriAdapter(invoker)
        with pytest.raises(ValidationError):
            await adapter.invoke("household_create", {"args": {"name": ""}})
        assert invoker.calls == []
        assert adapter.dump_logs()[0].success is False

    @pytest.mark.asyncio
    async def test_response_validated(self):
        adapter = TauriAdapter(RecordingInvoker(42))
        with pytest.raises(ValidationError) as excinfo:
            await adapter.invoke("household_get_active")
        assert excinfo.value.direction == "response"

    @pytest.mark.asyncio
    async def test_unknown_command_logged(self):
        adapter = TauriAdapter(RecordingInvoker(None))
        with pytest.raises(UnknownCommandError):
            await adapter.invoke("teleport", {"to": "moon"})
        entry = adapter.dump_logs()[0]
        assert entry.payload_keys == ("to",)
        assert "teleport" in entry.error

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        def invoker(command, payload):
            raise ConnectionError("bridge closed")

        adapter = TauriAdapter(invoker)
        with pytest.raises(ConnectionError):
            await adapter.invoke("household_get_active")
        assert adapter.dump_logs()[0].error == "bridge closed"

    @pytest.mark.asyncio
    async def test_cancelled_transport_call_is_logged(self):
        async def invoker(command, payload):
            await asyncio.sleep(10)

        adapter = TauriAdapter(invoker)
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(adapter.invoke("household_get_active"), 0.01)
        entries = adapter.dump_logs()
        assert len(entries) == 1
        assert entries[0].success is False
        assert entries[0].error == "CancelledError"

    @pytest.mark.asyncio
    async def test_hook_exposes_dump_logs(self):
        adapter = TauriAdapter(RecordingInvoker("hh"))
        await adapter.invoke("household_get_active")
        dumped = global_hook(TAURI_ADAPTER_HOOK)["dump_logs"]()
        assert [entry.command for entry in dumped] == ["household_get_active"]

    def test_hook_optional(self):
        TauriAdapter(RecordingInvoker(None), expose_hooks=False)
        assert global_hook(TAURI_ADAPTER_HOOK) == {}
