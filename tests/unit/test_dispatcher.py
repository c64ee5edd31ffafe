"""Unit tests for the fake dispatcher."""
import asyncio
import logging
import re
from collections.abc import Mapping

import pytest

from arklowdun_ipc.clock import FixedClock
from arklowdun_ipc.dispatcher import FakeDispatcher
from arklowdun_ipc.log_buffer import TEST_ADAPTER_HOOK, global_hook
from arklowdun_ipc.models import UnhandledCommandError, UnknownCommandError, ValidationError
from arklowdun_ipc.rng import SeededRng
from arklowdun_ipc.scenarios import ScenarioDefinition, ScenarioLoader, ScenarioSource


def _loader(**handlers):
    return ScenarioLoader.from_sources(
        [ScenarioSource(lambda: ScenarioDefinition("custom", handlers))]
    )


_ISO_MILLIS = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


class UnreadableKeys(Mapping):
    """Mapping whose keys cannot be enumerated."""

    def __getitem__(self, key):
        raise KeyError(key)

    def __len__(self):
        return 1

    def __iter__(self):
        raise RuntimeError("keys unavailable")


def _only_entry(dispatcher):
    entries = dispatcher.dump_logs()
    assert len(entries) == 1
    return entries[0]


class TestFallbackDispatch:
    """Concrete results against the fallback scenario."""

    @pytest.mark.asyncio
    async def test_active_household(self, fallback_dispatcher):
        assert await fallback_dispatcher.invoke("household_get_active", {}) == "fallback-household"

    @pytest.mark.asyncio
    async def test_notes_cursor(self, fallback_dispatcher):
        assert await fallback_dispatcher.invoke("notes_list_cursor", {}) == {"notes": []}

    @pytest.mark.asyncio
    async def test_events_range_with_arbitrary_payload(self, fallback_dispatcher):
        result = await fallback_dispatcher.invoke("events_list_range", {"anything": True})
        assert result == {"items": [], "truncated": False, "limit": 100}

    @pytest.mark.asyncio
    async def test_missing_payload_is_an_empty_object(self, fallback_dispatcher):
        assert await fallback_dispatcher.invoke("household_get_active") == "fallback-household"
        assert _only_entry(fallback_dispatcher).payload_keys == ()

    @pytest.mark.asyncio
    async def test_success_is_logged(self, fallback_dispatcher):
        await fallback_dispatcher.invoke("events_list_range", {"start": 1, "end": 2})
        entry = _only_entry(fallback_dispatcher)
        assert entry.adapter == "fake"
        assert entry.success is True
        assert entry.payload_keys == ("end", "start")
        assert entry.error is None
        assert _ISO_MILLIS.match(entry.timestamp)

    @pytest.mark.asyncio
    async def test_log_timestamps_use_wall_clock(self, fallback_dispatcher):
        await fallback_dispatcher.invoke("household_get_active")
        assert _only_entry(fallback_dispatcher).timestamp != "2024-06-01T12:00:00.000Z"

    @pytest.mark.asyncio
    async def test_log_clock_is_injectable(self, fallback_loader):
        dispatcher = FakeDispatcher(
            fallback_loader, log_clock=FixedClock(), expose_hooks=False
        )
        await dispatcher.invoke("household_get_active")
        assert _only_entry(dispatcher).timestamp == "2024-06-01T12:00:00.000Z"


class TestFailures:
    """Every failure reaches the caller and leaves exactly one entry."""

    @pytest.mark.asyncio
    async def test_unknown_command(self, fallback_dispatcher):
        with pytest.raises(UnknownCommandError):
            await fallback_dispatcher.invoke("not_a_command", {})
        entry = _only_entry(fallback_dispatcher)
        assert entry.success is False
        assert entry.error

    @pytest.mark.asyncio
    async def test_unhandled_command(self, caplog):
        dispatcher = FakeDispatcher(_loader(), clock=FixedClock())
        with caplog.at_level(logging.ERROR, logger="arklowdun_ipc.dispatcher"):
            with pytest.raises(UnhandledCommandError) as excinfo:
                await dispatcher.invoke("household_get_active", {})
        assert excinfo.value.command == "household_get_active"
        assert excinfo.value.scenario_name == "custom"
        assert "Scenario handler missing" in caplog.text
        entry = _only_entry(dispatcher)
        assert entry.success is False
        assert "household_get_active" in entry.error

    @pytest.mark.asyncio
    async def test_invalid_request_never_reaches_handler(self):
        calls = []

        def handler(payload, context):
            calls.append(payload)
            return {"id": "hh"}

        dispatcher = FakeDispatcher(_loader(household_create=handler))
        with pytest.raises(ValidationError) as excinfo:
            await dispatcher.invoke("household_create", {"args": {}})
        assert excinfo.value.direction == "request"
        assert calls == []
        assert _only_entry(dispatcher).success is False

    @pytest.mark.asyncio
    async def test_malformed_handler_result_fails_loudly(self):
        dispatcher = FakeDispatcher(
            _loader(household_get_active=lambda payload, context: {"not": "a string"})
        )
        with pytest.raises(ValidationError) as excinfo:
            await dispatcher.invoke("household_get_active", {})
        assert excinfo.value.direction == "response"
        assert _only_entry(dispatcher).success is False

    @pytest.mark.asyncio
    async def test_handler_exception_propagates(self):
        def handler(payload, context):
            raise RuntimeError("fixture exploded")

        dispatcher = FakeDispatcher(_loader(household_get_active=handler))
        with pytest.raises(RuntimeError, match="fixture exploded"):
            await dispatcher.invoke("household_get_active", {})
        assert _only_entry(dispatcher).error == "fixture exploded"

    @pytest.mark.asyncio
    async def test_log_failure_does_not_mask_result(self, fallback_dispatcher, monkeypatch, caplog):
        def broken(entry):
            raise RuntimeError("log store gone")

        monkeypatch.setattr(fallback_dispatcher.log, "record", broken)
        with caplog.at_level(logging.WARNING, logger="arklowdun_ipc.dispatcher"):
            result = await fallback_dispatcher.invoke("household_get_active", {})
        assert result == "fallback-household"
        assert "Failed to record IPC log entry" in caplog.text

    @pytest.mark.asyncio
    async def test_cancelled_call_is_logged(self):
        async def handler(payload, context):
            await asyncio.sleep(10)
            return "hh-late"

        dispatcher = FakeDispatcher(_loader(household_get_active=handler))
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(dispatcher.invoke("household_get_active", {}), 0.01)
        entry = _only_entry(dispatcher)
        assert entry.success is False
        assert entry.error == "CancelledError"

    @pytest.mark.asyncio
    async def test_unreadable_payload_keeps_original_error(self, fallback_dispatcher):
        with pytest.raises(UnknownCommandError):
            await fallback_dispatcher.invoke("not_a_command", UnreadableKeys())
        entry = _only_entry(fallback_dispatcher)
        assert entry.success is False
        assert entry.payload_keys == ()

    @pytest.mark.asyncio
    async def test_failing_log_clock_does_not_mask_result(self, fallback_loader):
        class BrokenClock:
            def now(self):
                raise OSError("clock unavailable")

        dispatcher = FakeDispatcher(
            fallback_loader, log_clock=BrokenClock(), expose_hooks=False
        )
        assert await dispatcher.invoke("household_get_active") == "fallback-household"
        assert _ISO_MILLIS.match(_only_entry(dispatcher).timestamp)

    @pytest.mark.asyncio
    async def test_log_failure_does_not_mask_error(self, fallback_dispatcher, monkeypatch):
        def broken(entry):
            raise RuntimeError("log store gone")

        monkeypatch.setattr(fallback_dispatcher.log, "record", broken)
        with pytest.raises(UnknownCommandError):
            await fallback_dispatcher.invoke("not_a_command", {})


class TestHandlerContext:
    @pytest.mark.asyncio
    async def test_async_handlers_are_awaited(self):
        async def handler(payload, context):
            await asyncio.sleep(0)
            return "hh-async"

        dispatcher = FakeDispatcher(_loader(household_get_active=handler))
        assert await dispatcher.invoke("household_get_active", {}) == "hh-async"

    @pytest.mark.asyncio
    async def test_handler_sees_clock_and_rng(self):
        seen = {}

        def handler(payload, context):
            seen["clock"] = context.clock
            seen["rng"] = context.rng
            return None

        clock = FixedClock()
        rng = SeededRng(7)
        dispatcher = FakeDispatcher(_loader(household_get_active=handler), clock=clock, rng=rng)
        await dispatcher.invoke("household_get_active", {})
        assert seen == {"clock": clock, "rng": rng}

    @pytest.mark.asyncio
    async def test_handler_receives_normalised_payload(self):
        seen = []

        def handler(payload, context):
            seen.append(payload)
            return {
                "id": "hh-1",
                "name": payload["args"]["name"],
                "color": payload["args"]["color"],
            }

        dispatcher = FakeDispatcher(_loader(household_create=handler))
        result = await dispatcher.invoke(
            "household_create", {"args": {"name": "Home", "color": "#abc"}}
        )
        assert seen[0]["args"]["color"] == "#ABC"
        assert result["color"] == "#ABC"


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_report_defaults_to_ok(self, default_dispatcher):
        report = await default_dispatcher.invoke("db_get_health_report", {})
        assert report["status"] == "ok"
        assert report["offenders"] == []

    @pytest.mark.asyncio
    async def test_set_health_unhealthy(self, default_dispatcher):
        default_dispatcher.set_health("unhealthy")
        report = await default_dispatcher.invoke("db_recheck", {})
        assert report["status"] == "error"
        assert report["offenders"][0]["table"] == "events"

    def test_set_health_rejects_unknown_state(self, default_dispatcher):
        with pytest.raises(ValueError):
            default_dispatcher.set_health("sickly")  # type: ignore[arg-type]

    def test_scenario_health_is_adopted(self):
        dispatcher = FakeDispatcher(scenario_name="corruptHealth")
        assert dispatcher.health == "unhealthy"
        dispatcher.set_scenario("defaultHousehold")
        assert dispatcher.health == "healthy"


class TestScenarioSelection:
    def test_default_is_first_registered(self, default_dispatcher):
        assert default_dispatcher.scenario.name == "defaultHousehold"

    def test_unknown_name_uses_default(self):
        assert FakeDispatcher(scenario_name="nope").scenario.name == "defaultHousehold"

    @pytest.mark.asyncio
    async def test_set_scenario_switches_handlers(self, default_dispatcher):
        default_dispatcher.set_scenario("multipleHouseholds")
        assert await default_dispatcher.invoke("household_get_active", {}) == "hh-coastal"

    def test_list_scenarios(self, default_dispatcher):
        assert "calendarPopulated" in default_dispatcher.list_scenarios()


class TestIntrospectionHook:
    @pytest.mark.asyncio
    async def test_hook_exposes_dump_logs(self, fallback_dispatcher):
        await fallback_dispatcher.invoke("household_get_active", {})
        hook = global_hook(TEST_ADAPTER_HOOK)
        assert [e.command for e in hook["dump_logs"]()] == ["household_get_active"]
        assert hook["list_scenarios"]() == ["fallback"]

    @pytest.mark.asyncio
    async def test_hook_set_health(self, fallback_dispatcher):
        global_hook(TEST_ADAPTER_HOOK)["set_health"]("unhealthy")
        assert fallback_dispatcher.health == "unhealthy"

    def test_hooks_can_be_disabled(self, fallback_loader):
        FakeDispatcher(fallback_loader, expose_hooks=False)
        assert global_hook(TEST_ADAPTER_HOOK) == {}

    @pytest.mark.asyncio
    async def test_log_size_bounds_history(self, fallback_loader):
        dispatcher = FakeDispatcher(fallback_loader, log_size=2)
        for _ in range(5):
            await dispatcher.invoke("household_get_active", {})
        assert len(dispatcher.dump_logs()) == 2
