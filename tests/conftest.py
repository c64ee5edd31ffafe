"""Shared pytest fixtures for all tests."""
from typing import Iterator

import pytest

from arklowdun_ipc import provider
from arklowdun_ipc.clock import FixedClock
from arklowdun_ipc.dispatcher import FakeDispatcher
from arklowdun_ipc.log_buffer import TAURI_ADAPTER_HOOK, TEST_ADAPTER_HOOK, detach_global_hook
from arklowdun_ipc.rng import SeededRng
from arklowdun_ipc.scenarios import ScenarioLoader, build_registry


IPC_ENV_VARS = ("IPC_MODE", "MODE", "IPC_ADAPTER", "IPC_SCENARIO", "IPC_LOG_SIZE", "IPC_SEED")


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset global hooks, the provider and IPC environment around each test."""
    for name in IPC_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    provider.reset_ipc_adapter()
    detach_global_hook(TEST_ADAPTER_HOOK)
    detach_global_hook(TAURI_ADAPTER_HOOK)
    yield
    provider.reset_ipc_adapter()
    detach_global_hook(TEST_ADAPTER_HOOK)
    detach_global_hook(TAURI_ADAPTER_HOOK)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def fallback_loader() -> ScenarioLoader:
    """Loader over an empty source list, i.e. only the fallback scenario."""
    return ScenarioLoader(build_registry([]))


@pytest.fixture
def fallback_dispatcher(fallback_loader: ScenarioLoader, clock: FixedClock) -> FakeDispatcher:
    return FakeDispatcher(fallback_loader, clock=clock, rng=SeededRng(42))


@pytest.fixture
def default_dispatcher(clock: FixedClock) -> FakeDispatcher:
    """Dispatcher over the built-in scenarios, seeded for reproducible ids."""
    return FakeDispatcher(clock=clock, rng=SeededRng(42))
