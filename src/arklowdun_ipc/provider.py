"""Process-wide adapter selection and the ``call`` entry point.

Feature code awaits :func:`call`; which adapter serves it is decided once,
from :mod:`arklowdun_ipc.config`, the first time an adapter is needed.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, List, Optional, Protocol, Union

from arklowdun_ipc.clock import Clock
from arklowdun_ipc.config import IpcSettings, load_settings
from arklowdun_ipc.dispatcher import FakeDispatcher
from arklowdun_ipc.models import AdapterName, AdapterResolutionError, IpcLogEntry
from arklowdun_ipc.rng import SeededRng
from arklowdun_ipc.scenarios import ScenarioLoader
from arklowdun_ipc.tauri import Invoker, TauriAdapter

logger = logging.getLogger("arklowdun_ipc.provider")


class IpcAdapter(Protocol):
    adapter_name: str

    async def invoke(self, command: str, payload: Any = None) -> Any: ...

    def dump_logs(self) -> List[IpcLogEntry]: ...


_lock = threading.Lock()
_adapter: Optional[Union[FakeDispatcher, TauriAdapter]] = None
_tauri_invoker: Optional[Invoker] = None


def register_tauri_invoker(invoker: Optional[Invoker]) -> None:
    """Install (or with ``None`` remove) the native transport."""
    global _tauri_invoker
    with _lock:
        _tauri_invoker = invoker


def resolve_adapter_name(
    settings: IpcSettings,
    tauri_available: Optional[bool] = None,
    loader: Optional[ScenarioLoader] = None,
) -> AdapterName:
    """Pick the adapter for *settings*.

    Order: test mode, explicit ``IPC_ADAPTER``, an installed native
    transport, then the fake backend outside production.

    Raises:
        AdapterResolutionError: In production with nothing to talk to.
    """
    if tauri_available is None:
        tauri_available = _tauri_invoker is not None
    if settings.is_test:
        return "fake"
    if settings.adapter is not None:
        return settings.adapter
    if tauri_available:
        return "tauri"
    if not settings.is_production:
        logger.warning(
            "No native IPC transport in %s mode; falling back to the fake adapter",
            settings.mode,
        )
        return "fake"
    names = (loader or ScenarioLoader()).list()
    raise AdapterResolutionError(
        "No IPC transport is available in production. Set IPC_ADAPTER=fake "
        f"and IPC_SCENARIO to one of: {', '.join(names)}"
    )


def configure_ipc_adapter(
    settings: Optional[IpcSettings] = None,
    loader: Optional[ScenarioLoader] = None,
    clock: Optional[Clock] = None,
) -> Union[FakeDispatcher, TauriAdapter]:
    """Build the adapter described by *settings* and make it current.

    *clock* is the handler clock of the fake adapter; call logs always use
    the wall clock.
    """
    global _adapter
    if settings is None:
        settings = load_settings()
    name = resolve_adapter_name(settings, loader=loader)
    adapter: Union[FakeDispatcher, TauriAdapter]
    if name == "tauri":
        if _tauri_invoker is None:
            raise AdapterResolutionError(
                "IPC_ADAPTER=tauri but no native transport is registered"
            )
        adapter = TauriAdapter(_tauri_invoker, log_size=settings.log_size)
    else:
        adapter = FakeDispatcher(
            loader=loader,
            clock=clock,
            rng=SeededRng(settings.seed),
            scenario_name=settings.scenario,
            log_size=settings.log_size,
        )
    logger.info("IPC adapter configured: %r", adapter)
    with _lock:
        _adapter = adapter
    return adapter


def get_ipc_adapter() -> Union[FakeDispatcher, TauriAdapter]:
    """Current adapter, configured from the environment on first use."""
    with _lock:
        adapter = _adapter
    if adapter is None:
        adapter = configure_ipc_adapter()
    return adapter


def get_ipc_adapter_name() -> AdapterName:
    return get_ipc_adapter().adapter_name  # type: ignore[return-value]


def get_active_test_scenario() -> Optional[str]:
    """Name of the active scenario, or ``None`` when the fake is not in use."""
    adapter = get_ipc_adapter()
    if isinstance(adapter, FakeDispatcher):
        return adapter.scenario.name
    return None


def reset_ipc_adapter() -> None:
    """Forget the current adapter and transport (tests only)."""
    global _adapter, _tauri_invoker
    with _lock:
        _adapter = None
        _tauri_invoker = None


async def call(command: str, payload: Any = None) -> Any:
    """Invoke *command* on the current adapter."""
    return await get_ipc_adapter().invoke(command, payload)
