"""
arklowdun-ipc: contract-checked, deterministic fake backend for the Arklowdun
IPC boundary.

Every command crossing the boundary has a request/response contract. The fake
adapter answers commands from a named scenario of in-memory handlers, checks
both sides of every call against its contract, and keeps a bounded log of
call attempts for test assertions.

Example:
    >>> import asyncio
    >>> from arklowdun_ipc import FakeDispatcher, ScenarioLoader, build_registry
    >>> dispatcher = FakeDispatcher(ScenarioLoader(build_registry([])), expose_hooks=False)
    >>> asyncio.run(dispatcher.invoke("household_get_active", {}))
    'fallback-household'
    >>> [entry.command for entry in dispatcher.dump_logs()]
    ['household_get_active']
"""

__version__ = "0.4.0"

# Core data models and errors
from arklowdun_ipc.models import (
    AdapterName,
    AdapterResolutionError,
    ArklowdunIpcError,
    ConfigurationError,
    IpcLogEntry,
    NoScenariosRegisteredError,
    UnhandledCommandError,
    UnknownCommandError,
    ValidationError,
)

# Deterministic primitives
from arklowdun_ipc.clock import Clock, FixedClock, SystemClock
from arklowdun_ipc.rng import Rng, SeededRng, SystemRng

# Contracts
from arklowdun_ipc.contracts import (
    CONTRACTS,
    Contract,
    Schema,
    get_contract,
    is_command,
    list_commands,
)

# Log buffer
from arklowdun_ipc.log_buffer import (
    TAURI_ADAPTER_HOOK,
    TEST_ADAPTER_HOOK,
    IpcLogBuffer,
    global_hook,
)

# Scenarios
from arklowdun_ipc.scenarios import (
    ScenarioContext,
    ScenarioDefinition,
    ScenarioLoader,
    ScenarioSource,
    build_registry,
    create_scenario,
)

# Adapters
from arklowdun_ipc.dispatcher import FakeDispatcher
from arklowdun_ipc.tauri import TauriAdapter
from arklowdun_ipc.config import IpcSettings, load_settings
from arklowdun_ipc.provider import (
    call,
    configure_ipc_adapter,
    get_active_test_scenario,
    get_ipc_adapter,
    get_ipc_adapter_name,
    register_tauri_invoker,
    reset_ipc_adapter,
    resolve_adapter_name,
)

__all__ = [
    "__version__",
    # Models and errors
    "AdapterName",
    "AdapterResolutionError",
    "ArklowdunIpcError",
    "ConfigurationError",
    "IpcLogEntry",
    "NoScenariosRegisteredError",
    "UnhandledCommandError",
    "UnknownCommandError",
    "ValidationError",
    # Primitives
    "Clock",
    "FixedClock",
    "Rng",
    "SeededRng",
    "SystemClock",
    "SystemRng",
    # Contracts
    "CONTRACTS",
    "Contract",
    "Schema",
    "get_contract",
    "is_command",
    "list_commands",
    # Log buffer
    "IpcLogBuffer",
    "TAURI_ADAPTER_HOOK",
    "TEST_ADAPTER_HOOK",
    "global_hook",
    # Scenarios
    "ScenarioContext",
    "ScenarioDefinition",
    "ScenarioLoader",
    "ScenarioSource",
    "build_registry",
    "create_scenario",
    # Adapters
    "FakeDispatcher",
    "IpcSettings",
    "TauriAdapter",
    "call",
    "configure_ipc_adapter",
    "get_active_test_scenario",
    "get_ipc_adapter",
    "get_ipc_adapter_name",
    "load_settings",
    "register_tauri_invoker",
    "reset_ipc_adapter",
    "resolve_adapter_name",
]
