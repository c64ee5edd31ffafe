"""Fake IPC adapter: contract validation around scenario handlers.

Every call runs validate request, look up handler, invoke, validate
response, record. Each call appends exactly one log entry whatever the
outcome, and every failure reaches the caller unchanged.
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Dict, List, Literal, Optional

from arklowdun_ipc.clock import Clock, FixedClock, iso_timestamp
from arklowdun_ipc.contracts import get_contract
from arklowdun_ipc.log_buffer import (
    DEFAULT_LOG_SIZE,
    TEST_ADAPTER_HOOK,
    IpcLogBuffer,
    Timer,
    attach_global_hook,
    finish_quietly,
)
from arklowdun_ipc.models import IpcLogEntry, UnhandledCommandError
from arklowdun_ipc.rng import Rng, SeededRng
from arklowdun_ipc.scenarios import ScenarioContext, ScenarioDefinition, ScenarioLoader

logger = logging.getLogger("arklowdun_ipc.dispatcher")

HealthState = Literal["healthy", "unhealthy"]

DEFAULT_RNG_SEED = 42
HEALTH_COMMANDS = frozenset({"db_get_health_report", "db_recheck"})


class FakeDispatcher:
    """In-process stand-in for the native backend.

    Args:
        loader: Scenario source. Defaults to the built-in scenarios.
        clock: Clock handed to handlers. Defaults to a ``FixedClock`` at
            2024-06-01T12:00:00Z.
        rng: Random stream handed to handlers. Defaults to ``SeededRng(42)``.
        scenario_name: Scenario to activate; unknown or missing names fall
            back to the loader's default.
        log_size: Capacity of the call log.
        timer: Millisecond timer for call durations.
        log_clock: Clock for log entry timestamps. Defaults to the wall
            clock, independent of the handler clock.
        expose_hooks: Publish the introspection hook for external drivers.
    """

    adapter_name = "fake"

    def __init__(
        self,
        loader: Optional[ScenarioLoader] = None,
        clock: Optional[Clock] = None,
        rng: Optional[Rng] = None,
        scenario_name: Optional[str] = None,
        log_size: int = DEFAULT_LOG_SIZE,
        timer: Optional[Timer] = None,
        expose_hooks: bool = True,
        log_clock: Optional[Clock] = None,
    ) -> None:
        self._loader = loader if loader is not None else ScenarioLoader()
        self._clock: Clock = clock if clock is not None else FixedClock()
        self._rng: Rng = rng if rng is not None else SeededRng(DEFAULT_RNG_SEED)
        self._health: HealthState = "healthy"
        self._log = IpcLogBuffer("fake", log_size, timer=timer, clock=log_clock)
        self._scenario = self._activate(scenario_name)
        if expose_hooks:
            attach_global_hook(
                TEST_ADAPTER_HOOK,
                dump_logs=self.dump_logs,
                set_health=self.set_health,
                list_scenarios=self.list_scenarios,
            )

    # -- state -------------------------------------------------------------

    @property
    def scenario(self) -> ScenarioDefinition:
        return self._scenario

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def rng(self) -> Rng:
        return self._rng

    @property
    def health(self) -> HealthState:
        return self._health

    @property
    def log(self) -> IpcLogBuffer:
        return self._log

    def _activate(self, name: Optional[str]) -> ScenarioDefinition:
        scenario = self._loader.load(name)
        if scenario.health is not None:
            self._health = scenario.health  # type: ignore[assignment]
        logger.debug("Activated scenario %s (health=%s)", scenario.name, self._health)
        return scenario

    def set_scenario(self, name: str) -> ScenarioDefinition:
        """Switch the active scenario, adopting its declared health."""
        self._scenario = self._activate(name)
        return self._scenario

    def set_health(self, state: HealthState) -> None:
        if state not in ("healthy", "unhealthy"):
            raise ValueError(f"Unknown health state: {state!r}")
        self._health = state

    def list_scenarios(self) -> List[str]:
        return self._loader.list()

    def dump_logs(self) -> List[IpcLogEntry]:
        return self._log.dump()

    def health_report(self) -> Dict[str, Any]:
        """Simulated ``DbHealthReport`` for the current health state."""
        healthy = self._health == "healthy"
        return {
            "status": "ok" if healthy else "error",
            "checks": [
                {
                    "name": "fake-db-check",
                    "passed": healthy,
                    "duration_ms": 1,
                    "details": "ok" if healthy else "simulated failure",
                }
            ],
            "offenders": []
            if healthy
            else [{"table": "events", "rowid": 1, "message": "simulated corruption"}],
            "schema_hash": "fake-schema",
            "app_version": "test",
            "generated_at": iso_timestamp(self._clock.now()),
        }

    # -- dispatch ----------------------------------------------------------

    async def invoke(self, command: str, payload: Any = None) -> Any:
        """Execute *command* against the active scenario.

        Raises:
            UnknownCommandError: If *command* has no contract.
            ValidationError: If the payload or the handler result violates
                the contract.
            UnhandledCommandError: If the active scenario lacks a handler.
        """
        if payload is None:
            payload = {}
        span = self._log.start(command, payload)
        try:
            contract = get_contract(command)
            parsed = contract.request.parse(payload)
            logger.debug("Dispatching %s on scenario %s", command, self._scenario.name)
            if command in HEALTH_COMMANDS:
                result = self.health_report()
            else:
                handler = self._scenario.handler_for(command)
                if handler is None:
                    logger.error(
                        "Scenario handler missing: command=%s scenario=%s",
                        command,
                        self._scenario.name,
                    )
                    raise UnhandledCommandError(command, self._scenario.name)
                result = handler(parsed, ScenarioContext(self._clock, self._rng))
                if inspect.isawaitable(result):
                    result = await result
            response = contract.response.parse(result)
        except BaseException as exc:
            finish_quietly(span, False, exc, logger)
            raise
        finish_quietly(span, True, log=logger)
        return response

    def __repr__(self) -> str:
        return f"FakeDispatcher(scenario={self._scenario.name!r}, health={self._health!r})"

