"""Scenario registry: named sets of fake command handlers.

Example:
    >>> from arklowdun_ipc.scenarios import ScenarioLoader, build_registry
    >>> ScenarioLoader(build_registry([])).list()
    ['fallback']
"""
from __future__ import annotations

from arklowdun_ipc.scenarios.base import ScenarioData, create_scenario
from arklowdun_ipc.scenarios.fallback import (
    FALLBACK_HOUSEHOLD_ID,
    FALLBACK_SCENARIO_NAME,
    fallback_scenario,
)
from arklowdun_ipc.scenarios.loader import ScenarioLoader, build_registry
from arklowdun_ipc.scenarios.models import (
    ScenarioContext,
    ScenarioDefinition,
    ScenarioHandler,
    ScenarioSource,
)

__all__ = [
    "FALLBACK_HOUSEHOLD_ID",
    "FALLBACK_SCENARIO_NAME",
    "ScenarioContext",
    "ScenarioData",
    "ScenarioDefinition",
    "ScenarioHandler",
    "ScenarioLoader",
    "ScenarioSource",
    "build_registry",
    "create_scenario",
    "fallback_scenario",
]
