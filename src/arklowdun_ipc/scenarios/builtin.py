"""Scenarios shipped with the library, in registration order.

The first entry is the default returned by ``ScenarioLoader.load()``.
"""
from __future__ import annotations

from typing import Tuple

from arklowdun_ipc.scenarios import (
    calendar_populated,
    corrupt_health,
    default_household,
    multiple_households,
)
from arklowdun_ipc.scenarios.models import ScenarioSource

BUILTIN_SOURCES: Tuple[ScenarioSource, ...] = (
    ScenarioSource(
        factory=default_household.default_household_scenario,
        slug=default_household.SLUG,
        source_id="arklowdun_ipc.scenarios.default_household",
    ),
    ScenarioSource(
        factory=multiple_households.multiple_households_scenario,
        slug=multiple_households.SLUG,
        source_id="arklowdun_ipc.scenarios.multiple_households",
    ),
    ScenarioSource(
        factory=calendar_populated.calendar_populated_scenario,
        slug=calendar_populated.SLUG,
        source_id="arklowdun_ipc.scenarios.calendar_populated",
    ),
    ScenarioSource(
        factory=corrupt_health.corrupt_health_scenario,
        slug=corrupt_health.SLUG,
        source_id="arklowdun_ipc.scenarios.corrupt_health",
    ),
)
