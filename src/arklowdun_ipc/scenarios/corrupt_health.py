"""Baseline household whose database reports as unhealthy."""
from __future__ import annotations

from arklowdun_ipc.scenarios import default_household
from arklowdun_ipc.scenarios.base import create_scenario
from arklowdun_ipc.scenarios.models import ScenarioDefinition

SLUG = "corruptHealth"


def corrupt_health_scenario() -> ScenarioDefinition:
    return create_scenario(
        SLUG,
        default_household.scenario_data(),
        description="Default household with a failing database health check",
        metadata={"health": "unhealthy"},
    )
