"""Scenario registry construction and selection."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from arklowdun_ipc.models import NoScenariosRegisteredError
from arklowdun_ipc.scenarios.fallback import fallback_scenario
from arklowdun_ipc.scenarios.models import ScenarioDefinition, ScenarioSource

logger = logging.getLogger("arklowdun_ipc.scenarios")


def build_registry(
    sources: Iterable[ScenarioSource],
) -> Dict[str, ScenarioDefinition]:
    """Invoke every source factory in order and key the results.

    A later source with the same key replaces the earlier definition but
    keeps its registration position. With no sources at all the registry
    holds only the fallback scenario.
    """
    registry: Dict[str, ScenarioDefinition] = {}
    for source in sources:
        definition = source.factory()
        registry[source.key_for(definition)] = definition
    if not registry:
        fallback = fallback_scenario()
        registry[fallback.name] = fallback
    logger.info("Scenario registry built: %s", ", ".join(registry))
    return registry


class ScenarioLoader:
    """Read-only view over a scenario registry.

    Args:
        scenarios: Registry to serve. ``None`` builds one from the built-in
            sources.
    """

    def __init__(
        self, scenarios: Optional[Mapping[str, ScenarioDefinition]] = None
    ) -> None:
        if scenarios is None:
            from arklowdun_ipc.scenarios.builtin import BUILTIN_SOURCES

            scenarios = build_registry(BUILTIN_SOURCES)
        self._scenarios: Dict[str, ScenarioDefinition] = dict(scenarios)

    @classmethod
    def from_sources(cls, sources: Sequence[ScenarioSource]) -> "ScenarioLoader":
        return cls(build_registry(sources))

    def list(self) -> List[str]:
        """Registered scenario names, alphabetically."""
        return sorted(self._scenarios)

    def __contains__(self, name: object) -> bool:
        return name in self._scenarios

    def __len__(self) -> int:
        return len(self._scenarios)

    def load(self, name: Optional[str] = None) -> ScenarioDefinition:
        """Return the scenario called *name*, else the first registered one.

        Raises:
            NoScenariosRegisteredError: If the registry is empty.
        """
        if name and name in self._scenarios:
            return self._scenarios[name]
        if not self._scenarios:
            raise NoScenariosRegisteredError()
        default = next(iter(self._scenarios.values()))
        if name:
            logger.warning(
                "Scenario %r is not registered; using %r", name, default.name
            )
        return default
