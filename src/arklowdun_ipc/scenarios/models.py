"""Scenario value types."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from arklowdun_ipc.clock import Clock
from arklowdun_ipc.rng import Rng


@dataclass(frozen=True)
class ScenarioContext:
    """What a handler may observe besides its payload."""

    clock: Clock
    rng: Rng


ScenarioHandler = Callable[[Any, ScenarioContext], Union[Any, Awaitable[Any]]]


def _frozen(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class ScenarioDefinition:
    """A named, partial set of fake command handlers.

    Commands without a handler fail at dispatch time.
    """

    name: str
    handlers: Mapping[str, ScenarioHandler] = field(default_factory=dict)
    description: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "handlers", _frozen(self.handlers))
        object.__setattr__(self, "metadata", _frozen(self.metadata))

    def handler_for(self, command: str) -> Optional[ScenarioHandler]:
        return self.handlers.get(command)

    @property
    def health(self) -> Optional[str]:
        value = self.metadata.get("health")
        if value in ("healthy", "unhealthy"):
            return str(value)
        return None


@dataclass(frozen=True)
class ScenarioSource:
    """An explicitly registered scenario factory.

    The registry key is ``slug`` when given, else the definition's name,
    else ``source_id``.
    """

    factory: Callable[[], ScenarioDefinition]
    slug: Optional[str] = None
    source_id: str = ""

    def key_for(self, definition: ScenarioDefinition) -> str:
        return self.slug or definition.name or self.source_id
