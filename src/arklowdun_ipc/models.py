"""Core data models and exceptions for arklowdun-ipc."""
from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

AdapterName = Literal["tauri", "fake"]


class IpcLogEntry(BaseModel):
    """Immutable record of one call attempt across the IPC boundary."""

    model_config = ConfigDict(frozen=True)

    adapter: AdapterName = Field(
        ..., description="Adapter that served the call"
    )
    command: str = Field(
        ..., min_length=1, description="Command name"
    )
    payload_keys: Tuple[str, ...] = Field(
        default=(),
        serialization_alias="payloadKeys",
        description="Sorted top-level payload field names",
    )
    success: bool = Field(
        ..., description="Whether the call resolved"
    )
    duration_ms: float = Field(
        ...,
        ge=0,
        serialization_alias="durationMs",
        description="Elapsed time in milliseconds, rounded to 2 decimals",
    )
    timestamp: str = Field(
        ..., description="ISO-8601 timestamp captured at call start"
    )
    error: Optional[str] = Field(
        None, description="Error message, present only for failed calls"
    )

    def __repr__(self) -> str:
        """Human-readable representation."""
        status = "ok" if self.success else f"error={self.error!r}"
        return (
            f"IpcLogEntry({self.adapter}:{self.command}, "
            f"{status}, {self.duration_ms}ms)"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase shape exposed to test drivers."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        data["payloadKeys"] = list(self.payload_keys)
        return data


# Custom Exceptions
class ArklowdunIpcError(Exception):
    """Base exception for all library errors."""
    pass


class UnknownCommandError(ArklowdunIpcError):
    """Raised when a command has no registered contract."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Unknown IPC command: {command!r}")


class ValidationError(ArklowdunIpcError):
    """A request payload or response failed its contract.

    ``violations`` holds one entry per offending field.
    """

    def __init__(
        self,
        command: str,
        direction: str,
        violations: Tuple[Any, ...],
    ) -> None:
        self.command = command
        self.direction = direction
        self.violations = violations
        details = "; ".join(
            f"{v.field or '<root>'}: {v.message}" for v in violations
        )
        super().__init__(
            f"{command} {direction} failed validation: {details}"
        )


class UnhandledCommandError(ArklowdunIpcError):
    """The active scenario has no handler for a registered command."""

    def __init__(self, command: str, scenario_name: str) -> None:
        self.command = command
        self.scenario_name = scenario_name
        super().__init__(
            f"Scenario {scenario_name!r} has no handler for {command!r}"
        )


class NoScenariosRegisteredError(ArklowdunIpcError):
    """The scenario registry is empty."""

    def __init__(self) -> None:
        super().__init__("No scenarios registered")


class AdapterResolutionError(ArklowdunIpcError):
    """No IPC adapter could be selected for the current environment."""
    pass


class ConfigurationError(ArklowdunIpcError):
    """Environment configuration could not be parsed."""
    pass
