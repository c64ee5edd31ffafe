"""Dual-layer validation for arklowdun-ipc contracts.

This module provides conformance validation combining:
1. Pydantic model validation (primary layer, the same check the adapters run)
2. JSON Schema validation (secondary layer, over the schema exported for
   non-Python consumers)

Both layers are derived from one contract, so a disagreement between them
points at a contract that cannot be expressed faithfully as JSON Schema.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Tuple, Union

from jsonschema import Draft202012Validator

from arklowdun_ipc.contracts import Direction, ModelViolation, get_contract
from arklowdun_ipc.models import ValidationError


@dataclass(frozen=True)
class SchemaViolation:
    """A violation detected by JSON Schema validation."""

    json_path: str
    message: str
    validator: str
    validator_value: object
    schema_path: Tuple[Union[str, int], ...]


@dataclass(frozen=True)
class ConformanceResult:
    """Result of dual-layer conformance validation."""

    valid: bool
    model_violations: Tuple[ModelViolation, ...]
    schema_violations: Tuple[SchemaViolation, ...]
    command: str
    direction: Direction


@lru_cache(maxsize=None)
def _schema_validator(command: str, direction: Direction) -> Draft202012Validator:
    contract = get_contract(command)
    schema = getattr(contract, direction).json_schema()
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def _validate_with_model(
    value: Any, command: str, direction: Direction
) -> Tuple[ModelViolation, ...]:
    schema = getattr(get_contract(command), direction)
    try:
        schema.parse(value)
    except ValidationError as exc:
        return tuple(exc.violations)
    return ()


def _validate_with_schema(
    value: Any, command: str, direction: Direction
) -> Tuple[SchemaViolation, ...]:
    validator = _schema_validator(command, direction)
    violations = []
    for error in validator.iter_errors(value):
        json_path = "$" + "".join(
            f"[{p}]" if isinstance(p, int) else f".{p}" for p in error.absolute_path
        )
        violations.append(
            SchemaViolation(
                json_path=json_path,
                message=error.message,
                validator=str(error.validator),
                validator_value=error.validator_value,
                schema_path=tuple(error.absolute_schema_path),
            )
        )
    return tuple(violations)


def validate_command(
    command: str,
    value: Any,
    direction: Direction = "request",
) -> ConformanceResult:
    """Validate a request payload or response against a command's contract.

    Args:
        command: Registered command name (e.g. ``"events_list_range"``).
        value: The payload (``direction="request"``) or result
            (``direction="response"``) to check.
        direction: Which side of the contract to check.

    Returns:
        ConformanceResult with validation status and any violations found.

    Raises:
        UnknownCommandError: If *command* is not registered.
        ValueError: If *direction* is neither ``"request"`` nor ``"response"``.
    """
    if direction not in ("request", "response"):
        raise ValueError(
            f"Unknown direction: {direction!r}. Expected 'request' or 'response'"
        )
    get_contract(command)

    model_violations = _validate_with_model(value, command, direction)
    schema_violations = _validate_with_schema(value, command, direction)

    return ConformanceResult(
        valid=not model_violations and not schema_violations,
        model_violations=model_violations,
        schema_violations=schema_violations,
        command=command,
        direction=direction,
    )
