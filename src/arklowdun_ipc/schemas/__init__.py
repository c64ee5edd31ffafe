"""JSON Schema views of the IPC contracts.

Schemas are derived from the same pydantic annotations the adapters validate
with, so they cannot drift from runtime behaviour. Use
``python -m arklowdun_ipc.schemas.generate`` to write them to disk for
non-Python consumers.
"""
from __future__ import annotations

from typing import Any, Dict, List

from arklowdun_ipc.contracts import CONTRACTS, Direction, get_contract

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
DIRECTIONS: tuple[Direction, Direction] = ("request", "response")


def schema_name(command: str, direction: Direction) -> str:
    return f"{command}.{direction}"


def contract_schema(command: str, direction: Direction = "request") -> Dict[str, Any]:
    """JSON Schema for one side of *command*'s contract.

    Raises:
        UnknownCommandError: If *command* is not registered.
        ValueError: If *direction* is neither ``"request"`` nor ``"response"``.
    """
    if direction not in DIRECTIONS:
        raise ValueError(
            f"Unknown direction: {direction!r}. Expected one of {list(DIRECTIONS)}"
        )
    schema = getattr(get_contract(command), direction).json_schema()
    schema["$schema"] = SCHEMA_DIALECT
    schema["$id"] = f"arklowdun-ipc/{schema_name(command, direction)}"
    return schema


def list_schemas() -> List[str]:
    """List all schema names (``<command>.<direction>``)."""
    return sorted(
        schema_name(command, direction)
        for command in CONTRACTS
        for direction in DIRECTIONS
    )
