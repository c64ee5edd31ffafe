"""Contract registry: the closed set of IPC commands and their schemas.

Example:
    >>> from arklowdun_ipc.contracts import get_contract
    >>> get_contract("household_get_active").response.parse("hh-1")
    'hh-1'
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from arklowdun_ipc.contracts.base import (
    Contract,
    Direction,
    EmptyRequest,
    FlexibleRecord,
    ModelViolation,
    Schema,
    contract,
)
from arklowdun_ipc.contracts.db import DB_CONTRACTS
from arklowdun_ipc.contracts.events import EVENT_CONTRACTS, EVENTS_RANGE_LIMIT
from arklowdun_ipc.contracts.files import FILE_CONTRACTS
from arklowdun_ipc.contracts.generic import CRUD_FAMILIES, GENERIC_CONTRACTS
from arklowdun_ipc.contracts.households import HOUSEHOLD_CONTRACTS
from arklowdun_ipc.contracts.notes import NOTE_CONTRACTS
from arklowdun_ipc.contracts.pets import PET_CONTRACTS
from arklowdun_ipc.contracts.system import SYSTEM_CONTRACTS
from arklowdun_ipc.contracts.vehicles import VEHICLE_CONTRACTS
from arklowdun_ipc.models import UnknownCommandError


def _build_registry(*families: Iterable[Contract]) -> Mapping[str, Contract]:
    registry: Dict[str, Contract] = {}
    for family in families:
        for entry in family:
            if entry.command in registry:
                raise RuntimeError(f"Duplicate contract for command {entry.command!r}")
            registry[entry.command] = entry
    return MappingProxyType(registry)


CONTRACTS: Mapping[str, Contract] = _build_registry(
    HOUSEHOLD_CONTRACTS,
    EVENT_CONTRACTS,
    NOTE_CONTRACTS,
    VEHICLE_CONTRACTS,
    PET_CONTRACTS,
    FILE_CONTRACTS,
    DB_CONTRACTS,
    SYSTEM_CONTRACTS,
    GENERIC_CONTRACTS,
)


def get_contract(command: str) -> Contract:
    """Look up the contract bound to *command*.

    Raises:
        UnknownCommandError: If *command* is not part of the registry.
    """
    try:
        return CONTRACTS[command]
    except KeyError:
        raise UnknownCommandError(command) from None


def list_commands() -> List[str]:
    """All registered command names, sorted."""
    return sorted(CONTRACTS)


def is_command(command: object) -> bool:
    return isinstance(command, str) and command in CONTRACTS


__all__ = [
    "CONTRACTS",
    "CRUD_FAMILIES",
    "Contract",
    "Direction",
    "EVENTS_RANGE_LIMIT",
    "EmptyRequest",
    "FlexibleRecord",
    "ModelViolation",
    "Schema",
    "contract",
    "get_contract",
    "is_command",
    "list_commands",
]
