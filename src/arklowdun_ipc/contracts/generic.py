"""CRUD families whose records are not modelled field by field.

Each family exposes ``<family>_list``, ``_get``, ``_create``, ``_update``,
``_delete`` and ``_restore`` over flexible records.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from arklowdun_ipc.contracts.base import Contract, FlexibleRecord, contract

CRUD_FAMILIES: Tuple[str, ...] = (
    "bills",
    "expenses",
    "family_members",
    "inventory_items",
    "policies",
    "property_documents",
    "shopping_items",
    "vehicle_maintenance",
    "categories",
    "budget_categories",
)


def crud_contracts(family: str) -> Tuple[Contract, ...]:
    return (
        contract(f"{family}_list", FlexibleRecord, List[FlexibleRecord]),
        contract(f"{family}_get", FlexibleRecord, Optional[FlexibleRecord]),
        contract(f"{family}_create", FlexibleRecord, FlexibleRecord),
        contract(f"{family}_update", FlexibleRecord, FlexibleRecord),
        contract(f"{family}_delete", FlexibleRecord, FlexibleRecord),
        contract(f"{family}_restore", FlexibleRecord, FlexibleRecord),
    )


GENERIC_CONTRACTS: Tuple[Contract, ...] = tuple(
    entry for family in CRUD_FAMILIES for entry in crud_contracts(family)
) + (
    contract("bills_list_due_between", FlexibleRecord, List[FlexibleRecord]),
)
