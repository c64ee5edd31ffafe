"""Household command contracts.

Colour support arrived after the first household contract shipped, so every
colour field is optional and legacy records without one must keep parsing.
"""
from __future__ import annotations

from typing import List, Optional, Tuple, Union

from pydantic import StrictBool, StrictInt

from arklowdun_ipc.contracts.base import (
    Contract,
    EmptyRequest,
    FlexibleRecord,
    HexColor,
    NonEmptyStr,
    Number,
    PassthroughModel,
    contract,
)


class HouseholdRecord(PassthroughModel):
    """Household row as returned by the backend."""

    id: str
    name: Optional[str] = None
    # Older backends report the SQLite integer flag instead of a bool.
    is_default: Optional[Union[StrictBool, StrictInt]] = None
    tz: Optional[str] = None
    created_at: Optional[Number] = None
    updated_at: Optional[Number] = None
    deleted_at: Optional[Number] = None
    color: Optional[str] = None


class HouseholdArgs(PassthroughModel):
    name: NonEmptyStr
    color: Optional[HexColor] = None


class HouseholdUpdateArgs(PassthroughModel):
    id: str
    name: Optional[NonEmptyStr] = None
    color: Optional[HexColor] = None


class HouseholdCreateRequest(PassthroughModel):
    args: HouseholdArgs


class HouseholdUpdateRequest(PassthroughModel):
    args: HouseholdUpdateArgs


class IdRequest(PassthroughModel):
    id: str


class HouseholdListRequest(PassthroughModel):
    includeDeleted: Optional[StrictBool] = None


class HouseholdDeleteResponse(PassthroughModel):
    fallbackId: Optional[str] = None


HOUSEHOLD_CONTRACTS: Tuple[Contract, ...] = (
    contract("household_create", HouseholdCreateRequest, HouseholdRecord),
    contract("household_delete", IdRequest, HouseholdDeleteResponse),
    contract("household_get", IdRequest, Optional[HouseholdRecord]),
    contract("household_get_active", EmptyRequest, Optional[str]),
    contract("household_list_all", FlexibleRecord, List[HouseholdRecord]),
    contract("household_list", HouseholdListRequest, List[HouseholdRecord]),
    contract("household_repair", FlexibleRecord, FlexibleRecord),
    contract("household_resume_delete", IdRequest, HouseholdRecord),
    contract("household_restore", IdRequest, HouseholdRecord),
    contract("household_vacuum_execute", FlexibleRecord, FlexibleRecord),
    contract("household_set_active", IdRequest, None),
    contract("household_update", HouseholdUpdateRequest, HouseholdRecord),
)
