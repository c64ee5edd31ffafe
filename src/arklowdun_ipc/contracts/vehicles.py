"""Vehicle command contracts."""
from __future__ import annotations

from typing import List, Optional, Tuple

from arklowdun_ipc.contracts.base import (
    Contract,
    NonEmptyStr,
    Number,
    PassthroughModel,
    contract,
)


class VehicleRecord(PassthroughModel):
    id: str
    household_id: str
    name: str
    created_at: Number
    updated_at: Number
    position: Number
    make: Optional[str] = None
    model: Optional[str] = None
    reg: Optional[str] = None
    vin: Optional[str] = None
    next_mot_due: Optional[Number] = None
    next_service_due: Optional[Number] = None
    deleted_at: Optional[Number] = None


class VehicleCreateData(PassthroughModel):
    household_id: str
    name: NonEmptyStr
    make: Optional[str] = None
    model: Optional[str] = None
    reg: Optional[str] = None
    vin: Optional[str] = None
    next_mot_due: Optional[Number] = None
    next_service_due: Optional[Number] = None
    position: Optional[Number] = None


class VehicleUpdateData(PassthroughModel):
    household_id: Optional[str] = None
    name: Optional[NonEmptyStr] = None
    make: Optional[str] = None
    model: Optional[str] = None
    reg: Optional[str] = None
    vin: Optional[str] = None
    next_mot_due: Optional[Number] = None
    next_service_due: Optional[Number] = None
    position: Optional[Number] = None


class HouseholdScopedRequest(PassthroughModel):
    householdId: str


class EntityScopedRequest(HouseholdScopedRequest):
    id: str


class VehicleCreateRequest(PassthroughModel):
    data: VehicleCreateData


class VehicleUpdateRequest(PassthroughModel):
    id: str
    data: VehicleUpdateData
    householdId: str


VEHICLE_CONTRACTS: Tuple[Contract, ...] = (
    contract("vehicles_list", HouseholdScopedRequest, List[VehicleRecord]),
    contract("vehicles_get", EntityScopedRequest, Optional[VehicleRecord]),
    contract("vehicles_create", VehicleCreateRequest, VehicleRecord),
    contract("vehicles_update", VehicleUpdateRequest, None),
    contract("vehicles_delete", EntityScopedRequest, None),
    contract("vehicles_restore", EntityScopedRequest, None),
)
