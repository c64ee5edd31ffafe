"""Pet and pet-medical command contracts.

Pet requests may name their household as ``householdId`` (UI callers) or
``household_id`` (older callers). Both spellings are reconciled before field
validation: the snake_case key always ends up populated, the camelCase key
mirrors it, and two different values are rejected as a mismatch.
"""
from __future__ import annotations

from typing import Any, List, Literal, Optional, Tuple

from pydantic import Field, StrictBool, StrictInt, model_validator

from arklowdun_ipc.contracts.base import (
    Contract,
    NonEmptyStr,
    Number,
    PassthroughModel,
    contract,
)

PET_MEDICAL_CATEGORY = "pet_medical"


def _normalise_household(value: Any, *, required: bool) -> Any:
    if not isinstance(value, dict):
        return value
    camel = value.get("householdId")
    snake = value.get("household_id")
    camel = camel if isinstance(camel, str) else None
    snake = snake if isinstance(snake, str) else None
    if camel is None and snake is None:
        if not required:
            return value
        raise ValueError("householdId is required")
    if camel and snake and camel != snake:
        raise ValueError("householdId mismatch")
    resolved = snake if snake is not None else camel
    normalised = dict(value)
    normalised["household_id"] = resolved
    normalised["householdId"] = camel if camel is not None else resolved
    return normalised


class HouseholdRequest(PassthroughModel):
    """Request carrying a household under either spelling (required)."""

    householdId: Optional[NonEmptyStr] = None
    household_id: Optional[NonEmptyStr] = None

    @model_validator(mode="before")
    @classmethod
    def _reconcile_household(cls, value: Any) -> Any:
        return _normalise_household(value, required=True)


class OptionalHouseholdRequest(PassthroughModel):
    """Like :class:`HouseholdRequest` but the household may be omitted."""

    householdId: Optional[NonEmptyStr] = None
    household_id: Optional[NonEmptyStr] = None

    @model_validator(mode="before")
    @classmethod
    def _reconcile_household(cls, value: Any) -> Any:
        return _normalise_household(value, required=False)


def _require_some_field(model: PassthroughModel) -> PassthroughModel:
    if not model.model_fields_set:
        raise ValueError("update data must include at least one field")
    return model


def _ensure_medical_category(value: Any, *, default: bool = True) -> Any:
    if not isinstance(value, dict):
        return value
    category = value.get("category")
    if category is None:
        if not default:
            return value
        return {**value, "category": PET_MEDICAL_CATEGORY}
    if category != PET_MEDICAL_CATEGORY:
        raise ValueError(f"category must be '{PET_MEDICAL_CATEGORY}'")
    return value


# --- pets -------------------------------------------------------------------


class PetRecord(PassthroughModel):
    id: str
    name: str
    type: str
    household_id: str
    image_path: Optional[NonEmptyStr] = None
    created_at: Number
    updated_at: Number
    deleted_at: Optional[Number] = None
    position: StrictInt


class PetsListRequest(HouseholdRequest):
    orderBy: Optional[str] = None
    order_by: Optional[str] = None
    limit: Optional[StrictInt] = Field(default=None, ge=0)
    offset: Optional[StrictInt] = Field(default=None, ge=0)
    includeDeleted: Optional[StrictBool] = None
    include_deleted: Optional[StrictBool] = None


class PetsGetRequest(OptionalHouseholdRequest):
    id: str


class PetCreateData(PassthroughModel):
    household_id: str
    name: NonEmptyStr
    type: NonEmptyStr
    image_path: Optional[NonEmptyStr] = None
    position: Optional[StrictInt] = Field(default=None, ge=0)


class PetUpdateData(PassthroughModel):
    household_id: Optional[str] = None
    name: Optional[NonEmptyStr] = None
    type: Optional[NonEmptyStr] = None
    image_path: Optional[NonEmptyStr] = None
    position: Optional[StrictInt] = Field(default=None, ge=0)
    created_at: Optional[Number] = None
    updated_at: Optional[Number] = None
    deleted_at: Optional[Number] = None

    @model_validator(mode="after")
    def _not_empty(self) -> "PetUpdateData":
        _require_some_field(self)
        return self


class PetsCreateRequest(PassthroughModel):
    data: PetCreateData


class PetsUpdateRequest(HouseholdRequest):
    id: str
    data: PetUpdateData


class PetsEntityRequest(HouseholdRequest):
    id: str


# --- pet medical ------------------------------------------------------------


class PetMedicalRecord(PassthroughModel):
    id: str
    pet_id: str
    household_id: str
    date: Number
    description: str
    document: Optional[str] = None
    reminder: Optional[Number] = None
    created_at: Number
    updated_at: Number
    deleted_at: Optional[Number] = None
    root_key: Optional[str] = None
    relative_path: Optional[str] = None
    category: Literal["pet_medical"]


class PetMedicalListRequest(PetsListRequest):
    petId: Optional[str] = None
    pet_id: Optional[str] = None


class PetMedicalCreateData(PassthroughModel):
    household_id: str
    pet_id: str
    date: Number
    description: NonEmptyStr
    document: Optional[str] = None
    reminder: Optional[Number] = None
    relative_path: Optional[str] = None
    root_key: Optional[str] = None
    category: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> Any:
        return _ensure_medical_category(value)


class PetMedicalUpdateData(PassthroughModel):
    household_id: Optional[str] = None
    pet_id: Optional[str] = None
    date: Optional[Number] = None
    description: Optional[NonEmptyStr] = None
    document: Optional[str] = None
    reminder: Optional[Number] = None
    relative_path: Optional[str] = None
    root_key: Optional[str] = None
    category: Optional[str] = None
    deleted_at: Optional[Number] = None
    updated_at: Optional[Number] = None

    @model_validator(mode="before")
    @classmethod
    def _check_category(cls, value: Any) -> Any:
        return _ensure_medical_category(value, default=False)

    @model_validator(mode="after")
    def _not_empty(self) -> "PetMedicalUpdateData":
        _require_some_field(self)
        return self


class PetMedicalCreateRequest(PassthroughModel):
    data: PetMedicalCreateData


class PetMedicalUpdateRequest(HouseholdRequest):
    id: str
    data: PetMedicalUpdateData


PET_CONTRACTS: Tuple[Contract, ...] = (
    contract("pets_list", PetsListRequest, List[PetRecord]),
    contract("pets_get", PetsGetRequest, Optional[PetRecord]),
    contract("pets_create", PetsCreateRequest, PetRecord),
    contract("pets_update", PetsUpdateRequest, None),
    contract("pets_delete", PetsEntityRequest, None),
    contract("pets_restore", PetsEntityRequest, None),
    contract("pet_medical_list", PetMedicalListRequest, List[PetMedicalRecord]),
    contract("pet_medical_get", PetsGetRequest, Optional[PetMedicalRecord]),
    contract("pet_medical_create", PetMedicalCreateRequest, PetMedicalRecord),
    contract("pet_medical_update", PetMedicalUpdateRequest, None),
    contract("pet_medical_delete", PetsEntityRequest, None),
    contract("pet_medical_restore", PetsEntityRequest, None),
)
