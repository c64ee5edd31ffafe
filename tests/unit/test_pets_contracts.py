"""Unit tests for pet and pet-medical contracts."""
import pytest

from arklowdun_ipc.contracts import get_contract
from arklowdun_ipc.contracts.pets import PET_MEDICAL_CATEGORY
from arklowdun_ipc.models import ValidationError


def _request(command):
    return get_contract(command).request


class TestHouseholdSpelling:
    """householdId / household_id reconciliation."""

    def test_camel_case_is_mirrored_to_snake_case(self):
        parsed = _request("pets_list").parse({"householdId": "hh-1"})
        assert parsed["household_id"] == "hh-1"
        assert parsed["householdId"] == "hh-1"

    def test_snake_case_is_mirrored_to_camel_case(self):
        parsed = _request("pets_list").parse({"household_id": "hh-1"})
        assert parsed["householdId"] == "hh-1"

    def test_matching_spellings_are_accepted(self):
        parsed = _request("pets_delete").parse(
            {"id": "pet-1", "householdId": "hh-1", "household_id": "hh-1"}
        )
        assert parsed["household_id"] == "hh-1"

    def test_mismatch_is_rejected(self):
        with pytest.raises(ValidationError, match="householdId mismatch"):
            _request("pets_list").parse({"householdId": "a", "household_id": "b"})

    def test_missing_household_is_rejected(self):
        with pytest.raises(ValidationError, match="householdId is required"):
            _request("pets_list").parse({})

    def test_get_allows_missing_household(self):
        assert _request("pets_get").parse({"id": "pet-1"}) == {"id": "pet-1"}

    def test_negative_paging_is_rejected(self):
        with pytest.raises(ValidationError):
            _request("pets_list").parse({"householdId": "hh", "limit": -1})


class TestPetUpdates:
    def test_update_requires_some_field(self):
        with pytest.raises(ValidationError, match="at least one field"):
            _request("pets_update").parse({"householdId": "hh", "id": "pet-1", "data": {}})

    def test_update_with_one_field(self):
        parsed = _request("pets_update").parse(
            {"householdId": "hh", "id": "pet-1", "data": {"name": "Rex"}}
        )
        assert parsed["data"] == {"name": "Rex"}


class TestPetMedical:
    def test_create_defaults_category(self):
        parsed = _request("pet_medical_create").parse(
            {
                "data": {
                    "household_id": "hh",
                    "pet_id": "pet-1",
                    "date": 1717243200,
                    "description": "Booster",
                }
            }
        )
        assert parsed["data"]["category"] == PET_MEDICAL_CATEGORY

    def test_create_rejects_foreign_category(self):
        with pytest.raises(ValidationError, match="category must be"):
            _request("pet_medical_create").parse(
                {
                    "data": {
                        "household_id": "hh",
                        "pet_id": "pet-1",
                        "date": 1,
                        "description": "Booster",
                        "category": "bills",
                    }
                }
            )

    def test_update_does_not_inject_category(self):
        parsed = _request("pet_medical_update").parse(
            {"householdId": "hh", "id": "med-1", "data": {"description": "Checkup"}}
        )
        assert "category" not in parsed["data"]

    def test_record_category_is_fixed(self):
        record = {
            "id": "med-1",
            "pet_id": "pet-1",
            "household_id": "hh",
            "date": 1,
            "description": "Booster",
            "created_at": 1,
            "updated_at": 1,
            "category": "vehicles",
        }
        with pytest.raises(ValidationError):
            get_contract("pet_medical_get").response.parse(record)
