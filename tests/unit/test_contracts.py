"""Unit tests for the contract registry."""
from types import MappingProxyType

import pytest

from arklowdun_ipc.contracts import (
    CONTRACTS,
    CRUD_FAMILIES,
    EVENTS_RANGE_LIMIT,
    get_contract,
    is_command,
    list_commands,
)
from arklowdun_ipc.models import UnknownCommandError, ValidationError


class TestRegistry:
    """Tests for registry lookups."""

    def test_get_contract_returns_bound_contract(self):
        entry = get_contract("events_list_range")
        assert entry.command == "events_list_range"
        assert entry.request.direction == "request"
        assert entry.response.direction == "response"

    def test_unknown_command_raises(self):
        with pytest.raises(UnknownCommandError) as excinfo:
            get_contract("definitely_not_a_command")
        assert excinfo.value.command == "definitely_not_a_command"

    def test_registry_is_read_only(self):
        assert isinstance(CONTRACTS, MappingProxyType)
        with pytest.raises(TypeError):
            CONTRACTS["new_command"] = CONTRACTS["household_get"]  # type: ignore[index]

    def test_list_commands_is_sorted(self):
        commands = list_commands()
        assert commands == sorted(commands)
        assert len(commands) == len(CONTRACTS)

    def test_is_command(self):
        assert is_command("household_get_active")
        assert not is_command("nope")
        assert not is_command(42)

    @pytest.mark.parametrize("family", CRUD_FAMILIES)
    def test_crud_families_register_every_verb(self, family):
        for verb in ("list", "get", "create", "update", "delete", "restore"):
            assert f"{family}_{verb}" in CONTRACTS

    def test_events_range_limit(self):
        assert EVENTS_RANGE_LIMIT == 100


class TestHouseholdContracts:
    """Backward compatibility and normalisation for households."""

    def test_legacy_record_without_color_parses_unchanged(self):
        legacy = {"id": "hh-1", "name": "Home", "is_default": 1, "tz": "UTC"}
        assert get_contract("household_get").response.parse(legacy) == legacy

    def test_absent_optional_fields_stay_absent(self):
        parsed = get_contract("household_get").response.parse({"id": "hh-1"})
        assert parsed == {"id": "hh-1"}

    def test_unknown_fields_pass_through(self):
        record = {"id": "hh-1", "future_flag": True}
        assert get_contract("household_get").response.parse(record) == record

    def test_colour_is_uppercased(self):
        parsed = get_contract("household_create").request.parse(
            {"args": {"name": "Home", "color": "#abcdef"}}
        )
        assert parsed["args"]["color"] == "#ABCDEF"

    def test_missing_name_names_the_field(self):
        with pytest.raises(ValidationError) as excinfo:
            get_contract("household_create").request.parse({"args": {}})
        err = excinfo.value
        assert err.command == "household_create"
        assert err.direction == "request"
        assert any(v.field == "args.name" for v in err.violations)
        assert "args.name" in str(err)

    def test_get_active_accepts_none(self):
        assert get_contract("household_get_active").response.parse(None) is None

    def test_get_active_request_must_be_empty(self):
        with pytest.raises(ValidationError):
            get_contract("household_get_active").request.parse({"unexpected": 1})


class TestEventContracts:
    """Range pages and numeric fields."""

    def test_legacy_page_without_truncation_metadata(self):
        page = {"items": []}
        assert get_contract("events_list_range").response.parse(page) == page

    def test_booleans_are_not_numbers(self):
        with pytest.raises(ValidationError):
            get_contract("event_create").request.parse(
                {"data": {"household_id": "hh", "title": "t", "start_at_utc": True}}
            )

    def test_floats_stay_floats(self):
        parsed = get_contract("event_create").request.parse(
            {"data": {"household_id": "hh", "title": "t", "start_at_utc": 1.5}}
        )
        assert parsed["data"]["start_at_utc"] == 1.5

    def test_range_request_accepts_missing_household(self):
        assert get_contract("events_list_range").request.parse({}) == {}


class TestNoteContracts:
    def test_restore_may_return_nothing(self):
        assert get_contract("notes_restore").response.parse(None) is None

    def test_cursor_page_requires_notes(self):
        with pytest.raises(ValidationError):
            get_contract("notes_list_cursor").response.parse({})


class TestDbContracts:
    def test_health_report_without_offenders(self):
        report = {
            "status": "ok",
            "checks": [{"name": "quick_check", "passed": True, "duration_ms": 3}],
            "schema_hash": "abc",
            "app_version": "1.0.0",
            "generated_at": "2024-06-01T12:00:00.000Z",
        }
        assert get_contract("db_get_health_report").response.parse(report) == report

    def test_health_report_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            get_contract("db_get_health_report").response.parse(
                {
                    "status": "degraded",
                    "checks": [],
                    "schema_hash": "",
                    "app_version": "",
                    "generated_at": "",
                }
            )


class TestSearchContracts:
    def test_results_are_discriminated_by_kind(self):
        result = {
            "kind": "Event",
            "id": "evt-1",
            "title": "Boiler service",
            "start_at_utc": 1717246800,
            "tz": "UTC",
        }
        assert get_contract("search_entities").response.parse([result]) == [result]

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValidationError):
            get_contract("search_entities").response.parse([{"kind": "Spaceship", "id": "x"}])
