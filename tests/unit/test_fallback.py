"""Unit tests for the built-in fallback scenario."""
import pytest

from arklowdun_ipc.clock import FixedClock
from arklowdun_ipc.contracts import CONTRACTS, contract
from arklowdun_ipc.contracts.households import HouseholdRecord
from arklowdun_ipc.rng import SeededRng
from arklowdun_ipc.scenarios import FALLBACK_HOUSEHOLD_ID, ScenarioContext, fallback_scenario
from arklowdun_ipc.scenarios.fallback import neutral_response

_SCENARIO = fallback_scenario()


def _context():
    return ScenarioContext(FixedClock(), SeededRng(1))


class TestCoverage:
    """The fallback answers every registered command."""

    def test_every_command_has_a_handler(self):
        assert set(_SCENARIO.handlers) == set(CONTRACTS)

    @pytest.mark.parametrize("command", sorted(CONTRACTS))
    def test_response_satisfies_contract(self, command):
        handler = _SCENARIO.handler_for(command)
        result = handler({}, _context())
        CONTRACTS[command].response.parse(result)

    def test_metadata_is_healthy(self):
        assert _SCENARIO.health == "healthy"


class TestFixedResponses:
    def test_active_household(self):
        assert _SCENARIO.handler_for("household_get_active")({}, _context()) == FALLBACK_HOUSEHOLD_ID

    def test_notes_cursor_is_empty(self):
        assert _SCENARIO.handler_for("notes_list_cursor")({}, _context()) == {"notes": []}

    def test_events_range_is_empty(self):
        assert _SCENARIO.handler_for("events_list_range")({"anything": 1}, _context()) == {
            "items": [],
            "truncated": False,
            "limit": 100,
        }

    def test_lists_are_empty(self):
        assert _SCENARIO.handler_for("vehicles_list")({"householdId": "hh"}, _context()) == []
        assert _SCENARIO.handler_for("household_list")({}, _context()) == []

    def test_singletons_are_none(self):
        assert _SCENARIO.handler_for("household_get")({"id": "x"}, _context()) is None

    def test_responses_are_independent_copies(self):
        handler = _SCENARIO.handler_for("notes_list_cursor")
        first = handler({}, _context())
        first["notes"].append("mutated")
        assert handler({}, _context()) == {"notes": []}

    def test_created_records_echo_household(self):
        record = _SCENARIO.handler_for("vehicles_create")(
            {"data": {"household_id": "hh-9", "name": "Car"}}, _context()
        )
        assert record["household_id"] == "hh-9"
        assert record["name"] == "Car"
        assert record["created_at"] == 1717243200


class TestNeutralResponse:
    def test_prefers_none(self):
        assert neutral_response(contract("x", dict, None)) is None

    def test_falls_through_candidates(self):
        assert neutral_response(contract("x", dict, bool)) is False
        assert neutral_response(contract("x", dict, str)) == ""

    def test_raises_when_nothing_fits(self):
        with pytest.raises(LookupError):
            neutral_response(contract("x", dict, HouseholdRecord))
