"""Conformance tests tying the bundled fixtures to the fake backend.

Fixture requests are fed through the dispatcher, and every built-in
scenario's answers are checked against the same conformance layer that
external consumers use.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from arklowdun_ipc.clock import FixedClock
from arklowdun_ipc.conformance import (
    FixtureCase,
    assert_response_conforms,
    load_all_fixtures,
    validate_command,
)
from arklowdun_ipc.dispatcher import FakeDispatcher
from arklowdun_ipc.models import ValidationError
from arklowdun_ipc.rng import SeededRng
from arklowdun_ipc.scenarios import ScenarioLoader


# ── Helpers ──────────────────────────────────────────────────────────────────

_REQUEST_CASES: List[FixtureCase] = [
    case for case in load_all_fixtures() if case.direction == "request"
]

_BUILTIN_SCENARIOS = ScenarioLoader().list()

# Read-only commands with the payload each built-in scenario can answer.
_READ_CALLS: Dict[str, Dict[str, Any]] = {
    "household_get_active": {},
    "household_list": {},
    "events_list_range": {},
    "notes_list_cursor": {},
    "vehicles_list": {"householdId": "hh-default"},
    "db_get_health_report": {},
}


def _dispatcher(scenario: str) -> FakeDispatcher:
    return FakeDispatcher(
        clock=FixedClock(),
        rng=SeededRng(42),
        scenario_name=scenario,
        expose_hooks=False,
    )


# ── Fixture requests through the dispatcher ──────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize("case", _REQUEST_CASES, ids=[c.id for c in _REQUEST_CASES])
async def test_dispatcher_request_validation_matches_fixture(case: FixtureCase) -> None:
    """The dispatcher rejects exactly the requests the manifest marks invalid."""
    dispatcher = _dispatcher("defaultHousehold")
    contract_ok = not validate_command(case.command, case.payload).model_violations
    assert contract_ok is case.expected_valid
    if case.expected_valid:
        return
    with pytest.raises(ValidationError) as excinfo:
        await dispatcher.invoke(case.command, case.payload)
    assert excinfo.value.direction == "request"
    entries = dispatcher.dump_logs()
    assert len(entries) == 1 and entries[0].success is False


# ── Scenario responses ───────────────────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize("scenario", _BUILTIN_SCENARIOS)
@pytest.mark.parametrize("command", sorted(_READ_CALLS))
async def test_builtin_scenario_responses_conform(scenario: str, command: str) -> None:
    dispatcher = _dispatcher(scenario)
    result = await dispatcher.invoke(command, _READ_CALLS[command])
    assert validate_command(command, result, "response").model_violations == ()


@pytest.mark.asyncio
@pytest.mark.parametrize("scenario", _BUILTIN_SCENARIOS)
async def test_household_answers_pass_both_layers(scenario: str) -> None:
    dispatcher = _dispatcher(scenario)
    assert_response_conforms(
        "household_get_active", await dispatcher.invoke("household_get_active")
    )
    assert_response_conforms("household_list", await dispatcher.invoke("household_list", {}))
