"""Conformance test suite for arklowdun-ipc.

Run: pytest --pyargs arklowdun_ipc.conformance
"""
from __future__ import annotations

from typing import Any, Dict, List

import pytest
from jsonschema import Draft202012Validator

from arklowdun_ipc.conformance.loader import FixtureCase, load_all_fixtures
from arklowdun_ipc.conformance.validators import validate_command
from arklowdun_ipc.contracts import CONTRACTS
from arklowdun_ipc.schemas import contract_schema, list_schemas


_CASES: List[FixtureCase] = load_all_fixtures()


# --- Manifest-driven fixture tests ---


@pytest.mark.parametrize("case", _CASES, ids=[c.id for c in _CASES])
def test_fixture_conformance(case: FixtureCase) -> None:
    """Validate each fixture against its expected result.

    For expected-valid fixtures the pydantic layer must pass; schema-only
    violations (values pydantic normalises but JSON Schema cannot express)
    are permitted. For expected-invalid fixtures at least one layer must
    reject the value.
    """
    result = validate_command(case.command, case.payload, case.direction)
    if case.expected_valid:
        if result.model_violations:
            violations = [
                f"  Model: {v.field}: {v.message}" for v in result.model_violations
            ]
            raise AssertionError(
                f"{case.direction} for {case.command!r} (fixture {case.id}) "
                f"failed model conformance:\n" + "\n".join(violations)
            )
    else:
        if result.valid:
            raise AssertionError(
                f"{case.direction} for {case.command!r} (fixture {case.id}) "
                f"was expected to fail but passed conformance."
            )


def test_manifest_commands_are_registered(manifest: Dict[str, Any]) -> None:
    for entry in manifest["fixtures"]:
        assert entry["command"] in CONTRACTS, entry["id"]


# --- Schema integrity tests ---


def test_every_contract_has_both_schemas() -> None:
    assert len(list_schemas()) == 2 * len(CONTRACTS)


@pytest.mark.parametrize("name", list_schemas())
def test_schema_is_valid_json_schema(name: str) -> None:
    """Each exported schema is a valid JSON Schema document."""
    command, direction = name.rsplit(".", 1)
    schema = contract_schema(command, direction)  # type: ignore[arg-type]
    assert "$schema" in schema
    assert "$id" in schema
    Draft202012Validator.check_schema(schema)
