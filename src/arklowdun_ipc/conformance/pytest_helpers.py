"""Reusable test helpers for arklowdun-ipc conformance testing.

Consumers can import these to write their own conformance assertions:
    from arklowdun_ipc.conformance.pytest_helpers import (
        assert_request_conforms,
        assert_response_fails,
    )
"""
from __future__ import annotations

from typing import Any

from arklowdun_ipc.contracts import Direction
from arklowdun_ipc.conformance.validators import (
    ConformanceResult,
    validate_command,
)


def _describe(result: ConformanceResult) -> str:
    lines = []
    for mv in result.model_violations:
        lines.append(f"  Model: {mv.field or '<root>'}: {mv.message}")
    for sv in result.schema_violations:
        lines.append(f"  Schema: {sv.json_path}: {sv.message}")
    return "\n".join(lines)


def _assert_conforms(command: str, value: Any, direction: Direction) -> ConformanceResult:
    result = validate_command(command, value, direction)
    if not result.valid:
        raise AssertionError(
            f"{direction.capitalize()} for {command!r} failed conformance:\n"
            + _describe(result)
        )
    return result


def _assert_fails(command: str, value: Any, direction: Direction) -> ConformanceResult:
    result = validate_command(command, value, direction)
    if result.valid:
        raise AssertionError(
            f"{direction.capitalize()} for {command!r} was expected to fail "
            "but passed conformance."
        )
    return result


def assert_request_conforms(command: str, payload: Any) -> ConformanceResult:
    """Assert a request payload conforms to the command's contract."""
    return _assert_conforms(command, payload, "request")


def assert_response_conforms(command: str, response: Any) -> ConformanceResult:
    """Assert a response conforms to the command's contract."""
    return _assert_conforms(command, response, "response")


def assert_request_fails(command: str, payload: Any) -> ConformanceResult:
    """Assert a request payload DOES NOT conform (expected invalid)."""
    return _assert_fails(command, payload, "request")


def assert_response_fails(command: str, response: Any) -> ConformanceResult:
    """Assert a response DOES NOT conform (expected invalid)."""
    return _assert_fails(command, response, "response")
