"""Conformance test suite for arklowdun-ipc.

Run: pytest --pyargs arklowdun_ipc.conformance
"""
from arklowdun_ipc.contracts import ModelViolation
from arklowdun_ipc.conformance.loader import (
    FixtureCase,
    load_all_fixtures,
    load_fixtures,
)
from arklowdun_ipc.conformance.pytest_helpers import (
    assert_request_conforms,
    assert_request_fails,
    assert_response_conforms,
    assert_response_fails,
)
from arklowdun_ipc.conformance.validators import (
    ConformanceResult,
    SchemaViolation,
    validate_command,
)

__all__ = [
    "ConformanceResult",
    "FixtureCase",
    "ModelViolation",
    "SchemaViolation",
    "assert_request_conforms",
    "assert_request_fails",
    "assert_response_conforms",
    "assert_response_fails",
    "load_all_fixtures",
    "load_fixtures",
    "validate_command",
]
