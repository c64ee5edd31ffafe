"""Canonical fixture loading for arklowdun-ipc conformance testing.

Provides FixtureCase (frozen dataclass) and load_fixtures() for data-driven
conformance tests. Reads from the bundled manifest.json and fixture JSON files.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from arklowdun_ipc.contracts import Direction

_FIXTURES_DIR = Path(__file__).parent / "fixtures"
_MANIFEST_PATH = _FIXTURES_DIR / "manifest.json"

_VALID_CATEGORIES = frozenset({
    "households", "events", "notes", "vehicles", "pets",
})


@dataclass(frozen=True)
class FixtureCase:
    """A single fixture test case loaded from the manifest."""

    id: str
    payload: Any
    expected_valid: bool
    command: str
    direction: Direction
    notes: str
    min_version: str


def load_manifest() -> Dict[str, Any]:
    with open(_MANIFEST_PATH, "r", encoding="utf-8") as fh:
        manifest: Dict[str, Any] = json.load(fh)
    return manifest


def load_fixtures(category: str) -> List[FixtureCase]:
    """Load canonical fixture cases for a category.

    Args:
        category: One of ``"households"``, ``"events"``, ``"notes"``,
            ``"vehicles"`` or ``"pets"``.

    Returns:
        List of :class:`FixtureCase` instances with payloads loaded from JSON.

    Raises:
        ValueError: If *category* is not one of the recognised categories.
        FileNotFoundError: If a referenced fixture file is missing.
    """
    if category not in _VALID_CATEGORIES:
        raise ValueError(
            f"Unknown fixture category: {category!r}. "
            f"Valid categories: {sorted(_VALID_CATEGORIES)}"
        )

    fixtures: List[FixtureCase] = []
    for entry in load_manifest()["fixtures"]:
        fixture_path: str = entry["path"]
        if not fixture_path.startswith(category + "/"):
            continue

        full_path = _FIXTURES_DIR / fixture_path
        if not full_path.exists():
            raise FileNotFoundError(
                f"Fixture file referenced in manifest does not exist: {full_path}"
            )

        with open(full_path, "r", encoding="utf-8") as fh:
            payload: Any = json.load(fh)

        fixtures.append(
            FixtureCase(
                id=entry["id"],
                payload=payload,
                expected_valid=entry["expected_result"] == "valid",
                command=entry["command"],
                direction=entry["direction"],
                notes=entry["notes"],
                min_version=entry["min_version"],
            )
        )

    return fixtures


def load_all_fixtures() -> List[FixtureCase]:
    cases: List[FixtureCase] = []
    for category in sorted(_VALID_CATEGORIES):
        cases.extend(load_fixtures(category))
    return cases
