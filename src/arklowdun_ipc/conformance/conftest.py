"""Shared pytest fixtures for conformance tests."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import pytest

from arklowdun_ipc.conformance.loader import load_manifest


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the conformance fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def manifest() -> Dict[str, Any]:
    """Loaded manifest.json contents."""
    return load_manifest()
