"""Environment-driven settings for adapter selection.

Variables:
    IPC_MODE (falls back to MODE): ``development``, ``test``, ``production``...
    IPC_ADAPTER: ``fake`` or ``tauri``.
    IPC_SCENARIO: scenario name for the fake adapter.
    IPC_LOG_SIZE: call log capacity (default 200).
    IPC_SEED: seed for the fake adapter's rng (default 42).

In test mode the adapter is always ``fake`` and the scenario defaults to
``defaultHousehold``.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from arklowdun_ipc.models import AdapterName, ConfigurationError

DEFAULT_MODE = "development"
TEST_MODE = "test"
PRODUCTION_MODE = "production"
TEST_MODE_SCENARIO = "defaultHousehold"


class IpcSettings(BaseModel):
    """Resolved IPC configuration."""

    model_config = ConfigDict(frozen=True)

    mode: str = Field(DEFAULT_MODE, min_length=1)
    adapter: Optional[AdapterName] = None
    scenario: Optional[str] = None
    log_size: int = Field(200, gt=0)
    seed: int = 42

    @field_validator("scenario")
    @classmethod
    def _blank_scenario_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def is_test(self) -> bool:
        return self.mode == TEST_MODE

    @property
    def is_production(self) -> bool:
        return self.mode == PRODUCTION_MODE


def _read(environ: Mapping[str, str], *names: str) -> Optional[str]:
    for name in names:
        value = environ.get(name)
        if value is not None and value.strip():
            return value.strip()
    return None


def settings_from_mapping(environ: Mapping[str, str]) -> IpcSettings:
    """Build settings from an environment-like mapping.

    Raises:
        ConfigurationError: If a variable holds an unusable value.
    """
    raw: Dict[str, object] = {}
    mode = _read(environ, "IPC_MODE", "MODE")
    if mode is not None:
        raw["mode"] = mode
    adapter = _read(environ, "IPC_ADAPTER")
    if adapter is not None:
        raw["adapter"] = adapter
    scenario = _read(environ, "IPC_SCENARIO")
    if scenario is not None:
        raw["scenario"] = scenario
    for key, name in (("log_size", "IPC_LOG_SIZE"), ("seed", "IPC_SEED")):
        value = _read(environ, name)
        if value is None:
            continue
        try:
            raw[key] = int(value, 10)
        except ValueError:
            raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None

    try:
        settings = IpcSettings.model_validate(raw)
    except PydanticValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid IPC configuration: {details}") from exc

    if settings.is_test:
        settings = settings.model_copy(
            update={
                "adapter": "fake",
                "scenario": settings.scenario or TEST_MODE_SCENARIO,
            }
        )
    return settings


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
) -> IpcSettings:
    """Read settings from *environ* (default: the process environment).

    Values from a ``.env`` file never override variables that are already
    set.
    """
    if environ is None:
        load_dotenv(dotenv_path=env_file, override=False)
        return settings_from_mapping(os.environ)
    merged: Dict[str, str] = {}
    if env_file is not None:
        merged.update(
            {key: value for key, value in dotenv_values(env_file).items() if value is not None}
        )
    merged.update(environ)
    return settings_from_mapping(merged)
