"""The always-available scenario with neutral responses for every command.

Most responses are derived from the contract itself: the first of ``None``,
``[]``, ``{}``, ``False``, ``0`` and ``""`` that the response schema accepts.
Commands whose responses are structured records get an explicit builder
that produces an obviously empty value.
"""
from __future__ import annotations

import copy
from typing import Any, Callable, Dict, Mapping, Tuple

from arklowdun_ipc.clock import epoch_seconds, iso_timestamp
from arklowdun_ipc.contracts import CONTRACTS, EVENTS_RANGE_LIMIT, Contract
from arklowdun_ipc.scenarios.models import (
    ScenarioContext,
    ScenarioDefinition,
    ScenarioHandler,
)

FALLBACK_SCENARIO_NAME = "fallback"
FALLBACK_HOUSEHOLD_ID = "fallback-household"

NEUTRAL_CANDIDATES: Tuple[Any, ...] = (None, [], {}, False, 0, "")


def _constant(value: Any) -> ScenarioHandler:
    def handler(payload: Any, context: ScenarioContext) -> Any:
        return copy.deepcopy(value)

    return handler


def _data_of(payload: Any, key: str = "data") -> Dict[str, Any]:
    if isinstance(payload, Mapping):
        inner = payload.get(key)
        if isinstance(inner, Mapping):
            return dict(inner)
    return {}


def _household_of(payload: Any) -> str:
    data = _data_of(payload)
    for source in (data, payload if isinstance(payload, Mapping) else {}):
        for key in ("household_id", "householdId"):
            value = source.get(key)
            if isinstance(value, str) and value:
                return value
    return FALLBACK_HOUSEHOLD_ID


def _record(
    kind: str, build: Callable[[Any, int], Dict[str, Any]]
) -> ScenarioHandler:
    def handler(payload: Any, context: ScenarioContext) -> Dict[str, Any]:
        now = epoch_seconds(context.clock)
        record = build(payload, now)
        record.setdefault("id", f"fallback-{kind}")
        return record

    return handler


def _household(payload: Any, now: int) -> Dict[str, Any]:
    args = _data_of(payload, "args")
    record: Dict[str, Any] = {
        "id": args.get("id")
        or (payload.get("id") if isinstance(payload, Mapping) else None)
        or FALLBACK_HOUSEHOLD_ID,
        "name": args.get("name", ""),
        "is_default": False,
        "created_at": now,
        "updated_at": now,
        "deleted_at": None,
    }
    if "color" in args:
        record["color"] = args["color"]
    return record


def _event(payload: Any, now: int) -> Dict[str, Any]:
    data = _data_of(payload)
    return {
        "household_id": _household_of(payload),
        "title": data.get("title", ""),
        "start_at_utc": data.get("start_at_utc", now),
        "created_at": now,
        "updated_at": now,
    }


def _note(payload: Any, now: int) -> Dict[str, Any]:
    data = _data_of(payload)
    return {
        "household_id": _household_of(payload),
        "position": 0,
        "created_at": now,
        "updated_at": now,
        "text": data.get("text", ""),
        "color": data.get("color", ""),
        "x": data.get("x", 0),
        "y": data.get("y", 0),
    }


def _note_link(payload: Any, now: int) -> Dict[str, Any]:
    source = payload if isinstance(payload, Mapping) else {}
    return {
        "household_id": _household_of(payload),
        "note_id": source.get("noteId") or source.get("note_id") or "",
        "entity_type": source.get("entityType") or source.get("entity_type") or "",
        "entity_id": source.get("entityId") or source.get("entity_id") or "",
        "created_at": now,
        "updated_at": now,
    }


def _vehicle(payload: Any, now: int) -> Dict[str, Any]:
    data = _data_of(payload)
    return {
        "household_id": _household_of(payload),
        "name": data.get("name", ""),
        "created_at": now,
        "updated_at": now,
        "position": 0,
    }


def _pet(payload: Any, now: int) -> Dict[str, Any]:
    data = _data_of(payload)
    return {
        "household_id": _household_of(payload),
        "name": data.get("name", ""),
        "type": data.get("type", ""),
        "created_at": now,
        "updated_at": now,
        "position": 0,
    }


def _pet_medical(payload: Any, now: int) -> Dict[str, Any]:
    data = _data_of(payload)
    return {
        "household_id": _household_of(payload),
        "pet_id": data.get("pet_id", ""),
        "date": data.get("date", now),
        "description": data.get("description", ""),
        "created_at": now,
        "updated_at": now,
        "category": "pet_medical",
    }


def _health_report(payload: Any, context: ScenarioContext) -> Dict[str, Any]:
    return {
        "status": "ok",
        "checks": [],
        "schema_hash": "",
        "app_version": "",
        "generated_at": iso_timestamp(context.clock.now()),
    }


def _backup_entry(payload: Any, context: ScenarioContext) -> Dict[str, Any]:
    return {
        "directory": "",
        "sqlitePath": "",
        "manifestPath": "",
        "manifest": {},
        "totalSizeBytes": 0,
    }


STRUCTURED_RESPONSES: Dict[str, ScenarioHandler] = {
    "household_get_active": _constant(FALLBACK_HOUSEHOLD_ID),
    "household_create": _record("household", _household),
    "household_update": _record("household", _household),
    "household_restore": _record("household", _household),
    "household_resume_delete": _record("household", _household),
    "events_list_range": _constant(
        {"items": [], "truncated": False, "limit": EVENTS_RANGE_LIMIT}
    ),
    "event_create": _record("event", _event),
    "notes_create": _record("note", _note),
    "notes_list_cursor": _constant({"notes": []}),
    "notes_list_by_deadline_range": _constant({"items": []}),
    "notes_list_for_entity": _constant({"notes": [], "links": []}),
    "notes_quick_create_for_entity": _constant({"notes": [], "links": []}),
    "note_links_create": _record("note-link", _note_link),
    "note_links_list_by_entity": _constant({"items": []}),
    "note_links_get_for_note": _constant({"items": []}),
    "vehicles_create": _record("vehicle", _vehicle),
    "pets_create": _record("pet", _pet),
    "pet_medical_create": _record("pet-medical", _pet_medical),
    "files_index_status": _constant(
        {"last_built_at": None, "row_count": 0, "state": "Idle"}
    ),
    "files_index_rebuild": _constant({"total": 0, "updated": 0, "duration_ms": 0}),
    "files_index_cancel": _constant({"cancelled": False}),
    "file_move": _constant({"moved": 0, "renamed": False}),
    "attachments_repair": _constant(
        {"scanned": 0, "missing": 0, "repaired": 0, "cancelled": False}
    ),
    "db_get_health_report": _health_report,
    "db_recheck": _health_report,
    "db_backup_create": _backup_entry,
    "db_backup_overview": _constant(
        {
            "availableBytes": 0,
            "dbSizeBytes": 0,
            "requiredFreeBytes": 0,
            "retentionMaxCount": 0,
            "retentionMaxBytes": 0,
            "backups": [],
        }
    ),
}


def neutral_response(entry: Contract) -> Any:
    """First neutral candidate the command's response schema accepts.

    Raises:
        LookupError: If no candidate fits; such commands need an entry in
            ``STRUCTURED_RESPONSES``.
    """
    for candidate in NEUTRAL_CANDIDATES:
        if entry.response.accepts(candidate):
            return candidate
    raise LookupError(f"No neutral response fits {entry.command!r}")


def fallback_handlers(
    contracts: Mapping[str, Contract] = CONTRACTS,
) -> Dict[str, ScenarioHandler]:
    handlers: Dict[str, ScenarioHandler] = {}
    for command, entry in contracts.items():
        structured = STRUCTURED_RESPONSES.get(command)
        if structured is not None:
            handlers[command] = structured
        else:
            handlers[command] = _constant(neutral_response(entry))
    return handlers


def fallback_scenario() -> ScenarioDefinition:
    """Scenario answering every registered command with an empty result."""
    return ScenarioDefinition(
        name=FALLBACK_SCENARIO_NAME,
        handlers=fallback_handlers(),
        description="Neutral responses for every command",
        metadata={"health": "healthy"},
    )
