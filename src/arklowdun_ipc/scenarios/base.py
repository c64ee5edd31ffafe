"""Stateful in-memory fake backend shared by the built-in scenarios.

``create_scenario`` deep-copies its :class:`ScenarioData`, so every scenario
instance starts from pristine fixtures and mutations made by one test never
leak into another. Identifiers for new rows combine a running serial with a
draw from the context rng, and timestamps come from the context clock, so a
``FixedClock`` plus ``SeededRng`` pair makes every response reproducible.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from arklowdun_ipc.clock import epoch_seconds, iso_timestamp
from arklowdun_ipc.contracts import EVENTS_RANGE_LIMIT
from arklowdun_ipc.scenarios.models import (
    ScenarioContext,
    ScenarioDefinition,
    ScenarioHandler,
)

logger = logging.getLogger("arklowdun_ipc.scenarios")

Record = Dict[str, Any]

DEFAULT_NOTE_COLOR = "#2563EB"
KNOWN_TABLES = ("events", "notes", "vehicles")
RANGE_WINDOW_SECONDS = 86_400

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


@dataclass
class BackupFixtures:
    manifest: Record = field(default_factory=dict)
    overview: Record = field(default_factory=dict)
    entries: List[Record] = field(default_factory=list)
    export_entry: Record = field(default_factory=dict)


@dataclass
class ImportFixtures:
    preview: Record = field(default_factory=dict)
    execute: Record = field(default_factory=dict)


@dataclass
class RepairFixtures:
    validation: Record = field(default_factory=dict)
    hard: Record = field(default_factory=dict)


@dataclass
class ScenarioData:
    """Seed rows for one scenario, in backend wire shape."""

    households: List[Record]
    active_household_id: str
    events: List[Record] = field(default_factory=list)
    notes: List[Record] = field(default_factory=list)
    note_links: List[Record] = field(default_factory=list)
    vehicles: List[Record] = field(default_factory=list)
    search_results: List[Record] = field(default_factory=list)
    categories: List[Record] = field(default_factory=list)
    backups: BackupFixtures = field(default_factory=BackupFixtures)
    imports: ImportFixtures = field(default_factory=ImportFixtures)
    repair: RepairFixtures = field(default_factory=RepairFixtures)


def base36(value: int) -> str:
    if value <= 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def _first_str(sources: List[Mapping[str, Any]], *keys: str) -> Optional[str]:
    for source in sources:
        for key in keys:
            value = source.get(key)
            if isinstance(value, str) and value:
                return value
    return None


def _nested(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key)
    return value if isinstance(value, Mapping) else {}


def _without_none(record: Record) -> Record:
    return {key: value for key, value in record.items() if value is not None}


def _live(record: Mapping[str, Any]) -> bool:
    return record.get("deleted_at") is None


class ScenarioState:
    """Mutable backend state plus the command handlers operating on it."""

    def __init__(self, data: ScenarioData) -> None:
        seed = copy.deepcopy(data)
        self.households = seed.households
        self.active_household_id = seed.active_household_id
        self.events = seed.events
        self.notes = seed.notes
        self.note_links = seed.note_links
        self.vehicles = seed.vehicles
        self.search_results = seed.search_results
        self.categories = seed.categories
        self.backups = seed.backups
        self.imports = seed.imports
        self.repair = seed.repair
        self.cursor = 0

    # -- helpers -----------------------------------------------------------

    def next_id(self, prefix: str, draw: float) -> str:
        serial = base36(int(draw * 1_000_000)).rjust(4, "0")
        self.cursor += 1
        return f"{prefix}-{self.cursor}-{serial}"

    def _household_for(self, payload: Mapping[str, Any]) -> str:
        return (
            _first_str(
                [payload, _nested(payload, "args")], "householdId", "household_id"
            )
            or self.active_household_id
        )

    def _find(self, rows: List[Record], row_id: Any) -> Optional[Record]:
        return next((row for row in rows if row.get("id") == row_id), None)

    def default_category(self, household_id: str) -> Optional[Record]:
        return next(
            (
                category
                for category in self.categories
                if category.get("household_id") == household_id and _live(category)
            ),
            None,
        )

    def _placeholder_note(self, household_id: str, now: int) -> Record:
        return {
            "id": f"placeholder-note-{household_id}",
            "household_id": household_id,
            "position": 0,
            "created_at": now,
            "updated_at": now,
            "text": "",
            "color": DEFAULT_NOTE_COLOR,
            "x": 0,
            "y": 0,
        }

    def make_note(self, data: Mapping[str, Any], context: ScenarioContext) -> Record:
        now = epoch_seconds(context.clock)
        household_id = (
            _first_str([data], "household_id", "householdId")
            or self.active_household_id
        )
        category_id = _first_str([data], "category_id", "categoryId")
        if category_id is None:
            fallback = self.default_category(household_id)
            category_id = fallback["id"] if fallback else None
        note = _without_none(
            {
                "id": self.next_id("note", context.rng.next()),
                "household_id": household_id,
                "category_id": category_id,
                "position": data.get("position", len(self.notes)),
                "created_at": now,
                "updated_at": now,
                "text": data.get("text", ""),
                "color": data.get("color") or DEFAULT_NOTE_COLOR,
                "x": data.get("x", 0),
                "y": data.get("y", 0),
                "z": data.get("z"),
                "deadline": data.get("deadline"),
                "deadline_tz": data.get("deadline_tz"),
            }
        )
        self.notes.append(note)
        return dict(note)

    def make_link(
        self,
        note: Mapping[str, Any],
        entity_id: str,
        entity_type: str,
        context: ScenarioContext,
        relation: str = "related",
    ) -> Record:
        now = epoch_seconds(context.clock)
        link = {
            "id": self.next_id("note-link", context.rng.next()),
            "household_id": note["household_id"],
            "note_id": note["id"],
            "entity_type": entity_type,
            "entity_id": entity_id,
            "relation": relation,
            "created_at": now,
            "updated_at": now,
        }
        self.note_links.append(link)
        return dict(link)

    def _link_list(self, links: List[Record], now: int) -> Record:
        items = []
        for link in links:
            note = self._find(self.notes, link["note_id"]) or self._placeholder_note(
                link["household_id"], now
            )
            items.append({"note": dict(note), "link": dict(link)})
        return {"items": items}

    def _soft_delete(
        self, rows: List[Record], payload: Mapping[str, Any], context: ScenarioContext
    ) -> None:
        row = self._find(rows, payload.get("id"))
        if row is not None:
            row["deleted_at"] = epoch_seconds(context.clock)

    def _restore(self, rows: List[Record], payload: Mapping[str, Any]) -> Optional[Record]:
        row = self._find(rows, payload.get("id"))
        if row is not None:
            row.pop("deleted_at", None)
        return row

    def _apply_update(
        self, rows: List[Record], payload: Mapping[str, Any], context: ScenarioContext
    ) -> None:
        row = self._find(rows, payload.get("id"))
        if row is not None:
            row.update(_nested(payload, "data"))
            row["updated_at"] = epoch_seconds(context.clock)

    # -- households --------------------------------------------------------

    def household_list(self, payload: Mapping[str, Any], context: ScenarioContext) -> List[Record]:
        include_deleted = bool(payload.get("includeDeleted"))
        return [
            dict(household)
            for household in self.households
            if include_deleted or household.get("deleted_at") is None
        ]

    def household_get_active(self, payload: Any, context: ScenarioContext) -> str:
        return self.active_household_id

    def household_get(self, payload: Mapping[str, Any], context: ScenarioContext) -> Optional[Record]:
        record = self._find(self.households, payload.get("id"))
        return dict(record) if record else None

    def household_create(self, payload: Mapping[str, Any], context: ScenarioContext) -> Record:
        args = _nested(payload, "args")
        now = epoch_seconds(context.clock)
        name = args.get("name")
        record = {
            "id": self.next_id("household", context.rng.next()),
            "name": name if isinstance(name, str) else f"Household {len(self.households) + 1}",
            "tz": args.get("tz"),
            "color": args.get("color"),
            "is_default": False,
            "created_at": now,
            "updated_at": now,
            "deleted_at": None,
        }
        self.households.append(record)
        return dict(record)

    def household_update(self, payload: Mapping[str, Any], context: ScenarioContext) -> Optional[Record]:
        args = _nested(payload, "args")
        record = self._find(self.households, args.get("id"))
        if record is None:
            return None
        if isinstance(args.get("name"), str):
            record["name"] = args["name"]
        if "color" in args:
            record["color"] = args["color"]
        record["updated_at"] = epoch_seconds(context.clock)
        return dict(record)

    def household_delete(self, payload: Mapping[str, Any], context: ScenarioContext) -> Record:
        target = payload.get("id") or self.active_household_id
        record = self._find(self.households, target)
        if record is not None:
            record["deleted_at"] = epoch_seconds(context.clock)
        fallback = next(
            (
                household
                for household in self.households
                if household["id"] != target and household.get("deleted_at") is None
            ),
            None,
        )
        if self.active_household_id == target and fallback is not None:
            self.active_household_id = fallback["id"]
        return {"fallbackId": fallback["id"] if fallback else None}

    def household_restore(self, payload: Mapping[str, Any], context: ScenarioContext) -> Optional[Record]:
        record = self._find(self.households, payload.get("id"))
        if record is None:
            return None
        record["deleted_at"] = None
        return dict(record)

    def household_set_active(self, payload: Mapping[str, Any], context: ScenarioContext) -> None:
        household_id = payload.get("id")
        if isinstance(household_id, str):
            self.active_household_id = household_id
        return None

    # -- events ------------------------------------------------------------

    def events_list_range(self, payload: Mapping[str, Any], context: ScenarioContext) -> Record:
        now = epoch_seconds(context.clock)
        start = payload.get("start")
        end = payload.get("end")
        if start is None:
            start = now - RANGE_WINDOW_SECONDS
        if end is None:
            end = now + RANGE_WINDOW_SECONDS
        household_id = payload.get("householdId") or self.active_household_id
        items = [
            dict(event)
            for event in self.events
            if event["household_id"] == household_id
            and _live(event)
            and start <= event["start_at_utc"] <= end
        ]
        return {"items": items, "truncated": False, "limit": EVENTS_RANGE_LIMIT}

    def event_create(self, payload: Mapping[str, Any], context: ScenarioContext) -> Record:
        args = _nested(payload, "data")
        event_id = self.next_id("event", context.rng.next())
        now = epoch_seconds(context.clock)
        event = _without_none(
            {
                "id": event_id,
                "household_id": args.get("household_id") or self.active_household_id,
                "title": args.get("title", "New event"),
                "tz": args.get("tz") or "UTC",
                "start_at_utc": args.get("start_at_utc", now),
                "end_at_utc": args.get("end_at_utc", now + 3600),
                "rrule": args.get("rrule") or args.get("rule"),
                "exdates": args.get("exdates"),
                "reminder": args.get("reminder"),
                "created_at": now,
                "updated_at": now,
                "series_parent_id": args.get("series_parent_id"),
            }
        )
        self.events.append(event)
        return dict(event)

    def event_update(self, payload: Mapping[str, Any], context: ScenarioContext) -> None:
        self._apply_update(self.events, payload, context)

    def event_delete(self, payload: Mapping[str, Any], context: ScenarioContext) -> None:
        self._soft_delete(self.events, payload, context)

    def event_restore(self, payload: Mapping[str, Any], context: ScenarioContext) -> None:
        self._restore(self.events, payload)

    # -- notes -------------------------------------------------------------

    def notes_list_cursor(self, payload: Mapping[str, Any], context: ScenarioContext) -> Record:
        household_id = self._household_for(payload)
        include_deleted = bool(
            payload.get("includeDeleted") or payload.get("include_deleted")
        )
        notes = [
            dict(note)
            for note in self.notes
            if note["household_id"] == household_id and (include_deleted or _live(note))
        ]
        return {"notes": notes}

    def notes_list_by_deadline_range(
        self, payload: Mapping[str, Any], context: ScenarioContext
    ) -> Record:
        household_id = self._household_for(payload)
        start = payload.get("start_utc")
        end = payload.get("end_utc")
        items = [
            dict(note)
            for note in self.notes
            if note.get("deadline") is not None
            and note["household_id"] == household_id
            and _live(note)
            and (start is None or note["deadline"] >= start)
            and (end is None or note["deadline"] <= end)
        ]
        return {"items": items}

    def notes_list_for_entity(self, payload: Mapping[str, Any], context: ScenarioContext) -> Record:
        entity_id = _first_str([payload], "entityId", "entity_id")
        links = [link for link in self.note_links if link["entity_id"] == entity_id]
        linked = {link["note_id"] for link in links}
        notes = [dict(note) for note in self.notes if note["id"] in linked]
        return {"notes": notes, "links": [dict(link) for link in links]}

    def notes_quick_create_for_entity(
        self, payload: Mapping[str, Any], context: ScenarioContext
    ) -> Record:
        sources = [payload, _nested(payload, "args")]
        household_id = self._household_for(payload)
        entity_id = _first_str(sources, "entityId", "entity_id") or (
            self.events[0]["id"] if self.events else "event-0"
        )
        entity_type = _first_str(sources, "entityType", "entity_type") or "event"
        note = self.make_note(
            {
                "household_id": household_id,
                "category_id": _first_str(sources, "categoryId", "category_id"),
                "text": _first_str(sources, "text") or "",
                "color": _first_str(sources, "color"),
            },
            context,
        )
        link = self.make_link(note, entity_id, entity_type, context)
        return {"notes": [note], "links": [link]}

    def notes_create(self, payload: Mapping[str, Any], context: ScenarioContext) -> Record:
        return self.make_note(_nested(payload, "data"), context)

    def notes_get(self, payload: Mapping[str, Any], context: ScenarioContext) -> Optional[Record]:
        note = self._find(self.notes, payload.get("id"))
        return dict(note) if note else None

    def notes_update(self, payload: Mapping[str, Any], context: ScenarioContext) -> None:
        self._apply_update(self.notes, payload, context)

    def notes_delete(self, payload: Mapping[str, Any], context: ScenarioContext) -> None:
        self._soft_delete(self.notes, payload, context)

    def notes_restore(self, payload: Mapping[str, Any], context: ScenarioContext) -> Optional[Record]:
        note = self._restore(self.notes, payload)
        return dict(note) if note else None

    # -- note links --------------------------------------------------------

    def note_links_create(self, payload: Mapping[str, Any], context: ScenarioContext) -> Record:
        sources = [_nested(payload, "data"), payload]
        note_id = _first_str(sources, "note_id", "noteId") or (
            self.notes[0]["id"] if self.notes else "note-0"
        )
        note = self._find(self.notes, note_id) or {
            "id": note_id,
            "household_id": self._household_for(payload),
        }
        entity_id = _first_str(sources, "entity_id", "entityId") or (
            self.events[0]["id"] if self.events else "event-0"
        )
        entity_type = _first_str(sources, "entity_type", "entityType") or "event"
        relation = _first_str(sources, "relation") or "related"
        return self.make_link(note, entity_id, entity_type, context, relation)

    def note_links_list_by_entity(
        self, payload: Mapping[str, Any], context: ScenarioContext
    ) -> Record:
        entity_id = _first_str([payload], "entityId", "entity_id")
        links = [link for link in self.note_links if link["entity_id"] == entity_id]
        return self._link_list(links, epoch_seconds(context.clock))

    def note_links_unlink_entity(self, payload: Mapping[str, Any], context: ScenarioContext) -> None:
        entity_id = _first_str([payload], "entityId", "entity_id")
        note_id = _first_str([payload], "noteId", "note_id")
        self.note_links = [
            link
            for link in self.note_links
            if not (
                link["entity_id"] == entity_id
                and (note_id is None or link["note_id"] == note_id)
            )
        ]

    def note_links_get_for_note(self, payload: Mapping[str, Any], context: ScenarioContext) -> Record:
        note_id = _first_str([payload], "noteId", "note_id")
        links = [link for link in self.note_links if link["note_id"] == note_id]
        return self._link_list(links, epoch_seconds(context.clock))

    def note_links_delete(self, payload: Mapping[str, Any], context: ScenarioContext) -> None:
        link_id = _first_str([payload], "linkId", "id")
        self.note_links = [link for link in self.note_links if link["id"] != link_id]

    # -- categories --------------------------------------------------------

    def categories_list(self, payload: Mapping[str, Any], context: ScenarioContext) -> List[Record]:
        args = _nested(payload, "args")
        household_id = self._household_for(payload)
        include_hidden = False
        for source in (args, payload):
            for key in ("includeHidden", "include_hidden"):
                if key in source:
                    include_hidden = bool(source[key])
                    break
        return [
            dict(category)
            for category in self.categories
            if category.get("household_id") == household_id
            and (include_hidden or _live(category))
        ]

    # -- vehicles ----------------------------------------------------------

    def vehicles_list(self, payload: Mapping[str, Any], context: ScenarioContext) -> List[Record]:
        household_id = payload.get("householdId") or self.active_household_id
        return [
            dict(vehicle)
            for vehicle in self.vehicles
            if vehicle["household_id"] == household_id
        ]

    def vehicles_get(self, payload: Mapping[str, Any], context: ScenarioContext) -> Optional[Record]:
        household_id = payload.get("householdId") or self.active_household_id
        vehicle = self._find(self.vehicles, payload.get("id"))
        if vehicle is None or vehicle["household_id"] != household_id:
            return None
        return dict(vehicle)

    def vehicles_create(self, payload: Mapping[str, Any], context: ScenarioContext) -> Record:
        args = _nested(payload, "data")
        now = epoch_seconds(context.clock)
        vehicle = _without_none(
            {
                "id": self.next_id("vehicle", context.rng.next()),
                "household_id": args.get("household_id") or self.active_household_id,
                "name": args.get("name") or "Vehicle",
                "make": args.get("make", ""),
                "model": args.get("model", ""),
                "reg": args.get("reg", ""),
                "vin": args.get("vin"),
                "next_mot_due": args.get("next_mot_due"),
                "next_service_due": args.get("next_service_due"),
                "created_at": now,
                "updated_at": now,
                "position": args.get("position", len(self.vehicles)),
            }
        )
        self.vehicles.append(vehicle)
        return dict(vehicle)

    def vehicles_update(self, payload: Mapping[str, Any], context: ScenarioContext) -> None:
        self._apply_update(self.vehicles, payload, context)

    def vehicles_delete(self, payload: Mapping[str, Any], context: ScenarioContext) -> None:
        self._soft_delete(self.vehicles, payload, context)

    def vehicles_restore(self, payload: Mapping[str, Any], context: ScenarioContext) -> None:
        self._restore(self.vehicles, payload)

    # -- backups, import, repair ------------------------------------------

    def db_backup_create(self, payload: Any, context: ScenarioContext) -> Record:
        stamp = iso_timestamp(context.clock.now())
        entry = {
            "directory": f"/tmp/backups/{stamp}",
            "sqlitePath": f"/tmp/backups/{stamp}/app.db",
            "manifestPath": f"/tmp/backups/{stamp}/manifest.json",
            "manifest": {**self.backups.manifest, "createdAt": stamp},
            "totalSizeBytes": 1024,
        }
        self.backups.entries.append(entry)
        self.backups.overview.setdefault("backups", []).append(entry)
        return copy.deepcopy(entry)

    def db_backup_overview(self, payload: Any, context: ScenarioContext) -> Record:
        return copy.deepcopy(self.backups.overview)

    def db_export_run(self, payload: Any, context: ScenarioContext) -> Record:
        return copy.deepcopy(self.backups.export_entry)

    def db_import_preview(self, payload: Any, context: ScenarioContext) -> Record:
        return copy.deepcopy(self.imports.preview)

    def db_import_execute(self, payload: Any, context: ScenarioContext) -> Record:
        return copy.deepcopy(self.imports.execute)

    def db_repair_run(self, payload: Any, context: ScenarioContext) -> Record:
        return copy.deepcopy(self.repair.validation)

    def db_hard_repair_run(self, payload: Any, context: ScenarioContext) -> Record:
        return copy.deepcopy(self.repair.hard)

    def db_table_exists(self, payload: Mapping[str, Any], context: ScenarioContext) -> bool:
        name = _first_str([payload, _nested(payload, "args")], "name")
        return name in KNOWN_TABLES

    # -- miscellaneous -----------------------------------------------------

    def diagnostics_household_stats(self, payload: Any, context: ScenarioContext) -> Record:
        return {"households": len(self.households)}

    def search_entities(self, payload: Any, context: ScenarioContext) -> List[Record]:
        return [dict(result) for result in self.search_results]


def _constant(value: Any) -> ScenarioHandler:
    def handler(payload: Any, context: ScenarioContext) -> Any:
        return copy.deepcopy(value)

    return handler


STATEFUL_COMMANDS = (
    "household_list",
    "household_get_active",
    "household_get",
    "household_create",
    "household_update",
    "household_delete",
    "household_restore",
    "household_set_active",
    "events_list_range",
    "event_create",
    "event_update",
    "event_delete",
    "event_restore",
    "notes_list_cursor",
    "notes_list_by_deadline_range",
    "notes_list_for_entity",
    "notes_quick_create_for_entity",
    "notes_create",
    "notes_get",
    "notes_update",
    "notes_delete",
    "notes_restore",
    "note_links_create",
    "note_links_list_by_entity",
    "note_links_unlink_entity",
    "note_links_get_for_note",
    "note_links_delete",
    "categories_list",
    "vehicles_list",
    "vehicles_get",
    "vehicles_create",
    "vehicles_update",
    "vehicles_delete",
    "vehicles_restore",
    "db_backup_create",
    "db_backup_overview",
    "db_export_run",
    "db_import_preview",
    "db_import_execute",
    "db_repair_run",
    "db_hard_repair_run",
    "db_table_exists",
    "diagnostics_household_stats",
    "search_entities",
)

STATIC_RESPONSES: Dict[str, Any] = {
    "about_metadata": {"version": "fake", "commit": "0000000"},
    "attachment_open": None,
    "attachment_reveal": None,
    "bills_list_due_between": [],
    "db_backup_reveal": None,
    "db_backup_reveal_root": None,
    "db_files_index_ready": True,
    "db_has_pet_columns": False,
    "db_has_vehicle_columns": True,
    "diagnostics_doc_path": "/tmp/diagnostics.md",
    "diagnostics_summary": {"ok": True},
    "events_backfill_timezone": {"started": True},
    "events_backfill_timezone_cancel": None,
    "events_backfill_timezone_status": {"status": "idle"},
    "import_run_legacy": {"ok": True},
    "open_diagnostics_doc": None,
    "open_path": None,
}


def create_scenario(
    name: str,
    data: ScenarioData,
    description: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> ScenarioDefinition:
    """Build a scenario backed by a private copy of *data*."""
    state = ScenarioState(data)
    handlers: Dict[str, ScenarioHandler] = {
        command: _constant(value) for command, value in STATIC_RESPONSES.items()
    }
    for command in STATEFUL_COMMANDS:
        handlers[command] = getattr(state, command)
    logger.debug("Created scenario %s with %d handlers", name, len(handlers))
    return ScenarioDefinition(
        name=name,
        handlers=handlers,
        description=description,
        metadata=dict(metadata or {}),
    )
