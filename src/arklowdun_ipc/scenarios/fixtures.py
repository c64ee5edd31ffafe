"""Shared building blocks for the built-in scenario data sets."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from arklowdun_ipc.clock import DEFAULT_FIXED_INSTANT, iso_timestamp
from arklowdun_ipc.scenarios.base import (
    BackupFixtures,
    ImportFixtures,
    Record,
    RepairFixtures,
)

BASE_SECONDS = int(DEFAULT_FIXED_INSTANT.timestamp())
TIMESTAMP = iso_timestamp(DEFAULT_FIXED_INSTANT)


def household(
    household_id: str,
    name: str,
    *,
    tz: str = "UTC",
    color: Optional[str] = None,
    is_default: bool = False,
) -> Record:
    return {
        "id": household_id,
        "name": name,
        "tz": tz,
        "color": color,
        "is_default": is_default,
        "created_at": BASE_SECONDS,
        "updated_at": BASE_SECONDS,
        "deleted_at": None,
    }


def event(
    event_id: str,
    household_id: str,
    title: str,
    start: int,
    end: int,
    *,
    tz: str = "UTC",
    reminder: int = 600,
) -> Record:
    return {
        "id": event_id,
        "household_id": household_id,
        "title": title,
        "tz": tz,
        "start_at_utc": start,
        "end_at_utc": end,
        "reminder": reminder,
        "created_at": BASE_SECONDS,
        "updated_at": BASE_SECONDS,
    }


def note(
    note_id: str,
    household_id: str,
    text: str,
    *,
    color: str = "#2563EB",
    deadline: Optional[int] = None,
    deadline_tz: str = "UTC",
    category_id: Optional[str] = None,
    position: int = 0,
    x: int = 0,
    y: int = 0,
) -> Record:
    record: Record = {
        "id": note_id,
        "household_id": household_id,
        "position": position,
        "created_at": BASE_SECONDS,
        "updated_at": BASE_SECONDS,
        "text": text,
        "color": color,
        "x": x,
        "y": y,
        "z": 0,
    }
    if category_id is not None:
        record["category_id"] = category_id
    if deadline is not None:
        record["deadline"] = deadline
        record["deadline_tz"] = deadline_tz
    return record


def event_link(link_id: str, household_id: str, note_id: str, event_id: str) -> Record:
    return {
        "id": link_id,
        "household_id": household_id,
        "note_id": note_id,
        "entity_type": "event",
        "entity_id": event_id,
        "relation": "related",
        "created_at": BASE_SECONDS,
        "updated_at": BASE_SECONDS,
    }


def vehicle(
    vehicle_id: str,
    household_id: str,
    name: str,
    *,
    make: str,
    model: str,
    reg: str,
    vin: str,
    mot_in: int,
    service_in: int,
    position: int = 0,
) -> Record:
    return {
        "id": vehicle_id,
        "household_id": household_id,
        "name": name,
        "make": make,
        "model": model,
        "reg": reg,
        "vin": vin,
        "next_mot_due": BASE_SECONDS + mot_in,
        "next_service_due": BASE_SECONDS + service_in,
        "created_at": BASE_SECONDS,
        "updated_at": BASE_SECONDS,
        "position": position,
    }


def category(
    category_id: str, household_id: str, name: str, color: str, position: int = 0
) -> Record:
    return {
        "id": category_id,
        "household_id": household_id,
        "name": name,
        "slug": name.lower(),
        "color": color,
        "position": position,
        "z": 0,
        "is_visible": True,
        "created_at": BASE_SECONDS,
        "updated_at": BASE_SECONDS,
    }


def event_search_result(record: Record) -> Record:
    return {
        "kind": "Event",
        "id": record["id"],
        "title": record["title"],
        "start_at_utc": record["start_at_utc"],
        "tz": record.get("tz", "UTC"),
    }


def _plan_counts(adds: int, updates: int = 0) -> Record:
    return {"adds": adds, "updates": updates, "skips": 0, "conflicts": []}


def backup_fixtures(
    slug: str,
    *,
    available_bytes: int,
    db_size_bytes: int = 4096,
    required_free_bytes: int = 4096,
    retention_max_count: int = 5,
    retention_max_bytes: int,
    with_entry: bool = False,
) -> BackupFixtures:
    manifest = {
        "appVersion": "test",
        "schemaHash": "schema-hash",
        "dbSizeBytes": 2048 if with_entry else db_size_bytes,
        "createdAt": TIMESTAMP,
        "sha256": "sha256" if with_entry else "sha",
    }
    entries: List[Record] = []
    if with_entry:
        entries.append(
            {
                "directory": f"/tmp/backups/{slug}",
                "sqlitePath": f"/tmp/backups/{slug}/app.db",
                "manifestPath": f"/tmp/backups/{slug}/manifest.json",
                "manifest": dict(manifest),
                "totalSizeBytes": 4096,
            }
        )
    export_dir = "/tmp/export" if slug == "default" else f"/tmp/export-{slug}"
    return BackupFixtures(
        manifest=manifest,
        overview={
            "availableBytes": available_bytes,
            "dbSizeBytes": db_size_bytes,
            "requiredFreeBytes": required_free_bytes,
            "retentionMaxCount": retention_max_count,
            "retentionMaxBytes": retention_max_bytes,
            "backups": [dict(entry) for entry in entries],
        },
        entries=entries,
        export_entry={
            "directory": export_dir,
            "manifestPath": f"{export_dir}/manifest.json",
            "verifyShPath": f"{export_dir}/verify.sh",
            "verifyPs1Path": f"{export_dir}/verify.ps1",
        },
    )


def import_fixtures(
    slug: str,
    *,
    table: str,
    adds: int,
    updates: int = 0,
    attachment_adds: int = 0,
    bundle_size: int = 4096,
    data_files: int = 1,
    attachments: int = 0,
) -> ImportFixtures:
    suffix = "" if slug == "default" else f"-{slug}"
    validation = {
        "bundleSizeBytes": bundle_size,
        "dataFilesVerified": data_files,
        "attachmentsVerified": attachments,
    }
    plan = {
        "mode": "merge",
        "tables": {table: _plan_counts(adds, updates)},
        "attachments": _plan_counts(attachment_adds),
    }
    preview: Dict[str, Any] = {
        "bundlePath": f"/tmp/import{suffix}.zip",
        "mode": "merge",
        "validation": validation,
        "plan": plan,
        "planDigest": "digest" if slug == "default" else slug,
    }
    execute = {
        **preview,
        "execution": {
            "mode": "merge",
            "tables": {table: _plan_counts(adds, updates)},
            "attachments": _plan_counts(attachment_adds),
        },
        "reportPath": f"/tmp/import{suffix}-report.json",
    }
    return ImportFixtures(preview=preview, execute=execute)


def repair_fixtures(
    slug: str,
    *,
    table: str,
    rows: int,
    bundle_size: int,
    data_files: int = 1,
    attachments: int = 0,
) -> RepairFixtures:
    root = "/tmp/hard-repair" if slug == "default" else f"/tmp/hard-repair-{slug}"
    return RepairFixtures(
        validation={
            "bundleSizeBytes": bundle_size,
            "dataFilesVerified": data_files,
            "attachmentsVerified": attachments,
        },
        hard={
            "success": True,
            "omitted": False,
            "reportPath": f"{root}/report.json",
            "preBackupDirectory": f"{root}/pre",
            "archivedDbPath": f"{root}/archive.db",
            "rebuiltDbPath": f"{root}/rebuilt.db",
            "recovery": {
                "appVersion": "test",
                "tables": {table: {"attempted": rows, "succeeded": rows, "failed": 0}},
                "skippedExamples": [],
                "completedAt": TIMESTAMP,
                "integrityOk": True,
            },
        },
    )
