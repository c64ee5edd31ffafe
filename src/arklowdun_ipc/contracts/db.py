"""Database maintenance contracts: health, backups, export, import, repair."""
from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import StrictBool, StrictInt

from arklowdun_ipc.contracts.base import (
    Contract,
    EmptyRequest,
    FlexibleRecord,
    Number,
    PassthroughModel,
    contract,
)

DbHealthStatus = Literal["ok", "error"]


class DbHealthCheck(PassthroughModel):
    name: str
    passed: StrictBool
    duration_ms: Number
    details: Optional[str] = None


class DbHealthOffender(PassthroughModel):
    table: str
    rowid: StrictInt
    message: str


class DbHealthReport(PassthroughModel):
    status: DbHealthStatus
    checks: List[DbHealthCheck]
    # Omitted by the backend when empty.
    offenders: Optional[List[DbHealthOffender]] = None
    schema_hash: str
    app_version: str
    generated_at: str


class BackupEntry(PassthroughModel):
    directory: str
    sqlitePath: str
    manifestPath: str
    manifest: FlexibleRecord
    totalSizeBytes: Number


class BackupOverview(PassthroughModel):
    availableBytes: Number
    dbSizeBytes: Number
    requiredFreeBytes: Number
    retentionMaxCount: Number
    retentionMaxBytes: Number
    backups: List[BackupEntry]


DB_CONTRACTS: Tuple[Contract, ...] = (
    contract("db_get_health_report", EmptyRequest, DbHealthReport),
    contract("db_recheck", EmptyRequest, DbHealthReport),
    contract("db_backup_create", FlexibleRecord, BackupEntry),
    contract("db_backup_overview", FlexibleRecord, BackupOverview),
    contract("db_backup_reveal", FlexibleRecord, None),
    contract("db_backup_reveal_root", FlexibleRecord, None),
    contract("db_export_run", FlexibleRecord, FlexibleRecord),
    contract("db_hard_repair_run", FlexibleRecord, FlexibleRecord),
    contract("db_has_pet_columns", FlexibleRecord, bool),
    contract("db_has_vehicle_columns", FlexibleRecord, bool),
    contract("db_import_execute", FlexibleRecord, FlexibleRecord),
    contract("db_import_preview", FlexibleRecord, FlexibleRecord),
    contract("db_repair_run", FlexibleRecord, FlexibleRecord),
    contract("db_table_exists", FlexibleRecord, bool),
)
