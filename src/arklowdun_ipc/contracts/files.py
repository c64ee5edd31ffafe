"""Attachment files index, file move and attachment repair contracts."""
from __future__ import annotations

from typing import Literal, Optional, Tuple

from pydantic import StrictBool, model_validator

from arklowdun_ipc.contracts.base import (
    Contract,
    FlexibleRecord,
    NonEmptyStr,
    Number,
    PassthroughModel,
    contract,
)

AttachmentCategory = Literal[
    "bills",
    "policies",
    "property_documents",
    "inventory_items",
    "pet_medical",
    "vehicles",
    "vehicle_maintenance",
    "notes",
    "misc",
]

FilesIndexMode = Literal["full", "incremental"]
FilesIndexState = Literal["Idle", "Building", "Cancelling", "Error"]


class FilesIndexRequest(PassthroughModel):
    """Either household spelling is accepted but one must be present."""

    household_id: Optional[str] = None
    householdId: Optional[str] = None

    @model_validator(mode="after")
    def _household_present(self) -> "FilesIndexRequest":
        if self.household_id is None and self.householdId is None:
            raise ValueError("household id required")
        return self


class FilesIndexRebuildRequest(FilesIndexRequest):
    mode: FilesIndexMode


class FilesIndexStatus(PassthroughModel):
    last_built_at: Optional[str]
    row_count: Number
    state: FilesIndexState


class FilesIndexSummary(PassthroughModel):
    total: Number
    updated: Number
    duration_ms: Number


class FilesIndexCancelResult(PassthroughModel):
    cancelled: StrictBool


class FileMoveRequest(PassthroughModel):
    household_id: str
    from_category: AttachmentCategory
    from_rel: NonEmptyStr
    to_category: AttachmentCategory
    to_rel: NonEmptyStr
    conflict: Optional[Literal["rename", "fail"]] = None


class FileMoveResult(PassthroughModel):
    moved: Number
    renamed: StrictBool


class AttachmentsRepairRequest(PassthroughModel):
    household_id: str
    mode: Literal["scan", "apply"]


class AttachmentsRepairResult(PassthroughModel):
    scanned: Number
    missing: Number
    repaired: Number
    cancelled: StrictBool


class AttachmentsManifestExportRequest(PassthroughModel):
    household_id: str


FILE_CONTRACTS: Tuple[Contract, ...] = (
    contract("files_index_status", FilesIndexRequest, FilesIndexStatus),
    contract("files_index_rebuild", FilesIndexRebuildRequest, FilesIndexSummary),
    contract("files_index_cancel", FilesIndexRequest, FilesIndexCancelResult),
    contract("file_move", FileMoveRequest, FileMoveResult),
    contract("attachments_repair", AttachmentsRepairRequest, AttachmentsRepairResult),
    contract(
        "attachments_repair_manifest_export",
        AttachmentsManifestExportRequest,
        str,
    ),
    contract("db_files_index_ready", FilesIndexRequest, bool),
    contract("db_has_files_index", FlexibleRecord, bool),
)
