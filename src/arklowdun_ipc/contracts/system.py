"""Application-level contracts: metadata, diagnostics, search, shell helpers."""
from __future__ import annotations

from typing import Annotated, List, Literal, Tuple, Union

from pydantic import Field

from arklowdun_ipc.contracts.base import (
    Contract,
    FlexibleRecord,
    Number,
    PassthroughModel,
    contract,
)


class FileSearchResult(PassthroughModel):
    kind: Literal["File"]
    id: str
    filename: str
    updated_at: Number


class EventSearchResult(PassthroughModel):
    kind: Literal["Event"]
    id: str
    title: str
    start_at_utc: Number
    tz: str


class NoteSearchResult(PassthroughModel):
    kind: Literal["Note"]
    id: str
    snippet: str
    updated_at: Number
    color: str


class VehicleSearchResult(PassthroughModel):
    kind: Literal["Vehicle"]
    id: str
    make: str
    model: str
    reg: str
    updated_at: Number
    nickname: str


class PetSearchResult(PassthroughModel):
    kind: Literal["Pet"]
    id: str
    name: str
    species: str
    updated_at: Number


SearchResult = Annotated[
    Union[
        FileSearchResult,
        EventSearchResult,
        NoteSearchResult,
        VehicleSearchResult,
        PetSearchResult,
    ],
    Field(discriminator="kind"),
]


SYSTEM_CONTRACTS: Tuple[Contract, ...] = (
    contract("about_metadata", FlexibleRecord, FlexibleRecord),
    contract("attachment_open", FlexibleRecord, None),
    contract("attachment_reveal", FlexibleRecord, None),
    contract("diagnostics_doc_path", FlexibleRecord, str),
    contract("diagnostics_household_stats", FlexibleRecord, FlexibleRecord),
    contract("diagnostics_summary", FlexibleRecord, FlexibleRecord),
    contract("import_run_legacy", FlexibleRecord, FlexibleRecord),
    contract("open_diagnostics_doc", FlexibleRecord, None),
    contract("open_path", FlexibleRecord, None),
    contract("search_entities", FlexibleRecord, List[SearchResult]),
    contract("time_invariants_check", FlexibleRecord, FlexibleRecord),
)
