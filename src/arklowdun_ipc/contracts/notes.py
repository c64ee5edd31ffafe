"""Note and note-link command contracts.

Most note requests accept both the camelCase keys the UI sends and the
snake_case keys older callers used; both spellings are optional here and
the backend reconciles them.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import StrictBool

from arklowdun_ipc.contracts.base import (
    Contract,
    FlexibleRecord,
    Number,
    PassthroughModel,
    contract,
)


class NoteRecord(PassthroughModel):
    id: str
    household_id: str
    position: Number
    created_at: Number
    updated_at: Number
    text: str
    color: str
    x: Number
    y: Number
    category_id: Optional[str] = None
    deleted_at: Optional[Number] = None
    z: Optional[Number] = None
    deadline: Optional[Number] = None
    deadline_tz: Optional[str] = None


class NoteLinkRecord(PassthroughModel):
    id: str
    household_id: str
    note_id: str
    entity_type: str
    entity_id: str
    created_at: Number
    updated_at: Number
    relation: Optional[str] = None


class NoteLinkListItem(PassthroughModel):
    note: NoteRecord
    link: NoteLinkRecord


class NoteLinkList(PassthroughModel):
    items: List[NoteLinkListItem]


class NotesPage(PassthroughModel):
    notes: List[NoteRecord]
    next_cursor: Optional[str] = None


class ContextNotesPage(PassthroughModel):
    notes: List[NoteRecord]
    links: List[NoteLinkRecord]
    next_cursor: Optional[str] = None


class NotesDeadlineRangePage(PassthroughModel):
    items: List[NoteRecord]
    cursor: Optional[str] = None


class NotesCreateData(PassthroughModel):
    household_id: str
    text: str
    color: str
    x: Number
    y: Number
    category_id: Optional[str] = None
    position: Optional[Number] = None
    z: Optional[Number] = None
    deadline: Optional[Number] = None
    deadline_tz: Optional[str] = None


class NotesUpdateData(PassthroughModel):
    household_id: Optional[str] = None
    text: Optional[str] = None
    color: Optional[str] = None
    x: Optional[Number] = None
    y: Optional[Number] = None
    category_id: Optional[str] = None
    position: Optional[Number] = None
    z: Optional[Number] = None
    deadline: Optional[Number] = None
    deadline_tz: Optional[str] = None
    deleted_at: Optional[Number] = None


class NotesCreateRequest(PassthroughModel):
    data: NotesCreateData


class NotesUpdateRequest(PassthroughModel):
    id: str
    data: NotesUpdateData
    householdId: str
    household_id: Optional[str] = None


class NotesScopedRequest(PassthroughModel):
    householdId: str
    household_id: Optional[str] = None
    id: str


class NotesListCursorRequest(PassthroughModel):
    """Cursor listing; without a household the active one is used."""

    householdId: Optional[str] = None
    household_id: Optional[str] = None
    afterCursor: Optional[str] = None
    after_cursor: Optional[str] = None
    limit: Optional[Number] = None
    categoryIds: Optional[List[str]] = None
    category_ids: Optional[List[str]] = None
    includeDeleted: Optional[StrictBool] = None
    include_deleted: Optional[StrictBool] = None


class NotesEntityRequest(PassthroughModel):
    householdId: str
    household_id: Optional[str] = None
    entityType: str
    entity_type: Optional[str] = None
    entityId: str
    entity_id: Optional[str] = None
    categoryIds: Optional[List[str]] = None
    category_ids: Optional[List[str]] = None
    cursor: Optional[str] = None
    limit: Optional[Number] = None
    offset: Optional[Number] = None
    orderBy: Optional[str] = None
    order_by: Optional[str] = None


class NoteLinkRequest(PassthroughModel):
    householdId: str
    household_id: Optional[str] = None
    noteId: Optional[str] = None
    note_id: Optional[str] = None
    linkId: Optional[str] = None
    entityType: Optional[str] = None
    entity_type: Optional[str] = None
    entityId: Optional[str] = None
    entity_id: Optional[str] = None


class NotesQuickCreateRequest(PassthroughModel):
    householdId: str
    entityType: str
    entityId: str
    categoryId: str
    text: str
    color: Optional[str] = None


class NotesDeadlineRangeRequest(PassthroughModel):
    householdId: str
    household_id: Optional[str] = None
    startUtc: Optional[Number] = None
    start_utc: Number
    endUtc: Optional[Number] = None
    end_utc: Number
    viewerTz: Optional[str] = None
    viewer_tz: str
    categoryIds: Optional[List[str]] = None
    category_ids: Optional[List[str]] = None
    cursor: Optional[str] = None
    limit: Optional[Number] = None


NOTE_CONTRACTS: Tuple[Contract, ...] = (
    contract("notes_get", FlexibleRecord, Optional[NoteRecord]),
    contract("notes_create", NotesCreateRequest, NoteRecord),
    contract("notes_update", NotesUpdateRequest, None),
    contract("notes_delete", NotesScopedRequest, None),
    contract("notes_restore", NotesScopedRequest, Optional[NoteRecord]),
    contract("notes_list_cursor", NotesListCursorRequest, NotesPage),
    contract(
        "notes_list_by_deadline_range",
        NotesDeadlineRangeRequest,
        NotesDeadlineRangePage,
    ),
    contract("notes_list_for_entity", NotesEntityRequest, ContextNotesPage),
    contract(
        "notes_quick_create_for_entity",
        NotesQuickCreateRequest,
        ContextNotesPage,
    ),
    contract("note_links_create", NoteLinkRequest, NoteLinkRecord),
    contract("note_links_list_by_entity", NotesEntityRequest, NoteLinkList),
    contract("note_links_unlink_entity", NoteLinkRequest, None),
    contract("note_links_get_for_note", NoteLinkRequest, NoteLinkList),
    contract("note_links_delete", NoteLinkRequest, None),
)
