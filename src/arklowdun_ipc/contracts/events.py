"""Calendar event command contracts."""
from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import StrictBool, StrictInt

from arklowdun_ipc.contracts.base import (
    Contract,
    FlexibleRecord,
    NonEmptyStr,
    Number,
    PassthroughModel,
    contract,
)

EVENTS_RANGE_LIMIT = 100


class EventRecord(PassthroughModel):
    id: str
    household_id: str
    title: str
    start_at_utc: Number
    created_at: Number
    updated_at: Number
    end_at_utc: Optional[Number] = None
    tz: Optional[str] = None
    rrule: Optional[str] = None
    exdates: Optional[str] = None
    reminder: Optional[Number] = None
    deleted_at: Optional[Number] = None
    series_parent_id: Optional[str] = None


class EventCreateData(PassthroughModel):
    household_id: str
    title: NonEmptyStr
    start_at_utc: Number
    end_at_utc: Optional[Number] = None
    tz: Optional[str] = None
    rule: Optional[str] = None
    exdates: Optional[str] = None
    reminder: Optional[Number] = None
    series_parent_id: Optional[str] = None


class EventUpdateData(PassthroughModel):
    household_id: Optional[str] = None
    title: Optional[NonEmptyStr] = None
    start_at_utc: Optional[Number] = None
    end_at_utc: Optional[Number] = None
    tz: Optional[str] = None
    rule: Optional[str] = None
    exdates: Optional[str] = None
    reminder: Optional[Number] = None
    series_parent_id: Optional[str] = None


class EventCreateRequest(PassthroughModel):
    data: EventCreateData


class EventUpdateRequest(PassthroughModel):
    id: str
    data: EventUpdateData
    householdId: str


class EventScopedRequest(PassthroughModel):
    householdId: str
    id: str


class EventsListRangeRequest(PassthroughModel):
    """Range query; the backend falls back to the active household."""

    householdId: Optional[str] = None
    start: Optional[Number] = None
    end: Optional[Number] = None


class EventsListRangeResponse(PassthroughModel):
    items: List[EventRecord]
    # Truncation metadata was added later; legacy pages carry items only.
    truncated: Optional[StrictBool] = None
    limit: Optional[StrictInt] = None


EVENT_CONTRACTS: Tuple[Contract, ...] = (
    contract("events_backfill_timezone", FlexibleRecord, FlexibleRecord),
    contract("events_backfill_timezone_cancel", FlexibleRecord, None),
    contract("events_backfill_timezone_status", FlexibleRecord, FlexibleRecord),
    contract("events_list_range", EventsListRangeRequest, EventsListRangeResponse),
    contract("event_create", EventCreateRequest, EventRecord),
    contract("event_update", EventUpdateRequest, None),
    contract("event_delete", EventScopedRequest, None),
    contract("event_restore", EventScopedRequest, None),
)
