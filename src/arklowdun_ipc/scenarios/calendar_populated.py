"""Calendar-heavy fixture: six daily events, three linked to one note."""
from __future__ import annotations

from arklowdun_ipc.scenarios.base import ScenarioData, create_scenario
from arklowdun_ipc.scenarios.fixtures import (
    BASE_SECONDS,
    backup_fixtures,
    event,
    event_link,
    event_search_result,
    household,
    import_fixtures,
    note,
    repair_fixtures,
    vehicle,
)
from arklowdun_ipc.scenarios.models import ScenarioDefinition

SLUG = "calendarPopulated"
HOUSEHOLD_ID = "hh-calendar"
EVENT_COUNT = 6
DAY = 86_400

_events = [
    event(
        f"evt-calendar-{index + 1}",
        HOUSEHOLD_ID,
        f"Event {index + 1}",
        BASE_SECONDS + index * DAY,
        BASE_SECONDS + index * DAY + 3_600,
    )
    for index in range(EVENT_COUNT)
]


def scenario_data() -> ScenarioData:
    return ScenarioData(
        households=[
            household(HOUSEHOLD_ID, "Calendar Lab", color="#7C3AED", is_default=True)
        ],
        active_household_id=HOUSEHOLD_ID,
        events=[dict(record) for record in _events],
        notes=[
            note(
                "note-calendar",
                HOUSEHOLD_ID,
                "Calendar annotations",
                color="#7C3AED",
                deadline=BASE_SECONDS + 7 * DAY,
            )
        ],
        note_links=[
            event_link(f"link-calendar-{index + 1}", HOUSEHOLD_ID, "note-calendar", record["id"])
            for index, record in enumerate(_events[:3])
        ],
        vehicles=[
            vehicle(
                "veh-calendar",
                HOUSEHOLD_ID,
                "Delivery Van",
                make="Ford",
                model="Transit",
                reg="CAL1",
                vin="VIN-CALENDAR",
                mot_in=4_147_200,
                service_in=6_912_000,
            )
        ],
        search_results=[event_search_result(record) for record in _events],
        backups=backup_fixtures(
            "calendar",
            available_bytes=6_000_000,
            retention_max_count=3,
            retention_max_bytes=12_000_000,
        ),
        imports=import_fixtures(
            "calendar", table="events", adds=EVENT_COUNT, data_files=3, attachments=1
        ),
        repair=repair_fixtures(
            "calendar",
            table="events",
            rows=EVENT_COUNT,
            bundle_size=1024,
            data_files=3,
            attachments=1,
        ),
    )


def calendar_populated_scenario() -> ScenarioDefinition:
    return create_scenario(
        SLUG,
        scenario_data(),
        description="Calendar-heavy fixture with multiple events",
        metadata={"health": "healthy"},
    )
