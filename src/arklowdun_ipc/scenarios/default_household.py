"""Single household with baseline fixtures."""
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

SLUG = "defaultHousehold"
HOUSEHOLD_ID = "hh-default"

_maintenance = event(
    "evt-maintenance",
    HOUSEHOLD_ID,
    "Boiler service",
    BASE_SECONDS + 3600,
    BASE_SECONDS + 7200,
    reminder=900,
)


def scenario_data() -> ScenarioData:
    return ScenarioData(
        households=[
            household(
                HOUSEHOLD_ID, "Default Household", color="#2563EB", is_default=True
            )
        ],
        active_household_id=HOUSEHOLD_ID,
        events=[dict(_maintenance)],
        notes=[
            note(
                "note-maintenance",
                HOUSEHOLD_ID,
                "Replace HVAC filter",
                deadline=BASE_SECONDS + 86_400,
            )
        ],
        note_links=[
            event_link(
                "link-maintenance", HOUSEHOLD_ID, "note-maintenance", "evt-maintenance"
            )
        ],
        vehicles=[
            vehicle(
                "veh-van",
                HOUSEHOLD_ID,
                "Family Van",
                make="VW",
                model="Transporter",
                reg="VAN1",
                vin="VIN123",
                mot_in=2_592_000,
                service_in=5_184_000,
            )
        ],
        search_results=[event_search_result(_maintenance)],
        backups=backup_fixtures(
            "default",
            available_bytes=10_000_000,
            required_free_bytes=8192,
            retention_max_bytes=50_000_000,
            with_entry=True,
        ),
        imports=import_fixtures(
            "default",
            table="households",
            adds=1,
            attachment_adds=1,
            bundle_size=8192,
            attachments=1,
        ),
        repair=repair_fixtures(
            "default", table="households", rows=1, bundle_size=8192, attachments=1
        ),
    )


def default_household_scenario() -> ScenarioDefinition:
    return create_scenario(
        SLUG,
        scenario_data(),
        description="Single household with baseline fixtures",
        metadata={"health": "healthy"},
    )
