"""Two households with independent data; the second one is active."""
from __future__ import annotations

from arklowdun_ipc.scenarios.base import ScenarioData, create_scenario
from arklowdun_ipc.scenarios.fixtures import (
    BASE_SECONDS,
    backup_fixtures,
    category,
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

SLUG = "multipleHouseholds"

_school_run = event(
    "evt-default-1", "hh-default", "School run", BASE_SECONDS + 1800, BASE_SECONDS + 3600
)
_garden = event(
    "evt-coastal-1",
    "hh-coastal",
    "Garden cleanup",
    BASE_SECONDS + 7200,
    BASE_SECONDS + 9000,
    tz="Europe/Dublin",
)


def scenario_data() -> ScenarioData:
    return ScenarioData(
        households=[
            household("hh-default", "Default Household", color="#2563EB", is_default=True),
            household("hh-coastal", "Coastal Retreat", tz="Europe/Dublin", color="#059669"),
        ],
        active_household_id="hh-coastal",
        events=[dict(_school_run), dict(_garden)],
        notes=[
            note(
                "note-default",
                "hh-default",
                "Pick up groceries",
                category_id="cat-default",
                deadline=BASE_SECONDS + 43_200,
            ),
            note(
                "note-coastal",
                "hh-coastal",
                "Check storm shutters",
                color="#059669",
                category_id="cat-coastal",
                deadline=BASE_SECONDS + 172_800,
                deadline_tz="Europe/Dublin",
                position=1,
                x=50,
                y=10,
            ),
        ],
        note_links=[
            event_link("link-default", "hh-default", "note-default", "evt-default-1"),
            event_link("link-coastal", "hh-coastal", "note-coastal", "evt-coastal-1"),
        ],
        vehicles=[
            vehicle(
                "veh-default",
                "hh-default",
                "City Car",
                make="Toyota",
                model="Corolla",
                reg="CITY1",
                vin="VIN-CITY",
                mot_in=2_592_000,
                service_in=5_184_000,
            ),
            vehicle(
                "veh-coastal",
                "hh-coastal",
                "Beach Jeep",
                make="Jeep",
                model="Wrangler",
                reg="BEACH",
                vin="VIN-BEACH",
                mot_in=3_456_000,
                service_in=6_912_000,
                position=1,
            ),
        ],
        search_results=[event_search_result(_garden)],
        categories=[
            category("cat-default", "hh-default", "Default", "#2563EB"),
            category("cat-coastal", "hh-coastal", "Coastal", "#059669"),
        ],
        backups=backup_fixtures(
            "multi", available_bytes=8_000_000, retention_max_bytes=40_000_000
        ),
        imports=import_fixtures(
            "multi", table="households", adds=1, updates=1, data_files=2
        ),
        repair=repair_fixtures(
            "multi", table="households", rows=2, bundle_size=2048, data_files=2
        ),
    )


def multiple_households_scenario() -> ScenarioDefinition:
    return create_scenario(
        SLUG,
        scenario_data(),
        description="Two active households with independent data",
        metadata={"health": "healthy"},
    )
