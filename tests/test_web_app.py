"""Mini README: Tests for the FastAPI JSON interface.

Uses FastAPI's ``TestClient`` against applications bound to isolated stores
so responses can be checked against known identifiers.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from budgetplanner.hierarchy import EntityStore, seed_demo_organization
from budgetplanner.interface import create_application
from budgetplanner.lookups import Airport, City, StaticAirportDirectory, StaticLocationDirectory
from budgetplanner.planning import BudgetPlanningService


@pytest.fixture
def planned() -> tuple:
    store = EntityStore()
    service = BudgetPlanningService(store)
    organization_id = service.create_organization("Acme", "Ada", 5_000_000.0).entity_id
    department_id = service.create_department(organization_id, "Engineering", "Grace", 2_000_000.0).entity_id
    manager_id = service.create_manager(department_id, "Alan").entity_id
    team_id = service.create_team(manager_id, "Platform").entity_id
    category_id = service.add_category(organization_id, "Conferences").entity_id
    ids = {
        "organization": organization_id,
        "department": department_id,
        "manager": manager_id,
        "team": team_id,
        "category": category_id,
    }
    return TestClient(create_application(store)), ids


def test_department_creation_enforces_remaining_budget(planned) -> None:
    client, ids = planned
    url = f"/organizations/{ids['organization']}/departments"

    created = client.post(url, data={"name": "Design", "head_name": "Dieter", "total_budget": "3000000"})
    rejected = client.post(url, data={"name": "Sales", "head_name": "Sam", "total_budget": "1"})
    duplicate = client.post(url, data={"name": "design", "head_name": "X", "total_budget": "0"})

    assert created.status_code == 201
    assert rejected.status_code == 400
    assert rejected.json()["detail"]["kind"] == "budget_exceeded"
    assert duplicate.status_code == 409


def test_budget_flow_and_team_summary(planned) -> None:
    client, ids = planned

    budget = client.post(f"/teams/{ids['team']}/budget", data={"total_amount": "600000", "year": "2024"})
    assert budget.status_code == 201
    budget_id = budget.json()["budget_id"]

    item = client.post(
        f"/budgets/{budget_id}/items",
        data={"category_id": ids["category"], "amount": "120000"},
    )
    assert item.status_code == 201
    item_id = item.json()["item_id"]

    trip = client.post(
        f"/budget-items/{item_id}/conference-travel",
        data={
            "conference_name": "PyCon US",
            "travel_type": "International",
            "country": "US",
            "city": "Pittsburgh",
            "start_date": "2024-05-15",
            "end_date": "2024-05-18",
            "number_of_travelers": "2",
            "needs_hotel": "true",
            "needs_air_travel": "true",
            "flight_costs": "800",
            "hotel_costs": "200",
            "meal_costs": "75",
        },
    )
    assert trip.status_code == 201
    assert trip.json()["total_amount"] == 2150.0
    assert trip.json()["duration_days"] == 3

    summary = client.get(f"/teams/{ids['team']}/summary").json()
    assert summary["budget"] == {"allocated": 120000.0, "spent": 2150.0, "remaining": 117850.0}
    assert summary["items"][0]["trips"][0]["per_person_cost"] == 1075.0

    department = client.get(f"/departments/{ids['department']}/summary").json()
    assert department["budget"]["remaining"] == 2_000_000.0 - 2150.0
    assert department["available_for_teams"] == 1_400_000.0

    deleted = client.delete(f"/budget-items/{item_id}")
    assert deleted.status_code == 200
    assert client.get(f"/managers/{ids['manager']}/summary").json()["budget"]["allocated"] == 0.0


def test_trip_over_item_allocation_is_rejected(planned) -> None:
    client, ids = planned
    budget_id = client.post(f"/teams/{ids['team']}/budget", data={"total_amount": "1000"}).json()["budget_id"]
    item_id = client.post(
        f"/budgets/{budget_id}/items", data={"category_id": ids["category"], "amount": "500"}
    ).json()["item_id"]

    response = client.post(
        f"/budget-items/{item_id}/business-travel",
        data={
            "purpose": "Client kickoff",
            "travel_category": "client-visit",
            "country": "GB",
            "city": "London",
            "start_date": "2024-04-10",
            "end_date": "2024-04-14",
            "meal_costs": "501",
        },
    )

    assert response.status_code == 400
    assert "exceeds budget allocation" in response.json()["detail"]["error"]


def test_category_endpoints(planned) -> None:
    client, ids = planned
    base = f"/organizations/{ids['organization']}/categories"

    assert client.post(base, data={"name": "Travel"}).status_code == 201
    assert client.post(base, data={"name": "TRAVEL"}).status_code == 409
    assert client.put(f"{base}/{ids['category']}", data={"name": "travel"}).status_code == 409
    assert client.delete(f"{base}/{ids['category']}").status_code == 200
    assert client.delete(f"{base}/{ids['category']}").status_code == 404


def test_unknown_entities_return_404(planned) -> None:
    client, _ = planned

    assert client.get("/organizations/missing/summary").status_code == 404
    assert client.get("/teams/missing/summary").status_code == 404
    assert client.post("/teams/missing/budget", data={"total_amount": "10"}).status_code == 404


def test_seeded_application_lists_demo_organisation() -> None:
    store = EntityStore()
    organization_id = seed_demo_organization(store)
    client = TestClient(create_application(store))

    organizations = client.get("/organizations").json()["organizations"]
    summary = client.get(f"/organizations/{organization_id}/summary").json()

    assert [org["name"] for org in organizations] == ["SampleTestOrg"]
    assert len(summary["departments"]) == 5
    assert [entry["name"] for entry in summary["category_breakdown"]][0] == "Training and Courses"


def test_lookup_endpoints() -> None:
    client = TestClient(create_application(EntityStore()))

    cities = client.get("/lookups/cities", params={"country_code": "GB", "query": "lon"}).json()["cities"]
    airports = client.get("/lookups/airports", params={"country": "united kingdom"}).json()["airports"]

    assert [city["name"] for city in cities] == ["London"]
    assert {airport["iata"] for airport in airports} == {"LHR", "MAN"}


def test_lookup_endpoints_use_supplied_directories() -> None:
    locations = StaticLocationDirectory(cities=[City("Lae", "PG", "Morobe")])
    airports = StaticAirportDirectory([Airport("LAE", "Nadzab Airport", "Lae", "Papua New Guinea")])
    client = TestClient(create_application(EntityStore(), locations=locations, airports=airports))

    cities = client.get("/lookups/cities", params={"country_code": "pg", "query": "la"}).json()["cities"]
    found = client.get("/lookups/airports", params={"country": "papua"}).json()["airports"]

    assert cities == [{"name": "Lae", "country": "PG", "region": "Morobe"}]
    assert [airport["iata"] for airport in found] == ["LAE"]
