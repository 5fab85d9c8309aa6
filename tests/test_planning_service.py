"""Mini README: End-to-end tests for validate-then-write planning operations.

Each test drives the service the way an interface would and checks that
rejected changes leave the store untouched.
"""

from __future__ import annotations

from datetime import date

import pytest

from budgetplanner.errors import BudgetExceededError, ErrorKind
from budgetplanner.hierarchy import EntityStore, TravelDetail, TravelType
from budgetplanner.planning import BudgetPlanningService


@pytest.fixture
def service() -> BudgetPlanningService:
    return BudgetPlanningService(EntityStore())


def _team_with_budget(service: BudgetPlanningService, amount: float = 600_000.0):
    organization_id = service.create_organization("Acme", "Ada", 5_000_000.0).entity_id
    department_id = service.create_department(organization_id, "Engineering", "Grace", 2_000_000.0).entity_id
    manager_id = service.create_manager(department_id, "Alan").entity_id
    team_id = service.create_team(manager_id, "Platform").entity_id
    budget_id = service.allocate_team_budget(team_id, amount, year=2024).entity_id
    training = service.add_category(organization_id, "Training").entity_id
    conferences = service.add_category(organization_id, "Conferences").entity_id
    return organization_id, team_id, budget_id, training, conferences


def test_second_department_over_remaining_budget_fails(service) -> None:
    organization_id = service.create_organization("Acme", "Ada", 5_000_000.0).entity_id

    first = service.create_department(organization_id, "Engineering", "Grace", 2_000_000.0)
    second = service.create_department(organization_id, "Design", "Dieter", 3_000_001.0)

    assert first.success
    assert not second.success
    assert second.kind is ErrorKind.BUDGET_EXCEEDED
    assert len(service.store.departments_by_organization(organization_id)) == 1
    with pytest.raises(BudgetExceededError):
        second.raise_for_error()


def test_duplicate_department_name_reported(service) -> None:
    organization_id = service.create_organization("Acme", "Ada", 100.0).entity_id
    service.create_department(organization_id, "Engineering", "Grace", 10.0)

    result = service.create_department(organization_id, "engineering", "Other", 10.0)

    assert result.kind is ErrorKind.DUPLICATE_NAME
    assert result.error == "A department with this name already exists in the organization"


def test_edit_department_validates_budget(service) -> None:
    organization_id = service.create_organization("Acme", "Ada", 1_000.0).entity_id
    department_id = service.create_department(organization_id, "Ops", "Lin", 400.0).entity_id
    service.create_department(organization_id, "Sales", "Sam", 500.0)

    assert service.edit_department(department_id, total_budget=500.0).success
    assert service.edit_department(department_id, total_budget=501.0).kind is ErrorKind.BUDGET_EXCEEDED
    assert service.store.find_department(department_id).total_budget == 500.0
    assert service.edit_department("missing", head_name="x").kind is ErrorKind.NOT_FOUND


def test_allocate_team_budget_replaces_existing_ceiling(service) -> None:
    _, team_id, budget_id, _, _ = _team_with_budget(service)

    result = service.allocate_team_budget(team_id, 700_000.0)

    assert result.entity_id == budget_id
    team = service.store.find_team(team_id)
    assert team.budget.total_amount == 700_000.0
    assert team.budget.year == 2024
    assert len(service.store.list_budgets()) == 1


def test_team_budget_scenario_with_conference_trip(service) -> None:
    _, team_id, budget_id, training, conferences = _team_with_budget(service)

    assert service.allocate_budget_item(budget_id, training, 120_000.0).success
    conference_item = service.allocate_budget_item(budget_id, conferences, 120_000.0).entity_id
    trip = TravelDetail(
        travel_id="trip_1",
        budget_item_id=conference_item,
        conference_name="EuroPython",
        motivation="Talks on packaging",
        travel_type=TravelType.INTERNATIONAL,
        country="NL",
        city="Amsterdam",
        start_date=date(2024, 7, 8),
        end_date=date(2024, 7, 14),
        number_of_travelers=2,
        needs_hotel=True,
        needs_air_travel=True,
        flight_costs=800.0,
        hotel_costs=200.0,
        meal_costs=75.0,
    )
    assert trip.per_person_cost == 1_075.0
    assert service.record_conference_travel(conference_item, trip).success

    info = service.aggregator.team_budget_info(team_id)
    assert info.as_dict() == {"allocated": 240_000.0, "spent": 2_150.0, "remaining": 237_850.0}
    stored = service.store.find_budget_item(conference_item)
    assert stored.spent == 2_150.0
    assert stored.recorded_travel_total == 2_150.0
    assert stored.description == "Budget allocation for Conferences"
    assert [detail.travel_id for detail in stored.travel_details] == ["trip_1"]


def test_over_budget_item_leaves_store_unchanged(service) -> None:
    _, _, budget_id, training, _ = _team_with_budget(service, amount=100_000.0)
    service.allocate_budget_item(budget_id, training, 80_000.0)

    result = service.allocate_budget_item(budget_id, training, 30_000.0)

    assert result.kind is ErrorKind.BUDGET_EXCEEDED
    assert len(service.store.budget_items_for_budget(budget_id)) == 1


def test_editing_item_keeps_spend_and_trips(service) -> None:
    _, _, budget_id, training, _ = _team_with_budget(service)
    item_id = service.allocate_budget_item(budget_id, training, 10_000.0, spent=2_000.0).entity_id

    result = service.allocate_budget_item(budget_id, training, 12_000.0, item_id=item_id)

    assert result.entity_id == item_id
    item = service.store.find_budget_item(item_id)
    assert item.amount == 12_000.0
    assert item.spent == 2_000.0
    assert service.allocate_budget_item(budget_id, training, 1.0, item_id="nope").kind is ErrorKind.NOT_FOUND


def test_remove_budget_item_is_idempotent(service) -> None:
    _, team_id, budget_id, training, _ = _team_with_budget(service)
    item_id = service.allocate_budget_item(budget_id, training, 10_000.0).entity_id

    assert service.remove_budget_item(item_id).success
    assert service.remove_budget_item(item_id).success
    assert service.aggregator.team_budget_info(team_id).allocated == 0.0


def test_category_lifecycle(service) -> None:
    organization_id, _, budget_id, training, conferences = _team_with_budget(service)
    service.allocate_budget_item(budget_id, training, 1_000.0)

    assert service.rename_category(organization_id, training, "conferences").kind is ErrorKind.DUPLICATE_NAME
    assert service.rename_category(organization_id, training, "Learning").success
    assert service.add_category(organization_id, "learning").kind is ErrorKind.DUPLICATE_NAME

    pending = service.delete_category(organization_id, training)
    assert pending.kind is ErrorKind.CONFIRMATION_REQUIRED
    assert "1 budget items across 1 teams and 1 departments" in pending.error

    assert service.delete_category(organization_id, training, confirmed=True).success
    assert service.delete_category(organization_id, conferences).success
    assert service.store.budget_categories(organization_id) == []


def test_rename_department_respects_sibling_names(service) -> None:
    organization_id = service.create_organization("Acme", "Ada", 1_000.0).entity_id
    department_id = service.create_department(organization_id, "Ops", "Lin", 100.0).entity_id
    service.create_department(organization_id, "Sales", "Sam", 100.0)

    result = service.edit_department(department_id, name="  SALES ")

    assert result.kind is ErrorKind.DUPLICATE_NAME
    assert service.store.find_department(department_id).name == "Ops"
    assert service.edit_department(department_id, name="OPS").success
    assert service.store.find_department(department_id).name == "OPS"


def test_edit_department_strips_head_name(service) -> None:
    organization_id = service.create_organization("Acme", "Ada", 1_000.0).entity_id
    department_id = service.create_department(organization_id, "Ops", " Lin ", 100.0).entity_id

    assert service.store.find_department(department_id).head_name == "Lin"
    assert service.edit_department(department_id, head_name="  Mei  ").success
    assert service.store.find_department(department_id).head_name == "Mei"


def test_trip_for_another_item_is_rejected(service) -> None:
    _, _, budget_id, training, conferences = _team_with_budget(service)
    first = service.allocate_budget_item(budget_id, training, 10_000.0).entity_id
    second = service.allocate_budget_item(budget_id, conferences, 10_000.0).entity_id
    trip = TravelDetail(
        travel_id="trip_1",
        budget_item_id=second,
        conference_name="PyCon",
        travel_type=TravelType.LOCAL,
        country="US",
        city="Pittsburgh",
        start_date=date(2024, 5, 15),
        end_date=date(2024, 5, 17),
        meal_costs=50.0,
    )

    result = service.record_conference_travel(first, trip)

    assert result.kind is ErrorKind.INVALID_INPUT
    assert service.store.find_budget_item(first).travel_details == []
    assert service.store.find_budget_item(first).spent == 0.0
