"""Mini README: Deterministic demo organisation for previews and manual testing.

``seed_demo_organization`` replays the same add operations a user would
perform: one organisation with five categories, five departments, six
managers and seven teams whose 2024 budgets are split across categories.
Conference and travel items carry sample trips whose totals make up their
recorded spend.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from ..logging_utils import get_logger
from .models import (
    Budget,
    BudgetCategory,
    BudgetItem,
    BusinessTravelDetail,
    Department,
    Manager,
    Organization,
    Team,
    TravelCategory,
    TravelDetail,
    TravelType,
)
from .store import EntityStore

LOGGER = get_logger(__name__)

_CATEGORIES: List[Tuple[str, str]] = [
    ("Training and Courses", "Online courses, certifications, and workshops"),
    ("Conferences", "Industry conferences and tech events"),
    ("Educational Materials", "Books, subscriptions, and learning resources"),
    ("Team Activities", "Team outings and social events"),
    ("Travel", "Business travel expenses"),
]

# Share of each team budget per category, in category order.
_DISTRIBUTION = (0.20, 0.20, 0.15, 0.15, 0.30)

_DEPARTMENTS: List[Tuple[str, str, float]] = [
    ("Engineering", "Michael Chen", 2_000_000.0),
    ("Product Management", "Emily Rodriguez", 1_000_000.0),
    ("Design", "David Kim", 800_000.0),
    ("Operations", "Lisa Thompson", 700_000.0),
    ("Customer Success", "James Wilson", 500_000.0),
]

# (manager name, department index)
_MANAGERS: List[Tuple[str, int]] = [
    ("Alex Kumar", 0),
    ("Maria Garcia", 0),
    ("John Smith", 1),
    ("Sophie Lee", 2),
    ("Rachel Green", 3),
    ("Emma Watson", 4),
]

# (team name, manager index, budget)
_TEAMS: List[Tuple[str, int, float]] = [
    ("Frontend Development", 0, 600_000.0),
    ("Backend Development", 0, 700_000.0),
    ("Mobile Development", 1, 400_000.0),
    ("Product Team", 2, 600_000.0),
    ("UX Design", 3, 300_000.0),
    ("Operations", 4, 400_000.0),
    ("Customer Support", 5, 300_000.0),
]


def seed_demo_organization(store: EntityStore, *, year: int = 2024) -> Optional[str]:
    """Populate an empty store and return the organisation id.

    Returns ``None`` without touching the store when it already holds data.
    """

    if not store.is_empty:
        LOGGER.debug("Store already populated; skipping demo seed")
        return None

    organization_id = store.next_id("org")
    categories = [
        BudgetCategory(
            category_id=store.next_id("cat"),
            organization_id=organization_id,
            name=name,
            description=description,
        )
        for name, description in _CATEGORIES
    ]
    store.add_organization(
        Organization(
            organization_id=organization_id,
            name="SampleTestOrg",
            leader_name="Sarah Anderson",
            total_budget=5_000_000.0,
            budget_categories=categories,
        )
    )

    department_ids: List[str] = []
    for name, head_name, total_budget in _DEPARTMENTS:
        department_id = store.next_id("dept")
        store.add_department(
            Department(
                department_id=department_id,
                organization_id=organization_id,
                name=name,
                head_name=head_name,
                total_budget=total_budget,
            )
        )
        department_ids.append(department_id)

    manager_ids: List[str] = []
    for name, department_index in _MANAGERS:
        manager_id = store.next_id("mgr")
        store.add_manager(
            Manager(manager_id=manager_id, department_id=department_ids[department_index], name=name)
        )
        manager_ids.append(manager_id)

    for name, manager_index, amount in _TEAMS:
        team_id = store.next_id("team")
        budget_id = store.next_id("budget")
        store.add_team(Team(team_id=team_id, manager_id=manager_ids[manager_index], name=name))
        store.add_budget(Budget(budget_id=budget_id, team_id=team_id, total_amount=amount, year=year))
        store.update_team_budget(team_id, budget_id)
        _seed_budget_items(store, budget_id, amount, categories)

    LOGGER.info("Seeded demo organisation %s with %s teams", organization_id, len(_TEAMS))
    return organization_id


def _seed_budget_items(
    store: EntityStore,
    budget_id: str,
    total_amount: float,
    categories: List[BudgetCategory],
) -> None:
    conferences, travel = categories[1], categories[4]
    for category, share in zip(categories, _DISTRIBUTION):
        item = BudgetItem(
            item_id=store.next_id("item"),
            budget_id=budget_id,
            category_id=category.category_id,
            amount=total_amount * share,
            description=f"Budget allocation for {category.name}",
        )
        if category is conferences:
            item = item.with_trip(_conference_trip(store, item.item_id))
        elif category is travel:
            for trip in _business_trips(store, item.item_id):
                item = item.with_trip(trip)
        store.add_budget_item(item)


def _conference_trip(store: EntityStore, item_id: str) -> TravelDetail:
    return TravelDetail(
        travel_id=store.next_id("trip"),
        budget_item_id=item_id,
        conference_name="Tech Conference 2024",
        motivation="Learning new technologies and networking",
        travel_type=TravelType.INTERNATIONAL,
        country="US",
        city="San Francisco",
        start_date=date(2024, 6, 15),
        end_date=date(2024, 6, 18),
        number_of_travelers=2,
        needs_hotel=True,
        needs_air_travel=True,
        flight_costs=800.0,
        hotel_costs=200.0,
        meal_costs=75.0,
    )


def _business_trips(store: EntityStore, item_id: str) -> List[BusinessTravelDetail]:
    return [
        BusinessTravelDetail(
            travel_id=store.next_id("trip"),
            budget_item_id=item_id,
            purpose="Client Meeting - Project Kickoff",
            travel_category=TravelCategory.CLIENT_VISIT,
            travel_type=TravelType.INTERNATIONAL,
            country="GB",
            city="London",
            start_date=date(2024, 4, 10),
            end_date=date(2024, 4, 14),
            number_of_travelers=3,
            needs_hotel=True,
            needs_air_travel=True,
            flight_costs=1200.0,
            hotel_costs=300.0,
            meal_costs=100.0,
        ),
        BusinessTravelDetail(
            travel_id=store.next_id("trip"),
            budget_item_id=item_id,
            purpose="Regional Office Visit",
            travel_category=TravelCategory.INTER_OFFICE,
            travel_type=TravelType.LOCAL,
            country="US",
            city="Chicago",
            start_date=date(2024, 5, 20),
            end_date=date(2024, 5, 22),
            number_of_travelers=2,
            needs_hotel=True,
            needs_car_rental=True,
            needs_air_travel=True,
            flight_costs=400.0,
            hotel_costs=150.0,
            car_rental_costs=200.0,
            meal_costs=50.0,
        ),
    ]
