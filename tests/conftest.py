"""Mini README: Shared fixtures building small, isolated hierarchies.

``hierarchy`` returns a store holding one organisation (5,000,000 budget,
Training and Conferences categories), one 2,000,000 department, one manager
and one team without a budget, plus a dict of their identifiers.
"""

from __future__ import annotations

from typing import Dict, Tuple

import pytest

from budgetplanner.hierarchy import (
    BudgetCategory,
    Department,
    EntityStore,
    Manager,
    Organization,
    Team,
)


@pytest.fixture
def store() -> EntityStore:
    return EntityStore()


@pytest.fixture
def hierarchy(store: EntityStore) -> Tuple[EntityStore, Dict[str, str]]:
    store.add_organization(
        Organization(
            organization_id="org_1",
            name="Acme",
            leader_name="Ada Lovelace",
            total_budget=5_000_000.0,
            budget_categories=[
                BudgetCategory("cat_training", "org_1", "Training", "Courses"),
                BudgetCategory("cat_conferences", "org_1", "Conferences", "Events"),
            ],
        )
    )
    store.add_department(
        Department(
            department_id="dept_1",
            organization_id="org_1",
            name="Engineering",
            head_name="Grace Hopper",
            total_budget=2_000_000.0,
        )
    )
    store.add_manager(Manager(manager_id="mgr_1", department_id="dept_1", name="Alan Turing"))
    store.add_team(Team(team_id="team_1", manager_id="mgr_1", name="Platform"))
    ids = {
        "organization": "org_1",
        "department": "dept_1",
        "manager": "mgr_1",
        "team": "team_1",
        "training": "cat_training",
        "conferences": "cat_conferences",
    }
    return store, ids
