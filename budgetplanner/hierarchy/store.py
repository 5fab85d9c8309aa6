"""Mini README: In-memory entity store for the budget hierarchy.

Structure:
    * EntityStore - holds organisations, departments, managers, teams,
      budgets and budget items, and exposes add/update/delete/query helpers.

The store is an explicit object handed to the aggregator, validator and
planning service, so tests build isolated instances. Each mutation swaps the
affected collection for a new mapping; a reference obtained before a write
therefore keeps seeing the previous snapshot. Only the department insert
checks anything (duplicate names); constraint checks live in
``budgetplanner.validation``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..errors import ErrorKind, OperationResult
from ..logging_utils import get_logger
from .models import (
    Budget,
    BudgetCategory,
    BudgetItem,
    Department,
    Manager,
    Organization,
    Team,
)

LOGGER = get_logger(__name__)


def normalise_name(name: str) -> str:
    """Case-insensitive comparison key for department and category names."""

    return name.strip().casefold()


class EntityStore:
    """Hold every hierarchy entity in memory."""

    def __init__(self) -> None:
        self._organizations: Dict[str, Organization] = {}
        self._departments: Dict[str, Department] = {}
        self._managers: Dict[str, Manager] = {}
        self._teams: Dict[str, Team] = {}
        self._budgets: Dict[str, Budget] = {}
        self._budget_items: Dict[str, BudgetItem] = {}
        self._sequences: Dict[str, int] = {}

    def next_id(self, prefix: str) -> str:
        """Generate a deterministic identifier such as ``dept_0001``."""

        sequence = self._sequences.get(prefix, 0) + 1
        self._sequences[prefix] = sequence
        return f"{prefix}_{sequence:04d}"

    @property
    def is_empty(self) -> bool:
        return not self._organizations

    # Mutations -----------------------------------------------------------------

    def add_organization(self, organization: Organization) -> None:
        self._organizations = {**self._organizations, organization.organization_id: organization}
        LOGGER.info("Added organisation %s (%s)", organization.organization_id, organization.name)

    def add_department(self, department: Department) -> OperationResult:
        """Append a department unless its name is already taken in the organisation."""

        key = normalise_name(department.name)
        for existing in self.departments_by_organization(department.organization_id):
            if normalise_name(existing.name) == key:
                LOGGER.warning(
                    "Rejected department %s: name '%s' already used in organisation %s",
                    department.department_id,
                    department.name,
                    department.organization_id,
                )
                return OperationResult.failed(
                    ErrorKind.DUPLICATE_NAME,
                    "A department with this name already exists in the organization",
                )
        self._departments = {**self._departments, department.department_id: department}
        LOGGER.info("Added department %s (%s)", department.department_id, department.name)
        return OperationResult.succeeded(department.department_id)

    def add_manager(self, manager: Manager) -> None:
        self._managers = {**self._managers, manager.manager_id: manager}
        LOGGER.info("Added manager %s to department %s", manager.manager_id, manager.department_id)

    def add_team(self, team: Team) -> None:
        self._teams = {**self._teams, team.team_id: team}
        LOGGER.info("Added team %s to manager %s", team.team_id, team.manager_id)

    def add_budget(self, budget: Budget) -> None:
        """Insert or replace a budget by id."""

        self._budgets = {**self._budgets, budget.budget_id: budget}
        LOGGER.info("Stored budget %s for team %s (%.2f)", budget.budget_id, budget.team_id, budget.total_amount)

    def add_budget_item(self, item: BudgetItem) -> None:
        """Insert or replace a budget item by id."""

        self._budget_items = {**self._budget_items, item.item_id: item}
        LOGGER.info(
            "Stored budget item %s on budget %s (amount=%.2f spent=%.2f)",
            item.item_id,
            item.budget_id,
            item.amount,
            item.spent,
        )

    def delete_budget_item(self, item_id: str) -> None:
        """Remove a budget item; unknown ids are ignored."""

        if item_id not in self._budget_items:
            LOGGER.debug("Budget item %s not present; nothing to delete", item_id)
            return
        self._budget_items = {
            key: item for key, item in self._budget_items.items() if key != item_id
        }
        LOGGER.info("Deleted budget item %s", item_id)

    def update_team_budget(self, team_id: str, budget_id: str) -> None:
        """Attach the budget with ``budget_id`` to the team, or detach when unknown."""

        team = self._teams.get(team_id)
        if team is None:
            LOGGER.debug("Team %s not present; budget %s not attached", team_id, budget_id)
            return
        budget = self._budgets.get(budget_id)
        if budget is None:
            LOGGER.warning("Budget %s not found; team %s left without a budget", budget_id, team_id)
        self._teams = {**self._teams, team_id: replace(team, budget=budget)}

    def update_department_budget(self, department: Department) -> None:
        """Replace a department record wholesale by id."""

        if department.department_id not in self._departments:
            LOGGER.debug("Department %s not present; update ignored", department.department_id)
            return
        self._departments = {**self._departments, department.department_id: department}
        LOGGER.info(
            "Updated department %s (budget=%.2f)", department.department_id, department.total_budget
        )

    def update_organization_categories(
        self, organization_id: str, categories: Iterable[BudgetCategory]
    ) -> None:
        """Replace an organisation's category list wholesale."""

        organization = self._organizations.get(organization_id)
        if organization is None:
            LOGGER.debug("Organisation %s not present; categories unchanged", organization_id)
            return
        updated = replace(organization, budget_categories=list(categories))
        self._organizations = {**self._organizations, organization_id: updated}
        LOGGER.info(
            "Organisation %s now has %s budget categories",
            organization_id,
            len(updated.budget_categories),
        )

    def update_department(
        self,
        department_id: str,
        *,
        name: Optional[str] = None,
        head_name: Optional[str] = None,
        total_budget: Optional[float] = None,
    ) -> Optional[Department]:
        """Change selected department fields, returning the new record."""

        department = self._departments.get(department_id)
        if department is None:
            return None
        updated = replace(
            department,
            name=department.name if name is None else name,
            head_name=department.head_name if head_name is None else head_name.strip(),
            total_budget=department.total_budget if total_budget is None else float(total_budget),
        )
        self.update_department_budget(updated)
        return updated

    def update_budget_item(
        self,
        item_id: str,
        *,
        amount: Optional[float] = None,
        spent: Optional[float] = None,
        description: Optional[str] = None,
        category_id: Optional[str] = None,
    ) -> Optional[BudgetItem]:
        """Change selected budget item fields, returning the new record."""

        item = self._budget_items.get(item_id)
        if item is None:
            return None
        updated = replace(
            item,
            amount=item.amount if amount is None else float(amount),
            spent=item.spent if spent is None else float(spent),
            description=item.description if description is None else description,
            category_id=item.category_id if category_id is None else category_id,
        )
        self.add_budget_item(updated)
        return updated

    # Queries -------------------------------------------------------------------

    def list_organizations(self) -> List[Organization]:
        return list(self._organizations.values())

    def list_budgets(self) -> List[Budget]:
        return list(self._budgets.values())

    def list_budget_items(self) -> List[BudgetItem]:
        return list(self._budget_items.values())

    def find_organization(self, organization_id: str) -> Optional[Organization]:
        return self._organizations.get(organization_id)

    def find_department(self, department_id: str) -> Optional[Department]:
        return self._departments.get(department_id)

    def find_manager(self, manager_id: str) -> Optional[Manager]:
        return self._managers.get(manager_id)

    def find_team(self, team_id: str) -> Optional[Team]:
        return self._teams.get(team_id)

    def find_budget(self, budget_id: str) -> Optional[Budget]:
        return self._budgets.get(budget_id)

    def find_budget_item(self, item_id: str) -> Optional[BudgetItem]:
        return self._budget_items.get(item_id)

    def departments_by_organization(self, organization_id: str) -> List[Department]:
        return [
            department
            for department in self._departments.values()
            if department.organization_id == organization_id
        ]

    def managers_by_department(self, department_id: str) -> List[Manager]:
        return [manager for manager in self._managers.values() if manager.department_id == department_id]

    def teams_by_manager(self, manager_id: str) -> List[Team]:
        return [team for team in self._teams.values() if team.manager_id == manager_id]

    def teams_by_department(self, department_id: str) -> List[Team]:
        teams: List[Team] = []
        for manager in self.managers_by_department(department_id):
            teams.extend(self.teams_by_manager(manager.manager_id))
        return teams

    def budget_items_for_budget(self, budget_id: str) -> List[BudgetItem]:
        return [item for item in self._budget_items.values() if item.budget_id == budget_id]

    def budget_items_by_category(self, category_id: str) -> List[BudgetItem]:
        return [item for item in self._budget_items.values() if item.category_id == category_id]

    def budget_categories(self, organization_id: str) -> List[BudgetCategory]:
        organization = self._organizations.get(organization_id)
        return list(organization.budget_categories) if organization else []

    def department_for_team(self, team_id: str) -> Optional[Department]:
        """Walk team -> manager -> department."""

        team = self._teams.get(team_id)
        if team is None:
            return None
        manager = self._managers.get(team.manager_id)
        if manager is None:
            return None
        return self._departments.get(manager.department_id)

    def organization_for_team(self, team_id: str) -> Optional[Organization]:
        department = self.department_for_team(team_id)
        if department is None:
            return None
        return self._organizations.get(department.organization_id)
