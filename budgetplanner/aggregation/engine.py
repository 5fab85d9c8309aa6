"""Mini README: Budget roll-ups across the organisation hierarchy.

Structure:
    * BudgetAggregator - computes allocated/spent/remaining triples for teams,
      managers, departments and organisations, plus category breakdowns and
      category usage counts.
    * CategoryUsage - how many items, teams and departments reference a category.

Every call walks the store afresh; nothing is cached, so figures always
reflect the latest writes.

Remaining is not computed the same way at every level. Teams and managers
report ``allocated - spent`` (headroom within what items were given), while
departments and organisations report ``total_budget - spent`` (headroom
against their declared ceiling).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..hierarchy.models import BudgetInfo, BudgetItem, Team
from ..hierarchy.store import EntityStore
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class CategoryUsage:
    """References to a category traced through item -> budget -> team -> department."""

    item_count: int
    team_count: int
    department_count: int

    @property
    def is_in_use(self) -> bool:
        return self.item_count > 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "item_count": self.item_count,
            "team_count": self.team_count,
            "department_count": self.department_count,
        }


class BudgetAggregator:
    """Read-only roll-ups over an ``EntityStore``."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def _team_items(self, team: Team) -> List[BudgetItem]:
        if team.budget is None:
            return []
        return self._store.budget_items_for_budget(team.budget.budget_id)

    def _sum_teams(self, teams: List[Team]) -> Tuple[float, float]:
        allocated = 0.0
        spent = 0.0
        for team in teams:
            for item in self._team_items(team):
                allocated += item.amount
                spent += item.spent or 0.0
        return allocated, spent

    def team_budget_info(self, team_id: str) -> BudgetInfo:
        team = self._store.find_team(team_id)
        if team is None or team.budget is None:
            return BudgetInfo()
        allocated, spent = self._sum_teams([team])
        return BudgetInfo(allocated=allocated, spent=spent, remaining=allocated - spent)

    def manager_budget_info(self, manager_id: str) -> BudgetInfo:
        allocated, spent = self._sum_teams(self._store.teams_by_manager(manager_id))
        return BudgetInfo(allocated=allocated, spent=spent, remaining=allocated - spent)

    def department_budget_info(self, department_id: str) -> BudgetInfo:
        department = self._store.find_department(department_id)
        if department is None:
            return BudgetInfo()
        allocated, spent = self._sum_teams(self._store.teams_by_department(department_id))
        return BudgetInfo(
            allocated=allocated,
            spent=spent,
            remaining=department.total_budget - spent,
        )

    def organization_budget_info(self, organization_id: str) -> BudgetInfo:
        organization = self._store.find_organization(organization_id)
        if organization is None:
            return BudgetInfo()
        allocated, spent = self._sum_teams(self._organization_teams(organization_id))
        LOGGER.debug(
            "Organisation %s roll-up -> allocated: %.2f spent: %.2f",
            organization_id,
            allocated,
            spent,
        )
        return BudgetInfo(
            allocated=allocated,
            spent=spent,
            remaining=organization.total_budget - spent,
        )

    def organization_total_spent(self, organization_id: str) -> float:
        _, spent = self._sum_teams(self._organization_teams(organization_id))
        return spent

    def _organization_teams(self, organization_id: str) -> List[Team]:
        teams: List[Team] = []
        for department in self._store.departments_by_organization(organization_id):
            teams.extend(self._store.teams_by_department(department.department_id))
        return teams

    def department_team_allocation(
        self, department_id: str, *, exclude_team_id: Optional[str] = None
    ) -> float:
        """Sum of team budget ceilings within a department."""

        return sum(
            team.budget.total_amount
            for team in self._store.teams_by_department(department_id)
            if team.budget is not None and team.team_id != exclude_team_id
        )

    def organization_department_allocation(
        self, organization_id: str, *, exclude_department_id: Optional[str] = None
    ) -> float:
        """Sum of department budgets within an organisation."""

        return sum(
            department.total_budget
            for department in self._store.departments_by_organization(organization_id)
            if department.department_id != exclude_department_id
        )

    def category_breakdown(
        self, organization_id: str, *, department_id: Optional[str] = None
    ) -> List[Dict[str, object]]:
        """Allocated amount per category, skipping categories with nothing allocated."""

        if department_id is not None:
            teams = self._store.teams_by_department(department_id)
        else:
            teams = self._organization_teams(organization_id)
        totals: Dict[str, float] = {}
        for team in teams:
            for item in self._team_items(team):
                totals[item.category_id] = totals.get(item.category_id, 0.0) + item.amount

        grand_total = sum(totals.values())
        breakdown: List[Dict[str, object]] = []
        for category in self._store.budget_categories(organization_id):
            amount = totals.get(category.category_id, 0.0)
            if amount <= 0:
                continue
            breakdown.append(
                {
                    "category_id": category.category_id,
                    "name": category.name,
                    "amount": amount,
                    "share_percent": amount / grand_total * 100.0,
                }
            )
        return breakdown

    def category_usage(self, category_id: str) -> CategoryUsage:
        items = self._store.budget_items_by_category(category_id)
        team_ids = set()
        department_ids = set()
        for item in items:
            budget = self._store.find_budget(item.budget_id)
            if budget is None:
                continue
            team = self._store.find_team(budget.team_id)
            if team is None:
                continue
            team_ids.add(team.team_id)
            manager = self._store.find_manager(team.manager_id)
            if manager is not None:
                department_ids.add(manager.department_id)
        return CategoryUsage(
            item_count=len(items),
            team_count=len(team_ids),
            department_count=len(department_ids),
        )
