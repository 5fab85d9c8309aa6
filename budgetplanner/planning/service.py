"""Mini README: Planning operations that validate before changing the store.

Structure:
    * BudgetPlanningService - one method per user action (create a department,
      allocate a team budget, record a trip, manage categories, ...).

Every method runs the matching ``BudgetValidator`` check and only then calls
the store. Failures come back as ``OperationResult`` values carrying the
message to display; the store is left exactly as it was.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..aggregation import BudgetAggregator
from ..configuration import get_settings
from ..errors import ErrorKind, OperationResult
from ..hierarchy.models import (
    Budget,
    BudgetCategory,
    BudgetItem,
    BusinessTravelDetail,
    Department,
    Manager,
    Organization,
    Team,
    TravelDetail,
    TripCosting,
)
from ..hierarchy.store import EntityStore
from ..logging_utils import get_logger
from ..validation import BudgetValidator

LOGGER = get_logger(__name__)


class BudgetPlanningService:
    """Validate-then-write operations over an ``EntityStore``."""

    def __init__(self, store: EntityStore) -> None:
        self.store = store
        self.aggregator = BudgetAggregator(store)
        self.validator = BudgetValidator(store, self.aggregator)

    # Hierarchy -----------------------------------------------------------------

    def create_organization(self, name: str, leader_name: str, total_budget: float) -> OperationResult:
        if not name.strip():
            return OperationResult.failed(ErrorKind.INVALID_INPUT, "Organization name is required")
        if total_budget < 0:
            return OperationResult.failed(ErrorKind.INVALID_INPUT, "Total budget cannot be negative")
        organization = Organization(
            organization_id=self.store.next_id("org"),
            name=name.strip(),
            leader_name=leader_name.strip(),
            total_budget=float(total_budget),
        )
        self.store.add_organization(organization)
        return OperationResult.succeeded(organization.organization_id)

    def create_department(
        self, organization_id: str, name: str, head_name: str, total_budget: float
    ) -> OperationResult:
        for check in (
            self.validator.validate_department_budget(organization_id, total_budget),
            self.validator.validate_department_name(organization_id, name),
        ):
            if not check.ok:
                return OperationResult.from_validation(check)
        department = Department(
            department_id=self.store.next_id("dept"),
            organization_id=organization_id,
            name=name.strip(),
            head_name=head_name.strip(),
            total_budget=float(total_budget),
        )
        return self.store.add_department(department)

    def edit_department(
        self,
        department_id: str,
        *,
        name: Optional[str] = None,
        head_name: Optional[str] = None,
        total_budget: Optional[float] = None,
    ) -> OperationResult:
        department = self.store.find_department(department_id)
        if department is None:
            return OperationResult.failed(ErrorKind.NOT_FOUND, "Department not found")
        if name is not None:
            check = self.validator.validate_department_name(
                department.organization_id, name, department_id=department_id
            )
            if not check.ok:
                return OperationResult.from_validation(check)
            name = name.strip()
        if total_budget is not None:
            check = self.validator.validate_department_budget(
                department.organization_id, total_budget, department_id=department_id
            )
            if not check.ok:
                return OperationResult.from_validation(check)
        self.store.update_department(
            department_id, name=name, head_name=head_name, total_budget=total_budget
        )
        return OperationResult.succeeded(department_id)

    def create_manager(self, department_id: str, name: str) -> OperationResult:
        if self.store.find_department(department_id) is None:
            return OperationResult.failed(ErrorKind.NOT_FOUND, "Department not found")
        manager = Manager(manager_id=self.store.next_id("mgr"), department_id=department_id, name=name.strip())
        self.store.add_manager(manager)
        return OperationResult.succeeded(manager.manager_id)

    def create_team(self, manager_id: str, name: str) -> OperationResult:
        if self.store.find_manager(manager_id) is None:
            return OperationResult.failed(ErrorKind.NOT_FOUND, "Manager not found")
        team = Team(team_id=self.store.next_id("team"), manager_id=manager_id, name=name.strip())
        self.store.add_team(team)
        return OperationResult.succeeded(team.team_id)

    # Budgets -------------------------------------------------------------------

    def allocate_team_budget(
        self, team_id: str, total_amount: float, *, year: Optional[int] = None
    ) -> OperationResult:
        """Create the team's budget, or replace the ceiling of the existing one."""

        check = self.validator.validate_team_budget(team_id, total_amount)
        if not check.ok:
            return OperationResult.from_validation(check)

        team = self.store.find_team(team_id)
        if team.budget is not None:
            budget = replace(
                team.budget,
                total_amount=float(total_amount),
                year=team.budget.year if year is None else year,
            )
        else:
            budget = Budget(
                budget_id=self.store.next_id("budget"),
                team_id=team_id,
                total_amount=float(total_amount),
                year=get_settings().default_budget_year if year is None else year,
            )
        self.store.add_budget(budget)
        self.store.update_team_budget(team_id, budget.budget_id)
        return OperationResult.succeeded(budget.budget_id)

    def allocate_budget_item(
        self,
        budget_id: str,
        category_id: str,
        amount: float,
        *,
        spent: Optional[float] = None,
        description: Optional[str] = None,
        item_id: Optional[str] = None,
    ) -> OperationResult:
        """Add a new item, or edit ``item_id`` keeping its recorded trips."""

        existing = self.store.find_budget_item(item_id) if item_id else None
        if item_id and existing is None:
            return OperationResult.failed(ErrorKind.NOT_FOUND, "Budget item not found")
        effective_spent = spent if spent is not None else (existing.spent if existing else 0.0)

        check = self.validator.validate_budget_item(
            budget_id, category_id, amount, spent=effective_spent, item_id=item_id
        )
        if not check.ok:
            return OperationResult.from_validation(check)

        if description is None:
            organization = self.store.organization_for_team(self.store.find_budget(budget_id).team_id)
            category = organization.find_category(category_id)
            description = existing.description if existing else f"Budget allocation for {category.name}"

        if existing is not None:
            item = replace(
                existing,
                budget_id=budget_id,
                category_id=category_id,
                amount=float(amount),
                spent=float(effective_spent),
                description=description,
            )
        else:
            item = BudgetItem(
                item_id=self.store.next_id("item"),
                budget_id=budget_id,
                category_id=category_id,
                amount=float(amount),
                description=description,
                spent=float(effective_spent),
            )
        self.store.add_budget_item(item)
        return OperationResult.succeeded(item.item_id)

    def remove_budget_item(self, item_id: str) -> OperationResult:
        self.store.delete_budget_item(item_id)
        return OperationResult.succeeded(item_id)

    # Travel --------------------------------------------------------------------

    def _record_trip(self, item_id: str, trip: TripCosting) -> OperationResult:
        if trip.budget_item_id != item_id:
            return OperationResult.failed(
                ErrorKind.INVALID_INPUT, "Travel belongs to a different budget item"
            )
        check = self.validator.validate_trip(item_id, trip)
        if not check.ok:
            return OperationResult.from_validation(check)
        item = self.store.find_budget_item(item_id)
        self.store.add_budget_item(item.with_trip(trip))
        LOGGER.info(
            "Recorded trip %s on item %s (total=%.2f)", trip.travel_id, item_id, trip.total_amount
        )
        return OperationResult.succeeded(trip.travel_id)

    def record_conference_travel(self, item_id: str, travel: TravelDetail) -> OperationResult:
        return self._record_trip(item_id, travel)

    def record_business_travel(self, item_id: str, travel: BusinessTravelDetail) -> OperationResult:
        return self._record_trip(item_id, travel)

    # Categories ----------------------------------------------------------------

    def add_category(self, organization_id: str, name: str, description: str = "") -> OperationResult:
        check = self.validator.validate_category_name(organization_id, name)
        if not check.ok:
            return OperationResult.from_validation(check)
        category = BudgetCategory(
            category_id=self.store.next_id("cat"),
            organization_id=organization_id,
            name=name.strip(),
            description=description,
        )
        categories = [*self.store.budget_categories(organization_id), category]
        self.store.update_organization_categories(organization_id, categories)
        return OperationResult.succeeded(category.category_id)

    def rename_category(
        self,
        organization_id: str,
        category_id: str,
        name: str,
        description: Optional[str] = None,
    ) -> OperationResult:
        categories = self.store.budget_categories(organization_id)
        if not any(category.category_id == category_id for category in categories):
            return OperationResult.failed(ErrorKind.NOT_FOUND, "Budget category not found")
        check = self.validator.validate_category_name(organization_id, name, category_id=category_id)
        if not check.ok:
            return OperationResult.from_validation(check)
        updated = [
            replace(
                category,
                name=name.strip(),
                description=category.description if description is None else description,
            )
            if category.category_id == category_id
            else category
            for category in categories
        ]
        self.store.update_organization_categories(organization_id, updated)
        return OperationResult.succeeded(category_id)

    def delete_category(
        self, organization_id: str, category_id: str, *, confirmed: bool = False
    ) -> OperationResult:
        """Remove a category; items referencing it are left untouched."""

        check = self.validator.validate_category_deletion(
            organization_id, category_id, confirmed=confirmed
        )
        if not check.ok:
            return OperationResult.from_validation(check)
        remaining = [
            category
            for category in self.store.budget_categories(organization_id)
            if category.category_id != category_id
        ]
        self.store.update_organization_categories(organization_id, remaining)
        return OperationResult.succeeded(category_id)
