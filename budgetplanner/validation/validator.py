"""Mini README: Pre-write constraint checks for budget mutations.

Structure:
    * BudgetValidator - pure predicates returning ``ValidationResult`` values.

Each check reads the current store state and a proposed change, and either
accepts it or returns a human-readable rejection. Nothing here mutates the
store; the planning service forwards accepted changes.

Available budget is always measured against sibling allocations: a
department may claim whatever its organisation has not already handed to
other departments, and a team whatever its department has not handed to other
teams. Recorded spend does not enter these checks.
"""

from __future__ import annotations

from typing import Optional

from ..aggregation import BudgetAggregator
from ..configuration import format_amount
from ..errors import ErrorKind, ValidationResult
from ..hierarchy.models import TripCosting
from ..hierarchy.store import EntityStore, normalise_name
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


def _reject(kind: ErrorKind, message: str, **details: float) -> ValidationResult:
    LOGGER.warning("Validation rejected (%s): %s", kind.value, message)
    return ValidationResult.reject(kind, message, details)


class BudgetValidator:
    """Constraint checks run before the store is changed."""

    def __init__(self, store: EntityStore, aggregator: Optional[BudgetAggregator] = None) -> None:
        self._store = store
        self._aggregator = aggregator or BudgetAggregator(store)

    def available_for_department(
        self, organization_id: str, *, department_id: Optional[str] = None
    ) -> float:
        """Organisation budget not yet handed to other departments."""

        organization = self._store.find_organization(organization_id)
        if organization is None:
            return 0.0
        allocated = self._aggregator.organization_department_allocation(
            organization_id, exclude_department_id=department_id
        )
        return organization.total_budget - allocated

    def available_for_team(self, department_id: str, *, team_id: Optional[str] = None) -> float:
        """Department budget not yet handed to other teams."""

        department = self._store.find_department(department_id)
        if department is None:
            return 0.0
        allocated = self._aggregator.department_team_allocation(
            department_id, exclude_team_id=team_id
        )
        return department.total_budget - allocated

    def validate_department_name(
        self, organization_id: str, name: str, *, department_id: Optional[str] = None
    ) -> ValidationResult:
        if not name.strip():
            return _reject(ErrorKind.INVALID_INPUT, "Department name is required")
        key = normalise_name(name)
        for department in self._store.departments_by_organization(organization_id):
            if department.department_id != department_id and normalise_name(department.name) == key:
                return _reject(
                    ErrorKind.DUPLICATE_NAME,
                    "A department with this name already exists in the organization",
                )
        return ValidationResult.accept()

    def validate_department_budget(
        self,
        organization_id: str,
        total_budget: float,
        *,
        department_id: Optional[str] = None,
    ) -> ValidationResult:
        """Check a new or edited department budget against its organisation."""

        if self._store.find_organization(organization_id) is None:
            return _reject(ErrorKind.NOT_FOUND, "Organization not found")
        if total_budget < 0:
            return _reject(ErrorKind.INVALID_INPUT, "Department budget cannot be negative")

        available = self.available_for_department(organization_id, department_id=department_id)
        if total_budget > available:
            return _reject(
                ErrorKind.BUDGET_EXCEEDED,
                "Department budget cannot exceed organization's remaining budget: "
                f"{format_amount(available)}",
                available=available,
            )

        if department_id is not None:
            committed = self._aggregator.department_team_allocation(department_id)
            if total_budget < committed:
                return _reject(
                    ErrorKind.BUDGET_EXCEEDED,
                    "Department budget cannot be lower than the budgets already given to its teams: "
                    f"{format_amount(committed)}",
                    committed=committed,
                )
        return ValidationResult.accept()

    def validate_team_budget(self, team_id: str, total_amount: float) -> ValidationResult:
        """Check a team budget ceiling against its department."""

        team = self._store.find_team(team_id)
        if team is None:
            return _reject(ErrorKind.NOT_FOUND, "Team not found")
        department = self._store.department_for_team(team_id)
        if department is None:
            return _reject(ErrorKind.NOT_FOUND, "Department not found")
        if total_amount <= 0:
            return _reject(ErrorKind.INVALID_INPUT, "Amount must be greater than 0")

        available = self.available_for_team(department.department_id, team_id=team_id)
        if total_amount > available:
            return _reject(
                ErrorKind.BUDGET_EXCEEDED,
                f"Amount cannot exceed department's remaining budget: {format_amount(available)}",
                available=available,
            )

        allocated = self._aggregator.team_budget_info(team_id).allocated
        if total_amount < allocated:
            return _reject(
                ErrorKind.BUDGET_EXCEEDED,
                f"Amount cannot be lower than the team's allocated items: {format_amount(allocated)}",
                allocated=allocated,
            )
        return ValidationResult.accept()

    def validate_budget_item(
        self,
        budget_id: str,
        category_id: str,
        amount: float,
        *,
        spent: float = 0.0,
        item_id: Optional[str] = None,
    ) -> ValidationResult:
        """Check a new or edited item against its team budget."""

        budget = self._store.find_budget(budget_id)
        if budget is None:
            return _reject(ErrorKind.NOT_FOUND, "Budget not found")
        organization = self._store.organization_for_team(budget.team_id)
        if organization is None or organization.find_category(category_id) is None:
            return _reject(ErrorKind.NOT_FOUND, "Budget category not found for this organization")
        if amount <= 0:
            return _reject(ErrorKind.INVALID_INPUT, "Amount must be greater than 0")
        if spent < 0:
            return _reject(ErrorKind.INVALID_INPUT, "Spent amount cannot be negative")
        if amount < spent:
            return _reject(ErrorKind.INVALID_INPUT, "Allocated amount cannot be less than spent amount")

        others = sum(
            item.amount
            for item in self._store.budget_items_for_budget(budget_id)
            if item.item_id != item_id
        )
        if others + amount > budget.total_amount:
            return _reject(
                ErrorKind.BUDGET_EXCEEDED,
                f"Total items cannot exceed budget amount: {format_amount(budget.total_amount)}",
                available=budget.total_amount - others,
            )
        return ValidationResult.accept()

    def validate_trip(self, item_id: str, trip: TripCosting) -> ValidationResult:
        """Check a conference or business trip against its budget item."""

        item = self._store.find_budget_item(item_id)
        if item is None:
            return _reject(ErrorKind.NOT_FOUND, "Budget item not found")
        if trip.end_date < trip.start_date:
            return _reject(ErrorKind.INVALID_INPUT, "End date cannot be before start date")
        if trip.number_of_travelers < 1:
            return _reject(ErrorKind.INVALID_INPUT, "At least one traveler is required")
        costs = (trip.flight_costs, trip.hotel_costs, trip.car_rental_costs, trip.meal_costs)
        if any(cost < 0 for cost in costs):
            return _reject(ErrorKind.INVALID_INPUT, "Travel costs cannot be negative")

        available = item.amount - item.spent
        if trip.total_amount > available:
            return _reject(
                ErrorKind.BUDGET_EXCEEDED,
                f"Total amount exceeds budget allocation of {format_amount(item.amount)}",
                available=available,
            )
        return ValidationResult.accept()

    def validate_category_name(
        self, organization_id: str, name: str, *, category_id: Optional[str] = None
    ) -> ValidationResult:
        if self._store.find_organization(organization_id) is None:
            return _reject(ErrorKind.NOT_FOUND, "Organization not found")
        if not name.strip():
            return _reject(ErrorKind.INVALID_INPUT, "Category name is required")
        key = normalise_name(name)
        for category in self._store.budget_categories(organization_id):
            if category.category_id != category_id and normalise_name(category.name) == key:
                return _reject(ErrorKind.DUPLICATE_NAME, "A category with this name already exists")
        return ValidationResult.accept()

    def validate_category_deletion(
        self, organization_id: str, category_id: str, *, confirmed: bool = False
    ) -> ValidationResult:
        """Deleting a category that items still reference needs confirmation."""

        organization = self._store.find_organization(organization_id)
        if organization is None or organization.find_category(category_id) is None:
            return _reject(ErrorKind.NOT_FOUND, "Budget category not found")
        usage = self._aggregator.category_usage(category_id)
        if usage.is_in_use and not confirmed:
            return _reject(
                ErrorKind.CONFIRMATION_REQUIRED,
                f"This category is used by {usage.item_count} budget items across "
                f"{usage.team_count} teams and {usage.department_count} departments. "
                "Confirm to delete it.",
                **{key: float(value) for key, value in usage.as_dict().items()},
            )
        return ValidationResult.accept()
