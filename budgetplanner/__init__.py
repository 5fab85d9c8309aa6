"""Mini README: Core package initializer for the budget planner.

The planner tracks budgets down an organisation -> department -> manager ->
team -> budget hierarchy. This module re-exports the pieces most callers
need so they do not have to know the subpackage layout.
"""

from .aggregation import BudgetAggregator
from .errors import ErrorKind, OperationResult, ValidationResult
from .hierarchy import EntityStore, seed_demo_organization
from .logging_utils import get_logger
from .planning import BudgetPlanningService
from .validation import BudgetValidator

__all__ = [
    "BudgetAggregator",
    "BudgetPlanningService",
    "BudgetValidator",
    "EntityStore",
    "ErrorKind",
    "OperationResult",
    "ValidationResult",
    "get_logger",
    "seed_demo_organization",
]
