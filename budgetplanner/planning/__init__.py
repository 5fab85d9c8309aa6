"""Mini README: User-facing planning operations.

``BudgetPlanningService`` is what interfaces call: it validates each change
and forwards accepted ones to the entity store.
"""

from .service import BudgetPlanningService

__all__ = ["BudgetPlanningService"]
