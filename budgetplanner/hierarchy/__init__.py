"""Mini README: Organisation hierarchy models and the in-memory entity store.

``models`` defines the organisation -> department -> manager -> team ->
budget -> item chain, ``store`` keeps the entities, and ``demo`` loads an
illustrative organisation for previews.
"""

from .demo import seed_demo_organization
from .models import (
    Budget,
    BudgetCategory,
    BudgetInfo,
    BudgetItem,
    BusinessTravelDetail,
    Department,
    Manager,
    Organization,
    Team,
    TravelCategory,
    TravelDetail,
    TravelType,
    TripCosting,
)
from .store import EntityStore, normalise_name

__all__ = [
    "Budget",
    "BudgetCategory",
    "BudgetInfo",
    "BudgetItem",
    "BusinessTravelDetail",
    "Department",
    "EntityStore",
    "Manager",
    "Organization",
    "Team",
    "TravelCategory",
    "TravelDetail",
    "TravelType",
    "TripCosting",
    "normalise_name",
    "seed_demo_organization",
]
