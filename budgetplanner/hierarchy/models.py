"""Mini README: Entity models for the organisation budget hierarchy.

Structure:
    * TravelType / TravelCategory - enums for trip classification.
    * Organization, BudgetCategory, Department, Manager, Team, Budget -
      hierarchy nodes linked by parent identifiers.
    * BudgetItem - category-tagged allocation with recorded spend.
    * TripCosting, TravelDetail, BusinessTravelDetail - trip cost breakdowns
      whose totals feed a budget item's spend.
    * BudgetInfo - allocated/spent/remaining triple returned by roll-ups.

Models are plain dataclasses. Ownership is expressed through parent ids so
the store can filter children with simple linear scans.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Dict, List, Optional


class TravelType(str, Enum):
    """Distinguish domestic from international trips."""

    LOCAL = "local"
    INTERNATIONAL = "international"

    @classmethod
    def from_str(cls, value: str) -> "TravelType":
        """Coerce arbitrary casing into a valid travel type."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported travel type: {value}") from error


class TravelCategory(str, Enum):
    """Reason for a business trip."""

    CLIENT_VISIT = "client_visit"
    INTER_OFFICE = "inter_office"
    OTHER = "other"

    @classmethod
    def from_str(cls, value: str) -> "TravelCategory":
        """Accept ``client-visit``, ``Client Visit`` and similar spellings."""

        try:
            normalised = value.strip().lower().replace("-", "_").replace(" ", "_")
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported travel category: {value}") from error


@dataclass(slots=True)
class BudgetCategory:
    """Organisation-scoped tag used to classify budget items."""

    category_id: str
    organization_id: str
    name: str
    description: str = ""


@dataclass(slots=True)
class Organization:
    """Root of a hierarchy with its own budget ceiling and categories."""

    organization_id: str
    name: str
    leader_name: str
    total_budget: float
    budget_categories: List[BudgetCategory] = field(default_factory=list)

    def find_category(self, category_id: str) -> Optional[BudgetCategory]:
        for category in self.budget_categories:
            if category.category_id == category_id:
                return category
        return None


@dataclass(slots=True)
class Department:
    department_id: str
    organization_id: str
    name: str
    head_name: str
    total_budget: float


@dataclass(slots=True)
class Manager:
    manager_id: str
    department_id: str
    name: str


@dataclass(slots=True)
class Budget:
    """Yearly spending ceiling owned by a single team."""

    budget_id: str
    team_id: str
    total_amount: float
    year: int


@dataclass(slots=True)
class Team:
    team_id: str
    manager_id: str
    name: str
    budget: Optional[Budget] = None


@dataclass(slots=True, kw_only=True)
class TripCosting:
    """Shared cost breakdown for conference and business trips.

    Car rental is shared between travellers; hotel, meals and flights are
    charged per person.
    """

    travel_id: str
    budget_item_id: str
    travel_type: TravelType
    country: str
    city: str
    start_date: date
    end_date: date
    number_of_travelers: int = 1
    needs_hotel: bool = False
    needs_car_rental: bool = False
    needs_air_travel: bool = False
    flight_costs: float = 0.0
    hotel_costs: float = 0.0
    car_rental_costs: float = 0.0
    meal_costs: float = 0.0

    @property
    def per_person_cost(self) -> float:
        travelers = max(self.number_of_travelers, 1)
        hotel = self.hotel_costs if self.needs_hotel else 0.0
        car_rental = self.car_rental_costs / travelers if self.needs_car_rental else 0.0
        flight = self.flight_costs if self.needs_air_travel else 0.0
        return hotel + car_rental + self.meal_costs + flight

    @property
    def total_amount(self) -> float:
        return round(self.per_person_cost * self.number_of_travelers, 2)

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days

    def cost_summary(self) -> Dict[str, object]:
        """Export the cost fields together with the derived totals."""

        return {
            "travel_id": self.travel_id,
            "travel_type": self.travel_type.value,
            "country": self.country,
            "city": self.city,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "duration_days": self.duration_days,
            "number_of_travelers": self.number_of_travelers,
            "per_person_cost": self.per_person_cost,
            "total_amount": self.total_amount,
        }


@dataclass(slots=True, kw_only=True)
class TravelDetail(TripCosting):
    """Conference attendance trip."""

    conference_name: str
    motivation: str = ""


@dataclass(slots=True, kw_only=True)
class BusinessTravelDetail(TripCosting):
    """Business trip such as a client or inter-office visit."""

    purpose: str
    travel_category: TravelCategory = TravelCategory.OTHER


@dataclass(slots=True)
class BudgetItem:
    """Allocation of part of a team budget to one category."""

    item_id: str
    budget_id: str
    category_id: str
    amount: float
    description: str = ""
    spent: float = 0.0
    travel_details: List[TravelDetail] = field(default_factory=list)
    business_travel_details: List[BusinessTravelDetail] = field(default_factory=list)

    @property
    def recorded_travel_total(self) -> float:
        """Sum of all trip totals attached to the item."""

        conference = sum(detail.total_amount for detail in self.travel_details)
        business = sum(detail.total_amount for detail in self.business_travel_details)
        return conference + business

    def with_trip(self, trip: TripCosting) -> "BudgetItem":
        """Return a copy with ``trip`` attached and its total added to ``spent``."""

        if isinstance(trip, TravelDetail):
            return replace(
                self,
                spent=self.spent + trip.total_amount,
                travel_details=[*self.travel_details, trip],
                business_travel_details=list(self.business_travel_details),
            )
        if isinstance(trip, BusinessTravelDetail):
            return replace(
                self,
                spent=self.spent + trip.total_amount,
                travel_details=list(self.travel_details),
                business_travel_details=[*self.business_travel_details, trip],
            )
        raise ValueError(f"Unsupported trip record: {type(trip).__name__}")


@dataclass(slots=True, frozen=True)
class BudgetInfo:
    """Allocated, spent and remaining figures for one hierarchy node."""

    allocated: float = 0.0
    spent: float = 0.0
    remaining: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "allocated": self.allocated,
            "spent": self.spent,
            "remaining": self.remaining,
        }
