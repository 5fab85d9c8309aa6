"""Mini README: FastAPI JSON interface for the budget planner.

Structure:
    * create_application - application factory wiring routes to a store.
    * _raise_for_result - maps failed operations onto HTTP errors.

Reads return roll-ups from ``BudgetAggregator``; writes go through
``BudgetPlanningService`` so every change is validated first. Form fields are
used for write payloads. Rejections map to 400, duplicate names and pending
confirmations to 409, and unknown entities to 404.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Dict, Optional, Type

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import JSONResponse

from ..configuration import get_settings
from ..errors import ErrorKind, OperationResult
from ..hierarchy import (
    BusinessTravelDetail,
    EntityStore,
    TravelCategory,
    TravelDetail,
    TravelType,
    seed_demo_organization,
)
from ..logging_utils import get_logger
from ..lookups import (
    AirportDirectory,
    LocationDirectory,
    StaticAirportDirectory,
    StaticLocationDirectory,
)
from ..planning import BudgetPlanningService

LOGGER = get_logger(__name__)

_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE_NAME: 409,
    ErrorKind.CONFIRMATION_REQUIRED: 409,
    ErrorKind.BUDGET_EXCEEDED: 400,
    ErrorKind.INVALID_INPUT: 400,
}


def _raise_for_result(result: OperationResult) -> None:
    if result.success:
        return
    status_code = _STATUS_BY_KIND.get(result.kind or ErrorKind.INVALID_INPUT, 400)
    raise HTTPException(
        status_code=status_code,
        detail={
            "error": result.error,
            "kind": result.kind.value if result.kind else None,
            "details": result.details,
        },
    )


def _parse_enum(enum_cls: Type[Enum], value: str) -> Enum:
    try:
        return enum_cls.from_str(value)
    except ValueError as error:
        raise HTTPException(status_code=400, detail=str(error)) from error


def create_application(
    store: Optional[EntityStore] = None,
    *,
    locations: Optional[LocationDirectory] = None,
    airports: Optional[AirportDirectory] = None,
) -> FastAPI:
    """Create the FastAPI application bound to ``store`` (a fresh one by default).

    ``locations`` and ``airports`` default to the bundled static directories.
    """

    settings = get_settings()
    app = FastAPI(title="Budget Planner", version="0.1.0")

    if store is None:
        store = EntityStore()
        if settings.seed_demo_data:
            seed_demo_organization(store, year=settings.default_budget_year)
    service = BudgetPlanningService(store)
    aggregator = service.aggregator
    if locations is None:
        locations = StaticLocationDirectory()
    if airports is None:
        airports = StaticAirportDirectory()

    @app.get("/organizations")
    async def list_organizations() -> JSONResponse:
        """List organisations with their roll-up figures."""

        payload = [
            {
                "organization_id": organization.organization_id,
                "name": organization.name,
                "leader_name": organization.leader_name,
                "total_budget": organization.total_budget,
                "budget": aggregator.organization_budget_info(organization.organization_id).as_dict(),
            }
            for organization in store.list_organizations()
        ]
        LOGGER.debug("Returning %s organisations", len(payload))
        return JSONResponse({"organizations": payload})

    @app.get("/organizations/{organization_id}/summary")
    async def organization_summary(organization_id: str) -> JSONResponse:
        organization = store.find_organization(organization_id)
        if organization is None:
            raise HTTPException(status_code=404, detail="Organization not found")
        departments = [
            {
                "department_id": department.department_id,
                "name": department.name,
                "head_name": department.head_name,
                "total_budget": department.total_budget,
                "budget": aggregator.department_budget_info(department.department_id).as_dict(),
            }
            for department in store.departments_by_organization(organization_id)
        ]
        return JSONResponse(
            {
                "organization_id": organization_id,
                "name": organization.name,
                "total_budget": organization.total_budget,
                "budget": aggregator.organization_budget_info(organization_id).as_dict(),
                "categories": [
                    {
                        "category_id": category.category_id,
                        "name": category.name,
                        "description": category.description,
                    }
                    for category in organization.budget_categories
                ],
                "category_breakdown": aggregator.category_breakdown(organization_id),
                "departments": departments,
            }
        )

    @app.get("/departments/{department_id}/summary")
    async def department_summary(department_id: str) -> JSONResponse:
        department = store.find_department(department_id)
        if department is None:
            raise HTTPException(status_code=404, detail="Department not found")
        managers = [
            {
                "manager_id": manager.manager_id,
                "name": manager.name,
                "budget": aggregator.manager_budget_info(manager.manager_id).as_dict(),
            }
            for manager in store.managers_by_department(department_id)
        ]
        return JSONResponse(
            {
                "department_id": department_id,
                "name": department.name,
                "total_budget": department.total_budget,
                "budget": aggregator.department_budget_info(department_id).as_dict(),
                "available_for_teams": service.validator.available_for_team(department_id),
                "managers": managers,
            }
        )

    @app.get("/managers/{manager_id}/summary")
    async def manager_summary(manager_id: str) -> JSONResponse:
        manager = store.find_manager(manager_id)
        if manager is None:
            raise HTTPException(status_code=404, detail="Manager not found")
        teams = [
            {
                "team_id": team.team_id,
                "name": team.name,
                "budget_total": team.budget.total_amount if team.budget else None,
                "budget": aggregator.team_budget_info(team.team_id).as_dict(),
            }
            for team in store.teams_by_manager(manager_id)
        ]
        return JSONResponse(
            {
                "manager_id": manager_id,
                "name": manager.name,
                "budget": aggregator.manager_budget_info(manager_id).as_dict(),
                "teams": teams,
            }
        )

    @app.get("/teams/{team_id}/summary")
    async def team_summary(team_id: str) -> JSONResponse:
        team = store.find_team(team_id)
        if team is None:
            raise HTTPException(status_code=404, detail="Team not found")
        items = []
        if team.budget is not None:
            items = [
                {
                    "item_id": item.item_id,
                    "category_id": item.category_id,
                    "description": item.description,
                    "amount": item.amount,
                    "spent": item.spent,
                    "travel_total": item.recorded_travel_total,
                    "trips": [
                        trip.cost_summary()
                        for trip in [*item.travel_details, *item.business_travel_details]
                    ],
                }
                for item in store.budget_items_for_budget(team.budget.budget_id)
            ]
        return JSONResponse(
            {
                "team_id": team_id,
                "name": team.name,
                "budget_id": team.budget.budget_id if team.budget else None,
                "budget_total": team.budget.total_amount if team.budget else None,
                "budget": aggregator.team_budget_info(team_id).as_dict(),
                "items": items,
            }
        )

    @app.post("/organizations/{organization_id}/departments")
    async def create_department(
        organization_id: str,
        name: str = Form(...),
        head_name: str = Form(...),
        total_budget: float = Form(...),
    ) -> JSONResponse:
        result = service.create_department(organization_id, name, head_name, total_budget)
        _raise_for_result(result)
        LOGGER.info("Department %s created via API", result.entity_id)
        return JSONResponse({"department_id": result.entity_id}, status_code=201)

    @app.post("/teams/{team_id}/budget")
    async def allocate_team_budget(
        team_id: str,
        total_amount: float = Form(...),
        year: Optional[int] = Form(None),
    ) -> JSONResponse:
        result = service.allocate_team_budget(team_id, total_amount, year=year)
        _raise_for_result(result)
        return JSONResponse({"budget_id": result.entity_id}, status_code=201)

    @app.post("/budgets/{budget_id}/items")
    async def allocate_budget_item(
        budget_id: str,
        category_id: str = Form(...),
        amount: float = Form(...),
        spent: Optional[float] = Form(None),
        description: Optional[str] = Form(None),
        item_id: Optional[str] = Form(None),
    ) -> JSONResponse:
        result = service.allocate_budget_item(
            budget_id,
            category_id,
            amount,
            spent=spent,
            description=description,
            item_id=item_id,
        )
        _raise_for_result(result)
        return JSONResponse({"item_id": result.entity_id}, status_code=201)

    @app.delete("/budget-items/{item_id}")
    async def delete_budget_item(item_id: str) -> JSONResponse:
        service.remove_budget_item(item_id)
        return JSONResponse({"item_id": item_id, "deleted": True})

    @app.post("/budget-items/{item_id}/conference-travel")
    async def record_conference_travel(
        item_id: str,
        conference_name: str = Form(...),
        motivation: str = Form(""),
        travel_type: str = Form("local"),
        country: str = Form(...),
        city: str = Form(...),
        start_date: date = Form(...),
        end_date: date = Form(...),
        number_of_travelers: int = Form(1),
        needs_hotel: bool = Form(False),
        needs_car_rental: bool = Form(False),
        needs_air_travel: bool = Form(False),
        flight_costs: float = Form(0.0),
        hotel_costs: float = Form(0.0),
        car_rental_costs: float = Form(0.0),
        meal_costs: float = Form(0.0),
    ) -> JSONResponse:
        travel = TravelDetail(
            travel_id=store.next_id("trip"),
            budget_item_id=item_id,
            conference_name=conference_name,
            motivation=motivation,
            travel_type=_parse_enum(TravelType, travel_type),
            country=country,
            city=city,
            start_date=start_date,
            end_date=end_date,
            number_of_travelers=number_of_travelers,
            needs_hotel=needs_hotel,
            needs_car_rental=needs_car_rental,
            needs_air_travel=needs_air_travel,
            flight_costs=flight_costs,
            hotel_costs=hotel_costs,
            car_rental_costs=car_rental_costs,
            meal_costs=meal_costs,
        )
        result = service.record_conference_travel(item_id, travel)
        _raise_for_result(result)
        return JSONResponse(travel.cost_summary(), status_code=201)

    @app.post("/budget-items/{item_id}/business-travel")
    async def record_business_travel(
        item_id: str,
        purpose: str = Form(...),
        travel_category: str = Form("other"),
        travel_type: str = Form("local"),
        country: str = Form(...),
        city: str = Form(...),
        start_date: date = Form(...),
        end_date: date = Form(...),
        number_of_travelers: int = Form(1),
        needs_hotel: bool = Form(False),
        needs_car_rental: bool = Form(False),
        needs_air_travel: bool = Form(False),
        flight_costs: float = Form(0.0),
        hotel_costs: float = Form(0.0),
        car_rental_costs: float = Form(0.0),
        meal_costs: float = Form(0.0),
    ) -> JSONResponse:
        travel = BusinessTravelDetail(
            travel_id=store.next_id("trip"),
            budget_item_id=item_id,
            purpose=purpose,
            travel_category=_parse_enum(TravelCategory, travel_category),
            travel_type=_parse_enum(TravelType, travel_type),
            country=country,
            city=city,
            start_date=start_date,
            end_date=end_date,
            number_of_travelers=number_of_travelers,
            needs_hotel=needs_hotel,
            needs_car_rental=needs_car_rental,
            needs_air_travel=needs_air_travel,
            flight_costs=flight_costs,
            hotel_costs=hotel_costs,
            car_rental_costs=car_rental_costs,
            meal_costs=meal_costs,
        )
        result = service.record_business_travel(item_id, travel)
        _raise_for_result(result)
        return JSONResponse(travel.cost_summary(), status_code=201)

    @app.post("/organizations/{organization_id}/categories")
    async def add_category(
        organization_id: str,
        name: str = Form(...),
        description: str = Form(""),
    ) -> JSONResponse:
        result = service.add_category(organization_id, name, description)
        _raise_for_result(result)
        return JSONResponse({"category_id": result.entity_id}, status_code=201)

    @app.put("/organizations/{organization_id}/categories/{category_id}")
    async def rename_category(
        organization_id: str,
        category_id: str,
        name: str = Form(...),
        description: Optional[str] = Form(None),
    ) -> JSONResponse:
        result = service.rename_category(organization_id, category_id, name, description)
        _raise_for_result(result)
        return JSONResponse({"category_id": category_id, "name": name.strip()})

    @app.delete("/organizations/{organization_id}/categories/{category_id}")
    async def delete_category(
        organization_id: str, category_id: str, confirmed: bool = False
    ) -> JSONResponse:
        result = service.delete_category(organization_id, category_id, confirmed=confirmed)
        _raise_for_result(result)
        return JSONResponse({"category_id": category_id, "deleted": True})

    @app.get("/lookups/cities")
    async def lookup_cities(country_code: str, query: str = "") -> JSONResponse:
        cities = locations.cities(country_code, query)
        return JSONResponse(
            {"cities": [{"name": city.name, "country": city.country, "region": city.region} for city in cities]}
        )

    @app.get("/lookups/airports")
    async def lookup_airports(country: str) -> JSONResponse:
        matches = airports.airports_by_country(country)
        return JSONResponse(
            {
                "airports": [
                    {"iata": airport.iata, "name": airport.name, "city": airport.city}
                    for airport in matches
                ]
            }
        )

    return app
