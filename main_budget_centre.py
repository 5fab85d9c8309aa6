"""Mini README: Entry point CLI for the budget planner.

This script exposes a Typer CLI with two commands: ``run`` starts the
FastAPI JSON API under uvicorn, and ``summary`` prints the demo organisation's
roll-up to the terminal. Defaults come from ``BUDGETPLANNER_*`` environment
variables.
"""

from __future__ import annotations

import typer
import uvicorn

from budgetplanner.aggregation import BudgetAggregator
from budgetplanner.configuration import format_amount, get_settings
from budgetplanner.hierarchy import EntityStore, seed_demo_organization
from budgetplanner.logging_utils import configure_root_logger, level_for_environment

cli = typer.Typer(help="Launch and inspect the budget planner.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(level_for_environment(settings.environment))

    # Browsers cannot open 0.0.0.0, so point operators at localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting budget planner on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "budgetplanner.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary() -> None:
    """Print allocated, spent and remaining figures for the demo organisation."""

    settings = get_settings()
    configure_root_logger(level_for_environment(settings.environment))
    store = EntityStore()
    organization_id = seed_demo_organization(store, year=settings.default_budget_year)
    aggregator = BudgetAggregator(store)

    organization = store.find_organization(organization_id)
    info = aggregator.organization_budget_info(organization_id)
    typer.echo(
        f"{organization.name}: budget {format_amount(organization.total_budget)}, "
        f"allocated {format_amount(info.allocated)}, spent {format_amount(info.spent)}, "
        f"remaining {format_amount(info.remaining)}"
    )
    for department in store.departments_by_organization(organization_id):
        department_info = aggregator.department_budget_info(department.department_id)
        typer.echo(
            f"  {department.name}: allocated {format_amount(department_info.allocated)}, "
            f"spent {format_amount(department_info.spent)}, "
            f"remaining {format_amount(department_info.remaining)}"
        )


if __name__ == "__main__":
    cli()
