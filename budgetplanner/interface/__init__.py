"""Mini README: Interfaces (HTTP/CLI) for the budget planner.

Exports the FastAPI application factory serving the JSON API. The Typer
launcher lives in ``main_budget_centre.py`` at the repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
