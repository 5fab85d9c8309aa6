"""Mini README: Centralised configuration for the budget planner.

Structure:
    * BudgetPlannerSettings - pydantic settings model read from the environment.
    * get_settings - cached accessor so validation runs once per process.

Usage:
    Variables use the ``BUDGETPLANNER_`` prefix, e.g.
    ``BUDGETPLANNER_INTERFACE_PORT=8080`` or ``BUDGETPLANNER_SEED_DEMO_DATA=false``.
    A ``.env`` file in the working directory is honoured as well.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BudgetPlannerSettings(BaseSettings):
    """Runtime configuration for the budget planner."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGETPLANNER_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the JSON API to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the JSON API listens on.",
        ge=1,
        le=65535,
    )
    seed_demo_data: bool = Field(
        True,
        description="Load the illustrative organisation when the application starts.",
    )
    default_budget_year: int = Field(
        2024,
        description="Year assigned to team budgets when callers do not provide one.",
        ge=2000,
    )
    currency_symbol: str = Field(
        "$",
        description="Symbol used when formatting amounts in messages.",
    )

    @field_validator("environment")
    @classmethod
    def _normalise_environment(cls, value: str) -> str:
        """Store environment labels in lower case."""

        return value.strip().lower()


@lru_cache()
def get_settings() -> BudgetPlannerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return BudgetPlannerSettings()


def format_amount(amount: float) -> str:
    """Render an amount with the configured currency symbol and separators."""

    return f"{get_settings().currency_symbol}{amount:,.2f}"
