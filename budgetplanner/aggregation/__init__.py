"""Mini README: Roll-up aggregation for the budget hierarchy.

The ``engine`` module exposes ``BudgetAggregator`` which turns the raw
entities held by the store into allocated/spent/remaining figures.
"""

from .engine import BudgetAggregator, CategoryUsage

__all__ = ["BudgetAggregator", "CategoryUsage"]
