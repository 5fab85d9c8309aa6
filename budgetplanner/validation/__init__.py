"""Mini README: Constraint checks guarding every budget mutation."""

from .validator import BudgetValidator

__all__ = ["BudgetValidator"]
