"""Mini README: Error taxonomy and result values shared by the planner.

Structure:
    * ErrorKind - enumerates the failure categories surfaced to callers.
    * ValidationResult - outcome of a pure constraint check.
    * OperationResult - outcome of a store mutation or planning operation.
    * BudgetPlannerError and subclasses - raised only on explicit request.

Validators and the store report failures as values so callers can show the
message inline and leave state untouched. ``raise_for_error`` converts a
failed result into an exception for code paths that prefer raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class ErrorKind(str, Enum):
    """Failure categories for rejected operations."""

    DUPLICATE_NAME = "duplicate_name"
    BUDGET_EXCEEDED = "budget_exceeded"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    CONFIRMATION_REQUIRED = "confirmation_required"


class BudgetPlannerError(Exception):
    """Base class for planner exceptions."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT


class DuplicateNameError(BudgetPlannerError):
    kind = ErrorKind.DUPLICATE_NAME


class BudgetExceededError(BudgetPlannerError):
    kind = ErrorKind.BUDGET_EXCEEDED


class NotFoundError(BudgetPlannerError):
    kind = ErrorKind.NOT_FOUND


class InvalidInputError(BudgetPlannerError):
    kind = ErrorKind.INVALID_INPUT


class ConfirmationRequiredError(BudgetPlannerError):
    kind = ErrorKind.CONFIRMATION_REQUIRED


_EXCEPTIONS = {
    ErrorKind.DUPLICATE_NAME: DuplicateNameError,
    ErrorKind.BUDGET_EXCEEDED: BudgetExceededError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.INVALID_INPUT: InvalidInputError,
    ErrorKind.CONFIRMATION_REQUIRED: ConfirmationRequiredError,
}


@dataclass(slots=True, frozen=True)
class ValidationResult:
    """Outcome of a validator check."""

    ok: bool
    message: str = ""
    kind: Optional[ErrorKind] = None
    details: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def accept(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def reject(
        cls,
        kind: ErrorKind,
        message: str,
        details: Optional[Dict[str, float]] = None,
    ) -> "ValidationResult":
        return cls(ok=False, message=message, kind=kind, details=dict(details or {}))


@dataclass(slots=True, frozen=True)
class OperationResult:
    """Outcome of a mutation; ``entity_id`` names the created or changed record."""

    success: bool
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None
    entity_id: Optional[str] = None
    details: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def succeeded(cls, entity_id: Optional[str] = None) -> "OperationResult":
        return cls(success=True, entity_id=entity_id)

    @classmethod
    def failed(
        cls,
        kind: ErrorKind,
        error: str,
        details: Optional[Dict[str, float]] = None,
    ) -> "OperationResult":
        return cls(success=False, error=error, kind=kind, details=dict(details or {}))

    @classmethod
    def from_validation(cls, result: ValidationResult) -> "OperationResult":
        """Carry a rejected validation over as a failed operation."""

        if result.ok:
            return cls.succeeded()
        return cls.failed(result.kind or ErrorKind.INVALID_INPUT, result.message, result.details)

    def raise_for_error(self) -> "OperationResult":
        """Raise the matching ``BudgetPlannerError`` when the operation failed."""

        if self.success:
            return self
        exception_cls = _EXCEPTIONS.get(self.kind or ErrorKind.INVALID_INPUT, BudgetPlannerError)
        raise exception_cls(self.error or "Operation failed")
