"""Exceptions raised by the DebtSage data and service layers."""

from __future__ import annotations


class DebtSageError(Exception):
    """Base class for domain errors surfaced to callers."""


class ValidationError(DebtSageError):
    """A debt record failed strict input validation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class DebtNotFoundError(DebtSageError):
    """No debt exists with the requested id."""

    def __init__(self, debt_id: int) -> None:
        super().__init__(f"Debt {debt_id} not found")
        self.debt_id = debt_id
