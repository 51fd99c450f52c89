"""Debt repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.debt import Debt
from ...models.payment import DebtPayment


class DebtRepository(Protocol):
    """Repository for managing debt entities."""

    def get_by_id(self, debt_id: int) -> Optional[Debt]:
        """Retrieve a debt by ID."""
        ...

    def list_all(self) -> list[Debt]:
        """List all debts."""
        ...

    def list_active(self) -> list[Debt]:
        """List debts still being repaid."""
        ...

    def create(self, debt: Debt) -> Debt:
        """Create a new debt."""
        ...

    def update(self, debt: Debt) -> Debt:
        """Update an existing debt."""
        ...

    def delete(self, debt_id: int) -> None:
        """Delete a debt and its payment history."""
        ...

    def record_payment(self, debt: Debt, payment: DebtPayment) -> DebtPayment:
        """Persist the advanced debt and its payment row together."""
        ...
