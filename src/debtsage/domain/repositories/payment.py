"""Debt payment repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.payment import DebtPayment


class DebtPaymentRepository(Protocol):
    """Repository for recorded debt payments."""

    def create(self, payment: DebtPayment) -> DebtPayment:
        """Record a payment."""
        ...

    def list_for_debt(self, debt_id: int) -> list[DebtPayment]:
        """List payments for one debt, oldest first."""
        ...

    def list_all(self) -> list[DebtPayment]:
        """List every recorded payment, oldest first."""
        ...

    def delete_for_debt(self, debt_id: int) -> int:
        """Delete a debt's payments; return how many were removed."""
        ...
