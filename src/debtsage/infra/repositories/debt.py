"""SQLModel implementation of Debt repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.debt import Debt
from ...models.payment import DebtPayment


class SQLModelDebtRepository:
    """SQLModel-based debt repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, debt_id: int) -> Optional[Debt]:
        """Retrieve a debt by ID."""
        with self.session_factory() as session:
            return session.get(Debt, debt_id)

    def list_all(self) -> list[Debt]:
        """List all debts."""
        with self.session_factory() as session:
            statement = select(Debt).order_by(Debt.name)  # type: ignore
            return list(session.exec(statement).all())

    def list_active(self) -> list[Debt]:
        """List debts still being repaid."""
        with self.session_factory() as session:
            statement = (
                select(Debt)
                .where(Debt.is_active == True)  # noqa: E712
                .order_by(Debt.name)  # type: ignore
            )
            return list(session.exec(statement).all())

    def create(self, debt: Debt) -> Debt:
        """Create a new debt."""
        with self.session_factory() as session:
            session.add(debt)
            session.commit()
            session.refresh(debt)
            return debt

    def update(self, debt: Debt) -> Debt:
        """Update an existing debt."""
        with self.session_factory() as session:
            merged = session.merge(debt)
            session.commit()
            session.refresh(merged)
            return merged

    def delete(self, debt_id: int) -> None:
        """Delete a debt and its payment history."""
        with self.session_factory() as session:
            debt = session.get(Debt, debt_id)
            if debt:
                for payment in session.exec(
                    select(DebtPayment).where(DebtPayment.debt_id == debt_id)
                ).all():
                    session.delete(payment)
                session.delete(debt)
                session.commit()

    def record_payment(self, debt: Debt, payment: DebtPayment) -> DebtPayment:
        """Persist the advanced debt and its payment row in one transaction."""
        with self.session_factory() as session:
            session.merge(debt)
            session.add(payment)
            session.commit()
            session.refresh(payment)
            return payment
