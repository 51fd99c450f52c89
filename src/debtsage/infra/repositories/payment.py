"""SQLModel implementation of DebtPayment repository."""

from __future__ import annotations

from typing import Callable

from sqlmodel import Session, select

from ...models.payment import DebtPayment


class SQLModelDebtPaymentRepository:
    """SQLModel-based payment history repository."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def create(self, payment: DebtPayment) -> DebtPayment:
        """Record a payment."""
        with self.session_factory() as session:
            session.add(payment)
            session.commit()
            session.refresh(payment)
            return payment

    def list_for_debt(self, debt_id: int) -> list[DebtPayment]:
        """List payments for one debt, oldest first."""
        with self.session_factory() as session:
            statement = (
                select(DebtPayment)
                .where(DebtPayment.debt_id == debt_id)
                .order_by(DebtPayment.payment_date, DebtPayment.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    def list_all(self) -> list[DebtPayment]:
        with self.session_factory() as session:
            statement = select(DebtPayment).order_by(
                DebtPayment.payment_date, DebtPayment.id  # type: ignore
            )
            return list(session.exec(statement).all())

    def delete_for_debt(self, debt_id: int) -> int:
        """Delete a debt's payments; return how many were removed."""
        with self.session_factory() as session:
            payments = session.exec(
                select(DebtPayment).where(DebtPayment.debt_id == debt_id)
            ).all()
            for payment in payments:
                session.delete(payment)
            session.commit()
            return len(payments)
