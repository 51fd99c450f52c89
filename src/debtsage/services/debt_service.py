"""Debt tracking service: persistence glue around the amortization engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Any, Optional

from ..domain.repositories import DebtPaymentRepository, DebtRepository
from ..errors import DebtNotFoundError, ValidationError
from ..logging_config import get_logger
from ..models.debt import DEBT_CATEGORIES, Debt
from ..models.payment import DebtPayment
from . import amortization
from .amortization import DebtRecord, DebtSummary, PaymentRecord, ScheduleEntry

logger = get_logger("services.debts")

_EDITABLE_FIELDS = {
    "name",
    "category",
    "total_amount",
    "remaining_amount",
    "monthly_payment",
    "interest_rate",
    "total_months",
    "remaining_months",
    "start_date",
    "target_payoff_date",
    "description",
    "is_active",
}


@dataclass(slots=True)
class DebtOverview:
    """Dashboard view of the active portfolio."""

    summary: DebtSummary
    next_month_payments: list[PaymentRecord] = field(default_factory=list)
    this_month_payments: list[PaymentRecord] = field(default_factory=list)


def to_record(debt: Debt) -> DebtRecord:
    """Snapshot a persisted debt as an immutable engine record."""

    return DebtRecord(
        id=debt.id,
        remaining_amount=float(debt.remaining_amount),
        monthly_payment=float(debt.monthly_payment),
        interest_rate=float(debt.interest_rate),
        remaining_months=int(debt.remaining_months),
        name=debt.name,
        category=debt.category,
        total_amount=float(debt.total_amount),
        total_months=int(debt.total_months),
        start_date=debt.start_date,
        target_payoff_date=debt.target_payoff_date,
        description=debt.description,
        is_active=debt.is_active,
        created_at=debt.created_at,
        updated_at=debt.updated_at,
    )


def _validate_category(category: str) -> None:
    if category not in DEBT_CATEGORIES:
        raise ValidationError("category", f"must be one of {', '.join(DEBT_CATEGORIES)}")


class DebtService:
    """CRUD, payments and portfolio summaries for tracked debts."""

    def __init__(self, debts: DebtRepository, payments: DebtPaymentRepository):
        self.debts = debts
        self.payments = payments

    def add_debt(
        self,
        *,
        name: str,
        monthly_payment: float,
        interest_rate: float,
        remaining_months: int,
        remaining_amount: float | None = None,
        total_amount: float | None = None,
        total_months: int | None = None,
        category: str = "other",
        start_date: date | None = None,
        target_payoff_date: date | None = None,
        description: str | None = None,
    ) -> Debt:
        """Create and persist a debt.

        Without an explicit ``remaining_amount`` the balance is estimated as
        ``monthly_payment * remaining_months``.
        """

        if not name or not name.strip():
            raise ValidationError("name", "must not be empty")
        _validate_category(category)
        if remaining_amount is None:
            remaining_amount = amortization.estimate_remaining_amount(
                monthly_payment, remaining_months
            )

        record = DebtRecord(
            id=None,
            remaining_amount=remaining_amount,
            monthly_payment=monthly_payment,
            interest_rate=interest_rate,
            remaining_months=remaining_months,
            total_amount=remaining_amount if total_amount is None else total_amount,
            total_months=remaining_months if total_months is None else total_months,
        )
        amortization.validate_debt(record)

        debt = Debt(
            name=name.strip(),
            category=category,
            total_amount=record.total_amount,
            remaining_amount=record.remaining_amount,
            monthly_payment=record.monthly_payment,
            interest_rate=record.interest_rate,
            total_months=record.total_months,
            remaining_months=record.remaining_months,
            start_date=start_date or date.today(),
            target_payoff_date=target_payoff_date,
            description=description,
            is_active=record.remaining_months > 0 and record.remaining_amount > 0,
        )
        created = self.debts.create(debt)
        logger.info(
            "Debt created",
            extra={
                "debt_id": created.id,
                "remaining_amount": created.remaining_amount,
                "remaining_months": created.remaining_months,
            },
        )
        if not amortization.is_amortizing(to_record(created)):
            self._warn_non_amortizing(created)
        return created

    def get_debt(self, debt_id: int) -> Debt:
        """Return the debt or raise DebtNotFoundError."""

        debt = self.debts.get_by_id(debt_id)
        if debt is None:
            raise DebtNotFoundError(debt_id)
        return debt

    def list_debts(self, *, active_only: bool = False) -> list[Debt]:
        return self.debts.list_active() if active_only else self.debts.list_all()

    def update_debt(self, debt_id: int, **changes: Any) -> Debt:
        """Apply field changes after validating the resulting record."""

        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(sorted(unknown)[0], "is not an editable field")
        if "category" in changes:
            _validate_category(changes["category"])

        debt = self.get_debt(debt_id)
        record = replace(
            to_record(debt),
            **{k: v for k, v in changes.items() if k in DebtRecord.__dataclass_fields__},
        )
        amortization.validate_debt(record)

        for key, value in changes.items():
            setattr(debt, key, value)
        if "is_active" not in changes and {"remaining_amount", "remaining_months"} & set(changes):
            debt.is_active = record.remaining_months > 0 and record.remaining_amount > 0
        debt.updated_at = datetime.now(timezone.utc)
        updated = self.debts.update(debt)
        logger.info("Debt updated", extra={"debt_id": debt_id, "fields": sorted(changes)})
        return updated

    def delete_debt(self, debt_id: int) -> None:
        """Remove a debt together with its payment history."""

        self.get_debt(debt_id)
        removed = self.payments.delete_for_debt(debt_id)
        self.debts.delete(debt_id)
        logger.info("Debt deleted", extra={"debt_id": debt_id, "payments_removed": removed})

    def payoff_schedule(self, debt_id: int) -> list[ScheduleEntry]:
        """Project the payoff schedule of a stored debt from its current state."""

        debt = self.get_debt(debt_id)
        record = to_record(debt)
        if not amortization.is_amortizing(record):
            self._warn_non_amortizing(debt)
        return amortization.compute_schedule(record)

    def make_payment(
        self, debt_id: int, *, payment_date: datetime | None = None
    ) -> Optional[DebtPayment]:
        """Record one monthly payment and advance the debt by a period.

        Returns ``None`` without changes when the debt is already paid off or
        no months remain.
        """

        debt = self.get_debt(debt_id)
        if debt.remaining_months <= 0 or debt.remaining_amount <= 0:
            logger.info(
                "Payment skipped; debt is settled",
                extra={"debt_id": debt_id, "remaining_months": debt.remaining_months},
            )
            return None

        updated, payment = amortization.apply_payment(to_record(debt), payment_date=payment_date)
        debt.remaining_amount = updated.remaining_amount
        debt.remaining_months = updated.remaining_months
        debt.is_active = updated.is_active
        debt.updated_at = updated.updated_at or datetime.now(timezone.utc)
        # Debt state and history row commit together.
        row = self.debts.record_payment(
            debt,
            DebtPayment(
                debt_id=debt_id,
                amount=payment.amount,
                payment_date=payment.payment_date,
                principal_amount=payment.principal_amount,
                interest_amount=payment.interest_amount,
                remaining_balance=payment.remaining_balance,
            ),
        )
        logger.info(
            "Payment recorded",
            extra={
                "debt_id": debt_id,
                "principal": payment.principal_amount,
                "interest": payment.interest_amount,
                "remaining_balance": payment.remaining_balance,
                "remaining_months": updated.remaining_months,
            },
        )
        return row

    def payment_history(self, debt_id: int) -> list[DebtPayment]:
        self.get_debt(debt_id)
        return self.payments.list_for_debt(debt_id)

    def get_summary(self) -> DebtSummary:
        """Summarize the debts that are still being repaid."""

        return amortization.summarize(to_record(d) for d in self.debts.list_active())

    def get_overview(self, *, as_of: date | None = None) -> DebtOverview:
        """Summary plus next month's projected payments for the active debts."""

        today = as_of or date.today()
        records = [to_record(d) for d in self.debts.list_active()]
        upcoming = amortization.upcoming_payments(records, as_of=today)
        this_month = datetime(today.year, today.month, 1, tzinfo=timezone.utc)
        return DebtOverview(
            summary=amortization.summarize(records),
            next_month_payments=upcoming,
            this_month_payments=[replace(p, payment_date=this_month) for p in upcoming],
        )

    def _warn_non_amortizing(self, debt: Debt) -> None:
        logger.warning(
            "Monthly payment does not cover interest; balance will not decrease",
            extra={
                "debt_id": debt.id,
                "monthly_payment": debt.monthly_payment,
                "interest_rate": debt.interest_rate,
                "remaining_amount": debt.remaining_amount,
            },
        )


__all__ = ["DebtOverview", "DebtService", "to_record"]
