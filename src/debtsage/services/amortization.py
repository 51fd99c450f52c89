"""Debt amortization engine.

Pure functions over immutable records: build a month-by-month payoff schedule
for a fixed-payment debt, step a debt forward by one paid period, and
aggregate a portfolio of debts. Nothing in this module touches the database or
logs; the service layer owns persistence.

Interest compounds monthly on a fixed nominal annual rate
(``interest_rate / 100 / 12``). The monthly payment already includes the
interest component, so the principal reduction for a period is whatever is
left after interest, capped at the outstanding balance.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Hashable, Iterable, Optional

from ..errors import ValidationError


@dataclass(slots=True, frozen=True)
class DebtRecord:
    """Engine input: the amortization terms of one debt plus passthrough metadata."""

    id: Optional[Hashable]
    remaining_amount: float
    monthly_payment: float
    interest_rate: float  # annual percentage, e.g. 18.0 for 18%
    remaining_months: int
    name: str = ""
    category: str = "other"
    total_amount: float = 0.0
    total_months: int = 0
    start_date: Optional[date] = None
    target_payoff_date: Optional[date] = None
    description: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class ScheduleEntry:
    """A single projected period of a payoff schedule."""

    month: int
    payment: float
    monthly_interest: float
    principal: float
    balance: float


@dataclass(slots=True, frozen=True)
class PaymentRecord:
    """Audit row describing how one payment split into principal and interest."""

    debt_id: Optional[Hashable]
    amount: float
    payment_date: datetime
    principal_amount: float
    interest_amount: float
    remaining_balance: float


@dataclass(slots=True, frozen=True)
class DebtSummary:
    """Portfolio-level aggregates across a collection of debts."""

    total_debt: float = 0.0
    total_monthly_payments: float = 0.0
    total_interest_per_month: float = 0.0
    average_payoff_months: float = 0.0


def monthly_rate(interest_rate: float) -> float:
    """Convert an annual percentage rate into a monthly decimal rate."""

    return interest_rate / 100 / 12


def _period_split(*, balance: float, payment: float, rate: float) -> tuple[float, float]:
    """Return (monthly_interest, principal) for one period starting at *balance*."""

    monthly_interest = balance * rate
    principal = min(payment - monthly_interest, balance)
    return monthly_interest, principal


def compute_schedule(debt: DebtRecord) -> list[ScheduleEntry]:
    """Project the payoff schedule for *debt* from its current state.

    The schedule stops after ``remaining_months`` periods or as soon as the
    balance reaches zero, whichever comes first, so an overfunded payment
    shortens the schedule without the caller recomputing the term. Degenerate
    inputs never raise: a zero-term or zero-balance debt yields ``[]``.

    When the payment does not cover a period's interest the principal is zero
    or negative and the balance does not shrink; see :func:`is_amortizing`.
    """

    balance = debt.remaining_amount
    rate = monthly_rate(debt.interest_rate)
    schedule: list[ScheduleEntry] = []

    for month in range(1, debt.remaining_months + 1):
        if balance <= 0:
            break
        monthly_interest, principal = _period_split(
            balance=balance, payment=debt.monthly_payment, rate=rate
        )
        balance -= principal
        schedule.append(
            ScheduleEntry(
                month=month,
                payment=debt.monthly_payment,
                monthly_interest=monthly_interest,
                principal=principal,
                balance=max(0.0, balance),
            )
        )

    return schedule


def apply_payment(
    debt: DebtRecord, *, payment_date: datetime | None = None
) -> tuple[DebtRecord, PaymentRecord]:
    """Advance *debt* by one paid period.

    Returns the updated record and the payment row describing the split. The
    input record is left untouched; persisting either value is up to the caller.
    """

    paid_at = payment_date or datetime.now(timezone.utc)
    if paid_at.tzinfo is None:
        paid_at = paid_at.replace(tzinfo=timezone.utc)
    monthly_interest, principal = _period_split(
        balance=debt.remaining_amount,
        payment=debt.monthly_payment,
        rate=monthly_rate(debt.interest_rate),
    )
    new_amount = max(0.0, debt.remaining_amount - principal)
    new_months = max(0, debt.remaining_months - 1)

    updated = replace(
        debt,
        remaining_amount=new_amount,
        remaining_months=new_months,
        is_active=new_months > 0 and new_amount > 0,
        updated_at=paid_at,
    )
    payment = PaymentRecord(
        debt_id=debt.id,
        amount=debt.monthly_payment,
        payment_date=paid_at,
        principal_amount=principal,
        interest_amount=monthly_interest,
        remaining_balance=new_amount,
    )
    return updated, payment


def summarize(debts: Iterable[DebtRecord]) -> DebtSummary:
    """Aggregate balances, payments and next-period interest across *debts*.

    ``total_interest_per_month`` is the interest that would accrue on the
    current balances, not the first-period interest of a computed schedule.
    """

    items = list(debts)
    if not items:
        return DebtSummary()

    return DebtSummary(
        total_debt=sum(d.remaining_amount for d in items),
        total_monthly_payments=sum(d.monthly_payment for d in items),
        total_interest_per_month=sum(
            d.remaining_amount * monthly_rate(d.interest_rate) for d in items
        ),
        average_payoff_months=sum(d.remaining_months for d in items) / len(items),
    )


def is_amortizing(debt: DebtRecord) -> bool:
    """Return False when the payment cannot reduce the balance.

    A debt with nothing left to schedule counts as amortizing.
    """

    if debt.remaining_amount <= 0 or debt.remaining_months <= 0:
        return True
    _, principal = _period_split(
        balance=debt.remaining_amount,
        payment=debt.monthly_payment,
        rate=monthly_rate(debt.interest_rate),
    )
    return principal > 0


def schedule_totals(schedule: Iterable[ScheduleEntry]) -> tuple[float, float, int]:
    """Return (total_interest, total_principal, periods) for a schedule."""

    total_interest = 0.0
    total_principal = 0.0
    periods = 0
    for entry in schedule:
        total_interest += entry.monthly_interest
        total_principal += entry.principal
        periods += 1
    return total_interest, total_principal, periods


def _first_of_next_month(value: date) -> date:
    month = value.month + 1
    year = value.year + (month - 1) // 12
    month = ((month - 1) % 12) + 1
    return date(year, month, 1)


def upcoming_payments(debts: Iterable[DebtRecord], *, as_of: date) -> list[PaymentRecord]:
    """Project the next payment of every active debt, due the month after *as_of*.

    The principal shown is floored at zero; the projected balance is not, so an
    underfunded debt shows its balance growing.
    """

    due = _first_of_next_month(as_of)
    due_at = datetime(due.year, due.month, due.day, tzinfo=timezone.utc)
    projections: list[PaymentRecord] = []
    for debt in debts:
        if not debt.is_active:
            continue
        interest = debt.remaining_amount * monthly_rate(debt.interest_rate)
        principal = debt.monthly_payment - interest
        projections.append(
            PaymentRecord(
                debt_id=debt.id,
                amount=debt.monthly_payment,
                payment_date=due_at,
                principal_amount=max(0.0, principal),
                interest_amount=interest,
                remaining_balance=debt.remaining_amount - principal,
            )
        )
    return projections


def estimate_remaining_amount(monthly_payment: float, remaining_months: int) -> float:
    """Default outstanding balance for a debt entered without one."""

    return monthly_payment * remaining_months


def validate_debt(debt: DebtRecord) -> None:
    """Strict input check for user-entered debts.

    The engine functions accept anything numeric; this is applied by callers
    at the point where records are created or edited.
    """

    if debt.remaining_amount < 0:
        raise ValidationError("remaining_amount", "must not be negative")
    if not 0 <= debt.interest_rate <= 100:
        raise ValidationError("interest_rate", "must be between 0 and 100")
    if debt.monthly_payment <= 0:
        raise ValidationError("monthly_payment", "must be positive")
    if debt.remaining_months < 0:
        raise ValidationError("remaining_months", "must not be negative")
    if debt.total_months and debt.remaining_months > debt.total_months:
        raise ValidationError("remaining_months", "cannot exceed total_months")


__all__ = [
    "DebtRecord",
    "DebtSummary",
    "PaymentRecord",
    "ScheduleEntry",
    "apply_payment",
    "compute_schedule",
    "estimate_remaining_amount",
    "is_amortizing",
    "monthly_rate",
    "schedule_totals",
    "summarize",
    "upcoming_payments",
    "validate_debt",
]
