"""Service layer exports."""

from .amortization import (
    DebtRecord,
    DebtSummary,
    PaymentRecord,
    ScheduleEntry,
    apply_payment,
    compute_schedule,
    summarize,
)
from .debt_service import DebtOverview, DebtService

__all__ = [
    "DebtOverview",
    "DebtRecord",
    "DebtService",
    "DebtSummary",
    "PaymentRecord",
    "ScheduleEntry",
    "apply_payment",
    "compute_schedule",
    "summarize",
]
