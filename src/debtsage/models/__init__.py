"""SQLModel table exports."""

from .debt import DEBT_CATEGORIES, Debt
from .payment import DebtPayment

__all__ = ["DEBT_CATEGORIES", "Debt", "DebtPayment"]
