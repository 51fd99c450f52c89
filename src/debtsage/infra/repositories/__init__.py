"""Concrete repository implementations using SQLModel."""

from .debt import SQLModelDebtRepository
from .payment import SQLModelDebtPaymentRepository

__all__ = ["SQLModelDebtPaymentRepository", "SQLModelDebtRepository"]
