"""Repository protocol definitions for domain layer."""

from .debt import DebtRepository
from .payment import DebtPaymentRepository

__all__ = ["DebtPaymentRepository", "DebtRepository"]
