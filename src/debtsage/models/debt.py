"""Debt and debt payment entities."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .payment import DebtPayment

DEBT_CATEGORIES: tuple[str, ...] = ("credit_card", "loan", "mortgage", "personal", "other")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Debt(SQLModel, table=True):
    """Installment debt repaid with a fixed monthly payment."""

    __tablename__: ClassVar[str] = "debt"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    category: str = Field(default="other", max_length=32)
    total_amount: float = Field(default=0.0, nullable=False)
    remaining_amount: float = Field(nullable=False)
    monthly_payment: float = Field(nullable=False, description="Includes the interest component")
    interest_rate: float = Field(default=0.0, nullable=False, description="Annual percentage")
    total_months: int = Field(default=0, nullable=False)
    remaining_months: int = Field(default=0, nullable=False)
    start_date: date = Field(default_factory=date.today, nullable=False)
    target_payoff_date: Optional[date] = Field(default=None)
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True, nullable=False, index=True)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    payments: list["DebtPayment"] = Relationship(
        back_populates="debt",
        sa_relationship=relationship(
            "DebtPayment", back_populates="debt", cascade="all, delete-orphan"
        ),
    )
