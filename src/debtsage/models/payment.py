"""Recorded payments against a debt."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .debt import Debt


class DebtPayment(SQLModel, table=True):
    """One monthly payment, split into principal and interest for history display."""

    __tablename__: ClassVar[str] = "debt_payment"

    id: Optional[int] = Field(default=None, primary_key=True)
    debt_id: int = Field(foreign_key="debt.id", nullable=False, index=True)
    amount: float = Field(nullable=False)
    payment_date: datetime = Field(nullable=False, index=True)
    principal_amount: float = Field(default=0.0, nullable=False)
    interest_amount: float = Field(default=0.0, nullable=False)
    remaining_balance: float = Field(default=0.0, nullable=False)

    debt: "Debt" = Relationship(
        back_populates="payments",
        sa_relationship=relationship("Debt", back_populates="payments"),
    )
