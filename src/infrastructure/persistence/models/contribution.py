"""Contribution database model."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class Contribution(BaseMutableModel):
    """Member payment record.

    Fields:
        member_id: Paying member (cascade delete)
        amount: Numeric(12, 2)
        contributed_on: Payment date
    """

    __tablename__ = "contributions"

    member_id: Mapped[UUID] = mapped_column(
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    contributed_on: Mapped[date] = mapped_column(Date, nullable=False)
