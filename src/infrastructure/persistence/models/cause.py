"""Cause database model."""

from decimal import Decimal

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class Cause(BaseMutableModel):
    """Fundraising cause.

    Fields:
        title: Short title
        description: Long description (nullable)
        amount: Target amount (nullable, Numeric(12, 2))
    """

    __tablename__ = "causes"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
