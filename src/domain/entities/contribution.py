"""Contribution domain entity (money a member paid in)."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal
from uuid import UUID


@dataclass
class Contribution:
    """A member's recorded payment.

    Attributes:
        id: Unique contribution identifier.
        member_id: Member who paid.
        amount: Amount paid (two decimal places).
        contributed_on: Date of payment.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: UUID
    member_id: UUID
    amount: Decimal
    contributed_on: date
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
