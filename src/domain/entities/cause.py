"""Cause domain entity (a fundraising target)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID


@dataclass
class Cause:
    """Fundraising cause.

    Attributes:
        id: Unique cause identifier.
        title: Short title (used in image object names).
        description: Optional long description.
        amount: Target amount, None when open-ended.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: UUID
    title: str
    description: str | None = None
    amount: Decimal | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
