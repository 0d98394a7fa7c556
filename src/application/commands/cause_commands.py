"""Cause commands (create, update, delete)."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class CreateCause:
    """Create a fundraising cause and announce it to every member with email.

    Attributes:
        title: Non-blank title.
        description: Optional description.
        amount: Optional non-negative target amount.
        created_at: Backdated creation time (defaults to now).
    """

    title: str
    description: str | None = None
    amount: Decimal | None = None
    created_at: datetime | None = None
    notify: bool = True


@dataclass(frozen=True, kw_only=True)
class UpdateCause:
    """Partial update; None leaves a field unchanged."""

    cause_id: UUID
    title: str | None = None
    description: str | None = None
    amount: Decimal | None = None
    notify: bool = True


@dataclass(frozen=True, kw_only=True)
class DeleteCause:
    """Delete a cause together with its images."""

    cause_id: UUID
    notify: bool = True
