"""Contribution commands (record, update, delete)."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class RecordContribution:
    """Record a payment for a member.

    Attributes:
        member_id: Paying member.
        amount: Positive amount.
        contributed_on: Payment date.
        notify: Send contribution.created to the member.
    """

    member_id: UUID
    amount: Decimal
    contributed_on: date
    notify: bool = True


@dataclass(frozen=True, kw_only=True)
class UpdateContribution:
    """Partial update; None leaves a field unchanged."""

    contribution_id: UUID
    member_id: UUID | None = None
    amount: Decimal | None = None
    contributed_on: date | None = None
    notify: bool = True


@dataclass(frozen=True, kw_only=True)
class DeleteContribution:
    """Delete a contribution together with its images."""

    contribution_id: UUID
    notify: bool = True
