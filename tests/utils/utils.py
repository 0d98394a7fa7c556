"""Utility functions for testing.

Provides helpers for random test data and for seeding an InMemoryDatabase.
"""

import random
import string
from datetime import UTC, date, datetime
from decimal import Decimal

from uuid_extensions import uuid7

from src.domain.entities import Attachment, Cause, Contribution, Member
from src.domain.enums import AttachmentOwner
from src.domain.value_objects import FileUpload
from tests.utils.fakes import InMemoryDatabase

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def random_lower_string(length: int = 32) -> str:
    """Generate a random lowercase string.

    Args:
        length: Length of the string to generate

    Returns:
        Random lowercase string
    """
    return "".join(random.choices(string.ascii_lowercase, k=length))


def random_email() -> str:
    """Generate a random email address for testing.

    Returns:
        Random email in format: random@example.com
    """
    return f"{random_lower_string(10)}@example.com"


def make_upload(filename: str = "photo.png", content_type: str = "image/png") -> FileUpload:
    return FileUpload(filename=filename, content_type=content_type, content=PNG_BYTES)


def add_member(
    db: InMemoryDatabase,
    *,
    name: str = "Jane Doe",
    email: str | None = "jane@example.com",
    password_hash: str | None = None,
    email_verified: bool = False,
) -> Member:
    """Insert a committed member and return it."""
    member = Member(
        id=uuid7(),
        name=name,
        email=email,
        password_hash=password_hash,
        email_verified=email_verified,
    )
    db.members[member.id] = member
    return member


def add_contribution(
    db: InMemoryDatabase,
    member: Member,
    *,
    amount: str = "150.00",
    contributed_on: date = date(2024, 3, 1),
) -> Contribution:
    contribution = Contribution(
        id=uuid7(),
        member_id=member.id,
        amount=Decimal(amount),
        contributed_on=contributed_on,
    )
    db.contributions[contribution.id] = contribution
    return contribution


def add_cause(
    db: InMemoryDatabase,
    *,
    title: str = "Roof Repair",
    description: str | None = None,
    amount: str | None = "5000.00",
    created_at: datetime = datetime(2024, 3, 1, 9, 30, tzinfo=UTC),
) -> Cause:
    cause = Cause(
        id=uuid7(),
        title=title,
        description=description,
        amount=Decimal(amount) if amount is not None else None,
        created_at=created_at,
    )
    db.causes[cause.id] = cause
    return cause


def add_attachment(
    db: InMemoryDatabase,
    owner: AttachmentOwner,
    owner_id,
    url: str,
    *,
    created_at: datetime | None = None,
) -> Attachment:
    attachment = Attachment(
        id=uuid7(),
        owner=owner,
        owner_id=owner_id,
        url=url,
        created_at=created_at or datetime.now(UTC),
    )
    db.attachments[owner][attachment.id] = attachment
    return attachment
