"""Attachment index models (one table per owner kind).

Rows reference remote objects by public URL. The FK cascade is a backstop;
AttachmentService deletes rows explicitly so it can clean up the objects.
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class ContributionImage(BaseModel):
    """Proof image attached to a contribution."""

    __tablename__ = "contribution_images"

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("contributions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)


class CauseImage(BaseModel):
    """Image attached to a cause."""

    __tablename__ = "cause_images"

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("causes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
