"""Attachment queries (read operations).

Queries are immutable and never change state.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums import AttachmentOwner


@dataclass(frozen=True, kw_only=True)
class ListImages:
    """List an owner's images, newest first.

    Attributes:
        owner: Owner kind (contribution or cause).
        owner_id: Owning entity id.
    """

    owner: AttachmentOwner
    owner_id: UUID
