"""Attachment domain entity.

Relational index entry for an image held in the object store. The row
references the remote object by its public URL; it does not own the blob.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.domain.enums import AttachmentOwner


@dataclass
class Attachment:
    """Image attached to a contribution or a cause.

    Attributes:
        id: Unique attachment identifier.
        owner: Owner kind (selects table and folder).
        owner_id: Owning contribution or cause.
        url: Public URL of the stored object.
        created_at: Creation timestamp.
    """

    id: UUID
    owner: AttachmentOwner
    owner_id: UUID
    url: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
