"""AttachmentRepository protocol (port) for domain layer.

One repository instance is bound to one owner kind (contribution_images or
cause_images); the owner kind is therefore not a method argument.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities import Attachment


class AttachmentRepository(Protocol):
    """Protocol for attachment index persistence operations.

    Implementations:
        - SQLAlchemyAttachmentRepository: src/infrastructure/persistence/repositories/
    """

    async def get(self, attachment_id: UUID, owner_id: UUID) -> Attachment | None:
        """Load an attachment that belongs to the given owner."""
        ...

    async def list_for_owner(self, owner_id: UUID) -> list[Attachment]:
        """Return the owner's attachments, newest first."""
        ...

    async def add(self, attachment: Attachment) -> None: ...

    async def update_url(self, attachment_id: UUID, url: str) -> bool:
        """Point an attachment row at a new object.

        Returns:
            True if the row existed and was updated.
        """
        ...

    async def delete(self, attachment_id: UUID) -> bool: ...

    async def delete_for_owner(self, owner_id: UUID) -> int:
        """Delete every attachment row of an owner.

        Returns:
            Number of rows deleted.
        """
        ...

    async def all_urls(self) -> set[str]:
        """Return the URL of every live attachment row for this owner kind."""
        ...
