"""ObjectStoreProtocol - Domain protocol for remote blob storage.

The object store cannot take part in a database transaction; callers pair
every upload with a compensating delete (see application/saga.py).

Implementations:
    - S3ObjectStore: src/infrastructure/storage/s3_object_store.py (production)
    - InMemoryObjectStore: src/infrastructure/storage/in_memory_object_store.py (dev/test)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from src.core.errors import UpstreamUnavailableError
from src.core.result import Result


@dataclass(frozen=True)
class StoredObject:
    """Handle to an uploaded object.

    Attributes:
        object_id: Provider key used for deletion.
        public_url: URL recorded in the attachment row.
    """

    object_id: str
    public_url: str


@dataclass(frozen=True)
class ObjectInfo:
    """Listing entry used by the orphan sweeper."""

    object_id: str
    public_url: str
    last_modified: datetime


class ObjectStoreProtocol(Protocol):
    """Protocol for object store operations.

    All failures (including timeouts) are returned as
    Failure(UpstreamUnavailableError); adapters never raise SDK exceptions.
    """

    async def upload(
        self,
        folder: str,
        content: bytes,
        content_type: str,
        name: str,
    ) -> Result[StoredObject, UpstreamUnavailableError]:
        """Store bytes under folder with a collision-free key derived from name.

        Args:
            folder: Logical folder (contributions, causes).
            content: Object bytes.
            content_type: MIME type stored with the object.
            name: Human-readable object name including extension.

        Returns:
            Success(StoredObject) or Failure(UpstreamUnavailableError).
        """
        ...

    async def delete(self, object_id: str) -> Result[None, UpstreamUnavailableError]:
        """Delete an object. Deleting a missing object succeeds."""
        ...

    def object_id_from_url(self, url: str) -> str | None:
        """Recover the object id from a public URL produced by this store.

        Returns:
            Object id, or None if the URL does not belong to this store.
        """
        ...

    async def list_objects(
        self, folder: str
    ) -> Result[list[ObjectInfo], UpstreamUnavailableError]:
        """List every object under a folder."""
        ...
