"""In-memory object store adapter (development and tests).

Keeps blobs in a dict for the life of the process. URLs look like
"{public_base_url}/{object_id}" so object_id_from_url round-trips.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from uuid_extensions import uuid7

from src.core.errors import UpstreamUnavailableError
from src.core.result import Result, Success
from src.domain.protocols.object_store_protocol import ObjectInfo, StoredObject


@dataclass
class _Blob:
    content: bytes
    content_type: str
    last_modified: datetime


class InMemoryObjectStore:
    """Implements ObjectStoreProtocol with a process-local dict."""

    def __init__(self, public_base_url: str = "http://objects.local") -> None:
        self._public_base_url = public_base_url.rstrip("/")
        self._blobs: dict[str, _Blob] = {}

    @property
    def object_ids(self) -> set[str]:
        return set(self._blobs)

    def get(self, object_id: str) -> bytes | None:
        blob = self._blobs.get(object_id)
        return blob.content if blob else None

    async def upload(
        self,
        folder: str,
        content: bytes,
        content_type: str,
        name: str,
    ) -> Result[StoredObject, UpstreamUnavailableError]:
        object_id = f"{folder}/{uuid7().hex}-{name}"
        self._blobs[object_id] = _Blob(
            content=content,
            content_type=content_type,
            last_modified=datetime.now(UTC),
        )
        return Success(
            value=StoredObject(
                object_id=object_id,
                public_url=f"{self._public_base_url}/{object_id}",
            )
        )

    async def delete(self, object_id: str) -> Result[None, UpstreamUnavailableError]:
        self._blobs.pop(object_id, None)
        return Success(value=None)

    def object_id_from_url(self, url: str) -> str | None:
        prefix = f"{self._public_base_url}/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix) :] or None

    async def list_objects(
        self, folder: str
    ) -> Result[list[ObjectInfo], UpstreamUnavailableError]:
        prefix = f"{folder}/"
        return Success(
            value=[
                ObjectInfo(
                    object_id=object_id,
                    public_url=f"{self._public_base_url}/{object_id}",
                    last_modified=blob.last_modified,
                )
                for object_id, blob in self._blobs.items()
                if object_id.startswith(prefix)
            ]
        )
