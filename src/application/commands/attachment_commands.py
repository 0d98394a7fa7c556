"""Attachment (image) commands for contributions and causes."""

from dataclasses import dataclass, field
from uuid import UUID

from src.domain.enums import AttachmentOwner
from src.domain.value_objects import FileUpload


@dataclass(frozen=True, kw_only=True)
class AttachImages:
    """Upload one or more images for an owner, all or nothing.

    Attributes:
        owner: Owner kind (contribution or cause).
        owner_id: Owning entity id.
        files: Uploaded files.
        notify: Send the owner's "updated" notification afterwards.
    """

    owner: AttachmentOwner
    owner_id: UUID
    files: tuple[FileUpload, ...] = field(default_factory=tuple)
    notify: bool = True


@dataclass(frozen=True, kw_only=True)
class ReplaceImage:
    owner: AttachmentOwner
    owner_id: UUID
    attachment_id: UUID
    file: FileUpload | None = None
    notify: bool = True


@dataclass(frozen=True, kw_only=True)
class RemoveImage:
    owner: AttachmentOwner
    owner_id: UUID
    attachment_id: UUID
    notify: bool = True
