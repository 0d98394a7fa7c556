"""Image command handlers for contributions and causes.

Each handler delegates the storage/database workflow to AttachmentService
and, on success, sends the owner's "updated" notification.
"""

from src.application.commands.attachment_commands import (
    AttachImages,
    RemoveImage,
    ReplaceImage,
)
from src.application.services.attachment_service import AttachmentService
from src.application.services.change_notifier import ChangeNotifier
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result
from src.domain.entities import Attachment


class AttachImagesHandler:
    """Handler for AttachImages.

    Uploads a batch all-or-nothing, then notifies about the owner change.
    """

    def __init__(self, attachment_service: AttachmentService, notifier: ChangeNotifier) -> None:
        self._attachment_service = attachment_service
        self._notifier = notifier

    async def handle(self, cmd: AttachImages) -> Result[list[Attachment], DomainError]:
        result = await self._attachment_service.attach(cmd.owner, cmd.owner_id, cmd.files)
        if not isinstance(result, Failure) and cmd.notify:
            await self._notifier.owner_changed(cmd.owner, cmd.owner_id)
        return result


class ReplaceImageHandler:
    """Handler for ReplaceImage (a missing file is a validation failure)."""

    def __init__(self, attachment_service: AttachmentService, notifier: ChangeNotifier) -> None:
        self._attachment_service = attachment_service
        self._notifier = notifier

    async def handle(self, cmd: ReplaceImage) -> Result[Attachment, DomainError]:
        if cmd.file is None:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="An image file is required",
                    field="file",
                )
            )

        result = await self._attachment_service.replace(
            cmd.owner, cmd.owner_id, cmd.attachment_id, cmd.file
        )
        if not isinstance(result, Failure) and cmd.notify:
            await self._notifier.owner_changed(cmd.owner, cmd.owner_id)
        return result


class RemoveImageHandler:
    """Handler for RemoveImage."""

    def __init__(self, attachment_service: AttachmentService, notifier: ChangeNotifier) -> None:
        self._attachment_service = attachment_service
        self._notifier = notifier

    async def handle(self, cmd: RemoveImage) -> Result[None, DomainError]:
        result = await self._attachment_service.remove(cmd.owner, cmd.owner_id, cmd.attachment_id)
        if not isinstance(result, Failure) and cmd.notify:
            await self._notifier.owner_changed(cmd.owner, cmd.owner_id)
        return result
