"""List Images query handler."""

from src.application.queries.attachment_queries import ListImages
from src.application.services.attachment_service import AttachmentService
from src.core.errors import DomainError
from src.core.result import Result
from src.domain.entities import Attachment


class ListImagesHandler:
    """Returns Success(attachments) newest first, or Failure(NotFoundError) for an unknown owner."""

    def __init__(self, attachment_service: AttachmentService) -> None:
        self._attachment_service = attachment_service

    async def handle(self, query: ListImages) -> Result[list[Attachment], DomainError]:
        return await self._attachment_service.list_attachments(query.owner, query.owner_id)
