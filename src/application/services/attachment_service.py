"""Attachment service: image lifecycle across object store and database.

The object store and the attachment tables cannot be updated atomically,
so every workflow orders its steps to keep row URLs pointing at objects
that exist:

    attach:  upload object → insert row (commit once for the batch)
    replace: upload object → update row → delete old object
    remove:  delete row → delete object
    cascade: delete rows and owner → delete objects

Uploads are saga steps; any failure before commit deletes every object
uploaded by the same call. Deletes that run after a commit are best-effort:
a failure leaves an orphaned object (reclaimed by OrphanSweeper), never a
row pointing at a missing object.
"""

import asyncio
from collections.abc import Sequence
from datetime import UTC, datetime
from functools import partial
from uuid import UUID

from uuid_extensions import uuid7

from src.application.saga import Saga, SagaStep
from src.application.services.attachment_naming import (
    build_object_name,
    cause_base_name,
    contribution_base_name,
)
from src.core.enums import ErrorCode
from src.core.errors import DomainError, InternalError, NotFoundError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities import Attachment
from src.domain.enums import AttachmentOwner
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.object_store_protocol import (
    ObjectStoreProtocol,
    StoredObject,
)
from src.domain.protocols.unit_of_work import UnitOfWork, UnitOfWorkFactory
from src.domain.value_objects import FileUpload

_OWNER_NOT_FOUND_CODES: dict[AttachmentOwner, ErrorCode] = {
    AttachmentOwner.CONTRIBUTION: ErrorCode.CONTRIBUTION_NOT_FOUND,
    AttachmentOwner.CAUSE: ErrorCode.CAUSE_NOT_FOUND,
}


class AttachmentService:
    """Upload, replace and delete images attached to contributions and causes."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        object_store: ObjectStoreProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._uow_factory = uow_factory
        self._store = object_store
        self._logger = logger

    async def attach(
        self,
        owner: AttachmentOwner,
        owner_id: UUID,
        files: Sequence[FileUpload],
    ) -> Result[list[Attachment], DomainError]:
        """Upload files and index them, all or nothing.

        Returns:
            Success(attachments) in upload order.
            Failure(ValidationError) if files is empty.
            Failure(NotFoundError) if the owner (or contribution's member) is missing.
            Failure(UpstreamUnavailableError) if any upload fails.
            Failure(InternalError) if indexing fails.
        """
        if not files:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.NO_FILES_UPLOADED,
                    message="No images uploaded",
                    field="files",
                )
            )

        log = self._logger.bind(owner=owner.value, owner_id=str(owner_id))
        saga = Saga(logger=log, name="attach_images")
        created: list[Attachment] = []

        try:
            async with self._uow_factory() as uow:
                base = await self._base_name(uow, owner, owner_id)
                if isinstance(base, Failure):
                    return base

                repo = uow.attachments(owner)
                now = datetime.now(UTC)
                for index, upload in enumerate(files):
                    name = build_object_name(base.value, upload, index, len(files))
                    stored = await saga.execute(
                        SagaStep(
                            name=f"upload:{name}",
                            action=partial(
                                self._store.upload,
                                owner.folder,
                                upload.content,
                                upload.content_type,
                                name,
                            ),
                            compensation=self._delete_stored,
                        )
                    )
                    if isinstance(stored, Failure):
                        # Saga already unwound; leaving the block rolls back rows
                        return stored

                    attachment = Attachment(
                        id=uuid7(),
                        owner=owner,
                        owner_id=owner_id,
                        url=stored.value.public_url,
                        created_at=now,
                    )
                    await repo.add(attachment)
                    created.append(attachment)

                await uow.commit()
        except Exception as e:
            log.error("attachment_attach_failed", error=e, uploaded=saga.pending_compensations)
            await saga.unwind()
            return Failure(error=_internal("Attaching images failed"))

        saga.complete()
        log.info("attachments_added", count=len(created))
        return Success(value=created)

    async def replace(
        self,
        owner: AttachmentOwner,
        owner_id: UUID,
        attachment_id: UUID,
        upload: FileUpload,
    ) -> Result[Attachment, DomainError]:
        """Swap the object behind one attachment row.

        If the row update fails the new object is deleted and the old row and
        object are untouched. The old object is deleted only after commit.
        """
        log = self._logger.bind(
            owner=owner.value, owner_id=str(owner_id), attachment_id=str(attachment_id)
        )
        saga = Saga(logger=log, name="replace_image")

        try:
            async with self._uow_factory() as uow:
                base = await self._base_name(uow, owner, owner_id)
                if isinstance(base, Failure):
                    return base

                repo = uow.attachments(owner)
                existing = await repo.get(attachment_id, owner_id)
                if existing is None:
                    return Failure(error=_attachment_not_found(attachment_id))

                name = build_object_name(base.value, upload, 0, 1)
                stored = await saga.execute(
                    SagaStep(
                        name=f"upload:{name}",
                        action=partial(
                            self._store.upload,
                            owner.folder,
                            upload.content,
                            upload.content_type,
                            name,
                        ),
                        compensation=self._delete_stored,
                    )
                )
                if isinstance(stored, Failure):
                    return stored

                if not await repo.update_url(attachment_id, stored.value.public_url):
                    # Row vanished between read and update (concurrent remove)
                    await saga.unwind()
                    return Failure(error=_attachment_not_found(attachment_id))

                await uow.commit()
        except Exception as e:
            log.error("attachment_replace_failed", error=e)
            await saga.unwind()
            return Failure(error=_internal("Replacing image failed"))

        saga.complete()
        await self._delete_url(existing.url, log)
        log.info("attachment_replaced")
        return Success(
            value=Attachment(
                id=existing.id,
                owner=owner,
                owner_id=owner_id,
                url=stored.value.public_url,
                created_at=existing.created_at,
            )
        )

    async def remove(
        self,
        owner: AttachmentOwner,
        owner_id: UUID,
        attachment_id: UUID,
    ) -> Result[None, DomainError]:
        """Delete the row, then the object (an orphan beats a dangling row)."""
        log = self._logger.bind(
            owner=owner.value, owner_id=str(owner_id), attachment_id=str(attachment_id)
        )
        try:
            async with self._uow_factory() as uow:
                found = await self._ensure_owner(uow, owner, owner_id)
                if isinstance(found, Failure):
                    return found

                repo = uow.attachments(owner)
                existing = await repo.get(attachment_id, owner_id)
                if existing is None:
                    return Failure(error=_attachment_not_found(attachment_id))

                await repo.delete(attachment_id)
                await uow.commit()
        except Exception as e:
            log.error("attachment_remove_failed", error=e)
            return Failure(error=_internal("Removing image failed"))

        await self._delete_url(existing.url, log)
        log.info("attachment_removed")
        return Success(value=None)

    async def cascade_cleanup(
        self,
        owner: AttachmentOwner,
        owner_id: UUID,
    ) -> Result[list[Attachment], DomainError]:
        """Delete an owner together with its attachment rows, then its objects.

        Rows and owner are deleted in one unit of work. Remote objects are
        deleted concurrently afterwards; failures are logged only.

        Returns:
            Success(attachments that were removed).
        """
        log = self._logger.bind(owner=owner.value, owner_id=str(owner_id))
        try:
            async with self._uow_factory() as uow:
                found = await self._ensure_owner(uow, owner, owner_id)
                if isinstance(found, Failure):
                    return found

                repo = uow.attachments(owner)
                attachments = await repo.list_for_owner(owner_id)
                await repo.delete_for_owner(owner_id)
                if owner is AttachmentOwner.CONTRIBUTION:
                    await uow.contributions.delete(owner_id)
                else:
                    await uow.causes.delete(owner_id)
                await uow.commit()
        except Exception as e:
            log.error("attachment_cascade_failed", error=e)
            return Failure(error=_internal("Deleting owner failed"))

        await asyncio.gather(*(self._delete_url(a.url, log) for a in attachments))
        log.info("owner_deleted_with_attachments", count=len(attachments))
        return Success(value=attachments)

    async def list_attachments(
        self,
        owner: AttachmentOwner,
        owner_id: UUID,
    ) -> Result[list[Attachment], DomainError]:
        """Attachments of an owner, newest first."""
        async with self._uow_factory() as uow:
            found = await self._ensure_owner(uow, owner, owner_id)
            if isinstance(found, Failure):
                return found
            return Success(value=await uow.attachments(owner).list_for_owner(owner_id))

    async def _ensure_owner(
        self, uow: UnitOfWork, owner: AttachmentOwner, owner_id: UUID
    ) -> Result[None, DomainError]:
        if owner is AttachmentOwner.CONTRIBUTION:
            exists = await uow.contributions.get(owner_id) is not None
        else:
            exists = await uow.causes.get(owner_id) is not None
        if not exists:
            return Failure(error=_owner_not_found(owner, owner_id))
        return Success(value=None)

    async def _base_name(
        self, uow: UnitOfWork, owner: AttachmentOwner, owner_id: UUID
    ) -> Result[str, DomainError]:
        if owner is AttachmentOwner.CONTRIBUTION:
            contribution = await uow.contributions.get(owner_id)
            if contribution is None:
                return Failure(error=_owner_not_found(owner, owner_id))
            member = await uow.members.get(contribution.member_id)
            if member is None:
                return Failure(
                    error=NotFoundError(
                        code=ErrorCode.MEMBER_NOT_FOUND,
                        message="Member not found",
                        resource_type="Member",
                        resource_id=str(contribution.member_id),
                    )
                )
            return Success(
                value=contribution_base_name(
                    member.name, contribution.amount, contribution.contributed_on
                )
            )

        cause = await uow.causes.get(owner_id)
        if cause is None:
            return Failure(error=_owner_not_found(owner, owner_id))
        return Success(value=cause_base_name(cause.title, cause.amount, cause.created_at))

    async def _delete_stored(self, stored: StoredObject) -> Result[None, DomainError]:
        return await self._store.delete(stored.object_id)

    async def _delete_url(self, url: str, log: LoggerProtocol) -> None:
        """Best-effort object delete after the database is already consistent."""
        object_id = self._store.object_id_from_url(url)
        if object_id is None:
            log.warning("attachment_object_url_unrecognized", url=url)
            return
        try:
            result = await self._store.delete(object_id)
        except Exception as e:
            log.warning(
                "attachment_object_delete_failed",
                object_id=object_id,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return
        if isinstance(result, Failure):
            log.warning(
                "attachment_object_delete_failed",
                object_id=object_id,
                error_code=result.error.code.value,
            )


def _owner_not_found(owner: AttachmentOwner, owner_id: UUID) -> NotFoundError:
    return NotFoundError(
        code=_OWNER_NOT_FOUND_CODES[owner],
        message=f"{owner.label} not found",
        resource_type=owner.label,
        resource_id=str(owner_id),
    )


def _attachment_not_found(attachment_id: UUID) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.ATTACHMENT_NOT_FOUND,
        message="Image not found",
        resource_type="Attachment",
        resource_id=str(attachment_id),
    )


def _internal(message: str) -> InternalError:
    return InternalError(code=ErrorCode.INTERNAL_ERROR, message=message)
