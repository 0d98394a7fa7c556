"""Cause command handlers (create, update, delete).

Cause notifications are broadcast to every member with an email address
after commit.
"""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID

from uuid_extensions import uuid7

from src.application.commands.cause_commands import CreateCause, DeleteCause, UpdateCause
from src.application.services.attachment_service import AttachmentService
from src.application.services.change_notifier import ChangeNotifier
from src.core.enums import ErrorCode
from src.core.errors import DomainError, InternalError, NotFoundError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities import Cause
from src.domain.enums import AttachmentOwner
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.unit_of_work import UnitOfWorkFactory


class CreateCauseHandler:
    """Handler for CreateCause; broadcasts the new cause to members."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        notifier: ChangeNotifier,
        logger: LoggerProtocol,
    ) -> None:
        self._uow_factory = uow_factory
        self._notifier = notifier
        self._logger = logger

    async def handle(self, cmd: CreateCause) -> Result[Cause, DomainError]:
        invalid = _validate(cmd.title, cmd.amount, title_required=True)
        if invalid is not None:
            return Failure(error=invalid)

        now = datetime.now(UTC)
        cause = Cause(
            id=uuid7(),
            title=cmd.title.strip(),
            description=_clean_description(cmd.description),
            amount=cmd.amount,
            created_at=cmd.created_at or now,
            updated_at=now,
        )
        try:
            async with self._uow_factory() as uow:
                await uow.causes.add(cause)
                await uow.commit()
        except Exception as e:
            self._logger.error("cause_create_failed", error=e)
            return Failure(error=_internal("Creating cause failed"))

        self._logger.info("cause_created", cause_id=str(cause.id))
        if cmd.notify:
            await self._notifier.cause_changed("cause.created", cause, include_images=False)
        return Success(value=cause)


class UpdateCauseHandler:
    """Handler for UpdateCause (partial update)."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        notifier: ChangeNotifier,
        logger: LoggerProtocol,
    ) -> None:
        self._uow_factory = uow_factory
        self._notifier = notifier
        self._logger = logger

    async def handle(self, cmd: UpdateCause) -> Result[Cause, DomainError]:
        invalid = _validate(cmd.title, cmd.amount, title_required=False)
        if invalid is not None:
            return Failure(error=invalid)

        try:
            async with self._uow_factory() as uow:
                cause = await uow.causes.get(cmd.cause_id)
                if cause is None:
                    return Failure(error=_cause_not_found(cmd.cause_id))

                if cmd.title is not None:
                    cause.title = cmd.title.strip()
                if cmd.description is not None:
                    cause.description = _clean_description(cmd.description)
                if cmd.amount is not None:
                    cause.amount = cmd.amount
                cause.updated_at = datetime.now(UTC)

                await uow.causes.save(cause)
                await uow.commit()
        except Exception as e:
            self._logger.error("cause_update_failed", error=e)
            return Failure(error=_internal("Updating cause failed"))

        self._logger.info("cause_updated", cause_id=str(cause.id))
        if cmd.notify:
            await self._notifier.cause_changed("cause.updated", cause)
        return Success(value=cause)


class DeleteCauseHandler:
    """Handler for DeleteCause.

    Removes the cause with its image rows, cleans up the stored objects,
    then tells members the cause is gone.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        attachment_service: AttachmentService,
        notifier: ChangeNotifier,
        logger: LoggerProtocol,
    ) -> None:
        self._uow_factory = uow_factory
        self._attachment_service = attachment_service
        self._notifier = notifier
        self._logger = logger

    async def handle(self, cmd: DeleteCause) -> Result[None, DomainError]:
        try:
            async with self._uow_factory() as uow:
                cause = await uow.causes.get(cmd.cause_id)
        except Exception as e:
            self._logger.error("cause_delete_failed", error=e)
            return Failure(error=_internal("Deleting cause failed"))
        if cause is None:
            return Failure(error=_cause_not_found(cmd.cause_id))

        cleaned = await self._attachment_service.cascade_cleanup(AttachmentOwner.CAUSE, cause.id)
        if isinstance(cleaned, Failure):
            return cleaned

        if cmd.notify:
            await self._notifier.cause_changed("cause.deleted", cause, include_images=False)
        return Success(value=None)


def _validate(
    title: str | None, amount: Decimal | None, *, title_required: bool
) -> ValidationError | None:
    if (title_required or title is not None) and not (title or "").strip():
        return ValidationError(
            code=ErrorCode.VALIDATION_FAILED, message="Title is required", field="title"
        )
    if amount is not None and amount < 0:
        return ValidationError(
            code=ErrorCode.INVALID_AMOUNT,
            message="Amount cannot be negative",
            field="amount",
        )
    return None


def _clean_description(description: str | None) -> str | None:
    return (description or "").strip() or None


def _cause_not_found(cause_id: UUID) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.CAUSE_NOT_FOUND,
        message="Cause not found",
        resource_type="Cause",
        resource_id=str(cause_id),
    )


def _internal(message: str) -> InternalError:
    return InternalError(code=ErrorCode.INTERNAL_ERROR, message=message)
