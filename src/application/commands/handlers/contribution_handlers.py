"""Contribution command handlers (record, update, delete).

Notifications go to the owning member after the change is committed and
never affect the returned Result.
"""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID

from uuid_extensions import uuid7

from src.application.commands.contribution_commands import (
    DeleteContribution,
    RecordContribution,
    UpdateContribution,
)
from src.application.services.attachment_service import AttachmentService
from src.application.services.change_notifier import ChangeNotifier
from src.core.enums import ErrorCode
from src.core.errors import DomainError, InternalError, NotFoundError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities import Contribution
from src.domain.enums import AttachmentOwner
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.unit_of_work import UnitOfWorkFactory


class RecordContributionHandler:
    """Handler for RecordContribution.

    Flow:
        1. Reject non-positive amounts
        2. Ensure the member exists
        3. Insert and commit
        4. Notify the member (contribution.created)
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        notifier: ChangeNotifier,
        logger: LoggerProtocol,
    ) -> None:
        self._uow_factory = uow_factory
        self._notifier = notifier
        self._logger = logger

    async def handle(self, cmd: RecordContribution) -> Result[Contribution, DomainError]:
        # Step 1
        if cmd.amount <= 0:
            return Failure(error=_invalid_amount())

        try:
            async with self._uow_factory() as uow:
                # Step 2
                member = await uow.members.get(cmd.member_id)
                if member is None:
                    return Failure(error=_member_not_found(cmd.member_id))

                # Step 3
                contribution = Contribution(
                    id=uuid7(),
                    member_id=member.id,
                    amount=_money(cmd.amount),
                    contributed_on=cmd.contributed_on,
                )
                await uow.contributions.add(contribution)
                await uow.commit()
        except Exception as e:
            self._logger.error("contribution_record_failed", error=e)
            return Failure(error=_internal("Recording contribution failed"))

        self._logger.info(
            "contribution_recorded",
            contribution_id=str(contribution.id),
            member_id=str(member.id),
        )

        # Step 4
        if cmd.notify:
            await self._notifier.contribution_changed(
                "contribution.created", contribution, member=member, include_images=False
            )
        return Success(value=contribution)


class UpdateContributionHandler:
    """Handler for UpdateContribution (partial update)."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        notifier: ChangeNotifier,
        logger: LoggerProtocol,
    ) -> None:
        self._uow_factory = uow_factory
        self._notifier = notifier
        self._logger = logger

    async def handle(self, cmd: UpdateContribution) -> Result[Contribution, DomainError]:
        if cmd.amount is not None and cmd.amount <= 0:
            return Failure(error=_invalid_amount())

        try:
            async with self._uow_factory() as uow:
                contribution = await uow.contributions.get(cmd.contribution_id)
                if contribution is None:
                    return Failure(error=_contribution_not_found(cmd.contribution_id))

                if cmd.member_id is not None:
                    if await uow.members.get(cmd.member_id) is None:
                        return Failure(error=_member_not_found(cmd.member_id))
                    contribution.member_id = cmd.member_id
                if cmd.amount is not None:
                    contribution.amount = _money(cmd.amount)
                if cmd.contributed_on is not None:
                    contribution.contributed_on = cmd.contributed_on
                contribution.updated_at = datetime.now(UTC)

                await uow.contributions.save(contribution)
                await uow.commit()
        except Exception as e:
            self._logger.error("contribution_update_failed", error=e)
            return Failure(error=_internal("Updating contribution failed"))

        self._logger.info("contribution_updated", contribution_id=str(contribution.id))
        if cmd.notify:
            await self._notifier.contribution_changed("contribution.updated", contribution)
        return Success(value=contribution)


class DeleteContributionHandler:
    """Handler for DeleteContribution.

    Rows (contribution and images) are deleted in one unit of work by
    AttachmentService.cascade_cleanup; stored objects are removed afterwards.
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

    async def handle(self, cmd: DeleteContribution) -> Result[None, DomainError]:
        try:
            async with self._uow_factory() as uow:
                contribution = await uow.contributions.get(cmd.contribution_id)
        except Exception as e:
            self._logger.error("contribution_delete_failed", error=e)
            return Failure(error=_internal("Deleting contribution failed"))
        if contribution is None:
            return Failure(error=_contribution_not_found(cmd.contribution_id))

        cleaned = await self._attachment_service.cascade_cleanup(
            AttachmentOwner.CONTRIBUTION, contribution.id
        )
        if isinstance(cleaned, Failure):
            return cleaned

        if cmd.notify:
            await self._notifier.contribution_changed(
                "contribution.deleted", contribution, include_images=False
            )
        return Success(value=None)


def _money(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(Decimal("0.01"))


def _invalid_amount() -> ValidationError:
    return ValidationError(
        code=ErrorCode.INVALID_AMOUNT,
        message="Contribution amount must be positive",
        field="amount",
    )


def _member_not_found(member_id: UUID) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.MEMBER_NOT_FOUND,
        message="Member not found",
        resource_type="Member",
        resource_id=str(member_id),
    )


def _contribution_not_found(contribution_id: UUID) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.CONTRIBUTION_NOT_FOUND,
        message="Contribution not found",
        resource_type="Contribution",
        resource_id=str(contribution_id),
    )


def _internal(message: str) -> InternalError:
    return InternalError(code=ErrorCode.INTERNAL_ERROR, message=message)
