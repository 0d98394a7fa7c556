"""Resend Verification handler.

Flow:
1. Look up member by normalized email (NotFound if absent)
2. Already verified: Conflict
3. Issue a fresh token (supersedes the previous link)
4. Hand the verification email to the dispatcher
"""

from datetime import timedelta

from src.application.commands.member_commands import ResendVerification
from src.application.services.change_notifier import ChangeNotifier
from src.application.services.secret_token_store import SecretTokenStore
from src.core.enums import ErrorCode
from src.core.errors import (
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from src.core.result import Failure, Result, Success
from src.domain.enums import TokenKind
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.unit_of_work import UnitOfWorkFactory
from src.domain.value_objects import Email


class ResendVerificationHandler:
    """Handler for the ResendVerification command."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        token_store: SecretTokenStore,
        notifier: ChangeNotifier,
        logger: LoggerProtocol,
        verification_ttl: timedelta,
    ) -> None:
        self._uow_factory = uow_factory
        self._token_store = token_store
        self._notifier = notifier
        self._logger = logger
        self._verification_ttl = verification_ttl

    async def handle(self, cmd: ResendVerification) -> Result[None, DomainError]:
        try:
            email = Email(cmd.email).value
        except ValueError as e:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED, message=str(e), field="email"
                )
            )

        # Step 1: Look up member
        try:
            async with self._uow_factory() as uow:
                member = await uow.members.get_by_email(email)
        except Exception as e:
            self._logger.error("verification_resend_failed", error=e)
            return Failure(
                error=InternalError(
                    code=ErrorCode.INTERNAL_ERROR, message="Verification resend failed"
                )
            )

        if member is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.MEMBER_NOT_FOUND,
                    message="Member not found",
                    resource_type="Member",
                    resource_id=email,
                )
            )

        # Step 2: Nothing to verify
        if member.email_verified:
            return Failure(
                error=ConflictError(
                    code=ErrorCode.EMAIL_ALREADY_VERIFIED,
                    message="Email already verified",
                    resource_type="Member",
                    conflicting_field="email",
                )
            )

        # Step 3: Fresh token
        issued = await self._token_store.issue(
            member.id, TokenKind.EMAIL_VERIFICATION, self._verification_ttl
        )
        if isinstance(issued, Failure):
            return issued

        # Step 4: Email
        if issued.value is not None:
            self._notifier.verification_issued(member, issued.value, self._verification_ttl)
        return Success(value=None)
