"""Request Password Reset handler.

Flow:
1. Look up member by email
2. Unknown email or no email on record: return Success (no member enumeration)
3. Issue a reset token (supersedes earlier links)
4. Hand the reset email to the dispatcher
5. Return Success

Security:
- ALWAYS returns success for well-formed input
- Tokens expire after password_reset_ttl_minutes (default 15)
"""

from dataclasses import dataclass
from datetime import timedelta

from src.application.commands.member_commands import RequestPasswordReset
from src.application.services.change_notifier import ChangeNotifier
from src.application.services.secret_token_store import SecretTokenStore
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.enums import TokenKind
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.unit_of_work import UnitOfWorkFactory
from src.domain.value_objects import Email


@dataclass
class PasswordResetRequestResponse:
    """Response for a reset request.

    Note: Always the same message to prevent member enumeration.
    """

    message: str = (
        "If an account with that email exists, a password reset link has been sent."
    )


class RequestPasswordResetHandler:
    """Handler for the RequestPasswordReset command."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        token_store: SecretTokenStore,
        notifier: ChangeNotifier,
        logger: LoggerProtocol,
        reset_ttl: timedelta,
    ) -> None:
        self._uow_factory = uow_factory
        self._token_store = token_store
        self._notifier = notifier
        self._logger = logger
        self._reset_ttl = reset_ttl

    async def handle(
        self, cmd: RequestPasswordReset
    ) -> Result[PasswordResetRequestResponse, DomainError]:
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
            # Same response either way; the failure is only logged
            self._logger.error("password_reset_request_failed", error=e)
            return Success(value=PasswordResetRequestResponse())

        # Step 2: No enumeration
        if member is None or not member.has_email:
            self._logger.info("password_reset_request_ignored", reason="member_not_found")
            return Success(value=PasswordResetRequestResponse())

        # Step 3: Issue token
        issued = await self._token_store.issue(member.id, TokenKind.PASSWORD_RESET, self._reset_ttl)
        if isinstance(issued, Failure):
            self._logger.warning(
                "password_reset_request_failed",
                member_id=str(member.id),
                error_code=issued.error.code.value,
            )
            return Success(value=PasswordResetRequestResponse())

        # Step 4: Email
        if issued.value is not None:
            self._notifier.reset_issued(member, issued.value, self._reset_ttl)

        # Step 5
        return Success(value=PasswordResetRequestResponse())
