"""Credential transaction: password reset as one atomic unit.

Flow (single unit of work):
    1. Lock the member row, then lock and load the reset token by hash
    2. Reject if consumed, superseded or expired
    3. Hash the new password (bcrypt)
    4. Write the new credential
    5. Mark every still-active reset token of the member consumed
    6. Commit

Any failure after step 1 rolls back the whole unit: the password is not
changed and the token stays usable.
"""

from datetime import UTC, datetime
from uuid import UUID

from src.application.services.secret_token_store import SecretTokenStore
from src.core.enums import ErrorCode
from src.core.errors import DomainError, InternalError, NotFoundError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.enums import TokenKind
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.unit_of_work import UnitOfWorkFactory
from src.domain.value_objects import Password


class CredentialTransaction:
    """Atomic, row-locked password reset."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        token_store: SecretTokenStore,
        password_service: PasswordHashingProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._uow_factory = uow_factory
        self._token_store = token_store
        self._password_service = password_service
        self._logger = logger

    async def reset_password(
        self,
        plaintext_token: str,
        new_password: str,
    ) -> Result[UUID, DomainError]:
        """Consume a reset token and replace the member's password.

        Args:
            plaintext_token: Token from the reset link.
            new_password: New plaintext password (min 8 characters).

        Returns:
            Success(member_id) on success.
            Failure(ValidationError) if the password is too short (checked
                before any database work).
            Failure(NotFoundError | SecretTokenError) for unusable tokens.
            Failure(InternalError) on persistence failure.
        """
        try:
            password = Password(new_password)
        except ValueError as e:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=str(e),
                    field="password",
                )
            )

        try:
            async with self._uow_factory() as uow:
                # Steps 1-2: lock member then token, validate, mark consumed (not yet committed)
                claimed = await self._token_store.claim_within(
                    uow, plaintext_token, TokenKind.PASSWORD_RESET
                )
                if isinstance(claimed, Failure):
                    return claimed
                token = claimed.value

                member = await uow.members.get(token.member_id, for_update=True)
                if member is None:
                    return Failure(
                        error=NotFoundError(
                            code=ErrorCode.MEMBER_NOT_FOUND,
                            message="Member not found",
                            resource_type="Member",
                            resource_id=str(token.member_id),
                        )
                    )

                # Steps 3-4: hash and write the credential
                password_hash = self._password_service.hash_password(password.value)
                now = token.consumed_at or datetime.now(UTC)
                member.change_password(password_hash, at=now)
                await uow.members.save(member)

                # Step 5: no other reset link for this member stays usable
                await uow.secret_tokens.supersede_active(
                    member.id, TokenKind.PASSWORD_RESET, now
                )

                # Step 6: commit
                await uow.commit()
        except Exception as e:
            self._logger.error("password_reset_failed", error=e)
            return Failure(
                error=InternalError(
                    code=ErrorCode.INTERNAL_ERROR,
                    message="Password reset failed",
                )
            )

        self._logger.info("password_reset_completed", member_id=str(member.id))
        return Success(value=member.id)
