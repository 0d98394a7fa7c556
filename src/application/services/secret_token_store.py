"""Secret token store (email verification and password reset).

Issues, verifies and consumes single-use secrets. Only SHA-256 hashes are
persisted; the plaintext is returned exactly once from issue().

Concurrency:
    - issue() locks the member row, so concurrent issuance for one member is
      serialized and the "at most one active token per kind" rule holds.
    - consume() locks the member row, then the token row, and flips
      consumed_at with a conditional update, so of N concurrent consumers
      exactly one succeeds. Both paths lock member before token.

Usage:
    store = SecretTokenStore(uow_factory=uow_factory, token_service=SecretTokenService(), logger=logger)

    issued = await store.issue(member_id, TokenKind.EMAIL_VERIFICATION, settings.email_verification_ttl)
    if isinstance(issued, Success) and issued.value is not None:
        link = f"{settings.client_base_url}/verify-email?token={issued.value}"

    consumed = await store.consume(token_from_link, TokenKind.EMAIL_VERIFICATION)
"""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from uuid_extensions import uuid7

from src.core.constants import TOKEN_LOG_PREVIEW_LENGTH
from src.core.enums import ErrorCode
from src.core.errors import DomainError, InternalError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities import SecretToken
from src.domain.enums import TokenKind
from src.domain.errors import SecretTokenError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.secret_token_service_protocol import (
    SecretTokenServiceProtocol,
)
from src.domain.protocols.unit_of_work import UnitOfWork, UnitOfWorkFactory


class SecretTokenStore:
    """Single-use secret token state machine.

    Attributes:
        token_service: Generates plaintext tokens and their lookup hashes.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        token_service: SecretTokenServiceProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._uow_factory = uow_factory
        self.token_service = token_service
        self._logger = logger

    async def issue(
        self,
        member_id: UUID,
        kind: TokenKind,
        ttl: timedelta,
    ) -> Result[str | None, DomainError]:
        """Issue a new token, superseding any still-unconsumed token of the kind.

        Args:
            member_id: Member to issue for.
            kind: Token kind.
            ttl: Lifetime from issuance.

        Returns:
            Success(plaintext) on issuance.
            Success(None) if the member has no email (nothing issued).
            Failure(NotFoundError) if the member does not exist.
            Failure(InternalError) on persistence failure.
        """
        plaintext = self.token_service.generate_token()
        token_hash = self.token_service.hash_token(plaintext)

        try:
            async with self._uow_factory() as uow:
                # Step 1: Lock the member row (serializes issuance per member)
                member = await uow.members.get(member_id, for_update=True)
                if member is None:
                    return Failure(error=_member_not_found(member_id))

                if not member.has_email:
                    self._logger.info(
                        "secret_token_skipped_no_email",
                        member_id=str(member_id),
                        kind=kind.value,
                    )
                    return Success(value=None)

                now = datetime.now(UTC)

                # Step 2: Supersede prior unconsumed tokens of this kind
                superseded = await uow.secret_tokens.supersede_active(member_id, kind, now)

                # Step 3: A fresh verification token means the address is unverified
                if kind is TokenKind.EMAIL_VERIFICATION:
                    member.mark_unverified()
                    await uow.members.save(member)

                # Step 4: Persist the hash only
                token = SecretToken(
                    id=uuid7(),
                    member_id=member_id,
                    kind=kind,
                    token_hash=token_hash,
                    issued_at=now,
                    expires_at=now + ttl,
                )
                await uow.secret_tokens.add(token)
                await uow.commit()
        except Exception as e:
            self._logger.error(
                "secret_token_issue_failed",
                error=e,
                member_id=str(member_id),
                kind=kind.value,
            )
            return Failure(error=_internal("Token issuance failed"))

        self._logger.info(
            "secret_token_issued",
            member_id=str(member_id),
            kind=kind.value,
            superseded=superseded,
            expires_at=token.expires_at.isoformat(),
            token_preview=token_hash[:TOKEN_LOG_PREVIEW_LENGTH],
        )
        return Success(value=plaintext)

    async def consume(self, plaintext: str, kind: TokenKind) -> Result[UUID, DomainError]:
        """Consume a token; for email verification also mark the member verified.

        Returns:
            Success(member_id) if this call consumed the token.
            Failure(NotFoundError) if no token of this kind matches.
            Failure(SecretTokenError TOKEN_ALREADY_USED) if consumed or superseded.
            Failure(SecretTokenError TOKEN_EXPIRED) if past expires_at.
        """
        try:
            async with self._uow_factory() as uow:
                claimed = await self.claim_within(uow, plaintext, kind)
                if isinstance(claimed, Failure):
                    return claimed
                token = claimed.value

                if kind is TokenKind.EMAIL_VERIFICATION:
                    member = await uow.members.get(token.member_id)
                    if member is None:
                        return Failure(error=_member_not_found(token.member_id))
                    member.mark_verified(token.consumed_at or datetime.now(UTC))
                    await uow.members.save(member)

                await uow.commit()
        except Exception as e:
            self._logger.error("secret_token_consume_failed", error=e, kind=kind.value)
            return Failure(error=_internal("Token consumption failed"))

        self._logger.info(
            "secret_token_consumed",
            member_id=str(token.member_id),
            kind=kind.value,
        )
        return Success(value=token.member_id)

    async def claim_within(
        self,
        uow: UnitOfWork,
        plaintext: str,
        kind: TokenKind,
    ) -> Result[SecretToken, DomainError]:
        """Lock, validate and mark a token consumed inside the caller's unit of work.

        Nothing is committed here; the caller commits together with its own
        writes, or rolls everything back.

        Lock order is member row, then token row, the same order issue()
        takes through supersede_active(). The token is first read without a
        lock to find its member, then re-read under the lock.

        Check order: not found, then already used, then expired.

        Returns:
            Success(token) with consumed_at set, or the rejection Failure.
        """
        token_hash = self.token_service.hash_token(plaintext)
        token = await uow.secret_tokens.get_by_hash(token_hash, kind)
        if token is not None:
            await uow.members.get(token.member_id, for_update=True)
            token = await uow.secret_tokens.get_by_hash(token_hash, kind, for_update=True)

        if token is None:
            self._logger.info("secret_token_rejected", kind=kind.value, reason="not_found")
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.TOKEN_NOT_FOUND,
                    message="Token not found",
                    resource_type="SecretToken",
                    resource_id=token_hash[:TOKEN_LOG_PREVIEW_LENGTH],
                )
            )

        if token.is_consumed:
            self._logger.info(
                "secret_token_rejected", kind=kind.value, reason="already_used"
            )
            return Failure(error=_already_used(kind))

        now = datetime.now(UTC)
        if token.is_expired(now):
            self._logger.info("secret_token_rejected", kind=kind.value, reason="expired")
            return Failure(
                error=SecretTokenError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message="Token expired",
                    token_kind=kind,
                )
            )

        # Conditional update: loses cleanly if another transaction got here first
        if not await uow.secret_tokens.mark_consumed(token.id, now):
            return Failure(error=_already_used(kind))

        token.consumed_at = now
        return Success(value=token)

    async def active_token_count(self, member_id: UUID, kind: TokenKind) -> int:
        """Number of unconsumed, unexpired tokens of a kind (0 or 1 in a healthy store)."""
        async with self._uow_factory() as uow:
            return await uow.secret_tokens.count_active(member_id, kind, datetime.now(UTC))


def _member_not_found(member_id: UUID) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.MEMBER_NOT_FOUND,
        message="Member not found",
        resource_type="Member",
        resource_id=str(member_id),
    )


def _already_used(kind: TokenKind) -> SecretTokenError:
    return SecretTokenError(
        code=ErrorCode.TOKEN_ALREADY_USED,
        message="Token already used",
        token_kind=kind,
    )


def _internal(message: str) -> InternalError:
    return InternalError(code=ErrorCode.INTERNAL_ERROR, message=message)
