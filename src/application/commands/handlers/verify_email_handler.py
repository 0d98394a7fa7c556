"""Verify Email handler.

Consumes an email verification token; the member is marked verified in the
same unit of work. Expired links require a resend.
"""

from uuid import UUID

from src.application.commands.member_commands import VerifyEmail
from src.application.services.secret_token_store import SecretTokenStore
from src.core.errors import DomainError
from src.core.result import Result
from src.domain.enums import TokenKind


class VerifyEmailHandler:
    """Handler for VerifyEmail; consumes the verification token."""

    def __init__(self, token_store: SecretTokenStore) -> None:
        self._token_store = token_store

    async def handle(self, cmd: VerifyEmail) -> Result[UUID, DomainError]:
        """Returns Success(member_id), or the token rejection Failure."""
        return await self._token_store.consume(cmd.token.strip(), TokenKind.EMAIL_VERIFICATION)
