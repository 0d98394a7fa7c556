"""Confirm Password Reset handler.

Flow:
1. Consume token and rewrite the credential atomically (CredentialTransaction)
2. On success, notify the member that the password changed
3. Return Success(member_id) or the transaction's Failure
"""

from uuid import UUID

from src.application.commands.member_commands import ConfirmPasswordReset
from src.application.services.change_notifier import ChangeNotifier
from src.application.services.credential_transaction import CredentialTransaction
from src.core.errors import DomainError
from src.core.result import Failure, Result


class ConfirmPasswordResetHandler:
    """Handler for ConfirmPasswordReset (runs CredentialTransaction)."""

    def __init__(
        self,
        credential_transaction: CredentialTransaction,
        notifier: ChangeNotifier,
    ) -> None:
        self._credential_transaction = credential_transaction
        self._notifier = notifier

    async def handle(self, cmd: ConfirmPasswordReset) -> Result[UUID, DomainError]:
        # Step 1
        result = await self._credential_transaction.reset_password(
            cmd.token.strip(), cmd.new_password
        )
        if isinstance(result, Failure):
            return result

        # Step 2: After commit only
        await self._notifier.password_changed(result.value)

        # Step 3
        return result
