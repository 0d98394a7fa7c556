"""Unit tests for CredentialTransaction (atomic password reset).

Tests cover:
- Successful reset: new hash stored, token consumed, sibling tokens dead
- Rejections: short password (before any database work), bad tokens
- Rollback: any failure after the token lock leaves password and token unchanged
- Concurrent use of one link: exactly one reset wins
- A reset racing a new link request settles without deadlock
"""

import asyncio
from datetime import timedelta

import pytest
from freezegun import freeze_time

from src.application.services.credential_transaction import CredentialTransaction
from src.application.services.secret_token_store import SecretTokenStore
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Success
from src.domain.enums import TokenKind
from src.infrastructure.security.secret_token_service import SecretTokenService
from tests.utils.utils import add_member

TTL = timedelta(minutes=15)
NEW_PASSWORD = "correct horse battery"


@pytest.fixture
def token_store(db, mock_logger):
    return SecretTokenStore(
        uow_factory=db.uow, token_service=SecretTokenService(), logger=mock_logger
    )


@pytest.fixture
def transaction(db, token_store, password_service, mock_logger):
    return CredentialTransaction(
        uow_factory=db.uow,
        token_store=token_store,
        password_service=password_service,
        logger=mock_logger,
    )


@pytest.fixture
def member(db, password_service):
    return add_member(db, password_hash=password_service.hash_password("old password 1"))


@pytest.mark.unit
class TestResetPassword:
    """Test CredentialTransaction.reset_password()."""

    async def test_reset_replaces_password_and_consumes_token(
        self, transaction, token_store, db, member, password_service
    ):
        # Arrange
        issued = await token_store.issue(member.id, TokenKind.PASSWORD_RESET, TTL)

        # Act
        result = await transaction.reset_password(issued.value, NEW_PASSWORD)

        # Assert
        assert result == Success(value=member.id)
        stored = db.members[member.id]
        assert password_service.verify_password(NEW_PASSWORD, stored.password_hash)
        assert not password_service.verify_password("old password 1", stored.password_hash)
        assert await token_store.active_token_count(member.id, TokenKind.PASSWORD_RESET) == 0

    async def test_second_use_of_link_fails(self, transaction, token_store, member):
        issued = await token_store.issue(member.id, TokenKind.PASSWORD_RESET, TTL)

        await transaction.reset_password(issued.value, NEW_PASSWORD)
        again = await transaction.reset_password(issued.value, "another password")

        assert isinstance(again, Failure)
        assert again.error.code == ErrorCode.TOKEN_ALREADY_USED

    async def test_short_password_rejected_and_token_untouched(
        self, transaction, token_store, db, member
    ):
        issued = await token_store.issue(member.id, TokenKind.PASSWORD_RESET, TTL)
        commits_before = db.commits

        result = await transaction.reset_password(issued.value, "short")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.field == "password"
        assert db.commits == commits_before
        assert await token_store.active_token_count(member.id, TokenKind.PASSWORD_RESET) == 1

    async def test_verification_token_cannot_reset_password(
        self, transaction, token_store, member
    ):
        issued = await token_store.issue(member.id, TokenKind.EMAIL_VERIFICATION, TTL)

        result = await transaction.reset_password(issued.value, NEW_PASSWORD)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_NOT_FOUND

    async def test_expired_token_rejected(self, transaction, token_store, db, member):
        old_hash = member.password_hash

        with freeze_time("2024-06-01 08:00:00") as frozen:
            issued = await token_store.issue(member.id, TokenKind.PASSWORD_RESET, TTL)
            frozen.tick(TTL + timedelta(seconds=1))
            result = await transaction.reset_password(issued.value, NEW_PASSWORD)

        assert result.error.code == ErrorCode.TOKEN_EXPIRED
        assert db.members[member.id].password_hash == old_hash

    async def test_write_failure_rolls_back_password_and_token(
        self, transaction, token_store, db, member, mock_logger
    ):
        # Arrange
        old_hash = member.password_hash
        issued = await token_store.issue(member.id, TokenKind.PASSWORD_RESET, TTL)
        db.inject_failure("secret_tokens.supersede_active", RuntimeError("connection lost"))

        # Act
        result = await transaction.reset_password(issued.value, NEW_PASSWORD)

        # Assert
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INTERNAL_ERROR
        assert db.members[member.id].password_hash == old_hash
        (token,) = db.tokens_for(member.id, TokenKind.PASSWORD_RESET)
        assert token.consumed_at is None
        assert mock_logger.error.call_args.args[0] == "password_reset_failed"

    async def test_commit_failure_leaves_link_usable(self, transaction, token_store, db, member):
        issued = await token_store.issue(member.id, TokenKind.PASSWORD_RESET, TTL)
        db.inject_failure("commit", RuntimeError("serialization failure"))

        failed = await transaction.reset_password(issued.value, NEW_PASSWORD)
        db.clear_failure("commit")
        retried = await transaction.reset_password(issued.value, NEW_PASSWORD)

        assert isinstance(failed, Failure)
        assert isinstance(retried, Success)

    async def test_concurrent_resets_with_one_link_one_wins(
        self, transaction, token_store, db, member, password_service
    ):
        issued = await token_store.issue(member.id, TokenKind.PASSWORD_RESET, TTL)
        passwords = [f"new password {i}" for i in range(4)]

        results = await asyncio.gather(
            *(transaction.reset_password(issued.value, p) for p in passwords)
        )

        winners = [p for p, r in zip(passwords, results) if isinstance(r, Success)]
        assert len(winners) == 1
        assert password_service.verify_password(winners[0], db.members[member.id].password_hash)

    @pytest.mark.parametrize("reset_first", [False, True])
    async def test_reset_racing_new_link_request_settles(
        self, transaction, token_store, member, reset_first
    ):
        # Arrange
        issued = await token_store.issue(member.id, TokenKind.PASSWORD_RESET, TTL)
        reset = transaction.reset_password(issued.value, NEW_PASSWORD)
        request = token_store.issue(member.id, TokenKind.PASSWORD_RESET, TTL)
        calls = [reset, request] if reset_first else [request, reset]

        # Act
        results = await asyncio.wait_for(asyncio.gather(*calls), timeout=5)

        # Assert
        for result in results:
            assert isinstance(result, Success) or result.error.code == ErrorCode.TOKEN_ALREADY_USED
        assert await token_store.active_token_count(member.id, TokenKind.PASSWORD_RESET) == 1
