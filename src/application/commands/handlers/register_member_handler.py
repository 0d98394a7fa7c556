"""Register Member handler.

Flow:
1. Validate name, password and (optional) email
2. If the email belongs to an unverified member: re-issue the verification link
3. If the email belongs to a verified member: Conflict
4. Hash password, insert member, commit
5. Issue an email verification token (members with email only)
6. Hand the verification email to the dispatcher
7. Return Success(RegisteredMember)

Architecture:
- Application layer ONLY imports from domain and core
- Persistence through the injected unit of work factory
"""

from datetime import timedelta

from uuid_extensions import uuid7

from src.application.commands.member_commands import RegisteredMember, RegisterMember
from src.application.services.change_notifier import ChangeNotifier
from src.application.services.secret_token_store import SecretTokenStore
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, DomainError, InternalError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities import Member
from src.domain.enums import TokenKind
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.unit_of_work import DuplicateKeyError, UnitOfWorkFactory
from src.domain.value_objects import Email, Password


class RegisterMemberHandler:
    """Handler for the RegisterMember command."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        token_store: SecretTokenStore,
        password_service: PasswordHashingProtocol,
        notifier: ChangeNotifier,
        logger: LoggerProtocol,
        verification_ttl: timedelta,
    ) -> None:
        self._uow_factory = uow_factory
        self._token_store = token_store
        self._password_service = password_service
        self._notifier = notifier
        self._logger = logger
        self._verification_ttl = verification_ttl

    async def handle(self, cmd: RegisterMember) -> Result[RegisteredMember, DomainError]:
        """Handle RegisterMember.

        Returns:
            Success(RegisteredMember) on registration (or link re-issue).
            Failure(ValidationError) for unusable input.
            Failure(ConflictError) if the email is already verified by a member.
            Failure(InternalError) on persistence failure.
        """
        # Step 1: Validate input
        name = cmd.name.strip()
        if not name:
            return Failure(error=_invalid("Name is required", "name"))
        try:
            password = Password(cmd.password)
        except ValueError as e:
            return Failure(error=_invalid(str(e), "password"))

        email: str | None = None
        if cmd.email and cmd.email.strip():
            try:
                email = Email(cmd.email).value
            except ValueError as e:
                return Failure(error=_invalid(str(e), "email"))

        # Steps 2-3: Existing member with this email
        if email is not None:
            try:
                async with self._uow_factory() as uow:
                    existing = await uow.members.get_by_email(email)
            except Exception as e:
                self._logger.error("member_registration_failed", error=e)
                return Failure(error=_internal())

            if existing is not None:
                if existing.email_verified:
                    return Failure(error=_email_taken())
                self._logger.info(
                    "member_registration_reissued_verification",
                    member_id=str(existing.id),
                )
                await self._issue_verification(existing)
                return Success(value=self._registered(existing))

        # Step 4: Insert member
        member = Member(
            id=uuid7(),
            name=name,
            email=email,
            phone=(cmd.phone or "").strip() or None,
            password_hash=self._password_service.hash_password(password.value),
        )
        try:
            async with self._uow_factory() as uow:
                await uow.members.add(member)
                await uow.commit()
        except DuplicateKeyError:
            # Lost a race with a concurrent registration for the same email
            return Failure(error=_email_taken())
        except Exception as e:
            self._logger.error("member_registration_failed", error=e)
            return Failure(error=_internal())

        self._logger.info(
            "member_registered",
            member_id=str(member.id),
            has_email=member.has_email,
        )

        # Steps 5-6: Verification link
        if member.has_email:
            await self._issue_verification(member)

        # Step 7
        return Success(value=self._registered(member))

    async def _issue_verification(self, member: Member) -> None:
        issued = await self._token_store.issue(
            member.id, TokenKind.EMAIL_VERIFICATION, self._verification_ttl
        )
        if isinstance(issued, Failure):
            # Member is stored; they can ask for a new link
            self._logger.warning(
                "verification_issue_failed",
                member_id=str(member.id),
                error_code=issued.error.code.value,
            )
            return
        if issued.value is not None:
            self._notifier.verification_issued(member, issued.value, self._verification_ttl)

    def _registered(self, member: Member) -> RegisteredMember:
        return RegisteredMember(
            member_id=member.id,
            verification_required=member.has_email,
            verification_ttl_seconds=(
                int(self._verification_ttl.total_seconds()) if member.has_email else None
            ),
        )


def _invalid(message: str, field: str) -> ValidationError:
    return ValidationError(code=ErrorCode.VALIDATION_FAILED, message=message, field=field)


def _email_taken() -> ConflictError:
    return ConflictError(
        code=ErrorCode.EMAIL_ALREADY_EXISTS,
        message="Email already registered",
        resource_type="Member",
        conflicting_field="email",
    )


def _internal() -> InternalError:
    return InternalError(code=ErrorCode.INTERNAL_ERROR, message="Registration failed")
