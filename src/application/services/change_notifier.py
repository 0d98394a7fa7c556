"""Change notifier: hand committed changes to the notification dispatcher.

Runs after the primary unit of work has committed. Loads whatever the
templates need (member, image URLs, recipient list) in a fresh read-only
unit of work and enqueues the notification. Nothing here raises: a failed
lookup is logged and the notification is skipped.

Recipients:
    - contribution.*: the owning member.
    - cause.*: every member with an email address.
    - auth.*: the member the token was issued to.
"""

from datetime import timedelta
from uuid import UUID

from src.application.services.notification_content import (
    cause_data,
    contribution_data,
    password_changed_data,
    reset_password_data,
    token_link,
    verify_email_data,
)
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.domain.entities import Cause, Contribution, Member
from src.domain.enums import AttachmentOwner
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.unit_of_work import UnitOfWorkFactory

VERIFY_EMAIL_PATH = "/api/auth/verify-email"
RESET_PASSWORD_PATH = "/reset-password"


class ChangeNotifier:
    """Build and enqueue member-facing notifications.

    Args:
        uow_factory: Unit of work factory for read-only lookups.
        dispatcher: Background notification dispatcher.
        logger: Structured logger.
        app_base_url: Base URL for verification links (served by the API).
        client_base_url: Base URL for reset links (served by the web client).
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        dispatcher: NotificationDispatcher,
        logger: LoggerProtocol,
        *,
        app_base_url: str,
        client_base_url: str,
    ) -> None:
        self._uow_factory = uow_factory
        self._dispatcher = dispatcher
        self._logger = logger
        self._app_base_url = app_base_url
        self._client_base_url = client_base_url or app_base_url

    def verification_issued(self, member: Member, token: str, ttl: timedelta) -> None:
        url = token_link(self._app_base_url, VERIFY_EMAIL_PATH, token)
        self._dispatcher.dispatch(
            "auth.verification_issued",
            [member.email],
            "auth.verify",
            verify_email_data(member, url, ttl),
        )

    def reset_issued(self, member: Member, token: str, ttl: timedelta) -> None:
        url = token_link(self._client_base_url, RESET_PASSWORD_PATH, token)
        self._dispatcher.dispatch(
            "auth.reset_issued",
            [member.email],
            "auth.reset",
            reset_password_data(member, url, ttl),
        )

    async def password_changed(self, member_id: UUID) -> None:
        try:
            async with self._uow_factory() as uow:
                member = await uow.members.get(member_id)
        except Exception as e:
            self._logger.warning(
                "notification_lookup_failed",
                notification_event="auth.password_changed",
                error=str(e),
            )
            return
        if member is None:
            return
        self._dispatcher.dispatch(
            "auth.password_changed",
            [member.email],
            "auth.password_changed",
            password_changed_data(member),
        )

    async def contribution_changed(
        self,
        template_key: str,
        contribution: Contribution,
        *,
        member: Member | None = None,
        include_images: bool = True,
    ) -> None:
        """Notify the owning member about a contribution change.

        Args:
            template_key: contribution.created, .updated or .deleted.
            contribution: Committed state (or last state, for deletes).
            member: Owning member, loaded when not given.
            include_images: Attach the image gallery (False for deletes).
        """
        try:
            async with self._uow_factory() as uow:
                if member is None:
                    member = await uow.members.get(contribution.member_id)
                urls: list[str] = []
                if include_images:
                    attachments = await uow.attachments(
                        AttachmentOwner.CONTRIBUTION
                    ).list_for_owner(contribution.id)
                    urls = [a.url for a in attachments]
        except Exception as e:
            self._logger.warning(
                "notification_lookup_failed", notification_event=template_key, error=str(e)
            )
            return

        if member is None:
            self._logger.info(
                "notification_skipped",
                notification_event=template_key,
                reason="member_not_found",
                contribution_id=str(contribution.id),
            )
            return

        self._dispatcher.dispatch(
            template_key,
            [member.email],
            template_key,
            contribution_data(member, contribution, urls),
        )

    async def contribution_changed_by_id(self, template_key: str, contribution_id: UUID) -> None:
        try:
            async with self._uow_factory() as uow:
                contribution = await uow.contributions.get(contribution_id)
        except Exception as e:
            self._logger.warning(
                "notification_lookup_failed", notification_event=template_key, error=str(e)
            )
            return
        if contribution is not None:
            await self.contribution_changed(template_key, contribution)

    async def cause_changed(
        self,
        template_key: str,
        cause: Cause,
        *,
        include_images: bool = True,
    ) -> None:
        """Send a cause change to every member with an email address, one job each."""
        try:
            async with self._uow_factory() as uow:
                members = await uow.members.list_with_email()
                urls: list[str] = []
                if include_images:
                    attachments = await uow.attachments(AttachmentOwner.CAUSE).list_for_owner(
                        cause.id
                    )
                    urls = [a.url for a in attachments]
        except Exception as e:
            self._logger.warning(
                "notification_lookup_failed", notification_event=template_key, error=str(e)
            )
            return

        # One job per member: the greeting is personal
        for member in members:
            self._dispatcher.dispatch(
                template_key,
                [member.email],
                template_key,
                cause_data(cause, urls, member_name=member.name),
            )

    async def cause_changed_by_id(self, template_key: str, cause_id: UUID) -> None:
        try:
            async with self._uow_factory() as uow:
                cause = await uow.causes.get(cause_id)
        except Exception as e:
            self._logger.warning(
                "notification_lookup_failed", notification_event=template_key, error=str(e)
            )
            return
        if cause is not None:
            await self.cause_changed(template_key, cause)

    async def owner_changed(self, owner: AttachmentOwner, owner_id: UUID) -> None:
        """Send the owner's "updated" notification after an image change."""
        if owner is AttachmentOwner.CONTRIBUTION:
            await self.contribution_changed_by_id("contribution.updated", owner_id)
        else:
            await self.cause_changed_by_id("cause.updated", owner_id)
