"""Application context (composition root).

Built once at startup; owns every long-lived collaborator and hands out
handlers wired to them. There are no module-level singletons: two contexts
(for example one per test) never share state.

Usage:
    async with AppContext.create(get_settings()) as app:
        handler = app.register_member_handler()
        result = await handler.handle(RegisterMember(name="Jane", email="jane@example.com", password="..."))

Lifecycle:
    start(): starts the notification worker.
    aclose(): drains the notification queue (bounded), closes the mail
        transport and disposes the database engine.
"""

from types import TracebackType
from typing import Self

from src.application.commands.handlers.attachment_handlers import (
    AttachImagesHandler,
    RemoveImageHandler,
    ReplaceImageHandler,
)
from src.application.commands.handlers.cause_handlers import (
    CreateCauseHandler,
    DeleteCauseHandler,
    UpdateCauseHandler,
)
from src.application.commands.handlers.confirm_password_reset_handler import (
    ConfirmPasswordResetHandler,
)
from src.application.commands.handlers.contribution_handlers import (
    DeleteContributionHandler,
    RecordContributionHandler,
    UpdateContributionHandler,
)
from src.application.commands.handlers.register_member_handler import (
    RegisterMemberHandler,
)
from src.application.commands.handlers.request_password_reset_handler import (
    RequestPasswordResetHandler,
)
from src.application.commands.handlers.resend_verification_handler import (
    ResendVerificationHandler,
)
from src.application.commands.handlers.verify_email_handler import VerifyEmailHandler
from src.application.queries.handlers.list_images_handler import ListImagesHandler
from src.application.services.attachment_service import AttachmentService
from src.application.services.change_notifier import ChangeNotifier
from src.application.services.credential_transaction import CredentialTransaction
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.application.services.orphan_sweeper import OrphanSweeper
from src.application.services.secret_token_store import SecretTokenStore
from src.core.config import Settings, get_settings
from src.core.constants import NOTIFICATION_STOP_TIMEOUT_SECONDS
from src.core.container.infrastructure import (
    build_logger,
    build_mail_transport,
    build_object_store,
    build_password_service,
    build_template_renderer,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.mail_transport_protocol import MailTransportProtocol
from src.domain.protocols.object_store_protocol import ObjectStoreProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.secret_token_service_protocol import (
    SecretTokenServiceProtocol,
)
from src.domain.protocols.template_renderer_protocol import TemplateRendererProtocol
from src.domain.protocols.unit_of_work import UnitOfWorkFactory
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.unit_of_work import SQLAlchemyUnitOfWork
from src.infrastructure.security.secret_token_service import SecretTokenService


class AppContext:
    """Owns infrastructure adapters, core services and handler factories.

    Construct with AppContext.create(settings) in production. Tests pass
    their own unit of work factory and adapters to the constructor.

    Attributes:
        settings: Application settings.
        logger: Root structured logger.
        database: Database engine owner (None when persistence is faked).
        token_store: SecretTokenStore.
        attachment_service: AttachmentService (attachment saga).
        credential_transaction: CredentialTransaction.
        dispatcher: NotificationDispatcher.
        notifier: ChangeNotifier.
        orphan_sweeper: OrphanSweeper.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        logger: LoggerProtocol,
        uow_factory: UnitOfWorkFactory,
        object_store: ObjectStoreProtocol,
        mail_transport: MailTransportProtocol,
        renderer: TemplateRendererProtocol,
        password_service: PasswordHashingProtocol,
        token_service: SecretTokenServiceProtocol | None = None,
        database: Database | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self.database = database
        self.uow_factory = uow_factory
        self.object_store = object_store
        self.mail_transport = mail_transport
        self.renderer = renderer
        self.password_service = password_service

        self.token_store = SecretTokenStore(
            uow_factory=uow_factory,
            token_service=token_service or SecretTokenService(),
            logger=logger.bind(component="secret_token_store"),
        )
        self.attachment_service = AttachmentService(
            uow_factory=uow_factory,
            object_store=object_store,
            logger=logger.bind(component="attachment_service"),
        )
        self.credential_transaction = CredentialTransaction(
            uow_factory=uow_factory,
            token_store=self.token_store,
            password_service=password_service,
            logger=logger.bind(component="credential_transaction"),
        )
        self.dispatcher = NotificationDispatcher(
            renderer=renderer,
            transport=mail_transport,
            logger=logger.bind(component="notification_dispatcher"),
            sender=settings.mail_from,
            mail_enabled=settings.mail_enabled,
            queue_size=settings.notification_queue_size,
            concurrency=settings.notification_concurrency,
        )
        self.notifier = ChangeNotifier(
            uow_factory=uow_factory,
            dispatcher=self.dispatcher,
            logger=logger.bind(component="change_notifier"),
            app_base_url=settings.app_base_url,
            client_base_url=settings.client_base_url,
        )
        self.orphan_sweeper = OrphanSweeper(
            uow_factory=uow_factory,
            object_store=object_store,
            logger=logger.bind(component="orphan_sweeper"),
            grace_period=settings.orphan_grace_period,
        )

    @classmethod
    def create(cls, settings: Settings | None = None) -> Self:
        """Build the production context from settings (adapters chosen by config)."""
        settings = settings or get_settings()
        logger = build_logger(settings)
        database = Database(settings.database_url, echo=settings.db_echo)
        return cls(
            settings=settings,
            logger=logger,
            uow_factory=SQLAlchemyUnitOfWork.factory(database.async_session),
            object_store=build_object_store(settings),
            mail_transport=build_mail_transport(settings, logger),
            renderer=build_template_renderer(settings),
            password_service=build_password_service(settings),
            database=database,
        )

    async def start(self) -> None:
        self.dispatcher.start()
        self.logger.info(
            "app_context_started",
            object_store=type(self.object_store).__name__,
            mail_transport=type(self.mail_transport).__name__,
            mail_enabled=self.settings.mail_enabled,
        )

    async def aclose(self, drain_timeout: float = NOTIFICATION_STOP_TIMEOUT_SECONDS) -> None:
        await self.dispatcher.stop(drain_timeout=drain_timeout)

        aclose_transport = getattr(self.mail_transport, "aclose", None)
        if aclose_transport is not None:
            await aclose_transport()

        if self.database is not None:
            await self.database.close()
        self.logger.info("app_context_closed")

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # =========================================================================
    # Member handlers
    # =========================================================================

    def register_member_handler(self) -> RegisterMemberHandler:
        return RegisterMemberHandler(
            uow_factory=self.uow_factory,
            token_store=self.token_store,
            password_service=self.password_service,
            notifier=self.notifier,
            logger=self.logger.bind(handler="register_member"),
            verification_ttl=self.settings.email_verification_ttl,
        )

    def verify_email_handler(self) -> VerifyEmailHandler:
        return VerifyEmailHandler(token_store=self.token_store)

    def resend_verification_handler(self) -> ResendVerificationHandler:
        return ResendVerificationHandler(
            uow_factory=self.uow_factory,
            token_store=self.token_store,
            notifier=self.notifier,
            logger=self.logger.bind(handler="resend_verification"),
            verification_ttl=self.settings.email_verification_ttl,
        )

    def request_password_reset_handler(self) -> RequestPasswordResetHandler:
        return RequestPasswordResetHandler(
            uow_factory=self.uow_factory,
            token_store=self.token_store,
            notifier=self.notifier,
            logger=self.logger.bind(handler="request_password_reset"),
            reset_ttl=self.settings.password_reset_ttl,
        )

    def confirm_password_reset_handler(self) -> ConfirmPasswordResetHandler:
        return ConfirmPasswordResetHandler(
            credential_transaction=self.credential_transaction,
            notifier=self.notifier,
        )

    # =========================================================================
    # Contribution and cause handlers
    # =========================================================================

    def record_contribution_handler(self) -> RecordContributionHandler:
        return RecordContributionHandler(
            uow_factory=self.uow_factory,
            notifier=self.notifier,
            logger=self.logger.bind(handler="record_contribution"),
        )

    def update_contribution_handler(self) -> UpdateContributionHandler:
        return UpdateContributionHandler(
            uow_factory=self.uow_factory,
            notifier=self.notifier,
            logger=self.logger.bind(handler="update_contribution"),
        )

    def delete_contribution_handler(self) -> DeleteContributionHandler:
        return DeleteContributionHandler(
            uow_factory=self.uow_factory,
            attachment_service=self.attachment_service,
            notifier=self.notifier,
            logger=self.logger.bind(handler="delete_contribution"),
        )

    def create_cause_handler(self) -> CreateCauseHandler:
        return CreateCauseHandler(
            uow_factory=self.uow_factory,
            notifier=self.notifier,
            logger=self.logger.bind(handler="create_cause"),
        )

    def update_cause_handler(self) -> UpdateCauseHandler:
        return UpdateCauseHandler(
            uow_factory=self.uow_factory,
            notifier=self.notifier,
            logger=self.logger.bind(handler="update_cause"),
        )

    def delete_cause_handler(self) -> DeleteCauseHandler:
        return DeleteCauseHandler(
            uow_factory=self.uow_factory,
            attachment_service=self.attachment_service,
            notifier=self.notifier,
            logger=self.logger.bind(handler="delete_cause"),
        )

    # =========================================================================
    # Image handlers
    # =========================================================================

    def attach_images_handler(self) -> AttachImagesHandler:
        return AttachImagesHandler(attachment_service=self.attachment_service, notifier=self.notifier)

    def replace_image_handler(self) -> ReplaceImageHandler:
        return ReplaceImageHandler(attachment_service=self.attachment_service, notifier=self.notifier)

    def remove_image_handler(self) -> RemoveImageHandler:
        return RemoveImageHandler(attachment_service=self.attachment_service, notifier=self.notifier)

    def list_images_handler(self) -> ListImagesHandler:
        return ListImagesHandler(attachment_service=self.attachment_service)
