"""Infrastructure adapter factories.

The container owns adapter selection; callers only see protocols:
- Logging: ConsoleAdapter (JSON outside development)
- Object store: in-memory or S3 (OBJECT_STORE_BACKEND)
- Mail transport: stub, SES or Resend (MAIL_PROVIDER)
- Templates: bundled Jinja2 templates
- Password hashing: bcrypt

Each factory takes Settings explicitly so tests can build isolated
instances without touching the process environment.
"""

from src.core.config import Settings
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.mail_transport_protocol import MailTransportProtocol
from src.domain.protocols.object_store_protocol import ObjectStoreProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.template_renderer_protocol import TemplateRendererProtocol


def build_logger(settings: Settings) -> LoggerProtocol:
    """Console logger; JSON lines everywhere except development."""
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    ).bind(app=settings.app_name, environment=settings.environment.value)


def build_object_store(settings: Settings) -> ObjectStoreProtocol:
    """Object store selected by OBJECT_STORE_BACKEND.

    Raises:
        ValueError: If the backend is unsupported.
    """
    backend = settings.object_store_backend

    if backend == "s3":
        from src.infrastructure.storage.s3_object_store import (
            S3ObjectStore,
            build_s3_client,
        )

        client = build_s3_client(
            region=settings.aws_region,
            endpoint_url=settings.object_store_endpoint_url,
            connect_timeout=settings.object_store_connect_timeout_seconds,
            read_timeout=settings.object_store_read_timeout_seconds,
            max_attempts=settings.object_store_max_attempts,
        )
        return S3ObjectStore(
            client=client,
            bucket=settings.object_store_bucket,
            public_base_url=settings.object_store_public_base_url,
        )

    if backend == "memory":
        from src.infrastructure.storage.in_memory_object_store import (
            InMemoryObjectStore,
        )

        if settings.object_store_public_base_url:
            return InMemoryObjectStore(public_base_url=settings.object_store_public_base_url)
        return InMemoryObjectStore()

    raise ValueError(f"Unsupported OBJECT_STORE_BACKEND: {backend}")


def build_mail_transport(settings: Settings, logger: LoggerProtocol) -> MailTransportProtocol:
    """Mail transport selected by MAIL_PROVIDER.

    Raises:
        ValueError: If the provider is unsupported or misconfigured.
    """
    provider = settings.mail_provider

    if provider == "ses":
        from src.infrastructure.email.ses_mail_transport import (
            SESMailTransport,
            build_ses_client,
        )

        return SESMailTransport(
            client=build_ses_client(settings.aws_region, timeout=settings.mail_timeout_seconds)
        )

    if provider == "resend":
        from src.infrastructure.email.resend_mail_transport import ResendMailTransport

        if not settings.resend_api_key:
            raise ValueError("RESEND_API_KEY is required when MAIL_PROVIDER=resend")
        return ResendMailTransport(
            api_key=settings.resend_api_key,
            base_url=settings.resend_api_url,
            timeout=settings.mail_timeout_seconds,
        )

    if provider == "stub":
        from src.infrastructure.email.stub_mail_transport import StubMailTransport

        return StubMailTransport(logger=logger)

    raise ValueError(f"Unsupported MAIL_PROVIDER: {provider}")


def build_template_renderer(settings: Settings) -> TemplateRendererProtocol:
    from src.infrastructure.email.jinja_template_renderer import JinjaTemplateRenderer

    return JinjaTemplateRenderer(app_name=settings.app_name)


def build_password_service(settings: Settings) -> PasswordHashingProtocol:
    from src.infrastructure.security.bcrypt_password_service import (
        BcryptPasswordService,
    )

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)
