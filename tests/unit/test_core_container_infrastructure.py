"""Unit tests for container adapter factories and AppContext wiring.

Tests cover:
- Adapter selection from Settings (object store, mail transport)
- Misconfiguration errors
- Logger, renderer and password service construction
- AppContext.create() / aclose() lifecycle
"""

import pytest
from moto import mock_aws

from src.core.config import Settings
from src.core.container import (
    AppContext,
    build_logger,
    build_mail_transport,
    build_object_store,
    build_password_service,
    build_template_renderer,
)
from src.core.enums import Environment
from src.infrastructure.email.jinja_template_renderer import JinjaTemplateRenderer
from src.infrastructure.email.resend_mail_transport import ResendMailTransport
from src.infrastructure.email.ses_mail_transport import SESMailTransport
from src.infrastructure.email.stub_mail_transport import StubMailTransport
from src.infrastructure.logging.console_adapter import ConsoleAdapter
from src.infrastructure.security.bcrypt_password_service import BcryptPasswordService
from src.infrastructure.storage.in_memory_object_store import InMemoryObjectStore
from src.infrastructure.storage.s3_object_store import S3ObjectStore


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, environment=Environment.TESTING, bcrypt_rounds=4, **overrides)


@pytest.mark.unit
class TestBuildObjectStore:
    def test_memory_is_default(self):
        store = build_object_store(make_settings())

        assert isinstance(store, InMemoryObjectStore)

    def test_memory_uses_public_base_url(self):
        store = build_object_store(
            make_settings(object_store_public_base_url="http://files.test/")
        )

        assert store.object_id_from_url("http://files.test/causes/a.png") == "causes/a.png"

    def test_s3(self):
        with mock_aws():
            store = build_object_store(
                make_settings(object_store_backend="s3", object_store_bucket="uploads")
            )

        assert isinstance(store, S3ObjectStore)


@pytest.mark.unit
class TestBuildMailTransport:
    def test_stub_is_default(self, mock_logger):
        assert isinstance(build_mail_transport(make_settings(), mock_logger), StubMailTransport)

    def test_ses(self, mock_logger):
        with mock_aws():
            transport = build_mail_transport(make_settings(mail_provider="ses"), mock_logger)

        assert isinstance(transport, SESMailTransport)

    async def test_resend(self, mock_logger):
        transport = build_mail_transport(
            make_settings(mail_provider="resend", resend_api_key="re_123"), mock_logger
        )

        assert isinstance(transport, ResendMailTransport)
        await transport.aclose()

    def test_resend_without_key_raises(self, mock_logger):
        with pytest.raises(ValueError, match="RESEND_API_KEY"):
            build_mail_transport(make_settings(mail_provider="resend"), mock_logger)


@pytest.mark.unit
class TestOtherFactories:
    def test_logger(self):
        assert isinstance(build_logger(make_settings()), ConsoleAdapter)

    def test_template_renderer_uses_app_name(self):
        renderer = build_template_renderer(make_settings(app_name="Parish Fund"))

        assert isinstance(renderer, JinjaTemplateRenderer)
        assert "Parish Fund" in renderer.render("auth.password_changed", {"member_name": "J"}).subject

    def test_password_service_uses_rounds(self):
        service = build_password_service(make_settings())

        assert isinstance(service, BcryptPasswordService)
        assert service.hash_password("correct horse").startswith("$2b$04$")


@pytest.mark.unit
class TestAppContextLifecycle:
    async def test_create_start_and_close(self):
        app = AppContext.create(make_settings())

        async with app:
            assert app.dispatcher.is_running
            assert isinstance(app.object_store, InMemoryObjectStore)
            assert isinstance(app.mail_transport, StubMailTransport)

        assert not app.dispatcher.is_running

    async def test_contexts_do_not_share_state(self, app, db, object_store, mail_transport):
        other = AppContext(
            settings=app.settings,
            logger=app.logger,
            uow_factory=db.uow,
            object_store=object_store,
            mail_transport=mail_transport,
            renderer=app.renderer,
            password_service=app.password_service,
        )

        assert other.dispatcher is not app.dispatcher
        assert other.token_store is not app.token_store
        assert other.register_member_handler() is not app.register_member_handler()
