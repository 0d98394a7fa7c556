"""Pytest configuration shared by unit and integration tests.

Unit tests run against the in-memory doubles in tests/utils/fakes.py:
- InMemoryDatabase / InMemoryUnitOfWork (transactions, row locks, failure injection)
- FlakyObjectStore (scripted upload/delete failures)
- RecordingMailTransport (records sends, fails chosen recipients)

Each test gets fresh instances; nothing is shared between tests.
"""

from unittest.mock import Mock

import pytest
import pytest_asyncio

from src.core.config import Settings
from src.core.enums import Environment
from src.core.container import AppContext
from src.infrastructure.email.jinja_template_renderer import JinjaTemplateRenderer
from src.infrastructure.security.bcrypt_password_service import BcryptPasswordService
from tests.utils.fakes import FlakyObjectStore, InMemoryDatabase, RecordingMailTransport


@pytest.fixture
def mock_logger():
    """Provide a mock logger for testing.

    bind() returns the same mock so calls made through bound loggers can
    be asserted on the fixture directly.

    Usage:
        def test_something(mock_logger):
            service = MyService(logger=mock_logger)
            service.do_something()
            mock_logger.info.assert_called_once()
    """
    logger = Mock()
    logger.info = Mock()
    logger.debug = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    logger.critical = Mock()
    logger.bind = Mock(return_value=logger)
    return logger


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the process environment and any .env file."""
    return Settings(
        _env_file=None,
        environment=Environment.TESTING,
        bcrypt_rounds=4,
        mail_enabled=True,
        mail_from="Fundkeeper <no-reply@fundkeeper.test>",
        app_base_url="https://api.fundkeeper.test",
        client_base_url="https://app.fundkeeper.test",
        notification_queue_size=50,
        notification_concurrency=4,
        orphan_grace_period_minutes=60,
    )


@pytest.fixture
def db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def object_store() -> FlakyObjectStore:
    return FlakyObjectStore()


@pytest.fixture
def mail_transport() -> RecordingMailTransport:
    return RecordingMailTransport()


@pytest.fixture
def renderer() -> JinjaTemplateRenderer:
    return JinjaTemplateRenderer(app_name="Fundkeeper")


@pytest.fixture
def password_service() -> BcryptPasswordService:
    # Minimum cost keeps hashing fast in tests
    return BcryptPasswordService(cost_factor=4)


@pytest_asyncio.fixture
async def app(
    test_settings,
    mock_logger,
    db,
    object_store,
    mail_transport,
    renderer,
    password_service,
):
    """AppContext wired to in-memory doubles, with the notification worker running.

    Usage:
        async def test_something(app, mail_transport):
            await app.register_member_handler().handle(command)
            await app.dispatcher.join()
            assert mail_transport.recipients == ["jane@example.com"]
    """
    context = AppContext(
        settings=test_settings,
        logger=mock_logger,
        uow_factory=db.uow,
        object_store=object_store,
        mail_transport=mail_transport,
        renderer=renderer,
        password_service=password_service,
    )
    await context.start()
    yield context
    await context.aclose(drain_timeout=1.0)


# Async timeout configuration
@pytest.fixture
def async_timeout():
    """Default timeout for async operations in tests."""
    return 5.0
