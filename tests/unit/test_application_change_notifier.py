"""Unit tests for ChangeNotifier (recipient selection and link building).

The dispatcher is a Mock; assertions read the arguments of dispatch().
"""

from datetime import timedelta
from unittest.mock import Mock

import pytest
from uuid_extensions import uuid7

from src.application.services.change_notifier import ChangeNotifier
from src.domain.entities import Member
from src.domain.enums import AttachmentOwner
from tests.utils.utils import add_attachment, add_cause, add_contribution, add_member


@pytest.fixture
def dispatcher():
    return Mock()


@pytest.fixture
def notifier(db, dispatcher, mock_logger):
    return ChangeNotifier(
        uow_factory=db.uow,
        dispatcher=dispatcher,
        logger=mock_logger,
        app_base_url="https://api.fundkeeper.test",
        client_base_url="https://app.fundkeeper.test",
    )


@pytest.fixture
def jane():
    return Member(id=uuid7(), name="Jane", email="jane@example.com")


@pytest.mark.unit
class TestTokenLinks:
    def test_verification_link_uses_app_base_url(self, notifier, dispatcher, jane):
        notifier.verification_issued(jane, "abc123", timedelta(seconds=90))

        event, recipients, template_key, data = dispatcher.dispatch.call_args.args
        assert event == "auth.verification_issued"
        assert recipients == ["jane@example.com"]
        assert template_key == "auth.verify"
        assert data["verify_url"] == (
            "https://api.fundkeeper.test/api/auth/verify-email?token=abc123"
        )
        assert data["ttl_text"] == "90 seconds"

    def test_reset_link_uses_client_base_url(self, notifier, dispatcher, jane):
        notifier.reset_issued(jane, "abc123", timedelta(minutes=15))

        _, _, template_key, data = dispatcher.dispatch.call_args.args
        assert template_key == "auth.reset"
        assert data["reset_url"] == "https://app.fundkeeper.test/reset-password?token=abc123"

    def test_reset_link_falls_back_to_app_base_url(self, db, dispatcher, mock_logger, jane):
        notifier = ChangeNotifier(
            uow_factory=db.uow,
            dispatcher=dispatcher,
            logger=mock_logger,
            app_base_url="https://api.fundkeeper.test",
            client_base_url="",
        )

        notifier.reset_issued(jane, "t", timedelta(minutes=15))

        data = dispatcher.dispatch.call_args.args[3]
        assert data["reset_url"].startswith("https://api.fundkeeper.test/reset-password")


@pytest.mark.unit
class TestRecipients:
    async def test_contribution_goes_to_owning_member_with_images(self, notifier, dispatcher, db):
        # Arrange
        member = add_member(db)
        add_member(db, name="Omar", email="omar@example.com")
        contribution = add_contribution(db, member)
        add_attachment(
            db, AttachmentOwner.CONTRIBUTION, contribution.id, "https://cdn.test/c.png"
        )

        # Act
        await notifier.contribution_changed_by_id("contribution.updated", contribution.id)

        # Assert
        _, recipients, _, data = dispatcher.dispatch.call_args.args
        assert recipients == ["jane@example.com"]
        assert "https://cdn.test/c.png" in str(data["images_html"])

    async def test_cause_goes_to_every_member_with_email(self, notifier, dispatcher, db):
        add_member(db)
        add_member(db, name="Omar", email="omar@example.com")
        add_member(db, name="Cash Donor", email=None)
        cause = add_cause(db)

        await notifier.owner_changed(AttachmentOwner.CAUSE, cause.id)

        calls = [c.args for c in dispatcher.dispatch.call_args_list]
        assert {template_key for _, _, template_key, _ in calls} == {"cause.updated"}
        greetings = {tuple(recipients): data["member_name"] for _, recipients, _, data in calls}
        assert greetings == {
            ("jane@example.com",): "Jane Doe",
            ("omar@example.com",): "Omar",
        }

    async def test_unknown_owner_sends_nothing(self, notifier, dispatcher):
        await notifier.owner_changed(AttachmentOwner.CONTRIBUTION, uuid7())

        dispatcher.dispatch.assert_not_called()

    async def test_password_changed_for_missing_member(self, notifier, dispatcher):
        await notifier.password_changed(uuid7())

        dispatcher.dispatch.assert_not_called()


@pytest.mark.unit
class TestLookupFailures:
    async def test_lookup_failure_is_logged_not_raised(self, notifier, dispatcher, db, mock_logger):
        # Arrange
        member = add_member(db)
        db.inject_failure("members.get", RuntimeError("connection lost"))

        # Act
        await notifier.password_changed(member.id)

        # Assert
        dispatcher.dispatch.assert_not_called()
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args[0] == "notification_lookup_failed"
        assert mock_logger.warning.call_args.kwargs["notification_event"] == (
            "auth.password_changed"
        )
