"""Unit tests for contribution and cause command handlers.

Tests cover:
- Validation (amounts, titles) before any persistence
- Persistence through the unit of work
- Notification recipients (owning member vs. every member with email)
- Delete cascades images and sends the "deleted" notification
"""

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest
from uuid_extensions import uuid7

from src.application.commands import (
    AttachImages,
    CreateCause,
    DeleteCause,
    DeleteContribution,
    RecordContribution,
    UpdateCause,
    UpdateContribution,
)
from src.core.enums import ErrorCode
from src.core.errors import NotFoundError, ValidationError
from src.core.result import Failure, Success
from src.domain.enums import AttachmentOwner
from tests.utils.utils import add_cause, add_contribution, add_member, make_upload


@pytest.mark.unit
class TestRecordContribution:
    async def test_record_quantizes_and_notifies_member(self, app, db, mail_transport):
        # Arrange
        member = add_member(db)

        # Act
        result = await app.record_contribution_handler().handle(
            RecordContribution(
                member_id=member.id,
                amount=Decimal("25.5"),
                contributed_on=date(2024, 4, 2),
            )
        )
        await app.dispatcher.join()

        # Assert
        assert isinstance(result, Success)
        stored = db.contributions[result.value.id]
        assert stored.amount == Decimal("25.50")
        assert stored.member_id == member.id
        (_, recipient, subject, html) = mail_transport.sent[0]
        assert recipient == "jane@example.com"
        assert subject == "Contribution recorded: 25.50 on 2024-04-02"
        assert "Jane Doe" in html

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-1")])
    async def test_non_positive_amount_is_rejected(self, app, db, amount):
        member = add_member(db)

        result = await app.record_contribution_handler().handle(
            RecordContribution(member_id=member.id, amount=amount, contributed_on=date(2024, 4, 2))
        )

        assert isinstance(result.error, ValidationError)
        assert result.error.code == ErrorCode.INVALID_AMOUNT
        assert db.contributions == {}

    async def test_unknown_member_is_not_found(self, app, db):
        result = await app.record_contribution_handler().handle(
            RecordContribution(member_id=uuid7(), amount=Decimal("5"), contributed_on=date.today())
        )

        assert isinstance(result.error, NotFoundError)
        assert result.error.code == ErrorCode.MEMBER_NOT_FOUND

    async def test_member_without_email_gets_no_mail(self, app, db, mail_transport):
        member = add_member(db, email=None)

        result = await app.record_contribution_handler().handle(
            RecordContribution(member_id=member.id, amount=Decimal("5"), contributed_on=date.today())
        )
        await app.dispatcher.join()

        assert isinstance(result, Success)
        assert mail_transport.sent == []

    async def test_notify_false_sends_nothing(self, app, db, mail_transport):
        member = add_member(db)

        await app.record_contribution_handler().handle(
            RecordContribution(
                member_id=member.id,
                amount=Decimal("5"),
                contributed_on=date.today(),
                notify=False,
            )
        )
        await app.dispatcher.join()

        assert mail_transport.sent == []

    async def test_commit_failure_is_internal_error(self, app, db, mail_transport):
        member = add_member(db)
        db.inject_failure("commit", RuntimeError("disk full"))

        result = await app.record_contribution_handler().handle(
            RecordContribution(member_id=member.id, amount=Decimal("5"), contributed_on=date.today())
        )
        await app.dispatcher.join()

        assert result.error.code == ErrorCode.INTERNAL_ERROR
        assert db.contributions == {}
        assert mail_transport.sent == []


@pytest.mark.unit
class TestUpdateContribution:
    async def test_partial_update(self, app, db, mail_transport):
        member = add_member(db)
        contribution = add_contribution(db, member)

        result = await app.update_contribution_handler().handle(
            UpdateContribution(contribution_id=contribution.id, amount=Decimal("200"))
        )
        await app.dispatcher.join()

        stored = db.contributions[contribution.id]
        assert result.value.amount == Decimal("200.00")
        assert stored.amount == Decimal("200.00")
        assert stored.contributed_on == date(2024, 3, 1)
        assert mail_transport.sent[0][2] == "Contribution updated: 200.00 on 2024-03-01"

    async def test_reassign_to_unknown_member(self, app, db):
        contribution = add_contribution(db, add_member(db))

        result = await app.update_contribution_handler().handle(
            UpdateContribution(contribution_id=contribution.id, member_id=uuid7())
        )

        assert result.error.code == ErrorCode.MEMBER_NOT_FOUND

    async def test_unknown_contribution(self, app):
        result = await app.update_contribution_handler().handle(
            UpdateContribution(contribution_id=uuid7(), amount=Decimal("1"))
        )

        assert result.error.code == ErrorCode.CONTRIBUTION_NOT_FOUND


@pytest.mark.unit
class TestDeleteContribution:
    async def test_delete_removes_images_and_notifies(
        self, app, db, object_store, mail_transport
    ):
        # Arrange
        member = add_member(db)
        contribution = add_contribution(db, member)
        attached = await app.attach_images_handler().handle(
            AttachImages(
                owner=AttachmentOwner.CONTRIBUTION,
                owner_id=contribution.id,
                files=(make_upload(), make_upload("second.png")),
                notify=False,
            )
        )
        assert len(attached.value) == 2

        # Act
        result = await app.delete_contribution_handler().handle(
            DeleteContribution(contribution_id=contribution.id)
        )
        await app.dispatcher.join()

        # Assert
        assert result == Success(value=None)
        assert db.contributions == {}
        assert db.attachments[AttachmentOwner.CONTRIBUTION] == {}
        assert object_store.object_ids == set()
        (_, recipient, subject, _) = mail_transport.sent[0]
        assert recipient == "jane@example.com"
        assert subject == "Contribution removed: 150.00 on 2024-03-01"

    async def test_unknown_contribution(self, app):
        result = await app.delete_contribution_handler().handle(
            DeleteContribution(contribution_id=uuid7())
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CONTRIBUTION_NOT_FOUND


@pytest.mark.unit
class TestCauseHandlers:
    async def test_create_broadcasts_to_members_with_email(self, app, db, mail_transport):
        # Arrange
        add_member(db, name="Jane", email="jane@example.com")
        add_member(db, name="Omar", email="omar@example.com")
        add_member(db, name="Cash Donor", email=None)

        # Act
        result = await app.create_cause_handler().handle(
            CreateCause(title="  Roof Repair  ", description="   ", amount=Decimal("5000"))
        )
        await app.dispatcher.join()

        # Assert
        cause = db.causes[result.value.id]
        assert cause.title == "Roof Repair"
        assert cause.description is None
        assert sorted(mail_transport.recipients) == ["jane@example.com", "omar@example.com"]
        assert {subject for _, _, subject, _ in mail_transport.sent} == {"New cause: Roof Repair"}
        html_by_recipient = {recipient: html for _, recipient, _, html in mail_transport.sent}
        assert "Hello Jane," in html_by_recipient["jane@example.com"]
        assert "Hello Omar," in html_by_recipient["omar@example.com"]

    async def test_backdated_created_at_is_kept(self, app, db):
        created_at = datetime(2023, 12, 24, 18, 0, tzinfo=UTC)

        result = await app.create_cause_handler().handle(
            CreateCause(title="Christmas Dinner", created_at=created_at, notify=False)
        )

        assert db.causes[result.value.id].created_at == created_at

    @pytest.mark.parametrize(
        ("kwargs", "code", "field"),
        [
            ({"title": "   "}, ErrorCode.VALIDATION_FAILED, "title"),
            ({"title": "Roof", "amount": Decimal("-5")}, ErrorCode.INVALID_AMOUNT, "amount"),
        ],
    )
    async def test_invalid_cause(self, app, db, kwargs, code, field):
        result = await app.create_cause_handler().handle(CreateCause(**kwargs))

        assert result.error.code == code
        assert result.error.field == field
        assert db.causes == {}

    async def test_update_keeps_unset_fields(self, app, db, mail_transport):
        add_member(db)
        cause = add_cause(db, description="Fix the leak")

        result = await app.update_cause_handler().handle(
            UpdateCause(cause_id=cause.id, title="Roof and Gutters")
        )
        await app.dispatcher.join()

        stored = db.causes[cause.id]
        assert isinstance(result, Success)
        assert stored.title == "Roof and Gutters"
        assert stored.description == "Fix the leak"
        assert stored.amount == Decimal("5000.00")
        assert mail_transport.sent[0][2] == "Cause updated: Roof and Gutters"

    async def test_update_rejects_blank_title(self, app, db):
        cause = add_cause(db)

        result = await app.update_cause_handler().handle(UpdateCause(cause_id=cause.id, title=""))

        assert result.error.field == "title"
        assert db.causes[cause.id].title == "Roof Repair"

    async def test_delete_cascades_and_broadcasts(self, app, db, object_store, mail_transport):
        add_member(db)
        cause = add_cause(db)
        await app.attach_images_handler().handle(
            AttachImages(
                owner=AttachmentOwner.CAUSE,
                owner_id=cause.id,
                files=(make_upload(),),
                notify=False,
            )
        )

        result = await app.delete_cause_handler().handle(DeleteCause(cause_id=cause.id))
        await app.dispatcher.join()

        assert result == Success(value=None)
        assert db.causes == {}
        assert db.attachments[AttachmentOwner.CAUSE] == {}
        assert object_store.object_ids == set()
        assert mail_transport.sent[0][2] == "Cause removed: Roof Repair"

    async def test_delete_unknown_cause(self, app):
        result = await app.delete_cause_handler().handle(DeleteCause(cause_id=uuid7()))

        assert result.error.code == ErrorCode.CAUSE_NOT_FOUND
