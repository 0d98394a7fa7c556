"""Unit tests for image command handlers and the ListImages query."""

import pytest
from uuid_extensions import uuid7

from src.application.commands import AttachImages, RemoveImage, ReplaceImage
from src.application.queries import ListImages
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import AttachmentOwner
from tests.utils.utils import add_cause, add_contribution, add_member, make_upload


@pytest.fixture
def cause(db):
    add_member(db, name="Jane", email="jane@example.com")
    add_member(db, name="Omar", email="omar@example.com")
    return add_cause(db)


async def attach(app, owner_id, *files, owner=AttachmentOwner.CAUSE, notify=False):
    return await app.attach_images_handler().handle(
        AttachImages(owner=owner, owner_id=owner_id, files=files or (make_upload(),), notify=notify)
    )


@pytest.mark.unit
class TestAttachImages:
    async def test_attach_notifies_every_member(self, app, db, cause, object_store, mail_transport):
        # Act
        result = await attach(
            app, cause.id, make_upload(), make_upload("b.jpg", "image/jpeg"), notify=True
        )
        await app.dispatcher.join()

        # Assert
        assert isinstance(result, Success)
        assert len(result.value) == 2
        assert len(object_store.object_ids) == 2
        assert sorted(mail_transport.recipients) == ["jane@example.com", "omar@example.com"]
        _, _, subject, html = mail_transport.sent[0]
        assert subject == "Cause updated: Roof Repair"
        for attachment in result.value:
            assert attachment.url in html

    async def test_contribution_images_notify_owner(self, app, db, mail_transport):
        member = add_member(db)
        contribution = add_contribution(db, member)

        result = await attach(
            app, contribution.id, owner=AttachmentOwner.CONTRIBUTION, notify=True
        )
        await app.dispatcher.join()

        assert isinstance(result, Success)
        assert mail_transport.recipients == ["jane@example.com"]
        assert result.value[0].url in mail_transport.sent[0][3]

    async def test_failed_upload_sends_nothing(self, app, cause, object_store, mail_transport):
        object_store.fail_upload_after = 1

        result = await attach(
            app, cause.id, make_upload("first.png"), make_upload("second.png"), notify=True
        )
        await app.dispatcher.join()

        assert isinstance(result, Failure)
        assert object_store.object_ids == set()
        assert mail_transport.sent == []

    async def test_empty_batch(self, app, cause):
        result = await app.attach_images_handler().handle(
            AttachImages(owner=AttachmentOwner.CAUSE, owner_id=cause.id)
        )

        assert result.error.code == ErrorCode.NO_FILES_UPLOADED


@pytest.mark.unit
class TestReplaceImage:
    async def test_replace_swaps_object_and_notifies(
        self, app, db, cause, object_store, mail_transport
    ):
        # Arrange
        (original,) = (await attach(app, cause.id)).value
        old_ids = set(object_store.object_ids)

        # Act
        result = await app.replace_image_handler().handle(
            ReplaceImage(
                owner=AttachmentOwner.CAUSE,
                owner_id=cause.id,
                attachment_id=original.id,
                file=make_upload("new.png"),
            )
        )
        await app.dispatcher.join()

        # Assert
        assert result.value.id == original.id
        assert result.value.url != original.url
        assert db.attachments[AttachmentOwner.CAUSE][original.id].url == result.value.url
        assert object_store.object_ids.isdisjoint(old_ids)
        assert len(object_store.object_ids) == 1
        assert len(mail_transport.sent) == 2

    async def test_missing_file_is_rejected(self, app, cause, mail_transport):
        (original,) = (await attach(app, cause.id)).value

        result = await app.replace_image_handler().handle(
            ReplaceImage(owner=AttachmentOwner.CAUSE, owner_id=cause.id, attachment_id=original.id)
        )
        await app.dispatcher.join()

        assert result.error.code == ErrorCode.VALIDATION_FAILED
        assert result.error.field == "file"
        assert mail_transport.sent == []

    async def test_unknown_attachment(self, app, cause):
        result = await app.replace_image_handler().handle(
            ReplaceImage(
                owner=AttachmentOwner.CAUSE,
                owner_id=cause.id,
                attachment_id=uuid7(),
                file=make_upload(),
            )
        )

        assert result.error.code == ErrorCode.ATTACHMENT_NOT_FOUND


@pytest.mark.unit
class TestRemoveImage:
    async def test_remove_deletes_row_and_object(self, app, db, cause, object_store, mail_transport):
        (original,) = (await attach(app, cause.id)).value

        result = await app.remove_image_handler().handle(
            RemoveImage(owner=AttachmentOwner.CAUSE, owner_id=cause.id, attachment_id=original.id)
        )
        await app.dispatcher.join()

        assert result == Success(value=None)
        assert db.attachments[AttachmentOwner.CAUSE] == {}
        assert object_store.object_ids == set()
        assert mail_transport.sent[0][2] == "Cause updated: Roof Repair"

    async def test_notify_false(self, app, cause, mail_transport):
        (original,) = (await attach(app, cause.id)).value

        await app.remove_image_handler().handle(
            RemoveImage(
                owner=AttachmentOwner.CAUSE,
                owner_id=cause.id,
                attachment_id=original.id,
                notify=False,
            )
        )
        await app.dispatcher.join()

        assert mail_transport.sent == []


@pytest.mark.unit
class TestListImages:
    async def test_lists_owner_images(self, app, cause):
        attached = (await attach(app, cause.id, make_upload("a.png"), make_upload("b.png"))).value

        result = await app.list_images_handler().handle(
            ListImages(owner=AttachmentOwner.CAUSE, owner_id=cause.id)
        )

        assert {a.id for a in result.value} == {a.id for a in attached}

    async def test_unknown_owner(self, app):
        result = await app.list_images_handler().handle(
            ListImages(owner=AttachmentOwner.CONTRIBUTION, owner_id=uuid7())
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CONTRIBUTION_NOT_FOUND
