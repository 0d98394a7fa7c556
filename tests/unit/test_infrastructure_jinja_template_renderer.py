"""Unit tests for JinjaTemplateRenderer and notification template data.

Tests cover:
- Every template key renders with its data builder's output
- Autoescaping of untrusted values in bodies
- "_html" values passed through untouched; gallery fragments escape URLs
- Plain-text subjects
- Unknown template keys
"""

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest
from uuid_extensions import uuid7

from src.application.services.notification_content import (
    NO_AMOUNT,
    NO_DESCRIPTION,
    cause_data,
    contribution_data,
    images_gallery_html,
    password_changed_data,
    reset_password_data,
    token_link,
    ttl_text,
    verify_email_data,
)
from src.domain.entities import Cause, Contribution, Member
from src.infrastructure.email.jinja_template_renderer import JinjaTemplateRenderer


@pytest.fixture
def member():
    return Member(id=uuid7(), name="Jane <b>Doe</b>", email="jane@example.com")


@pytest.fixture
def contribution(member):
    return Contribution(
        id=uuid7(),
        member_id=member.id,
        amount=Decimal("50"),
        contributed_on=date(2024, 3, 1),
    )


@pytest.fixture
def cause():
    return Cause(
        id=uuid7(),
        title="Roof & Gutters",
        description=None,
        amount=None,
        created_at=datetime(2024, 2, 10, tzinfo=UTC),
    )


@pytest.mark.unit
class TestRenderAllTemplates:
    def test_every_template_key_renders(self, renderer, member, contribution, cause):
        data_by_group = {
            "auth.verify": verify_email_data(member, "https://x/v?token=t", timedelta(seconds=90)),
            "auth.reset": reset_password_data(member, "https://x/r?token=t", timedelta(minutes=15)),
            "auth.password_changed": password_changed_data(member),
        }
        for key in renderer.template_keys:
            if key.startswith("contribution."):
                data = contribution_data(member, contribution, ["https://cdn/x.png"])
            elif key.startswith("cause."):
                data = cause_data(cause, ["https://cdn/y.png"])
            else:
                data = data_by_group[key]

            rendered = renderer.render(key, data)

            assert rendered.subject
            assert "<html" in rendered.html
            assert "Fundkeeper" in rendered.html

    def test_unknown_template_raises_key_error(self, renderer):
        with pytest.raises(KeyError):
            renderer.render("contribution.archived", {})


@pytest.mark.unit
class TestEscaping:
    def test_untrusted_values_are_escaped_in_body(self, renderer, member, contribution):
        rendered = renderer.render("contribution.created", contribution_data(member, contribution))

        assert "Jane &lt;b&gt;Doe&lt;/b&gt;" in rendered.html
        assert "<b>Doe</b>" not in rendered.html

    def test_subject_is_plain_text(self, renderer, cause):
        rendered = renderer.render("cause.created", cause_data(cause))

        assert rendered.subject == "New cause: Roof & Gutters"

    def test_trusted_html_passes_through(self, renderer):
        rendered = renderer.render(
            "cause.updated",
            {"title": "T", "description": "D", "amount": "1", "cause_id": "c", "images_html": "<hr>"},
        )

        assert "<hr>" in rendered.html

    def test_gallery_escapes_urls(self):
        html = str(images_gallery_html(['https://cdn/a.png"><script>x</script>']))

        assert "<script>" not in html
        assert "&#34;&gt;&lt;script&gt;" in html

    def test_empty_gallery_renders_nothing(self, renderer, cause):
        rendered = renderer.render("cause.created", cause_data(cause, []))

        assert 'class="gallery"' not in rendered.html

    def test_cause_greeting_uses_member_name(self, renderer, cause):
        named = renderer.render("cause.created", cause_data(cause, member_name="Omar"))
        anonymous = renderer.render("cause.created", cause_data(cause))

        assert "Hello Omar," in named.html
        assert "Hello," in anonymous.html


@pytest.mark.unit
class TestTemplateData:
    def test_cause_defaults(self, cause):
        data = cause_data(cause)

        assert data["description"] == NO_DESCRIPTION
        assert data["amount"] == NO_AMOUNT

    def test_contribution_amount_has_two_decimals(self, member, contribution):
        data = contribution_data(member, contribution)

        assert data["amount"] == "50.00"
        assert data["contributed_on"] == "2024-03-01"

    @pytest.mark.parametrize(
        ("ttl", "expected"),
        [
            (timedelta(seconds=90), "90 seconds"),
            (timedelta(minutes=15), "15 minutes"),
            (timedelta(hours=1), "1 hour"),
            (timedelta(days=2), "2 days"),
            (timedelta(seconds=1), "1 second"),
        ],
    )
    def test_ttl_text(self, ttl, expected):
        assert ttl_text(ttl) == expected

    def test_token_link_encodes_token(self):
        link = token_link("https://api.example.com", "/api/auth/verify-email", "a b+c")

        assert link == "https://api.example.com/api/auth/verify-email?token=a+b%2Bc"


@pytest.mark.unit
def test_custom_app_name_is_used():
    renderer = JinjaTemplateRenderer(app_name="Parish Fund")

    rendered = renderer.render("auth.password_changed", {"member_name": "Jane"})

    assert "Parish Fund" in rendered.subject
    assert "Parish Fund" in rendered.html
