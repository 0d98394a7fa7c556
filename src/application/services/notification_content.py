"""Template data builders for member-facing notifications.

Each builder returns the dict passed to TemplateRendererProtocol.render().
Keys ending in "_html" are trusted fragments; everything they embed is
escaped here (Markup.format) before it is marked safe.
"""

from collections.abc import Sequence
from datetime import timedelta
from typing import Any
from urllib.parse import urlencode

from markupsafe import Markup

from src.domain.entities import Cause, Contribution, Member

NO_DESCRIPTION = "No description provided."
NO_AMOUNT = "N/A"


def ttl_text(ttl: timedelta) -> str:
    """Human form of a token lifetime ("90 seconds", "15 minutes", "1 hour")."""
    seconds = int(ttl.total_seconds())
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size and seconds % size == 0:
            count = seconds // size
            return f"{count} {unit}{'' if count == 1 else 's'}"
    return f"{seconds} second{'' if seconds == 1 else 's'}"


def token_link(base_url: str, path: str, token: str) -> str:
    return f"{base_url}{path}?{urlencode({'token': token})}"


def images_gallery_html(urls: Sequence[str]) -> Markup:
    """Inline gallery of attachment images, or empty markup when there are none."""
    if not urls:
        return Markup("")
    items = Markup("").join(
        Markup(
            '<a href="{0}"><img src="{0}" alt="Attachment" width="160" '
            'style="margin:4px;border:1px solid #ddd;"></a>'
        ).format(url)
        for url in urls
    )
    return Markup('<div class="gallery"><p><strong>Images</strong></p>{}</div>').format(items)


def verify_email_data(member: Member, verify_url: str, ttl: timedelta) -> dict[str, Any]:
    return {
        "member_name": member.name,
        "verify_url": verify_url,
        "ttl_text": ttl_text(ttl),
    }


def reset_password_data(member: Member, reset_url: str, ttl: timedelta) -> dict[str, Any]:
    return {
        "member_name": member.name,
        "reset_url": reset_url,
        "ttl_text": ttl_text(ttl),
    }


def password_changed_data(member: Member) -> dict[str, Any]:
    return {"member_name": member.name}


def contribution_data(
    member: Member,
    contribution: Contribution,
    image_urls: Sequence[str] = (),
) -> dict[str, Any]:
    return {
        "member_name": member.name,
        "amount": f"{contribution.amount:.2f}",
        "contributed_on": contribution.contributed_on.isoformat(),
        "contribution_id": str(contribution.id),
        "images_html": images_gallery_html(image_urls),
    }


def cause_data(
    cause: Cause,
    image_urls: Sequence[str] = (),
    member_name: str | None = None,
) -> dict[str, Any]:
    """Template data for a cause; member_name personalizes the greeting."""
    return {
        "member_name": member_name,
        "title": cause.title,
        "description": cause.description or NO_DESCRIPTION,
        "amount": f"{cause.amount:.2f}" if cause.amount is not None else NO_AMOUNT,
        "cause_id": str(cause.id),
        "images_html": images_gallery_html(image_urls),
    }


__all__ = [
    "NO_AMOUNT",
    "NO_DESCRIPTION",
    "cause_data",
    "contribution_data",
    "images_gallery_html",
    "password_changed_data",
    "reset_password_data",
    "token_link",
    "ttl_text",
    "verify_email_data",
]
