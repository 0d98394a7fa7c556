"""TemplateRendererProtocol - Domain protocol for email templates."""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class RenderedEmail:
    """Subject and HTML body produced from a template."""

    subject: str
    html: str


class TemplateRendererProtocol(Protocol):
    """Render a named template into a subject and body.

    Escaping contract:
        Every value is HTML-escaped, except values whose key ends in
        "_html", which are trusted pre-rendered fragments.

    Implementations:
        - JinjaTemplateRenderer: src/infrastructure/email/jinja_template_renderer.py
    """

    def render(self, template_key: str, data: dict[str, Any]) -> RenderedEmail:
        """Render a template.

        Args:
            template_key: Dotted key such as "auth.verify".
            data: Template variables.

        Raises:
            KeyError: If template_key is unknown.
        """
        ...
