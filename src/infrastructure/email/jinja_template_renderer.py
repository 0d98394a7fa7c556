"""Jinja2 email template renderer.

Templates live in ./templates as "<group>/<action>.html" and extend
layout.html. A template key "contribution.updated" maps to
"contribution/updated.html".

Escaping contract:
    - The body environment autoescapes every value.
    - Values whose key ends in "_html" are wrapped in Markup before
      rendering, so pre-rendered fragments pass through untouched.
    - Subjects are plain text and rendered without HTML escaping.
"""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from markupsafe import Markup

from src.domain.protocols.template_renderer_protocol import RenderedEmail

TEMPLATES_DIR = Path(__file__).parent / "templates"

SUBJECTS: dict[str, str] = {
    "auth.verify": "Verify your {{ app_name }} email address",
    "auth.reset": "Reset your {{ app_name }} password",
    "auth.password_changed": "Your {{ app_name }} password was changed",
    "contribution.created": "Contribution recorded: {{ amount }} on {{ contributed_on }}",
    "contribution.updated": "Contribution updated: {{ amount }} on {{ contributed_on }}",
    "contribution.deleted": "Contribution removed: {{ amount }} on {{ contributed_on }}",
    "cause.created": "New cause: {{ title }}",
    "cause.updated": "Cause updated: {{ title }}",
    "cause.deleted": "Cause removed: {{ title }}",
}

TRUSTED_SUFFIX = "_html"


class JinjaTemplateRenderer:
    """Implements TemplateRendererProtocol with Jinja2.

    Args:
        app_name: Injected into every template as app_name (overridable by data).
        templates_dir: Template root (defaults to the bundled templates).
    """

    def __init__(self, app_name: str, templates_dir: Path = TEMPLATES_DIR) -> None:
        self._app_name = app_name
        self._body_env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html", "xml"], default_for_string=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._subject_env = Environment(autoescape=False)

    @property
    def template_keys(self) -> frozenset[str]:
        return frozenset(SUBJECTS)

    def render(self, template_key: str, data: dict[str, Any]) -> RenderedEmail:
        """Render subject and HTML body for a template key.

        Raises:
            KeyError: If template_key is unknown.
        """
        subject_source = SUBJECTS.get(template_key)
        if subject_source is None:
            raise KeyError(template_key)

        context: dict[str, Any] = {"app_name": self._app_name}
        for key, value in data.items():
            if value is None:
                context[key] = ""
            elif key.endswith(TRUSTED_SUFFIX):
                context[key] = Markup(str(value))
            else:
                context[key] = str(value)

        try:
            template = self._body_env.get_template(
                f"{template_key.replace('.', '/')}.html"
            )
        except TemplateNotFound as e:
            raise KeyError(template_key) from e

        subject = self._subject_env.from_string(subject_source).render(context)
        # Subjects are single-line headers
        subject = " ".join(subject.split())
        return RenderedEmail(subject=subject, html=template.render(context))
