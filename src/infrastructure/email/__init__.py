"""Email infrastructure: template rendering and mail transports.

- JinjaTemplateRenderer: bundled Jinja2 templates (autoescaped)
- SESMailTransport: AWS SES via boto3
- ResendMailTransport: Resend REST API via httpx
- StubMailTransport: logs instead of sending
"""

from src.infrastructure.email.jinja_template_renderer import JinjaTemplateRenderer
from src.infrastructure.email.resend_mail_transport import ResendMailTransport
from src.infrastructure.email.ses_mail_transport import SESMailTransport, build_ses_client
from src.infrastructure.email.stub_mail_transport import SentMessage, StubMailTransport

__all__ = [
    "JinjaTemplateRenderer",
    "ResendMailTransport",
    "SESMailTransport",
    "SentMessage",
    "StubMailTransport",
    "build_ses_client",
]
