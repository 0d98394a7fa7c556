"""MailTransportProtocol - Domain protocol for sending one email.

Rendering and fan-out live in NotificationDispatcher; a transport only
delivers a single, already rendered message to a single recipient.

Implementations:
    - SESMailTransport: src/infrastructure/email/ses_mail_transport.py
    - ResendMailTransport: src/infrastructure/email/resend_mail_transport.py
    - StubMailTransport: src/infrastructure/email/stub_mail_transport.py (dev/test)
"""

from typing import Protocol

from src.core.errors import UpstreamUnavailableError
from src.core.result import Result


class MailTransportProtocol(Protocol):
    """Protocol for mail delivery."""

    async def send(
        self,
        sender: str,
        recipient: str,
        subject: str,
        html: str,
    ) -> Result[str, UpstreamUnavailableError]:
        """Send one HTML email.

        Args:
            sender: From address.
            recipient: To address (already normalized).
            subject: Subject line.
            html: Rendered HTML body.

        Returns:
            Success(message_id) or Failure(UpstreamUnavailableError).
        """
        ...
