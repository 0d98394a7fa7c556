"""Stub mail transport (development and tests).

Logs each message instead of sending it and keeps a copy in memory.
"""

from dataclasses import dataclass

from uuid_extensions import uuid7

from src.core.errors import UpstreamUnavailableError
from src.core.result import Result, Success
from src.domain.protocols.logger_protocol import LoggerProtocol


@dataclass(frozen=True)
class SentMessage:
    message_id: str
    sender: str
    recipient: str
    subject: str
    html: str


class StubMailTransport:
    """Implements MailTransportProtocol without network access."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger
        self.sent: list[SentMessage] = []

    async def send(
        self,
        sender: str,
        recipient: str,
        subject: str,
        html: str,
    ) -> Result[str, UpstreamUnavailableError]:
        message_id = f"stub-{uuid7().hex}"
        self.sent.append(
            SentMessage(
                message_id=message_id,
                sender=sender,
                recipient=recipient,
                subject=subject,
                html=html,
            )
        )
        self._logger.info(
            "stub_email_sent",
            message_id=message_id,
            recipient=recipient,
            subject=subject,
            body_length=len(html),
        )
        return Success(value=message_id)
