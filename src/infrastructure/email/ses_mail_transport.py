"""AWS SES mail transport.

Sends one rendered HTML email via the SES SendEmail API. The boto3 call is
blocking and runs in the default executor.
"""

import asyncio
from functools import partial

import boto3
from botocore.client import BaseClient
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from src.core.enums import ErrorCode
from src.core.errors import UpstreamUnavailableError
from src.core.result import Failure, Result, Success


def build_ses_client(region: str, timeout: float = 10.0) -> BaseClient:
    """Return an SES client with bounded connect/read timeouts."""
    return boto3.client(
        "ses",
        region_name=region,
        config=Config(
            connect_timeout=timeout,
            read_timeout=timeout,
            retries={"max_attempts": 2, "mode": "standard"},
        ),
    )


class SESMailTransport:
    """Implements MailTransportProtocol on top of boto3 SES.

    Args:
        client: boto3 SES client (see build_ses_client).
    """

    SERVICE_NAME = "ses"

    def __init__(self, client: BaseClient) -> None:
        self._client = client

    async def send(
        self,
        sender: str,
        recipient: str,
        subject: str,
        html: str,
    ) -> Result[str, UpstreamUnavailableError]:
        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(
                None,
                partial(
                    self._client.send_email,
                    Source=sender,
                    Destination={"ToAddresses": [recipient]},
                    Message={
                        "Subject": {"Charset": "UTF-8", "Data": subject},
                        "Body": {"Html": {"Charset": "UTF-8", "Data": html}},
                    },
                ),
            )
        except ClientError as e:
            return Failure(
                error=UpstreamUnavailableError(
                    code=ErrorCode.UPSTREAM_UNAVAILABLE,
                    message="SES rejected the message",
                    service_name=self.SERVICE_NAME,
                    details={"aws_error_code": str(e.response["Error"]["Code"])},
                )
            )
        except BotoCoreError as e:
            return Failure(
                error=UpstreamUnavailableError(
                    code=ErrorCode.UPSTREAM_UNAVAILABLE,
                    message="SES unreachable",
                    service_name=self.SERVICE_NAME,
                    details={"error_type": type(e).__name__},
                )
            )
        return Success(value=response.get("MessageId", "unknown"))
