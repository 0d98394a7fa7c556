"""Resend HTTP API mail transport.

POSTs one message per call to {base_url}/emails with a bearer API key.
"""

import httpx

from src.core.enums import ErrorCode
from src.core.errors import UpstreamUnavailableError
from src.core.result import Failure, Result, Success


class ResendMailTransport:
    """Implements MailTransportProtocol over the Resend REST API.

    Args:
        api_key: Resend API key.
        base_url: API base URL.
        timeout: Per-request timeout in seconds.
        client: Optional shared AsyncClient (owned by the caller when given).
    """

    SERVICE_NAME = "resend"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.resend.com",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout),
            headers={"Authorization": f"Bearer {api_key}"},
        )

    async def send(
        self,
        sender: str,
        recipient: str,
        subject: str,
        html: str,
    ) -> Result[str, UpstreamUnavailableError]:
        try:
            response = await self._client.post(
                "/emails",
                json={"from": sender, "to": [recipient], "subject": subject, "html": html},
            )
        except httpx.HTTPError as e:
            return Failure(
                error=UpstreamUnavailableError(
                    code=ErrorCode.UPSTREAM_UNAVAILABLE,
                    message="Resend unreachable",
                    service_name=self.SERVICE_NAME,
                    details={"error_type": type(e).__name__},
                )
            )

        if response.is_error:
            return Failure(
                error=UpstreamUnavailableError(
                    code=ErrorCode.UPSTREAM_UNAVAILABLE,
                    message=f"Resend failed ({response.status_code})",
                    service_name=self.SERVICE_NAME,
                    details={
                        "status_code": str(response.status_code),
                        "body": response.text[:500],
                    },
                )
            )

        try:
            message_id = str(response.json().get("id", "unknown"))
        except ValueError:
            message_id = "unknown"
        return Success(value=message_id)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
