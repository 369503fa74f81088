"""Twilio SMS destination (https://www.twilio.com/docs/sms/api)."""

import logging
from typing import Optional

import httpx

from hookrelay.destinations.base import Destination
from hookrelay.errors import DispatchFailure
from hookrelay.relay import OutboundRequest, RenderedMessage

logger = logging.getLogger(__name__)


class TwilioSms(Destination):
    """Send a text message through the Twilio Messages REST API."""

    @property
    def destination_type(self) -> str:
        return "sms"

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        to_number: str,
        api_base: str = "https://api.twilio.com",
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.to_number = to_number
        self.api_base = api_base.rstrip("/")

    @property
    def messages_url(self) -> str:
        return f"{self.api_base}/2010-04-01/Accounts/{self.account_sid}/Messages.json"

    def build_request(self, message: RenderedMessage) -> OutboundRequest:
        return OutboundRequest(
            destination=self.destination_type,
            url=self.messages_url,
            body={
                "to": self.to_number,
                "from": self.from_number,
                "body": message.content,
            },
        )

    async def send(self, request: OutboundRequest) -> Optional[str]:
        form = {
            "To": request.body["to"],
            "From": request.body["from"],
            "Body": request.body["body"],
        }
        async with self.http_client(auth=(self.account_sid, self.auth_token)) as client:
            resp = await client.post(request.url, data=form, headers=request.headers)

        if resp.status_code >= 400:
            raise DispatchFailure(
                f"Twilio send failed: {resp.status_code} {_error_detail(resp)}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError:
            data = None
        sid = data.get("sid") if isinstance(data, dict) else None

        logger.info("SMS sent via Twilio to=%s sid=%s", request.body["to"], sid)
        return sid


def _error_detail(resp: httpx.Response) -> str:
    """Twilio errors are JSON with a ``message``; fall back to the raw text."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.text[:200]
