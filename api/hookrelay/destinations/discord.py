"""Discord webhook destination."""

import logging
from typing import Optional

import httpx

from hookrelay.destinations.base import Destination
from hookrelay.errors import DispatchFailure
from hookrelay.relay import OutboundRequest, RenderedMessage

logger = logging.getLogger(__name__)


def format_discord(message: RenderedMessage) -> dict:
    """
    Build the Discord webhook body.

    Embed keys are only set when the message has them; an embed with
    nothing in it is left out.
    """
    embed: dict = {}
    if message.title:
        embed["title"] = message.title
    if message.description:
        embed["description"] = message.description
    if message.image_url:
        embed["image"] = {"url": message.image_url}

    return {
        "content": message.content,
        "embeds": [embed] if embed else [],
    }


class DiscordWebhook(Destination):
    """Post a message to a Discord channel webhook."""

    @property
    def destination_type(self) -> str:
        return "discord"

    def __init__(self, webhook_url: str, timeout: float = 10, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(timeout=timeout, transport=transport)
        self.webhook_url = webhook_url

    def build_request(self, message: RenderedMessage) -> OutboundRequest:
        return OutboundRequest(
            destination=self.destination_type,
            url=self.webhook_url,
            body=format_discord(message),
            headers={"Content-Type": "application/json"},
        )

    async def send(self, request: OutboundRequest) -> Optional[str]:
        async with self.http_client() as client:
            resp = await client.post(request.url, json=request.body, headers=request.headers)

        if resp.status_code >= 400:
            raise DispatchFailure(
                f"Discord returned status {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )

        logger.debug("Discord accepted message (status %s)", resp.status_code)
        # Plain webhooks answer 204 with no body; ``?wait=true`` returns the message.
        if resp.status_code != 200:
            return None
        try:
            data = resp.json()
        except ValueError:
            data = None
        message_id = data.get("id") if isinstance(data, dict) else None
        return str(message_id) if message_id is not None else None
