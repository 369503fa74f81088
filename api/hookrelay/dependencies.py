"""FastAPI dependencies resolving the destinations configured at startup."""

from fastapi import Request

from hookrelay.destinations import DiscordWebhook, TwilioSms
from hookrelay.errors import DestinationNotConfigured


def get_discord_destination(request: Request) -> DiscordWebhook:
    destination = getattr(request.app.state, "discord", None)
    if destination is None:
        raise DestinationNotConfigured("Discord webhook is not configured")
    return destination


def get_sms_destination(request: Request) -> TwilioSms:
    destination = getattr(request.app.state, "sms", None)
    if destination is None:
        raise DestinationNotConfigured("SMS destination is not configured")
    return destination
