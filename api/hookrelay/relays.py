"""Build relays from settings."""

from typing import Optional

import httpx

from hookrelay.config import Settings
from hookrelay.destinations import DiscordWebhook, TwilioSms
from hookrelay.errors import DestinationNotConfigured
from hookrelay.relay.core import Relay
from hookrelay.relay.shapes import SMS_TRANSCRIPTION_SHAPE, github_shape_for


def discord_destination(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> DiscordWebhook:
    if not settings.discord_configured:
        raise DestinationNotConfigured("Discord webhook is not configured (DISCORD_WEBHOOK_URL)")
    return DiscordWebhook(
        settings.discord_webhook_url,
        timeout=settings.http_timeout,
        transport=transport,
    )


def sms_destination(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> TwilioSms:
    if not settings.sms_configured:
        raise DestinationNotConfigured(
            "SMS destination is not configured (TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, "
            "TWILIO_PHONE_NUMBER, USER_TW_PHONE_NUMBER)"
        )
    return TwilioSms(
        account_sid=settings.twilio_account_sid,
        auth_token=settings.twilio_auth_token,
        from_number=settings.twilio_phone_number,
        to_number=settings.user_tw_phone_number,
        api_base=settings.twilio_api_base,
        timeout=settings.http_timeout,
        transport=transport,
    )


def build_github_relay(
    destination: DiscordWebhook, event_type: Optional[str] = None
) -> Relay:
    return Relay(github_shape_for(event_type), destination)


def build_sms_relay(destination: TwilioSms) -> Relay:
    return Relay(SMS_TRANSCRIPTION_SHAPE, destination)
