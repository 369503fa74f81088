import pytest
from pydantic import ValidationError

from hookrelay.config import Settings
from hookrelay.destinations import DiscordWebhook, TwilioSms
from hookrelay.errors import DestinationNotConfigured
from hookrelay.relay.shapes import GITHUB_PUSH_SHAPE, GITHUB_STAR_SHAPE
from hookrelay.relays import build_github_relay, discord_destination, sms_destination


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DISCORD_WEBHOOK_URL", "https://discord.com/api/webhooks/1/x")
    monkeypatch.setenv("USER_TW_PHONE_NUMBER", "+15550001111")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.discord_webhook_url == "https://discord.com/api/webhooks/1/x"
    assert settings.user_tw_phone_number == "+15550001111"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("url", ["ftp://discord.com/x", "discord.com/api/webhooks", "https://"])
def test_rejects_bad_webhook_url(url):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, discord_webhook_url=url)


def test_destinations_from_settings(settings):
    discord = discord_destination(settings)
    sms = sms_destination(settings)

    assert isinstance(discord, DiscordWebhook)
    assert discord.webhook_url == settings.discord_webhook_url
    assert discord.timeout == settings.http_timeout
    assert isinstance(sms, TwilioSms)
    assert sms.to_number == "+14155551234"
    assert sms.from_number == "+14155550000"


def test_unconfigured_destinations(bare_settings):
    with pytest.raises(DestinationNotConfigured):
        discord_destination(bare_settings)
    with pytest.raises(DestinationNotConfigured):
        sms_destination(bare_settings)


def test_github_relay_shape(settings):
    destination = discord_destination(settings)

    assert build_github_relay(destination).shape is GITHUB_STAR_SHAPE
    assert build_github_relay(destination, "push").shape is GITHUB_PUSH_SHAPE
