"""Shared fixtures: settings, recorded HTTP traffic, sample events."""

import json
from typing import Callable, Optional

import httpx
import pytest

from hookrelay.config import Settings

DISCORD_URL = "https://discord.com/api/webhooks/123/abc"


class Recorder:
    """httpx.MockTransport handler that records every request it answers."""

    def __init__(self, responder: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: list[httpx.Request] = []
        self.responder = responder or (lambda request: httpx.Response(204))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


def failing_transport(exc: Exception) -> Recorder:
    def responder(request: httpx.Request) -> httpx.Response:
        raise exc

    return Recorder(responder)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        discord_webhook_url=DISCORD_URL,
        twilio_account_sid="AC_TEST_ACCOUNT_SID",
        twilio_auth_token="test_auth_token",
        twilio_phone_number="+14155550000",
        user_tw_phone_number="+14155551234",
    )


@pytest.fixture
def bare_settings() -> Settings:
    return Settings(
        _env_file=None,
        discord_webhook_url="",
        twilio_account_sid="",
        twilio_auth_token="",
        twilio_phone_number="",
        user_tw_phone_number="",
    )


@pytest.fixture
def star_event() -> dict:
    return {
        "action": "created",
        "sender": {"login": "ada", "avatar_url": "http://x/a.png"},
        "repository": {"name": "proj", "full_name": "ada/proj"},
    }


@pytest.fixture
def transcription_event() -> dict:
    return {
        "TranscriptionText": "I found the treasure",
        "TranscriptionStatus": "completed",
        "CallSid": "CA123",
    }


def twilio_created(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        201,
        json={"sid": "SM_TEST_SID_1", "status": "queued", "to": "+14155551234"},
    )
