import base64
import json
from urllib.parse import urlencode

import httpx
import pytest

from conftest import DISCORD_URL, Recorder, failing_transport, twilio_created
from hookrelay.destinations import DiscordWebhook, TwilioSms
from hookrelay.errors import DestinationNotConfigured
from hookrelay.functions import discorder, send_text


@pytest.fixture
def discord_recorder(monkeypatch):
    recorder = Recorder()
    destination = DiscordWebhook(DISCORD_URL, transport=recorder.transport)
    monkeypatch.setattr(discorder, "get_destination", lambda: destination)
    return recorder


def _twilio(monkeypatch, recorder: Recorder) -> Recorder:
    destination = TwilioSms(
        account_sid="AC_TEST",
        auth_token="secret",
        from_number="+14155550000",
        to_number="+14155551234",
        transport=recorder.transport,
    )
    monkeypatch.setattr(send_text, "get_destination", lambda: destination)
    return recorder


class TestDiscorder:
    def test_star_event(self, discord_recorder, star_event):
        resp = discorder.lambda_handler({"body": json.dumps(star_event)}, None)

        assert resp == {"statusCode": 204}
        assert discord_recorder.last_json == {
            "content": "Look who just ⭐️ proj!\nThanks ada! :rocket:!",
            "embeds": [{"image": {"url": "http://x/a.png"}}],
        }

    def test_base64_body_and_event_header(self, discord_recorder, star_event):
        event = {
            "body": base64.b64encode(json.dumps(star_event).encode()).decode(),
            "isBase64Encoded": True,
            "headers": {"x-github-event": "push"},
        }

        resp = discorder.lambda_handler(event, None)

        assert resp["statusCode"] == 204
        assert discord_recorder.last_json["embeds"][0]["title"] == "New commit in proj by ada"

    @pytest.mark.asyncio
    async def test_async_handler(self, discord_recorder, star_event):
        resp = await discorder.handler({"body": json.dumps(star_event)})

        assert resp["statusCode"] == 204

    def test_invalid_body(self, discord_recorder):
        resp = discorder.lambda_handler({"body": "not json"}, None)

        assert resp["statusCode"] == 500
        assert "error" in json.loads(resp["body"])
        assert discord_recorder.requests == []

    def test_missing_repository(self, discord_recorder):
        resp = discorder.lambda_handler({"body": json.dumps({"sender": {"login": "ada"}})}, None)

        assert resp["statusCode"] == 500
        assert "repository.name" in json.loads(resp["body"])["error"]
        assert discord_recorder.requests == []

    def test_network_error(self, monkeypatch, star_event):
        recorder = failing_transport(httpx.ConnectError("boom"))
        destination = DiscordWebhook(DISCORD_URL, transport=recorder.transport)
        monkeypatch.setattr(discorder, "get_destination", lambda: destination)

        resp = discorder.lambda_handler({"body": json.dumps(star_event)}, None)

        assert resp["statusCode"] == 500
        assert resp["headers"]["Content-Type"] == "application/json"
        assert "boom" in json.loads(resp["body"])["error"]
        assert len(recorder.requests) == 1

    def test_not_configured(self, monkeypatch, star_event):
        def not_configured():
            raise DestinationNotConfigured("Discord webhook is not configured")

        monkeypatch.setattr(discorder, "get_destination", not_configured)

        resp = discorder.lambda_handler({"body": json.dumps(star_event)}, None)

        assert resp["statusCode"] == 500
        assert json.loads(resp["body"]) == {"error": "Discord webhook is not configured"}


class TestSendText:
    def test_twilio_event(self, monkeypatch, transcription_event):
        recorder = _twilio(monkeypatch, Recorder(twilio_created))

        resp = send_text.lambda_handler(transcription_event, None)

        assert resp == {"statusCode": 204, "headers": {"X-Message-Sid": "SM_TEST_SID_1"}}
        assert len(recorder.requests) == 1

    def test_gateway_wrapped_event(self, monkeypatch, transcription_event):
        recorder = _twilio(monkeypatch, Recorder(twilio_created))

        resp = send_text.lambda_handler({"body": json.dumps(transcription_event)}, None)

        assert resp["statusCode"] == 204
        assert len(recorder.requests) == 1

    def test_gateway_form_encoded_body(self, monkeypatch, transcription_event):
        recorder = _twilio(monkeypatch, Recorder(twilio_created))
        event = {
            "body": urlencode(transcription_event),
            "headers": {"content-type": "application/x-www-form-urlencoded"},
        }

        resp = send_text.lambda_handler(event, None)

        assert resp == {"statusCode": 204, "headers": {"X-Message-Sid": "SM_TEST_SID_1"}}
        assert len(recorder.requests) == 1
        assert b"A+Traveler+has+made+contact" in recorder.requests[0].content
        assert b"I+found+the+treasure" in recorder.requests[0].content

    def test_gateway_form_encoded_base64_body(self, monkeypatch, transcription_event):
        recorder = _twilio(monkeypatch, Recorder(twilio_created))
        event = {
            "body": base64.b64encode(urlencode(transcription_event).encode()).decode(),
            "isBase64Encoded": True,
            "headers": {"Content-Type": "application/x-www-form-urlencoded; charset=utf-8"},
        }

        resp = send_text.lambda_handler(event, None)

        assert resp["statusCode"] == 204
        assert len(recorder.requests) == 1

    def test_twilio_failure(self, monkeypatch, transcription_event):
        recorder = _twilio(
            monkeypatch,
            Recorder(lambda request: httpx.Response(401, json={"message": "Authenticate"})),
        )

        resp = send_text.lambda_handler(transcription_event, None)

        assert resp["statusCode"] == 500
        assert "Authenticate" in json.loads(resp["body"])["error"]
        assert len(recorder.requests) == 1

    def test_missing_transcription(self, monkeypatch):
        recorder = _twilio(monkeypatch, Recorder(twilio_created))

        resp = send_text.lambda_handler({"CallSid": "CA1"}, None)

        assert resp["statusCode"] == 500
        assert recorder.requests == []
