"""Twilio transcription event → SMS, as a serverless function."""

import asyncio
import logging
from functools import lru_cache
from typing import Any, Mapping

from hookrelay.config import settings
from hookrelay.destinations import TwilioSms
from hookrelay.errors import DestinationNotConfigured, MalformedEvent
from hookrelay.functions import header, request_id
from hookrelay.log import configure_logging
from hookrelay.relay import DispatchResult
from hookrelay.relay.extract import parse_event, parse_form_event
from hookrelay.relays import build_sms_relay, sms_destination
from hookrelay.response import function_error, function_response

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_destination() -> TwilioSms:
    """Resolved once per container."""
    return sms_destination(settings)


def _event_payload(event: Mapping[str, Any]) -> Mapping[str, Any]:
    """
    Twilio invokes functions with the callback fields directly; an API
    gateway wraps them in ``body``, form encoded as Twilio posts them or
    JSON when something else relays the callback.
    """
    if "body" not in event or "TranscriptionText" in event:
        return event

    base64_encoded = bool(event.get("isBase64Encoded"))
    content_type = header(event, "Content-Type") or ""
    if "application/x-www-form-urlencoded" in content_type:
        return parse_form_event(event.get("body"), base64_encoded=base64_encoded)
    return parse_event(event.get("body"), base64_encoded=base64_encoded)


async def handler(event: dict, context: Any = None) -> dict:
    logger.info("Sending text...", extra={"request_id": request_id(context)})

    try:
        destination = get_destination()
    except DestinationNotConfigured as exc:
        logger.error("%s", exc)
        return function_error(str(exc))

    try:
        payload = _event_payload(event)
    except MalformedEvent as exc:
        logger.warning("Unreadable Twilio event: %s", exc)
        return function_response(DispatchResult.failure(exc))

    result = await build_sms_relay(destination).relay(payload)
    if result.succeeded:
        logger.info("Message sent with SID: %s", result.identifier)
    return function_response(result)


def lambda_handler(event: dict, context: Any = None) -> dict:
    return asyncio.run(handler(event, context))
