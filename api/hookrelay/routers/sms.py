import logging

from fastapi import APIRouter, Depends, Request

from hookrelay.dependencies import get_sms_destination
from hookrelay.destinations import TwilioSms
from hookrelay.errors import MalformedEvent
from hookrelay.relay import DispatchResult
from hookrelay.relays import build_sms_relay
from hookrelay.response import relay_response
from hookrelay.routers import read_event

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sms"])


@router.post(
    "/sms",
    status_code=204,
    summary="Text a Twilio transcription to the configured phone",
    responses={500: {"description": "Malformed event or SMS delivery failed"}},
)
async def sms_webhook(request: Request, destination: TwilioSms = Depends(get_sms_destination)):
    logger.info("Sending text...")
    try:
        event = await read_event(request)
    except MalformedEvent as exc:
        logger.warning("Unreadable Twilio callback body: %s", exc)
        return relay_response(DispatchResult.failure(exc))

    result = await build_sms_relay(destination).relay(event)
    return relay_response(result)
