import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from hookrelay.dependencies import get_discord_destination
from hookrelay.destinations import DiscordWebhook
from hookrelay.errors import MalformedEvent
from hookrelay.relay import DispatchResult
from hookrelay.relays import build_github_relay
from hookrelay.response import relay_response
from hookrelay.routers import event_preview, read_event

logger = logging.getLogger(__name__)

router = APIRouter(tags=["github"])


@router.post(
    "/github",
    status_code=204,
    summary="Relay a GitHub webhook to Discord",
    responses={500: {"description": "Malformed event or Discord delivery failed"}},
)
async def github_webhook(
    request: Request,
    x_github_event: Optional[str] = Header(None),
    destination: DiscordWebhook = Depends(get_discord_destination),
):
    try:
        event = await read_event(request, form_field="payload")
    except MalformedEvent as exc:
        logger.warning("Unreadable GitHub webhook body: %s", exc)
        return relay_response(DispatchResult.failure(exc))

    logger.debug("GitHub %s event: %s", x_github_event or "unknown", event_preview(event))

    relay = build_github_relay(destination, x_github_event)
    result = await relay.relay(event)
    return relay_response(result)
