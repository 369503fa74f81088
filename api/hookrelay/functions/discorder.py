"""GitHub webhook → Discord, as a serverless function."""

import asyncio
import logging
from functools import lru_cache
from typing import Any

from hookrelay.config import settings
from hookrelay.destinations import DiscordWebhook
from hookrelay.errors import DestinationNotConfigured, MalformedEvent
from hookrelay.functions import header, request_id
from hookrelay.log import configure_logging
from hookrelay.relay import DispatchResult
from hookrelay.relay.extract import parse_event
from hookrelay.relays import build_github_relay, discord_destination
from hookrelay.response import function_error, function_response

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_destination() -> DiscordWebhook:
    """Resolved once per container."""
    return discord_destination(settings)


async def handler(event: dict, context: Any = None) -> dict:
    logger.info("discorder invoked", extra={"request_id": request_id(context)})

    try:
        destination = get_destination()
    except DestinationNotConfigured as exc:
        logger.error("%s", exc)
        return function_error(str(exc))

    try:
        body = parse_event(event.get("body"), base64_encoded=bool(event.get("isBase64Encoded")))
    except MalformedEvent as exc:
        logger.warning("Unreadable GitHub webhook body: %s", exc)
        return function_response(DispatchResult.failure(exc))

    relay = build_github_relay(destination, header(event, "X-GitHub-Event"))
    result = await relay.relay(body)
    if result.succeeded:
        logger.info("Submitted!")
    return function_response(result)


def lambda_handler(event: dict, context: Any = None) -> dict:
    return asyncio.run(handler(event, context))
