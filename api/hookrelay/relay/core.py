"""The Relay: one inbound event in, at most one outbound request out."""

import logging
from typing import Any, Mapping

import httpx

from hookrelay.destinations.base import Destination
from hookrelay.errors import DispatchFailure, MalformedEvent
from hookrelay.relay import DispatchResult, NotificationShape, OutboundRequest
from hookrelay.relay.extract import extract_fields
from hookrelay.relay.render import render_notification

logger = logging.getLogger(__name__)


class Relay:
    """
    Turn an inbound event into a notification for a single destination.

    Holds only its shape and destination, both fixed at construction, so
    one instance can serve concurrent invocations.
    """

    def __init__(self, shape: NotificationShape, destination: Destination):
        self.shape = shape
        self.destination = destination

    def render(self, event: Mapping[str, Any]) -> OutboundRequest:
        """Build the outbound request. Raises MalformedEvent on bad input."""
        fields = extract_fields(event, self.shape)
        message = render_notification(fields, self.shape)
        return self.destination.build_request(message)

    async def dispatch(self, request: OutboundRequest) -> DispatchResult:
        """
        Send ``request`` exactly once.

        Transport errors and destination rejections come back as a failed
        result; they are never raised.
        """
        try:
            identifier = await self.destination.send(request)
        except DispatchFailure as exc:
            logger.error("Dispatch to %s rejected: %s", request.destination, exc)
            return DispatchResult.failure(exc)
        except httpx.HTTPError as exc:
            logger.error(
                "Dispatch to %s failed: %s", request.destination, exc, exc_info=True
            )
            return DispatchResult.failure(
                DispatchFailure(f"Error sending to {request.destination}: {exc!r}")
            )

        if identifier:
            logger.info("Dispatched %s notification (id=%s)", self.shape.name, identifier)
        else:
            logger.info("Dispatched %s notification", self.shape.name)
        return DispatchResult.success(identifier)

    async def relay(self, event: Mapping[str, Any]) -> DispatchResult:
        """Render and dispatch one event; a malformed event is never sent."""
        try:
            request = self.render(event)
        except MalformedEvent as exc:
            logger.warning("Malformed %s event: %s", self.shape.name, exc)
            return DispatchResult.failure(exc)
        return await self.dispatch(request)
