"""Base destination interface."""

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from hookrelay.relay import OutboundRequest, RenderedMessage


class Destination(ABC):
    """
    Common interface for every place a notification can be sent.
    Each destination builds its own request body and sends it over HTTP.
    """

    def __init__(self, timeout: float = 10, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    @property
    @abstractmethod
    def destination_type(self) -> str:
        ...

    @abstractmethod
    def build_request(self, message: RenderedMessage) -> OutboundRequest:
        """Turn a rendered message into this destination's request."""
        ...

    @abstractmethod
    async def send(self, request: OutboundRequest) -> Optional[str]:
        """
        Send ``request`` with a single HTTP call.

        Returns the destination's acknowledgement id, if it gives one.
        Raises DispatchFailure when the destination rejects the request and
        lets ``httpx.HTTPError`` through for transport errors.
        """
        ...

    def http_client(self, **kwargs) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport, **kwargs)
