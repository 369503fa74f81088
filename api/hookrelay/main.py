import logging
from datetime import datetime, timezone
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from starlette.exceptions import HTTPException

from hookrelay import __version__
from hookrelay.config import Settings, settings as default_settings
from hookrelay.errors import DestinationNotConfigured
from hookrelay.log import configure_logging
from hookrelay.middleware import RequestSizeLimitMiddleware, SecurityHeadersMiddleware
from hookrelay.relays import discord_destination, sms_destination
from hookrelay.response import error_response
from hookrelay.routers import github, sms

logger = logging.getLogger(__name__)

LANDING_PAGE = """
  <html>
    <head><title>Success!</title></head>
    <body>
      <h1>You did it!</h1>
      <img src="https://media.giphy.com/media/XreQmk7ETCak0/giphy.gif" alt="Cool kid doing thumbs up" />
    </body>
  </html>
"""


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the relay server.

    Destinations are resolved once from ``settings`` here; an unconfigured
    destination leaves its route answering 500.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Relay GitHub and Twilio webhooks to Discord and SMS.",
        version=__version__,
        debug=settings.debug,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.discord = None
    app.state.sms = None

    try:
        app.state.discord = discord_destination(settings, transport=transport)
    except DestinationNotConfigured as exc:
        logger.warning("%s; /github will answer 500", exc)
    try:
        app.state.sms = sms_destination(settings, transport=transport)
    except DestinationNotConfigured as exc:
        logger.warning("%s; /sms will answer 500", exc)

    app.add_middleware(RequestSizeLimitMiddleware, max_body_size=settings.max_body_size)
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Exception Handlers ---

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return error_response(str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(DestinationNotConfigured)
    async def not_configured_handler(request: Request, exc: DestinationNotConfigured):
        logger.error("%s %s: %s", request.method, request.url.path, exc)
        return error_response(str(exc))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response("Internal server error")

    # --- Routes ---

    app.include_router(github.router)
    app.include_router(sms.router)

    @app.get("/", summary="Landing page", response_class=HTMLResponse)
    async def root():
        return LANDING_PAGE

    @app.get("/health", summary="Health check")
    async def health_ping(request: Request):
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "destinations": {
                "discord": request.app.state.discord is not None,
                "sms": request.app.state.sms is not None,
            },
        }

    return app


app = create_app()
