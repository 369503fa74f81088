"""Body size limit + security headers middleware."""

import logging

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from hookrelay.response import error_response

logger = logging.getLogger(__name__)

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        for header, value in _SECURITY_HEADERS.items():
            response.headers[header] = value
        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject webhook bodies whose declared Content-Length exceeds ``max_body_size``.

    Chunked bodies carry no length up front; ``routers.read_body`` applies the
    same limit to the bytes actually read.
    """

    def __init__(self, app, max_body_size: int = 1024 * 1024):
        super().__init__(app)
        self.max_body_size = max_body_size

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                too_large = int(content_length) > self.max_body_size
            except ValueError:
                return error_response("Invalid Content-Length header", status_code=400)
            if too_large:
                logger.warning(
                    "Rejected %s %s: body of %s bytes", request.method, request.url.path, content_length
                )
                return error_response(
                    f"Request body too large. Max size is {self.max_body_size} bytes.",
                    status_code=413,
                )

        return await call_next(request)
