"""Inbound webhook routes."""

import json
from typing import Any, Mapping, Optional

from fastapi import Request
from starlette.exceptions import HTTPException

from hookrelay.relay.extract import parse_event

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_body(request: Request) -> bytes:
    """
    Read the whole body, enforcing ``max_body_size`` on the bytes received.

    The middleware only sees a declared Content-Length; chunked uploads are
    caught here. Starlette caches the body, so ``request.form()`` still works.
    """
    max_body_size = request.app.state.settings.max_body_size
    raw = await request.body()
    if len(raw) > max_body_size:
        raise HTTPException(
            status_code=413,
            detail=f"Request body too large. Max size is {max_body_size} bytes.",
        )
    return raw


async def read_event(request: Request, form_field: Optional[str] = None) -> Mapping[str, Any]:
    """
    Read the request body as an event mapping.

    JSON bodies are parsed directly. Form bodies become a flat mapping of
    their string fields, unless ``form_field`` names a field that carries
    the JSON document itself (GitHub's ``payload=`` form delivery).
    Raises MalformedEvent when neither works.
    """
    raw = await read_body(request)

    content_type = request.headers.get("content-type", "")
    if any(ct in content_type for ct in FORM_CONTENT_TYPES):
        form = await request.form()
        fields = {k: v for k, v in form.items() if isinstance(v, str)}
        if form_field and form_field in fields:
            return parse_event(fields[form_field])
        return fields

    return parse_event(raw)


def event_preview(event: Mapping[str, Any], limit: int = 200) -> str:
    return json.dumps(event, default=str)[:limit]
