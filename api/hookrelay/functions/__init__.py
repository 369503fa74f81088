"""
Serverless entry points.

- discorder.py → GitHub webhook → Discord (API Gateway / Netlify style event)
- send_text.py → Twilio transcription event → SMS

Both build their relay once per container from ``hookrelay.config.settings``
and answer with the same 204 / 500 ``{"error": ...}`` contract as the server.
"""

from typing import Any, Mapping, Optional


def header(event: Mapping[str, Any], name: str) -> Optional[str]:
    """Case-insensitive header lookup on a gateway event."""
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def request_id(context: Any) -> Optional[str]:
    return getattr(context, "aws_request_id", None)
