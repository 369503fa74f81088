"""Pull the declared fields out of an inbound event."""

import base64
import binascii
import json
from typing import Any, Mapping, Union
from urllib.parse import parse_qsl

from hookrelay.errors import MalformedEvent
from hookrelay.relay import NotificationShape

_MISSING = object()


def _decode_body(raw: Union[str, bytes, None], base64_encoded: bool) -> Union[str, bytes]:
    if raw is None or raw == "" or raw == b"":
        raise MalformedEvent("event body is empty")

    if base64_encoded:
        try:
            raw = base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError):
            raise MalformedEvent("event body is not valid base64")
    return raw


def parse_event(raw: Union[Mapping[str, Any], str, bytes, None], base64_encoded: bool = False) -> Mapping[str, Any]:
    """
    Turn a trigger payload into an event mapping.

    Mappings pass through untouched. Strings/bytes are decoded as JSON
    (after base64 decoding when the trigger flags the body as encoded).
    """
    if isinstance(raw, Mapping):
        return raw

    raw = _decode_body(raw, base64_encoded)

    try:
        event = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError):
        raise MalformedEvent("event body is not valid JSON")

    if not isinstance(event, Mapping):
        raise MalformedEvent(f"event body must be a JSON object, got {type(event).__name__}")
    return event


def parse_form_event(raw: Union[str, bytes, None], base64_encoded: bool = False) -> Mapping[str, Any]:
    """
    Turn an ``application/x-www-form-urlencoded`` body into a flat mapping.

    Twilio posts its callbacks this way. Repeated keys keep the last value.
    """
    raw = _decode_body(raw, base64_encoded)
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise MalformedEvent("event body is not valid UTF-8")
    return dict(parse_qsl(raw, keep_blank_values=True))


def lookup(event: Mapping[str, Any], path: str) -> Any:
    """Walk a dot separated path. Returns ``_MISSING`` when any step is absent."""
    current: Any = event
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def extract_fields(event: Mapping[str, Any], shape: NotificationShape) -> dict[str, Any]:
    """
    Build a flat ``{field name: value}`` mapping for ``shape``.

    Raises MalformedEvent when a required field is absent or ``None``.
    Absent optional fields come back as ``None``.
    """
    if not isinstance(event, Mapping):
        raise MalformedEvent(f"event must be an object, got {type(event).__name__}")

    fields: dict[str, Any] = {}
    for spec in shape.fields:
        value = lookup(event, spec.path)
        if value is _MISSING or value is None:
            if spec.required:
                raise MalformedEvent(f"missing required field: {spec.path}")
            value = None
        fields[spec.name] = value
    return fields
