"""
Message rendering.

Every discriminator value resolves to exactly one template: the decision
table entry when the value is a string the table lists, the shape's default
template otherwise. Rendering therefore never fails for a valid shape.
"""

import json
from typing import Any, Mapping, Optional

from hookrelay.relay import NotificationShape, RenderedMessage

# Keys tried (in order) when a nested object ends up in a message.
DISPLAY_KEYS = (
    "full_name",
    "name",
    "login",
    "title",
    "html_url",
    "url",
    "id",
)

UNDEFINED = "undefined"


def format_value(val: Any, max_len: int = 300) -> str:
    """
    Format one extracted value for interpolation.

    - ``None`` becomes ``"undefined"``
    - strings are used verbatim, other primitives via ``str``
    - dicts are reduced to a well-known display key when they have one
    - anything else becomes compact JSON, truncated to *max_len*
    """
    if val is None:
        return UNDEFINED

    if isinstance(val, str):
        return val

    if isinstance(val, bool):
        return "true" if val else "false"

    if not isinstance(val, (dict, list)):
        return str(val)

    if isinstance(val, dict):
        for key in DISPLAY_KEYS:
            if val.get(key) is not None and not isinstance(val[key], (dict, list)):
                return str(val[key])

    try:
        dumped = json.dumps(val, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return "[complex value]"
    return f"{dumped[:max_len]}..." if len(dumped) > max_len else dumped


def select_template(fields: Mapping[str, Any], shape: NotificationShape) -> str:
    if shape.discriminator is None:
        return shape.default_template
    value = fields.get(shape.discriminator)
    # Only strings can match; unhashable or numeric values fall to default.
    if isinstance(value, str) and value in shape.templates:
        return shape.templates[value]
    return shape.default_template


class _Values(dict):
    def __missing__(self, key: str) -> str:
        return UNDEFINED


def _fill(template: str, fields: Mapping[str, Any]) -> str:
    values = _Values((name, format_value(value)) for name, value in fields.items())
    return template.format_map(values)


def render_message(fields: Mapping[str, Any], shape: NotificationShape) -> str:
    """Render the message text for ``fields`` using the shape's decision table."""
    return _fill(select_template(fields, shape), fields)


def render_notification(fields: Mapping[str, Any], shape: NotificationShape) -> RenderedMessage:
    """Render the message plus the optional embed decoration of the shape."""
    message = render_message(fields, shape)

    title: Optional[str] = None
    if shape.title_template:
        title = _fill(shape.title_template, fields)

    image_url: Optional[str] = None
    if shape.image_field:
        image = fields.get(shape.image_field)
        if image is not None:
            image_url = format_value(image)

    return RenderedMessage(
        content=message,
        title=title,
        description=message if shape.content_as_description else None,
        image_url=image_url,
    )
