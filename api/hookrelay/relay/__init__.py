"""Base types for the event-to-notification relay."""

from dataclasses import dataclass, field
from string import Formatter
from types import MappingProxyType
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class FieldSpec:
    """A field to pull out of an inbound event.

    ``path`` is dot separated, e.g. ``sender.login``.
    """
    name: str
    path: str
    required: bool = True


@dataclass(frozen=True)
class NotificationShape:
    """
    Static description of how one kind of event becomes a notification.

    - ``fields``: what to extract from the event
    - ``discriminator``: name of the field whose value picks a template
    - ``templates``: decision table, discriminator value -> template
    - ``default_template``: used for every value the table does not list

    Templates use ``str.format`` placeholders naming declared fields.
    The embed options (``title_template``, ``content_as_description``,
    ``image_field``) only matter to destinations that render embeds.
    """
    name: str
    fields: tuple[FieldSpec, ...]
    default_template: str
    discriminator: Optional[str] = None
    templates: Mapping[str, str] = field(default_factory=dict)
    title_template: Optional[str] = None
    content_as_description: bool = False
    image_field: Optional[str] = None

    def __post_init__(self):
        # Freeze the decision table
        object.__setattr__(self, "templates", MappingProxyType(dict(self.templates)))

        declared = self.field_names
        if len(declared) != len(self.fields):
            raise ValueError(f"Shape {self.name!r} declares a field twice")

        for option in ("discriminator", "image_field"):
            value = getattr(self, option)
            if value is not None and value not in declared:
                raise ValueError(f"Shape {self.name!r}: {option} {value!r} is not a declared field")

        templates = [self.default_template, *self.templates.values()]
        if self.title_template:
            templates.append(self.title_template)
        for template in templates:
            for placeholder in _placeholders(template):
                if placeholder not in declared:
                    raise ValueError(
                        f"Shape {self.name!r}: template placeholder {{{placeholder}}} "
                        "is not a declared field"
                    )

    @property
    def field_names(self) -> frozenset[str]:
        return frozenset(f.name for f in self.fields)


@dataclass(frozen=True)
class RenderedMessage:
    """Destination independent result of rendering a shape."""
    content: str
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


@dataclass
class OutboundRequest:
    """The request a destination is about to send."""
    destination: str
    url: str
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one relay invocation: succeeded or failed, never both."""
    succeeded: bool
    identifier: Optional[str] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, identifier: Optional[str] = None) -> "DispatchResult":
        return cls(succeeded=True, identifier=identifier)

    @classmethod
    def failure(cls, error: Exception) -> "DispatchResult":
        return cls(succeeded=False, error=error)

    @property
    def error_message(self) -> str:
        if self.error is None:
            return ""
        return str(self.error) or type(self.error).__name__


def _placeholders(template: str) -> set[str]:
    names = set()
    for _, field_name, _, _ in Formatter().parse(template):
        if field_name:
            names.add(field_name)
    return names
