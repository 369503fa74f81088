"""Notification shapes for the events we relay."""

from typing import Optional

from hookrelay.relay import FieldSpec, NotificationShape

_GITHUB_FIELDS = (
    FieldSpec("username", "sender.login"),
    FieldSpec("repo_name", "repository.name"),
    FieldSpec("avatar_url", "sender.avatar_url", required=False),
    FieldSpec("action", "action", required=False),
)

# Star / unstar events ("watch" on older payloads).
GITHUB_STAR_SHAPE = NotificationShape(
    name="github-star",
    fields=_GITHUB_FIELDS,
    discriminator="action",
    templates={
        "created": "Look who just ⭐️ {repo_name}!\nThanks {username}! :rocket:!",
        "deleted": "Oh no! {username} unstarred {repo_name} 😢",
    },
    default_template="{username} performed action: {action} on {repo_name}",
    image_field="avatar_url",
)

GITHUB_PUSH_SHAPE = NotificationShape(
    name="github-push",
    fields=_GITHUB_FIELDS,
    default_template=":wave: Lets Go!",
    title_template="New commit in {repo_name} by {username}",
    content_as_description=True,
    image_field="avatar_url",
)

SMS_TRANSCRIPTION_SHAPE = NotificationShape(
    name="sms-transcription",
    fields=(FieldSpec("transcription", "TranscriptionText"),),
    default_template="A Traveler has made contact!\n :{transcription}",
)

_GITHUB_SHAPES = {
    "push": GITHUB_PUSH_SHAPE,
}


def github_shape_for(event_type: Optional[str]) -> NotificationShape:
    """Pick the shape for an ``X-GitHub-Event`` value; stars are the default."""
    if event_type:
        return _GITHUB_SHAPES.get(event_type.strip().lower(), GITHUB_STAR_SHAPE)
    return GITHUB_STAR_SHAPE
