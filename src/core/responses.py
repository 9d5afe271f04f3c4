"""Reply shapes for the meme flow - platform agnostic.

Each function here turns domain values into a plain description of what the
user should see. Rendering to Discord objects happens in
src/clients/discord/rendering.py.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from src.core.captions import slot_key
from src.core.config import Presentation, ResponsePolicy
from src.core.providers import MemeResult
from src.core.templates import MAX_SUGGESTIONS, MemeTemplate
from src.core.tokens import build_token, create_token

# Discord allows at most five text inputs in a modal
MAX_DIALOG_FIELDS = 5

INVALID_TEMPLATE_MESSAGE = "Invalid template"
ERROR_MESSAGE = "Sorry, something went wrong :("

SAMPLE_BUTTON_LABEL = "Create meme with this template"
REUSE_BUTTON_LABEL = "Reuse this template"
DIALOG_TITLE = "Create meme"


@dataclass(frozen=True)
class Author:
    """The user a finished meme is credited to."""

    display_name: str
    avatar_url: str | None = None


@dataclass(frozen=True)
class Suggestion:
    """One autocomplete choice."""

    name: str
    value: str


@dataclass(frozen=True)
class ActionButton:
    """A primary button carrying a correlation token as its custom id."""

    label: str
    custom_id: str


@dataclass(frozen=True)
class MessageReply:
    """A text-only reply."""

    content: str
    ephemeral: bool = True


@dataclass(frozen=True)
class MemeReply:
    """A reply showing a meme image with a single action button.

    With ``embed`` set the image goes into an embed (optionally titled and
    footed); otherwise ``content`` carries the image URL as plain text.
    """

    image_url: str
    button: ActionButton
    ephemeral: bool
    embed: bool = True
    title: str | None = None
    content: str | None = None
    footer_text: str | None = None
    footer_icon_url: str | None = None


@dataclass(frozen=True)
class TextField:
    """An optional single-line input in a caption dialog."""

    custom_id: str
    label: str
    required: bool = False


@dataclass(frozen=True)
class CaptionDialog:
    """A modal collecting one caption per slot."""

    title: str
    custom_id: str
    fields: list[TextField] = field(default_factory=list)


Outcome = list[Suggestion] | MessageReply | MemeReply | CaptionDialog


def compose_suggestions(templates: Sequence[MemeTemplate]) -> list[Suggestion]:
    return [Suggestion(name=t.name, value=t.name) for t in templates[:MAX_SUGGESTIONS]]


def compose_invalid_template() -> MessageReply:
    return MessageReply(content=INVALID_TEMPLATE_MESSAGE, ephemeral=True)


def compose_error_reply() -> MessageReply:
    return MessageReply(content=ERROR_MESSAGE, ephemeral=True)


def compose_sample_reply(template: MemeTemplate, result: MemeResult) -> MemeReply:
    """Preview shown after /meme: private, titled with the template name."""
    return MemeReply(
        image_url=result.url,
        button=ActionButton(
            label=SAMPLE_BUTTON_LABEL,
            custom_id=create_token(template.id).encode(),
        ),
        ephemeral=True,
        embed=True,
        title=template.name,
    )


def compose_caption_dialog(template: MemeTemplate) -> CaptionDialog:
    """One optional short text field per caption slot.

    Templates with more slots than a modal can hold get fields for the first
    MAX_DIALOG_FIELDS slots only; the rest are submitted blank.
    """
    box_count = template.box_count
    fields = [
        TextField(custom_id=slot_key(i), label=f"Text box {i + 1}/{box_count}")
        for i in range(min(box_count, MAX_DIALOG_FIELDS))
    ]
    return CaptionDialog(
        title=DIALOG_TITLE,
        custom_id=build_token(template.id).encode(),
        fields=fields,
    )


def compose_meme_reply(
    template: MemeTemplate,
    result: MemeResult,
    policy: ResponsePolicy,
    author: Author | None = None,
) -> MemeReply:
    """Finished meme with a fresh button to caption the same template again."""
    button = ActionButton(
        label=REUSE_BUTTON_LABEL,
        custom_id=create_token(template.id).encode(),
    )

    if policy.presentation is Presentation.PLAIN_TEXT:
        return MemeReply(
            image_url=result.url,
            button=button,
            ephemeral=policy.ephemeral,
            embed=False,
            content=result.url,
        )

    return MemeReply(
        image_url=result.url,
        button=button,
        ephemeral=policy.ephemeral,
        embed=True,
        footer_text=f"Created by {author.display_name} with /meme" if author else None,
        footer_icon_url=author.avatar_url if author else None,
    )
