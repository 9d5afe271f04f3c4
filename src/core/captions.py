"""Caption set construction."""

from collections.abc import Mapping

from src.core.errors import PreconditionError
from src.core.templates import MemeTemplate

# Imgflip rejects empty box text, so blank inputs are sent as a single space
BLANK_CAPTION = " "


def require_caption_boxes(template: MemeTemplate) -> int:
    """Return the template's box count, rejecting templates without boxes."""
    if template.box_count <= 0:
        raise PreconditionError(
            f"Template {template.id} ({template.name!r}) has no caption boxes"
        )
    return template.box_count


def slot_key(index: int) -> str:
    """Dialog field key for caption slot ``index``."""
    return str(index)


def default_captions(box_count: int) -> list[str]:
    """Placeholder captions used for the sample meme: "Text box 1", ..."""
    return [f"Text box {i + 1}" for i in range(box_count)]


def captions_from_fields(box_count: int, fields: Mapping[str, str]) -> list[str]:
    """Read one caption per slot from submitted dialog fields.

    Values are trimmed. Blank values and slots missing from ``fields`` become
    BLANK_CAPTION, so the result always has exactly ``box_count`` non-empty
    strings.
    """
    captions = []
    for i in range(box_count):
        value = fields.get(slot_key(i), "").strip()
        captions.append(value or BLANK_CAPTION)
    return captions
