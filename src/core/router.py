"""Meme interaction state machine - platform agnostic.

Every user interaction arrives as one of four events. MemeRouter.handle()
runs that event to a terminal state and returns what to show the user:

    AutocompleteRequested -> list[Suggestion]
    TemplateSelected      -> MemeReply (sample) | MessageReply (invalid)
    ButtonPressed         -> CaptionDialog | None
    DialogSubmitted       -> MemeReply (finished) | None

None means the event carried a token this flow did not mint and is ignored.
No state survives between calls; follow-up interactions find their template
through the correlation token embedded in the event.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from src.core.captions import (
    captions_from_fields,
    default_captions,
    require_caption_boxes,
)
from src.core.config import ResponsePolicy
from src.core.errors import InvariantViolation
from src.core.logging import get_logger
from src.core.providers import MemeProvider
from src.core.responses import (
    Author,
    CaptionDialog,
    MemeReply,
    MessageReply,
    Outcome,
    Suggestion,
    compose_caption_dialog,
    compose_invalid_template,
    compose_meme_reply,
    compose_sample_reply,
    compose_suggestions,
)
from src.core.templates import CatalogSnapshot, MemeTemplate, match_templates
from src.core.tokens import CorrelationToken, FlowKind

logger = get_logger(__name__)

# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class AutocompleteRequested:
    """The user is typing the template option of /meme."""

    query: str


@dataclass(frozen=True)
class TemplateSelected:
    """/meme was submitted with a template name."""

    template_name: str


@dataclass(frozen=True)
class ButtonPressed:
    """A message button was clicked."""

    custom_id: str


@dataclass(frozen=True)
class DialogSubmitted:
    """A modal was submitted; ``fields`` maps input custom ids to values."""

    custom_id: str
    fields: Mapping[str, str] = field(default_factory=dict)
    author: Author | None = None


InteractionEvent = AutocompleteRequested | TemplateSelected | ButtonPressed | DialogSubmitted


# =============================================================================
# Router
# =============================================================================


class MemeRouter:
    """Routes interaction events through the meme flow.

    Args:
        provider: Meme catalog and captioning backend. One instance is shared
            for the life of the process.
        policy: Reply formatting and autocomplete matching choices.
    """

    def __init__(self, provider: MemeProvider, policy: ResponsePolicy | None = None) -> None:
        self._provider = provider
        self._policy = policy or ResponsePolicy()

    @property
    def policy(self) -> ResponsePolicy:
        return self._policy

    async def handle(self, event: InteractionEvent) -> Outcome | None:
        """Run one event to its terminal state."""
        catalog = CatalogSnapshot(self._provider)

        if isinstance(event, AutocompleteRequested):
            return await self.autocomplete(catalog, event.query)
        if isinstance(event, TemplateSelected):
            return await self.select_template(catalog, event.template_name)
        if isinstance(event, ButtonPressed):
            return await self.press_button(catalog, event.custom_id)
        if isinstance(event, DialogSubmitted):
            return await self.submit_dialog(catalog, event)

        raise TypeError(f"Unsupported interaction event: {type(event).__name__}")

    async def autocomplete(self, catalog: CatalogSnapshot, query: str) -> list[Suggestion]:
        matches = match_templates(
            await catalog.templates(), query, self._policy.autocomplete_match
        )
        logger.debug("autocomplete_matched", query=query, matches=len(matches))
        return compose_suggestions(matches)

    async def select_template(
        self, catalog: CatalogSnapshot, template_name: str
    ) -> MemeReply | MessageReply:
        template = await catalog.by_name(template_name)
        if template is None:
            logger.info("template_not_found", template_name=template_name)
            return compose_invalid_template()

        box_count = require_caption_boxes(template)
        result = await self._provider.create_meme(template.id, default_captions(box_count))
        logger.info("sample_meme_created", template_id=template.id, url=result.url)
        return compose_sample_reply(template, result)

    async def press_button(
        self, catalog: CatalogSnapshot, custom_id: str
    ) -> CaptionDialog | None:
        token = CorrelationToken.parse(custom_id)
        if token is None or token.kind is not FlowKind.CREATE:
            logger.debug("button_ignored", custom_id=custom_id)
            return None

        template = await self._resolve(catalog, token)
        require_caption_boxes(template)
        return compose_caption_dialog(template)

    async def submit_dialog(
        self, catalog: CatalogSnapshot, event: DialogSubmitted
    ) -> MemeReply | None:
        token = CorrelationToken.parse(event.custom_id)
        if token is None or token.kind is not FlowKind.BUILD:
            logger.debug("dialog_ignored", custom_id=event.custom_id)
            return None

        template = await self._resolve(catalog, token)
        captions = captions_from_fields(require_caption_boxes(template), event.fields)
        result = await self._provider.create_meme(template.id, captions)
        logger.info("meme_created", template_id=template.id, url=result.url)
        return compose_meme_reply(template, result, self._policy, event.author)

    async def _resolve(
        self, catalog: CatalogSnapshot, token: CorrelationToken
    ) -> MemeTemplate:
        # Tokens are minted from templates that were just fetched
        template = await catalog.by_id(token.template_id)
        if template is None:
            raise InvariantViolation(
                f"Template {token.template_id!r} from {token.kind.name} token "
                "is not in the catalog"
            )
        return template
