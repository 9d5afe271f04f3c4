"""Classify raw Discord interactions and feed them to the meme router.

Slash command and autocomplete interactions reach the router through the
command tree (see commands/meme.py). Button clicks and modal submissions are
not bound to live view objects; DiscordBot.on_interaction passes every
interaction through event_from_interaction and routes the ones it
recognizes.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import discord

from src.clients.discord.decorators import track_interaction
from src.clients.discord.rendering import send_outcome
from src.clients.discord.utils import author_from_interaction
from src.core.logging import get_logger
from src.core.router import ButtonPressed, DialogSubmitted, MemeRouter, TemplateSelected

if TYPE_CHECKING:
    from src.clients.discord.bot import DiscordBot

logger = get_logger(__name__)


def modal_values(data: Mapping[str, Any]) -> dict[str, str]:
    """Collect text input values from a modal_submit payload, keyed by custom id.

    Inputs arrive wrapped in action rows (``components``) or, for newer modal
    layouts, in label components (``component``).
    """
    values: dict[str, str] = {}
    for row in data.get("components", []):
        children = list(row.get("components", []))
        if "component" in row:
            children.append(row["component"])
        for child in children:
            custom_id = child.get("custom_id")
            value = child.get("value")
            if isinstance(custom_id, str) and isinstance(value, str):
                values[custom_id] = value
    return values


def event_from_interaction(
    interaction: discord.Interaction,
) -> ButtonPressed | DialogSubmitted | None:
    """Map a button click or modal submission to a router event.

    Returns:
        The event, or None for interactions the router does not handle here
        (slash commands, autocomplete, select menus, pings).
    """
    data: Mapping[str, Any] = interaction.data or {}

    if interaction.type is discord.InteractionType.component:
        if data.get("component_type") != discord.ComponentType.button.value:
            return None
        return ButtonPressed(custom_id=str(data.get("custom_id", "")))

    if interaction.type is discord.InteractionType.modal_submit:
        return DialogSubmitted(
            custom_id=str(data.get("custom_id", "")),
            fields=modal_values(data),
            author=author_from_interaction(interaction),
        )

    return None


async def respond(
    router: MemeRouter,
    interaction: discord.Interaction,
    event: TemplateSelected | ButtonPressed | DialogSubmitted,
) -> None:
    """Run ``event`` through the router and send whatever it produces."""
    outcome = await router.handle(event)
    if outcome is None:
        logger.debug("interaction_ignored", event_type=type(event).__name__)
        return
    await send_outcome(interaction, outcome)


@track_interaction
async def handle_component_event(
    interaction: "discord.Interaction[DiscordBot]",
    event: ButtonPressed | DialogSubmitted,
) -> None:
    await respond(interaction.client.router, interaction, event)
