"""The /meme slash command."""

from typing import TYPE_CHECKING

import discord
from discord import app_commands

from src.clients.discord.constants import (
    MEME_COMMAND_DESCRIPTION,
    MEME_COMMAND_NAME,
    TEMPLATE_OPTION_DESCRIPTION,
)
from src.clients.discord.decorators import track_interaction
from src.clients.discord.interactions import respond
from src.clients.discord.rendering import to_choices
from src.core.router import AutocompleteRequested, TemplateSelected

if TYPE_CHECKING:
    from src.clients.discord.bot import DiscordBot


def register_meme_commands(bot: "DiscordBot") -> None:
    """Register the /meme command and its template autocomplete.

    Args:
        bot: The Discord bot instance.
    """

    @track_interaction
    async def suggest_templates(
        interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        outcome = await bot.router.handle(AutocompleteRequested(query=current))
        return to_choices(outcome) if isinstance(outcome, list) else []

    async def template_autocomplete(
        interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        # A failed lookup answers with no suggestions
        return await suggest_templates(interaction, current) or []

    @bot.tree.command(  # type: ignore[arg-type]
        name=MEME_COMMAND_NAME, description=MEME_COMMAND_DESCRIPTION
    )
    @app_commands.describe(template=TEMPLATE_OPTION_DESCRIPTION)
    @app_commands.autocomplete(template=template_autocomplete)
    @track_interaction
    async def meme(interaction: discord.Interaction, template: str) -> None:
        """Create a meme.

        Args:
            interaction: The Discord interaction.
            template: Exact name of a catalog template.
        """
        await respond(bot.router, interaction, TemplateSelected(template_name=template))
