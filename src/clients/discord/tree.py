"""Command tree for the meme bot."""

from typing import TYPE_CHECKING

import discord
from discord import app_commands

from src.clients.discord.utils import report_interaction_error

if TYPE_CHECKING:
    from src.clients.discord.bot import DiscordBot


class MemeCommandTree(app_commands.CommandTree["DiscordBot"]):
    """CommandTree that reports errors through the bot's top-level handler.

    Command callbacks catch their own errors (see track_interaction); this
    covers failures raised by the tree itself, such as option conversion or
    signature mismatches after a stale sync.
    """

    async def on_error(
        self,
        interaction: discord.Interaction["DiscordBot"],
        error: app_commands.AppCommandError,
    ) -> None:
        original = getattr(error, "original", None)
        await report_interaction_error(interaction, original or error)
