"""Discord command modules."""

from src.clients.discord.commands.meme import register_meme_commands

__all__ = ["register_meme_commands"]
