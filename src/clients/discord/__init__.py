"""Discord client package."""

from src.clients.discord.bot import DiscordBot, create_bot
from src.clients.discord.commands import register_meme_commands
from src.clients.discord.decorators import track_interaction
from src.clients.discord.interactions import event_from_interaction
from src.clients.discord.utils import report_interaction_error

__all__ = [
    "DiscordBot",
    "create_bot",
    "event_from_interaction",
    "register_meme_commands",
    "report_interaction_error",
    "track_interaction",
]
