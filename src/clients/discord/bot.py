"""Discord bot core - setup and lifecycle management."""

import discord

from src.clients.discord.interactions import event_from_interaction, handle_component_event
from src.clients.discord.tree import MemeCommandTree
from src.core.config import BotSettings
from src.core.logging import get_logger
from src.core.providers import MemeProvider
from src.core.router import MemeRouter
from src.providers.imgflip_provider import ImgflipProvider

logger = get_logger(__name__)


class DiscordBot(discord.Client):
    """Discord client that serves the /meme flow.

    Attributes:
        tree: The command tree holding /meme.
        settings: Settings the bot was started with.
    """

    def __init__(
        self,
        settings: BotSettings,
        provider: MemeProvider | None = None,
    ) -> None:
        """Initialize the bot.

        Args:
            settings: Process settings (credentials, sync flag, reply policy).
            provider: Meme backend. Defaults to Imgflip with the configured
                account.
        """
        # Slash commands, buttons and modals only need the guilds intent
        intents = discord.Intents.none()
        intents.guilds = True
        super().__init__(intents=intents)
        self.tree = MemeCommandTree(self)
        self.settings = settings
        self._provider: MemeProvider = provider or ImgflipProvider(
            username=settings.imgflip_username,
            password=settings.imgflip_password,
        )
        self._router = MemeRouter(self._provider, settings.policy)

    @property
    def provider(self) -> MemeProvider:
        return self._provider

    @property
    def router(self) -> MemeRouter:
        return self._router

    async def setup_hook(self) -> None:
        """Sync the command schema with Discord when requested."""
        logger.info(
            "meme_router_initialized",
            reply_visibility=self.settings.policy.reply_visibility.value,
            presentation=self.settings.policy.presentation.value,
            autocomplete_match=self.settings.policy.autocomplete_match.value,
        )

        # Discord allows 200 command creates per day; only sync on deploys
        if self.settings.sync_commands:
            await self.tree.sync()
            logger.info("commands_synced_globally")
        else:
            logger.info("command_sync_skipped", reason="SYNC_COMMANDS not set")

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        """Route button clicks and modal submissions by their custom id."""
        event = event_from_interaction(interaction)
        if event is None:
            return
        await handle_component_event(interaction, event)


def create_bot(settings: BotSettings, provider: MemeProvider | None = None) -> DiscordBot:
    """Create and return a configured Discord bot instance."""
    return DiscordBot(settings, provider)
