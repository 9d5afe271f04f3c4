"""Entry point for the meme bot."""

import asyncio

from src.clients.discord import DiscordBot, create_bot, register_meme_commands
from src.core.config import BotSettings
from src.core.errors import ProviderError
from src.core.health import (
    HealthChecker,
    ServiceCheck,
    ServiceStatus,
    start_health_server,
)
from src.core.logging import configure_logging, get_logger
from src.providers.imgflip_provider import ImgflipProvider

# Configure structured logging (reads ENVIRONMENT and LOG_LEVEL from env)
configure_logging()

logger = get_logger(__name__)


def create_health_checker(bot: DiscordBot) -> HealthChecker:
    """Create health checker with service checks for the bot.

    Args:
        bot: The Discord bot instance.

    Returns:
        Configured HealthChecker instance.
    """
    checker = HealthChecker(version=bot.settings.app_version)

    async def check_discord() -> ServiceCheck:
        """Check Discord connection status."""
        if bot.is_ready():
            return ServiceCheck(
                name="discord",
                status=ServiceStatus.HEALTHY,
                message="Connected",
                details={"guilds": len(bot.guilds)},
            )
        if bot.is_closed():
            return ServiceCheck(
                name="discord",
                status=ServiceStatus.UNHEALTHY,
                message="Connection closed",
            )
        return ServiceCheck(
            name="discord",
            status=ServiceStatus.DEGRADED,
            message="Connecting...",
        )

    async def check_imgflip() -> ServiceCheck:
        """Check that Imgflip answers with a valid template catalog."""
        provider = bot.provider
        if isinstance(provider, ImgflipProvider) and not provider.has_credentials:
            return ServiceCheck(
                name="imgflip",
                status=ServiceStatus.UNHEALTHY,
                message="Credentials not configured",
            )
        try:
            templates = await provider.get_templates()
        except ProviderError as ex:
            return ServiceCheck(
                name="imgflip",
                status=ServiceStatus.DEGRADED,
                message=str(ex),
            )
        return ServiceCheck(
            name="imgflip",
            status=ServiceStatus.HEALTHY,
            message="Catalog reachable",
            details={"templates": len(templates)},
        )

    checker.add_check("discord", check_discord)
    checker.add_check("imgflip", check_imgflip)

    return checker


async def main() -> None:
    """Read settings, start the health server and run the bot."""
    settings = BotSettings.from_env()

    bot = create_bot(settings)
    register_meme_commands(bot)

    health_server = None
    if settings.health_enabled:
        health_server = await start_health_server(
            create_health_checker(bot),
            host="0.0.0.0",
            port=settings.health_port,
        )

    @bot.event
    async def on_ready() -> None:
        """Log the connected account and guilds."""
        if bot.user:
            logger.info("bot_ready", user=str(bot.user), user_id=bot.user.id)
        for guild in bot.guilds:
            logger.info("guild_connected", guild=guild.name, guild_id=guild.id)
        logger.info("listening_for_interactions")

    try:
        logger.info("bot_starting")
        await bot.start(settings.discord_token)
    finally:
        if health_server:
            await health_server.stop()


if __name__ == "__main__":
    asyncio.run(main())
