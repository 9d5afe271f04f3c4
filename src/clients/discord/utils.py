"""Shared utilities for Discord interaction handling."""

import discord

from src.core.errors import classify_error
from src.core.logging import get_logger
from src.core.responses import Author, compose_error_reply

logger = get_logger(__name__)

# Interaction types that can still be answered with a message
REPLIABLE_TYPES: frozenset[discord.InteractionType] = frozenset({
    discord.InteractionType.application_command,
    discord.InteractionType.component,
    discord.InteractionType.modal_submit,
})


def author_from_interaction(interaction: discord.Interaction) -> Author:
    """Credit line for a meme created by the interacting user."""
    user = interaction.user
    avatar = user.avatar
    return Author(
        display_name=user.display_name,
        avatar_url=avatar.url if avatar is not None else None,
    )


def can_send_reply(interaction: discord.Interaction) -> bool:
    """Whether Discord will still accept an initial response to this interaction."""
    if interaction.type not in REPLIABLE_TYPES:
        return False
    if interaction.response.is_done():
        return False
    return not interaction.is_expired()


async def report_interaction_error(
    interaction: discord.Interaction, error: BaseException
) -> None:
    """Log a failed interaction and tell the user, if Discord still allows it.

    This is the last stop for every error raised while handling an
    interaction. It never raises.

    Args:
        interaction: The interaction that failed.
        error: The exception that ended handling.
    """
    category = classify_error(error)
    logger.error(
        "interaction_failed",
        category=category.name,
        error=str(error),
        error_type=type(error).__name__,
        exc_info=error,
    )

    if not can_send_reply(interaction):
        return

    reply = compose_error_reply()
    try:
        await interaction.response.send_message(reply.content, ephemeral=reply.ephemeral)
    except (discord.HTTPException, discord.InteractionResponded) as ex:
        # The interaction expired or was answered concurrently
        logger.warning("error_reply_failed", error=str(ex))
