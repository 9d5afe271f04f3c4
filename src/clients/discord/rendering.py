"""Turn meme flow outcomes into discord.py responses.

Everything here is presentation: the shapes come from src/core/responses.py
and are sent as the interaction's single initial response.
"""

from typing import Any

import discord
from discord import app_commands

from src.clients.discord.constants import EMBED_COLOR_INFO, USER_INTERACTION_TIMEOUT
from src.core.responses import (
    ActionButton,
    CaptionDialog,
    MemeReply,
    MessageReply,
    Suggestion,
)

__all__ = [
    "build_embed",
    "build_modal",
    "build_view",
    "send_outcome",
    "to_choices",
]


def to_choices(suggestions: list[Suggestion]) -> list[app_commands.Choice[str]]:
    return [app_commands.Choice(name=s.name, value=s.value) for s in suggestions]


def build_embed(reply: MemeReply) -> discord.Embed:
    """Embed with the meme image, plus title and footer when present."""
    embed = discord.Embed(title=reply.title, color=EMBED_COLOR_INFO)
    embed.set_image(url=reply.image_url)
    if reply.footer_text:
        embed.set_footer(text=reply.footer_text, icon_url=reply.footer_icon_url)
    return embed


def build_view(button: ActionButton) -> discord.ui.View:
    """A view holding one primary button.

    The button has no callback of its own. Its custom id is a correlation
    token, and clicks are routed by DiscordBot.on_interaction, which keeps
    working after this view leaves the view store or the bot restarts.
    """
    view = discord.ui.View(timeout=USER_INTERACTION_TIMEOUT)
    view.add_item(
        discord.ui.Button(
            label=button.label,
            style=discord.ButtonStyle.primary,
            custom_id=button.custom_id,
        )
    )
    return view


def build_modal(dialog: CaptionDialog) -> discord.ui.Modal:
    """Caption modal; submissions are routed by its custom id."""
    modal = discord.ui.Modal(title=dialog.title, custom_id=dialog.custom_id)
    for text_field in dialog.fields:
        modal.add_item(
            discord.ui.TextInput(
                label=text_field.label,
                custom_id=text_field.custom_id,
                style=discord.TextStyle.short,
                required=text_field.required,
            )
        )
    return modal


async def send_outcome(
    interaction: discord.Interaction, outcome: MessageReply | MemeReply | CaptionDialog
) -> None:
    """Send ``outcome`` as the initial response to ``interaction``.

    Autocomplete suggestions are not sent here; the command tree answers
    autocomplete with the choices its callback returns.

    Args:
        interaction: The interaction being answered.
        outcome: A text reply, a meme reply or a caption dialog.
    """
    if isinstance(outcome, CaptionDialog):
        await interaction.response.send_modal(build_modal(outcome))
    elif isinstance(outcome, MemeReply):
        kwargs: dict[str, Any] = {
            "view": build_view(outcome.button),
            "ephemeral": outcome.ephemeral,
        }
        if outcome.content is not None:
            kwargs["content"] = outcome.content
        if outcome.embed:
            kwargs["embed"] = build_embed(outcome)
        await interaction.response.send_message(**kwargs)
    else:
        await interaction.response.send_message(outcome.content, ephemeral=outcome.ephemeral)
