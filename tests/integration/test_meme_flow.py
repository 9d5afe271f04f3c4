"""Integration tests for the /meme flow through the Discord adapter.

Each step feeds the custom id produced by the previous reply into the next
interaction, the way Discord would: /meme -> sample button -> caption modal
-> finished meme -> reuse button.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from main import create_health_checker
from src.clients.discord.bot import DiscordBot, create_bot
from src.clients.discord.commands.meme import register_meme_commands
from src.core.config import BotSettings, Presentation, ReplyVisibility, ResponsePolicy
from src.core.errors import ProviderError
from src.core.health import ServiceStatus
from src.core.responses import REUSE_BUTTON_LABEL
from tests.mocks.interactions import (
    button_interaction,
    create_mock_interaction,
    create_mock_user,
    modal_interaction,
)
from tests.mocks.providers import MockMemeProvider


def make_bot(provider: MockMemeProvider, policy: ResponsePolicy | None = None) -> DiscordBot:
    settings = BotSettings(
        discord_token="token",
        imgflip_username="memebot",
        imgflip_password="hunter2",
        policy=policy or ResponsePolicy(),
    )
    bot = create_bot(settings, provider)
    register_meme_commands(bot)
    return bot


async def run_slash_command(bot: DiscordBot, template: str) -> MagicMock:
    command = bot.tree.get_command("meme")
    assert command is not None
    interaction = create_mock_interaction()
    interaction.client = bot
    await command.callback(interaction, template=template)
    return interaction


def sent_button_id(interaction: MagicMock) -> str:
    return interaction.response.send_message.await_args.kwargs["view"].children[0].custom_id


class TestMemeFlow:
    async def test_create_and_reuse(self) -> None:
        """Test create, caption and reuse through the Discord adapter."""
        provider = MockMemeProvider()
        bot = make_bot(provider)
        ada = create_mock_user(display_name="Ada", avatar_url="https://cdn/ada.png")

        # /meme template:Two Buttons
        command = await run_slash_command(bot, "Two Buttons")
        sample_button = sent_button_id(command)
        assert provider.created == [("87743020", ["Text box 1", "Text box 2", "Text box 3"])]

        # Create meme with this template
        click = button_interaction(sample_button)
        click.client = bot
        await bot.on_interaction(click)
        modal = click.response.send_modal.await_args.args[0]
        inputs = [item for item in modal.children if isinstance(item, discord.ui.TextInput)]
        assert [i.label for i in inputs] == ["Text box 1/3", "Text box 2/3", "Text box 3/3"]

        # Submit the modal, leaving the last box empty
        submit = modal_interaction(
            modal.custom_id,
            {inputs[0].custom_id: "Tabs", inputs[1].custom_id: "Spaces", inputs[2].custom_id: ""},
            user=ada,
        )
        submit.client = bot
        await bot.on_interaction(submit)

        assert provider.created[-1] == ("87743020", ["Tabs", "Spaces", " "])
        final = submit.response.send_message.await_args.kwargs
        assert final["ephemeral"] is False
        assert final["embed"].image.url == "https://i.imgflip.com/mock2.jpg"
        assert final["embed"].footer.text == "Created by Ada with /meme"
        assert final["embed"].footer.icon_url == "https://cdn/ada.png"
        assert final["view"].children[0].label == REUSE_BUTTON_LABEL

        # Reuse this template opens the same dialog again
        reuse = button_interaction(sent_button_id(submit))
        reuse.client = bot
        await bot.on_interaction(reuse)
        assert reuse.response.send_modal.await_args.args[0].custom_id == modal.custom_id

    async def test_private_plain_text_policy(self) -> None:
        """Test that the private plain text policy shapes the final reply."""
        provider = MockMemeProvider()
        bot = make_bot(
            provider,
            ResponsePolicy(
                reply_visibility=ReplyVisibility.EPHEMERAL,
                presentation=Presentation.PLAIN_TEXT,
            ),
        )

        submit = modal_interaction("builder_181913649", {"0": "top", "1": "bottom"})
        submit.client = bot
        await bot.on_interaction(submit)

        final = submit.response.send_message.await_args.kwargs
        assert final["ephemeral"] is True
        assert final["content"] == "https://i.imgflip.com/mock1.jpg"
        assert "embed" not in final

    async def test_five_box_template_fills_every_slot(self) -> None:
        """Test that every box of a five-box template gets a caption."""
        provider = MockMemeProvider()
        bot = make_bot(provider)

        submit = modal_interaction("builder_8072285", {"0": "such", "2": "wow"})
        submit.client = bot
        await bot.on_interaction(submit)

        assert provider.created == [("8072285", ["such", " ", "wow", " ", " "])]


class TestHealthChecker:
    @pytest.fixture
    def bot(self) -> DiscordBot:
        return make_bot(MockMemeProvider())

    async def test_connecting_bot_is_degraded(self, bot: DiscordBot) -> None:
        """Test that a bot still connecting is reported degraded."""
        report = await create_health_checker(bot).check_all()

        statuses: dict[str, Any] = {c.name: c.status for c in report.checks}
        assert statuses == {
            "discord": ServiceStatus.DEGRADED,
            "imgflip": ServiceStatus.HEALTHY,
        }
        assert report.version == "1.0.0"

    async def test_ready_bot_is_healthy(self, bot: DiscordBot) -> None:
        """Test that a ready bot with a reachable catalog is healthy."""
        bot.is_ready = MagicMock(return_value=True)  # type: ignore[method-assign]

        report = await create_health_checker(bot).check_all()

        assert report.status == ServiceStatus.HEALTHY

    async def test_missing_credentials(self) -> None:
        """Test that missing Imgflip credentials are unhealthy."""
        settings = BotSettings(discord_token="token", imgflip_username="", imgflip_password="")
        bot = create_bot(settings)
        bot.is_ready = MagicMock(return_value=True)  # type: ignore[method-assign]

        report = await create_health_checker(bot).check_all()

        assert report.status == ServiceStatus.UNHEALTHY

    async def test_imgflip_check_fetches_catalog(self) -> None:
        """The imgflip check reports the catalog size it fetched."""
        provider = MockMemeProvider()
        bot = make_bot(provider)

        check = await create_health_checker(bot).check_one("imgflip")

        assert check.status == ServiceStatus.HEALTHY
        assert check.details == {"templates": 5}
        assert provider.template_calls == 1

    async def test_unreachable_imgflip_is_degraded(self) -> None:
        """A failing catalog fetch degrades the imgflip check."""
        provider = MockMemeProvider()
        provider.get_templates = AsyncMock(  # type: ignore[method-assign]
            side_effect=ProviderError("Imgflip request timed out")
        )
        bot = make_bot(provider)

        check = await create_health_checker(bot).check_one("imgflip")

        assert check.status == ServiceStatus.DEGRADED
        assert check.message == "Imgflip request timed out"
