"""Tests for the track_interaction decorator."""

import asyncio

import discord
import pytest
import structlog

from src.clients.discord.decorators import track_interaction
from src.core.errors import ProviderError
from src.core.responses import ERROR_MESSAGE
from tests.mocks.interactions import create_mock_interaction


class TestTrackInteraction:
    async def test_returns_handler_result(self) -> None:
        """Test that the wrapped handler's return value is passed through."""
        @track_interaction
        async def handler(interaction: discord.Interaction, value: int) -> int:
            return value * 2

        interaction = create_mock_interaction()

        assert await handler(interaction, 21) == 42
        interaction.response.send_message.assert_not_called()

    async def test_preserves_handler_name(self) -> None:
        """Test that name and docstring survive wrapping."""
        @track_interaction
        async def meme(interaction: discord.Interaction) -> None:
            """Create a meme."""

        assert meme.__name__ == "meme"
        assert meme.__doc__ == "Create a meme."

    async def test_binds_interaction_context(self) -> None:
        """Should bind correlation and interaction ids while the handler runs."""
        seen: dict = {}

        @track_interaction
        async def handler(interaction: discord.Interaction) -> None:
            seen.update(structlog.contextvars.get_contextvars())

        await handler(create_mock_interaction(channel_id=777))

        assert seen["handler"] == "handler"
        assert seen["interaction_id"] == 111222333
        assert seen["user_id"] == 12345
        assert seen["channel_id"] == 777
        assert len(seen["correlation_id"]) == 8

    async def test_clears_context_afterwards(self) -> None:
        """Test that logging context is cleared after a failure."""
        @track_interaction
        async def handler(interaction: discord.Interaction) -> None:
            raise ProviderError("imgflip down")

        await handler(create_mock_interaction())

        assert structlog.contextvars.get_contextvars() == {}

    async def test_reports_errors_to_user(self) -> None:
        """Should answer with the generic error and swallow the exception."""

        @track_interaction
        async def handler(interaction: discord.Interaction) -> str:
            raise ProviderError("imgflip down")

        interaction = create_mock_interaction(discord.InteractionType.component)

        assert await handler(interaction) is None
        interaction.response.send_message.assert_awaited_once_with(
            ERROR_MESSAGE, ephemeral=True
        )

    async def test_skips_reply_when_already_answered(self) -> None:
        """Test that no error reply is sent to an answered interaction."""
        @track_interaction
        async def handler(interaction: discord.Interaction) -> None:
            raise ValueError("late failure")

        interaction = create_mock_interaction(is_done=True)

        assert await handler(interaction) is None
        interaction.response.send_message.assert_not_called()

    async def test_cancellation_propagates(self) -> None:
        """Test that cancellation is re-raised without an error reply."""
        @track_interaction
        async def handler(interaction: discord.Interaction) -> None:
            raise asyncio.CancelledError()

        interaction = create_mock_interaction()

        with pytest.raises(asyncio.CancelledError):
            await handler(interaction)
        interaction.response.send_message.assert_not_called()
        assert structlog.contextvars.get_contextvars() == {}
