"""Tests for environment settings."""

import pytest

from src.core.config import (
    AutocompleteMatch,
    BotSettings,
    Presentation,
    ReplyVisibility,
    ResponsePolicy,
)
from src.core.errors import ConfigurationError

REQUIRED = {
    "DISCORD_BOT_TOKEN": "discord-token",
    "IMGFLIP_USERNAME": "memebot",
    "IMGFLIP_PASSWORD": "hunter2",
}


class TestBotSettingsFromEnv:
    def test_defaults(self) -> None:
        """Should fill optional settings with defaults."""
        settings = BotSettings.from_env(REQUIRED)

        assert settings.discord_token == "discord-token"
        assert settings.imgflip_username == "memebot"
        assert settings.imgflip_password == "hunter2"
        assert settings.sync_commands is False
        assert settings.health_enabled is True
        assert settings.health_port == 8080
        assert settings.app_version == "1.0.0"
        assert settings.policy == ResponsePolicy()

    @pytest.mark.parametrize("missing", sorted(REQUIRED))
    def test_missing_required_variable(self, missing: str) -> None:
        """Should name the missing variable."""
        env = {k: v for k, v in REQUIRED.items() if k != missing}

        with pytest.raises(ConfigurationError, match=f"Missing environment variable: {missing}"):
            BotSettings.from_env(env)

    def test_empty_required_variable_counts_as_missing(self) -> None:
        """Test that an empty required variable is treated as unset."""
        with pytest.raises(ConfigurationError):
            BotSettings.from_env({**REQUIRED, "IMGFLIP_PASSWORD": ""})

    def test_policy_from_env(self) -> None:
        """Should parse the response policy case-insensitively."""
        settings = BotSettings.from_env({
            **REQUIRED,
            "MEME_REPLY_VISIBILITY": "Ephemeral",
            "MEME_PRESENTATION": "plain_text",
            "MEME_AUTOCOMPLETE_MATCH": "PREFIX",
        })

        assert settings.policy.reply_visibility is ReplyVisibility.EPHEMERAL
        assert settings.policy.presentation is Presentation.PLAIN_TEXT
        assert settings.policy.autocomplete_match is AutocompleteMatch.PREFIX
        assert settings.policy.ephemeral

    def test_invalid_policy_value(self) -> None:
        """Test that an unsupported policy value raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="MEME_PRESENTATION"):
            BotSettings.from_env({**REQUIRED, "MEME_PRESENTATION": "gif"})

    def test_flags_and_port(self) -> None:
        """Test that boolean flags, port and version are parsed."""
        settings = BotSettings.from_env({
            **REQUIRED,
            "SYNC_COMMANDS": "TRUE",
            "HEALTH_ENABLED": "false",
            "HEALTH_PORT": "9090",
            "APP_VERSION": "2.3.4",
        })

        assert settings.sync_commands is True
        assert settings.health_enabled is False
        assert settings.health_port == 9090
        assert settings.app_version == "2.3.4"

    def test_invalid_port(self) -> None:
        """Test that a non-numeric HEALTH_PORT raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="HEALTH_PORT"):
            BotSettings.from_env({**REQUIRED, "HEALTH_PORT": "eighty"})


class TestResponsePolicy:
    def test_default_is_public_embed_substring(self) -> None:
        """Test the default reply policy."""
        policy = ResponsePolicy()
        assert policy.reply_visibility is ReplyVisibility.PUBLIC
        assert policy.presentation is Presentation.EMBED
        assert policy.autocomplete_match is AutocompleteMatch.SUBSTRING
        assert not policy.ephemeral
