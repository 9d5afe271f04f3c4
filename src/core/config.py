"""Runtime settings read from the environment.

Settings are read once at startup into immutable dataclasses and passed to
the components that need them.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from os import environ
from typing import TypeVar

from src.core.errors import ConfigurationError

E = TypeVar("E", bound=Enum)


class ReplyVisibility(Enum):
    """Who can see the finished meme."""

    PUBLIC = "public"
    EPHEMERAL = "ephemeral"


class Presentation(Enum):
    """How the finished meme image is attached to the reply."""

    EMBED = "embed"
    PLAIN_TEXT = "plain_text"


class AutocompleteMatch(Enum):
    """How typed text is matched against template names."""

    SUBSTRING = "substring"  # case-insensitive, anywhere in the name
    PREFIX = "prefix"  # case-insensitive, start of the name


@dataclass(frozen=True)
class ResponsePolicy:
    """Formatting choices for the meme flow.

    Attributes:
        reply_visibility: Visibility of the reply to a submitted caption
            dialog. The sample shown after /meme is always ephemeral.
        presentation: Embed with author footer, or the bare image URL.
        autocomplete_match: Matching rule for template suggestions.
    """

    reply_visibility: ReplyVisibility = ReplyVisibility.PUBLIC
    presentation: Presentation = Presentation.EMBED
    autocomplete_match: AutocompleteMatch = AutocompleteMatch.SUBSTRING

    @property
    def ephemeral(self) -> bool:
        return self.reply_visibility is ReplyVisibility.EPHEMERAL


@dataclass(frozen=True)
class BotSettings:
    """Everything the bot process needs to start."""

    discord_token: str
    imgflip_username: str
    imgflip_password: str
    sync_commands: bool = False
    policy: ResponsePolicy = field(default_factory=ResponsePolicy)
    health_enabled: bool = True
    health_port: int = 8080
    app_version: str = "1.0.0"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "BotSettings":
        """Build settings from environment variables.

        Args:
            env: Mapping to read from. Defaults to os.environ.

        Raises:
            ConfigurationError: If a required variable is missing or an
                optional one holds an unsupported value.
        """
        if env is None:
            env = environ

        policy = ResponsePolicy(
            reply_visibility=_enum_setting(
                env, "MEME_REPLY_VISIBILITY", ReplyVisibility, ReplyVisibility.PUBLIC
            ),
            presentation=_enum_setting(
                env, "MEME_PRESENTATION", Presentation, Presentation.EMBED
            ),
            autocomplete_match=_enum_setting(
                env,
                "MEME_AUTOCOMPLETE_MATCH",
                AutocompleteMatch,
                AutocompleteMatch.SUBSTRING,
            ),
        )

        port = env.get("HEALTH_PORT", "8080")
        try:
            health_port = int(port)
        except ValueError as ex:
            raise ConfigurationError(f"HEALTH_PORT must be an integer, got {port!r}") from ex

        return cls(
            discord_token=_required(env, "DISCORD_BOT_TOKEN"),
            imgflip_username=_required(env, "IMGFLIP_USERNAME"),
            imgflip_password=_required(env, "IMGFLIP_PASSWORD"),
            sync_commands=env.get("SYNC_COMMANDS", "").lower() == "true",
            policy=policy,
            health_enabled=env.get("HEALTH_ENABLED", "true").lower() == "true",
            health_port=health_port,
            app_version=env.get("APP_VERSION", "1.0.0"),
        )


def _required(env: Mapping[str, str], key: str) -> str:
    value = env.get(key)
    if not value:
        raise ConfigurationError(f"Missing environment variable: {key}")
    return value


def _enum_setting(env: Mapping[str, str], key: str, enum_type: type[E], default: E) -> E:
    raw = env.get(key)
    if not raw:
        return default
    try:
        return enum_type(raw.strip().lower())
    except ValueError as ex:
        allowed = ", ".join(str(member.value) for member in enum_type)
        raise ConfigurationError(f"{key} must be one of: {allowed} (got {raw!r})") from ex
